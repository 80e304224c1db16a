from __future__ import annotations

from typing import Sequence

import numpy as np


def _as_matrix(m: np.ndarray) -> np.ndarray:
    m = np.asarray(m, dtype=np.float64)
    if m.ndim != 2:
        raise ValueError(f"Serve una matrice 2-D (ndim={m.ndim}).")
    return m


def _as_pair(x: Sequence[float], w: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=np.float64)
    w = np.asarray(w, dtype=np.float64)
    if x.ndim != 1 or x.shape != w.shape:
        raise ValueError("x e w devono essere vettori 1-D della stessa lunghezza.")
    return x, w


def row_sums_loop(m: np.ndarray) -> np.ndarray:
    """Somma per riga con ciclo esplicito, l'equivalente di apply(m, 1, sum)."""
    m = _as_matrix(m)
    out = np.empty(m.shape[0], dtype=np.float64)
    for i in range(m.shape[0]):
        total = 0.0
        for value in m[i]:
            total += value
        out[i] = total
    return out


def row_sums(m: np.ndarray) -> np.ndarray:
    return _as_matrix(m).sum(axis=1)


def weighted_sum_loop(x: Sequence[float], w: Sequence[float]) -> float:
    x, w = _as_pair(x, w)
    total = 0.0
    for xi, wi in zip(x, w):
        total += xi * wi
    return float(total)


def weighted_sum(x: Sequence[float], w: Sequence[float]) -> float:
    x, w = _as_pair(x, w)
    return float(np.dot(x, w))
