from __future__ import annotations

import numpy as np
import pandas as pd


# -----------------------------
# Medie mobili (finestra a destra, parziale all'inizio come min_periods=1)
# -----------------------------
def _check_window(window: int) -> int:
    w = int(window)
    if w < 1:
        raise ValueError("Finestra non valida (>=1).")
    return w


def rolling_mean_pandas(y: pd.Series, window: int) -> pd.Series:
    w = _check_window(window)
    if w == 1:
        return y.copy()
    return y.rolling(window=w, min_periods=1, center=False).mean()


def rolling_mean_cumsum(y: pd.Series, window: int) -> pd.Series:
    """
    Media mobile O(n) tramite somme cumulate.
    Assume una serie senza NaN (un NaN si propaga a tutte le finestre successive).
    """
    w = _check_window(window)
    if w == 1:
        return y.copy()

    values = y.to_numpy(dtype=np.float64)
    n = values.shape[0]
    csum = np.concatenate(([0.0], np.cumsum(values)))
    end = np.arange(1, n + 1)
    start = np.maximum(end - w, 0)
    means = (csum[end] - csum[start]) / (end - start)
    return pd.Series(means, index=y.index, name=y.name)


def rolling_mean_loop(y: pd.Series, window: int) -> pd.Series:
    w = _check_window(window)
    if w == 1:
        return y.copy()

    values = y.to_numpy(dtype=np.float64)
    means = np.empty(values.shape[0], dtype=np.float64)
    for i in range(values.shape[0]):
        lo = max(0, i - w + 1)
        total = 0.0
        for j in range(lo, i + 1):
            total += values[j]
        means[i] = total / (i + 1 - lo)
    return pd.Series(means, index=y.index, name=y.name)
