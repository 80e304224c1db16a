"""
Alternative per il fit dei minimi quadrati ordinari (OLS).

Tutte le funzioni ritornano OlsFit con gli stessi coefficienti (entro tolleranza
numerica) su matrici a rango pieno; cambiano costo e stabilità:
- ols_lstsq: SVD via numpy.linalg.lstsq, gestisce anche rango ridotto
- ols_qr: fattorizzazione QR + sostituzione all'indietro
- ols_normal: equazioni normali con Cholesky, la più veloce e la meno stabile
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy.linalg import cho_factor, cho_solve, solve_triangular


@dataclass(slots=True)
class OlsFit:
    coef: np.ndarray
    residuals: np.ndarray
    rank: int

    @property
    def rss(self) -> float:
        return float(np.dot(self.residuals, self.residuals))


def add_intercept(x: np.ndarray) -> np.ndarray:
    """Matrice di disegno con colonna di 1 in testa."""
    x = np.asarray(x, dtype=np.float64)
    if x.ndim == 1:
        x = x[:, None]
    return np.column_stack([np.ones(x.shape[0]), x])


def _check_shapes(X: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError(f"X deve essere 2-D (ndim={X.ndim}).")
    if y.ndim != 1:
        raise ValueError(f"y deve essere 1-D (ndim={y.ndim}).")
    if X.shape[0] != y.shape[0]:
        raise ValueError(f"Righe di X ({X.shape[0]}) diverse dalla lunghezza di y ({y.shape[0]}).")
    if X.shape[0] < X.shape[1]:
        raise ValueError("Osservazioni insufficienti: servono almeno tante righe quante colonne.")
    return X, y


def ols_lstsq(X: np.ndarray, y: np.ndarray) -> OlsFit:
    X, y = _check_shapes(X, y)
    coef, _rss, rank, _sv = np.linalg.lstsq(X, y, rcond=None)
    return OlsFit(coef=coef, residuals=y - X @ coef, rank=int(rank))


def ols_qr(X: np.ndarray, y: np.ndarray) -> OlsFit:
    X, y = _check_shapes(X, y)
    q, r = np.linalg.qr(X, mode="reduced")
    coef = solve_triangular(r, q.T @ y, lower=False)
    return OlsFit(coef=coef, residuals=y - X @ coef, rank=int(X.shape[1]))


def ols_normal(X: np.ndarray, y: np.ndarray) -> OlsFit:
    X, y = _check_shapes(X, y)
    factor = cho_factor(X.T @ X)
    coef = cho_solve(factor, X.T @ y)
    return OlsFit(coef=coef, residuals=y - X @ coef, rank=int(X.shape[1]))
