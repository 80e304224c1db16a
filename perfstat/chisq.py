from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.stats import chi2, chi2_contingency

from .tabulate import fast_table


@dataclass(slots=True)
class ChiSquareResult:
    statistic: float
    dof: int
    p_value: float


def _chisq_from_observed(observed: np.ndarray) -> ChiSquareResult:
    observed = np.asarray(observed, dtype=np.float64)
    if observed.ndim != 2:
        raise ValueError("La tabella osservata deve essere 2-D.")

    total = observed.sum()
    row_sums = observed.sum(axis=1)
    col_sums = observed.sum(axis=0)
    if total <= 0 or np.any(row_sums == 0) or np.any(col_sums == 0):
        raise ValueError("Frequenze attese nulle: margini di riga o colonna a zero.")

    expected = np.outer(row_sums, col_sums) / total
    statistic = float(np.sum((observed - expected) ** 2 / expected))
    dof = (observed.shape[0] - 1) * (observed.shape[1] - 1)
    # Con dof=0 la statistica è 0 e non c'è evidenza contro l'indipendenza
    p_value = float(chi2.sf(statistic, dof)) if dof > 0 else 1.0
    return ChiSquareResult(statistic=statistic, dof=int(dof), p_value=p_value)


def fast_chisq(x: Sequence[float] | np.ndarray, y: Sequence[float] | np.ndarray) -> ChiSquareResult:
    """
    Statistica chi-quadro per due vettori numerici senza valori mancanti,
    trattati come le due righe di una tabella 2 × k.

    Solo il controllo sulla lunghezza: niente NaN, niente correzione di Yates,
    niente simulazione Monte Carlo.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.shape != y.shape or x.ndim != 1:
        raise ValueError("x e y devono essere vettori 1-D della stessa lunghezza.")
    return _chisq_from_observed(np.vstack([x, y]))


def table_chisq(a: Sequence[int] | np.ndarray, b: Sequence[int] | np.ndarray) -> ChiSquareResult:
    """Test di indipendenza per due vettori interi, tabulati con fast_table()."""
    return _chisq_from_observed(fast_table(a, b).counts)


def reference_chisq(observed: np.ndarray) -> ChiSquareResult:
    """Implementazione di riferimento (SciPy) su una tabella già costruita."""
    statistic, p_value, dof, _expected = chi2_contingency(np.asarray(observed), correction=False)
    return ChiSquareResult(statistic=float(statistic), dof=int(dof), p_value=float(p_value))
