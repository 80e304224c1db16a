from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np
import pandas as pd

from .logger import LogManager
from .tabulate import ContingencyTable, fast_table

log = LogManager("validation").get_logger()


class TabulationInputError(ValueError):
    """Precondizione violata: input non adatto al percorso veloce di tabulazione."""
    pass


def _as_integer_vector(values: Sequence[Any] | np.ndarray, name: str) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except ValueError as e:
        raise TabulationInputError(f"'{name}' non convertibile in vettore: {e}") from e

    if arr.ndim != 1:
        raise TabulationInputError(f"'{name}' deve essere un vettore 1-D (ndim={arr.ndim}).")

    if arr.dtype == object:
        # Liste con None / pd.NA finiscono qui: le rifiutiamo prima del cast
        if pd.isna(arr).any():
            raise TabulationInputError(f"'{name}' contiene valori mancanti.")
        if not all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in arr):
            raise TabulationInputError(f"'{name}' contiene valori non interi.")
        try:
            return arr.astype(np.int64)
        except OverflowError as e:
            raise TabulationInputError(f"'{name}' contiene valori fuori dal range int64.") from e

    if arr.size == 0:
        return arr.astype(np.int64)

    if np.issubdtype(arr.dtype, np.floating) and np.isnan(arr).any():
        raise TabulationInputError(f"'{name}' contiene valori mancanti.")

    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise TabulationInputError(f"'{name}' deve avere dtype intero (trovato {arr.dtype}).")

    # uint64 oltre 2**63 - 1 verrebbe troncato in silenzio dal cast
    if np.issubdtype(arr.dtype, np.unsignedinteger) and arr.max() > np.iinfo(np.int64).max:
        raise TabulationInputError(f"'{name}' contiene valori fuori dal range int64.")

    return arr.astype(np.int64, copy=False)


def validate_pair(
    a: Sequence[Any] | np.ndarray,
    b: Sequence[Any] | np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Controlla che (a, b) rispettino le precondizioni di fast_table():
      - vettori 1-D,
      - stessa lunghezza,
      - dtype intero (bool escluso),
      - nessun valore mancante.
    Ritorna le due serie come array int64. Lancia TabulationInputError altrimenti.
    """
    arr_a = _as_integer_vector(a, "a")
    arr_b = _as_integer_vector(b, "b")

    if arr_a.shape[0] != arr_b.shape[0]:
        raise TabulationInputError(
            f"Vettori di lunghezza diversa: len(a)={arr_a.shape[0]}, len(b)={arr_b.shape[0]}."
        )
    return arr_a, arr_b


def checked_table(a: Sequence[Any] | np.ndarray, b: Sequence[Any] | np.ndarray) -> ContingencyTable:
    """Valida l'input e delega a fast_table()."""
    try:
        arr_a, arr_b = validate_pair(a, b)
    except TabulationInputError as exc:
        log.warning("Input rifiutato per la tabulazione veloce: %s", exc)
        raise
    return fast_table(arr_a, arr_b)
