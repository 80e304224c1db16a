"""
Lookup di valori in una tabella: posizione della prima occorrenza o -1.

Tre strategie con lo stesso contratto:
- naive_match: scansione lineare per ogni elemento, O(n·m)
- hashed_match: dizionario costruito una volta, O(n + m)
- indexed_match: pandas.Index.get_indexer su indice deduplicato

Come in pandas, un NaN in x trova il primo NaN della tabella in tutte e tre
le strategie (e in is_in).
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Sequence

import numpy as np
import pandas as pd

NO_MATCH = -1

# Chiave unica per i NaN: nan != nan e oggetti NaN distinti hanno hash diversi
_NAN_KEY = object()


def _is_nan(value: Any) -> bool:
    return isinstance(value, (float, np.floating)) and value != value


def _key(value: Any) -> Any:
    return _NAN_KEY if _is_nan(value) else value


def naive_match(x: Sequence[Any], table: Sequence[Any]) -> np.ndarray:
    table_list = list(table)
    out = np.full(len(x), NO_MATCH, dtype=np.int64)
    for i, value in enumerate(x):
        for j, candidate in enumerate(table_list):
            if candidate == value or (_is_nan(candidate) and _is_nan(value)):
                out[i] = j
                break
    return out


def _first_positions(table: Sequence[Hashable]) -> Dict[Hashable, int]:
    positions: Dict[Hashable, int] = {}
    for j, value in enumerate(table):
        # setdefault conserva la prima occorrenza
        positions.setdefault(_key(value), j)
    return positions


def hashed_match(x: Sequence[Hashable], table: Sequence[Hashable]) -> np.ndarray:
    positions = _first_positions(table)
    return np.fromiter(
        (positions.get(_key(value), NO_MATCH) for value in x),
        dtype=np.int64,
        count=len(x),
    )


def indexed_match(x: Sequence[Hashable], table: Sequence[Hashable]) -> np.ndarray:
    index = pd.Index(table)
    if len(x) == 0:
        return np.empty(0, dtype=np.int64)
    if index.empty:
        return np.full(len(x), NO_MATCH, dtype=np.int64)

    keep = ~index.duplicated(keep="first")
    unique_index = index[keep]
    original_positions = np.flatnonzero(keep)

    hits = unique_index.get_indexer(pd.Index(x))
    out = np.full(hits.shape[0], NO_MATCH, dtype=np.int64)
    found = hits >= 0
    out[found] = original_positions[hits[found]]
    return out


def is_in(x: Sequence[Any], table: Sequence[Any]) -> np.ndarray:
    """Equivalente booleano: True dove x compare in table."""
    x_arr = np.asarray(x)
    table_arr = np.asarray(table)
    found = np.isin(x_arr, table_arr)
    if x_arr.dtype.kind == "f" and table_arr.dtype.kind == "f" and np.isnan(table_arr).any():
        found |= np.isnan(x_arr)
    return found
