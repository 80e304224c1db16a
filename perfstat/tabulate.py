from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

import numpy as np
import pandas as pd


@dataclass(slots=True, eq=False)
class ContingencyTable:
    """Tabella di contingenza p × q con le etichette ordinate di righe e colonne."""

    counts: np.ndarray
    row_labels: np.ndarray
    col_labels: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return int(self.counts.shape[0]), int(self.counts.shape[1])

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def cell(self, row_label: Any, col_label: Any) -> int:
        """Conteggio per la coppia (row_label, col_label); 0 se una delle due non compare."""
        rows = np.flatnonzero(self.row_labels == row_label)
        cols = np.flatnonzero(self.col_labels == col_label)
        if rows.size == 0 or cols.size == 0:
            return 0
        return int(self.counts[rows[0], cols[0]])

    def equals(self, other: "ContingencyTable") -> bool:
        return (
            self.counts.shape == other.counts.shape
            and np.array_equal(self.counts, other.counts)
            and np.array_equal(self.row_labels, other.row_labels)
            and np.array_equal(self.col_labels, other.col_labels)
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.counts,
            index=pd.Index(self.row_labels, name="a"),
            columns=pd.Index(self.col_labels, name="b"),
        )


class Tabulator(Protocol):
    """Qualsiasi funzione che produce una ContingencyTable da due sequenze."""

    def __call__(self, a: Sequence[Any], b: Sequence[Any]) -> ContingencyTable: ...


def fast_table(a: Sequence[int] | np.ndarray, b: Sequence[int] | np.ndarray) -> ContingencyTable:
    """
    Tabella a due vie per due vettori interi della stessa lunghezza, senza valori mancanti.

    Nessuna validazione: input non conformi (lunghezze diverse, NaN, float)
    vanno scartati a monte, ad es. con validation.checked_table().

    Passi:
      1. valori distinti ordinati di a e b (p e q valori),
      2. rango di ogni elemento via ricerca binaria sui distinti,
      3. bin lineare rA + p * rB (ordine per colonne sulla griglia p × q),
      4. conteggio dei bin con bincount (nessun ordinamento/raggruppamento),
      5. reshape nello stesso ordine per colonne.

    Example:
        >>> t = fast_table([1, 1, 2, 2], [5, 6, 5, 6])
        >>> t.counts.tolist()
        [[1, 1], [1, 1]]
    """
    a = np.asarray(a)
    b = np.asarray(b)

    row_labels = np.unique(a)
    col_labels = np.unique(b)
    p = row_labels.size
    q = col_labels.size

    rank_a = np.searchsorted(row_labels, a)
    rank_b = np.searchsorted(col_labels, b)
    bins = rank_a + p * rank_b

    counts = np.bincount(bins, minlength=p * q).astype(np.int64, copy=False)
    counts = counts.reshape((p, q), order="F")

    return ContingencyTable(counts=counts, row_labels=row_labels, col_labels=col_labels)


def generic_table(a: Sequence[Any], b: Sequence[Any]) -> ContingencyTable:
    """
    Versione generica e lenta: accetta qualsiasi valore ordinabile (stringhe, float,
    oggetti) e scarta le coppie in cui uno dei due lati è mancante.

    I valori di ciascun lato devono essere confrontabili tra loro (niente mix str/int).
    """
    if len(a) != len(b):
        raise ValueError(f"Sequenze di lunghezza diversa: {len(a)} vs {len(b)}.")

    frame = pd.DataFrame({"a": list(a), "b": list(b)}).dropna()
    if frame.empty:
        return ContingencyTable(
            counts=np.zeros((0, 0), dtype=np.int64),
            row_labels=np.array([]),
            col_labels=np.array([]),
        )

    crossed = pd.crosstab(frame["a"], frame["b"])
    return ContingencyTable(
        counts=crossed.to_numpy(dtype=np.int64),
        row_labels=crossed.index.to_numpy(),
        col_labels=crossed.columns.to_numpy(),
    )
