"""
Parsing di stringhe data/ora: dal ciclo strptime alla decodifica vettoriale.

Tutti i parser ritornano una pd.Series datetime64[ns]; le stringhe non
interpretabili e le date fuori dall'intervallo rappresentabile in
nanosecondi (circa 1677-2262) diventano NaT.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

import numpy as np
import pandas as pd

ISO_DATE_LEN = 10
ISO_DATETIME_LEN = 19

# Estremi al secondo dentro [pd.Timestamp.min, pd.Timestamp.max]
MIN_STAMP = datetime(1677, 9, 22)
MAX_STAMP = datetime(2262, 4, 11, 23, 47, 16)


def parse_strptime(values: Iterable[str], fmt: str) -> pd.Series:
    parsed = []
    for value in values:
        try:
            stamp = datetime.strptime(value, fmt)
            if stamp.tzinfo is not None:
                stamp = stamp.astimezone(timezone.utc).replace(tzinfo=None)
        except (TypeError, ValueError, OverflowError):
            parsed.append(pd.NaT)
            continue
        if not (MIN_STAMP <= stamp <= MAX_STAMP):
            parsed.append(pd.NaT)
        else:
            parsed.append(stamp)
    return pd.Series(parsed, dtype="datetime64[ns]")


def parse_pandas(values: Iterable[str], fmt: Optional[str] = None) -> pd.Series:
    """
    pandas.to_datetime: veloce con formato esplicito, più lento se deve inferirlo.

    Gli orari con offset vengono riportati in UTC e resi naive; quelli senza
    offset restano invariati.
    """
    series = pd.Series(list(values), dtype="object")
    parsed = pd.to_datetime(series, format=fmt, errors="coerce", utc=True).dt.tz_localize(None)
    # Con pandas 3 le date fuori range restano valide in un'unità più grossolana
    parsed = parsed.where((parsed >= MIN_STAMP) & (parsed <= MAX_STAMP))
    return parsed.astype("datetime64[ns]")


def _digits(codes: np.ndarray, start: int, width: int) -> np.ndarray:
    out = np.zeros(codes.shape[0], dtype=np.int64)
    for k in range(start, start + width):
        out = out * 10 + (codes[:, k] - ord("0"))
    return out


def _all_digits(codes: np.ndarray, positions: Iterable[int]) -> np.ndarray:
    cols = codes[:, list(positions)]
    return np.all((cols >= ord("0")) & (cols <= ord("9")), axis=1)


def parse_iso_fast(values: Iterable[str]) -> pd.Series:
    """
    Parser a larghezza fissa per 'YYYY-MM-DD' e 'YYYY-MM-DD HH:MM:SS' (anche con 'T').

    Le stringhe vengono viste come matrice di code point (uint32) e i campi
    estratti per posizione, senza alcun ciclo Python per elemento.
    """
    raw = np.asarray(list(values), dtype=str)
    n = raw.shape[0]
    if n == 0:
        return pd.Series([], dtype="datetime64[ns]")

    lengths = np.char.str_len(raw)
    codes = raw.astype(f"U{ISO_DATETIME_LEN}").view(np.uint32).reshape(n, ISO_DATETIME_LEN).astype(np.int64)

    has_time = lengths == ISO_DATETIME_LEN
    valid = (lengths == ISO_DATE_LEN) | has_time
    valid &= (codes[:, 4] == ord("-")) & (codes[:, 7] == ord("-"))
    valid &= _all_digits(codes, (0, 1, 2, 3, 5, 6, 8, 9))

    time_ok = (
        ((codes[:, 10] == ord(" ")) | (codes[:, 10] == ord("T")))
        & (codes[:, 13] == ord(":"))
        & (codes[:, 16] == ord(":"))
        & _all_digits(codes, (11, 12, 14, 15, 17, 18))
    )
    valid &= ~has_time | time_ok

    year = np.where(valid, _digits(codes, 0, 4), 1970)
    month = np.where(valid, _digits(codes, 5, 2), 1)
    day = np.where(valid, _digits(codes, 8, 2), 1)
    with_time = valid & has_time
    hour = np.where(with_time, _digits(codes, 11, 2), 0)
    minute = np.where(with_time, _digits(codes, 14, 2), 0)
    second = np.where(with_time, _digits(codes, 17, 2), 0)

    valid &= (month >= 1) & (month <= 12) & (day >= 1) & (day <= 31)
    valid &= (hour < 24) & (minute < 60) & (second < 60)
    month = np.where(valid, month, 1)
    day = np.where(valid, day, 1)

    month_start = ((year - 1970) * 12 + (month - 1)).astype("datetime64[M]")
    dates = month_start.astype("datetime64[D]") + (day - 1).astype("timedelta64[D]")
    # 30 febbraio & co. scivolano nel mese successivo: li scartiamo
    valid &= dates.astype("datetime64[M]") == month_start

    seconds = (hour * 3600 + minute * 60 + second).astype("timedelta64[s]")
    stamps = dates.astype("datetime64[s]") + seconds
    valid &= (stamps >= np.datetime64(MIN_STAMP, "s")) & (stamps <= np.datetime64(MAX_STAMP, "s"))
    stamps[~valid] = np.datetime64("NaT")
    return pd.Series(stamps.astype("datetime64[ns]"))
