"""Configurazione pytest e fixtures condivise."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator, Tuple

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    """Generatore con seed fisso per test riproducibili."""
    return np.random.default_rng(20240601)


@pytest.fixture
def small_pair() -> Tuple[np.ndarray, np.ndarray]:
    """La coppia d'esempio: ogni combinazione compare una volta."""
    return np.array([1, 1, 2, 2]), np.array([5, 6, 5, 6])


@pytest.fixture
def noisy_series(rng: np.random.Generator) -> pd.Series:
    """Serie gaussiana con indice non banale."""
    values = rng.normal(loc=10.0, scale=2.0, size=300)
    return pd.Series(values, index=pd.RangeIndex(100, 400), name="signal")


@pytest.fixture
def settings_path(tmp_path: Path) -> Iterator[Path]:
    """Percorso JSON temporaneo per le impostazioni."""
    path = tmp_path / "settings" / "bench.json"
    yield path
    if path.exists():
        path.unlink()
