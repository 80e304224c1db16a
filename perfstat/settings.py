"""
Impostazioni dei benchmark: salvataggio/caricamento su file JSON.

Permette di riutilizzare lo stesso numero di ripetizioni, seed e dimensioni
degli input fra esecuzioni diverse degli script di benchmark.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import List

from .bench import DEFAULT_RUNS, DEFAULT_WARMUP
from .logger import LogManager

log = LogManager("settings").get_logger()

# Schema version per compatibilità futura
SETTINGS_VERSION = "1.0"


class SettingsError(Exception):
    """Eccezione per errori nella gestione delle impostazioni."""
    pass


@dataclass
class BenchSettings:
    runs: int = DEFAULT_RUNS
    warmup: int = DEFAULT_WARMUP
    seed: int = 42
    sizes: List[int] = field(default_factory=lambda: [1_000, 100_000])
    max_value: int = 50  # valori interi generati in [0, max_value)

    def __post_init__(self) -> None:
        if int(self.runs) < 1:
            raise SettingsError("runs deve essere >= 1.")
        if int(self.warmup) < 0:
            raise SettingsError("warmup deve essere >= 0.")
        if int(self.max_value) < 1:
            raise SettingsError("max_value deve essere >= 1.")
        if any(int(s) < 0 for s in self.sizes):
            raise SettingsError("sizes non può contenere valori negativi.")


def save_settings(settings: BenchSettings, path: Path | str) -> None:
    """
    Salva le impostazioni in formato JSON.

    Raises:
        SettingsError: Se il salvataggio fallisce
    """
    target = Path(path)
    data = {
        "version": SETTINGS_VERSION,
        "saved_at": datetime.now().isoformat(),
        "settings": asdict(settings),
    }
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise SettingsError(f"Impossibile salvare impostazioni in '{target}': {e}") from e
    log.info("Impostazioni salvate: %s", target)


def load_settings(path: Path | str) -> BenchSettings:
    """
    Carica le impostazioni da JSON. Chiavi sconosciute ignorate, chiavi mancanti
    lasciate al default.

    Raises:
        SettingsError: Se il file non esiste o il formato non è valido
    """
    source = Path(path)
    if not source.exists():
        raise SettingsError(f"File impostazioni '{source}' non trovato")

    try:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"File impostazioni '{source}' corrotto (JSON invalido): {e}") from e

    version = data.get("version", "unknown") if isinstance(data, dict) else "unknown"
    if version != SETTINGS_VERSION:
        log.warning("Versione impostazioni %s diversa da %s: caricamento tollerante", version, SETTINGS_VERSION)

    raw = data.get("settings", {}) if isinstance(data, dict) else None
    if not isinstance(raw, dict):
        raise SettingsError(f"File impostazioni '{source}' ha formato invalido")

    known = {f.name for f in fields(BenchSettings)}
    ignored = sorted(set(raw) - known)
    if ignored:
        log.debug("Chiavi ignorate in %s: %s", source.name, ignored)

    try:
        return BenchSettings(**{k: v for k, v in raw.items() if k in known})
    except (TypeError, ValueError) as e:
        raise SettingsError(f"File impostazioni '{source}' ha valori invalidi: {e}") from e
