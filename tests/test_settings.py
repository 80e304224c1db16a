"""Test per perfstat/settings.py - impostazioni dei benchmark."""
from __future__ import annotations

import json

import pytest

from perfstat.settings import (
    SETTINGS_VERSION,
    BenchSettings,
    SettingsError,
    load_settings,
    save_settings,
)


def test_defaults():
    settings = BenchSettings()
    assert settings.runs >= 1
    assert settings.warmup >= 0
    assert settings.sizes == [1_000, 100_000]


def test_save_and_load(settings_path):
    """Salvataggio e caricamento conservano tutti i campi."""
    original = BenchSettings(runs=7, warmup=0, seed=3, sizes=[10, 20], max_value=5)
    save_settings(original, settings_path)

    assert settings_path.exists()
    data = json.loads(settings_path.read_text(encoding="utf-8"))
    assert data["version"] == SETTINGS_VERSION
    assert "saved_at" in data

    assert load_settings(settings_path) == original


def test_missing_keys_use_defaults(settings_path):
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps({"version": SETTINGS_VERSION, "settings": {"runs": 3}}), encoding="utf-8")

    loaded = load_settings(settings_path)
    assert loaded.runs == 3
    assert loaded.seed == BenchSettings().seed


def test_unknown_keys_ignored(settings_path):
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"version": "0.9", "settings": {"runs": 4, "colour": "blue"}}
    settings_path.write_text(json.dumps(payload), encoding="utf-8")

    assert load_settings(settings_path).runs == 4


def test_missing_file(tmp_path):
    with pytest.raises(SettingsError, match="non trovato"):
        load_settings(tmp_path / "nope.json")


def test_corrupted_json(settings_path):
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsError, match="JSON invalido"):
        load_settings(settings_path)


def test_wrong_structure(settings_path):
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps({"settings": [1, 2]}), encoding="utf-8")

    with pytest.raises(SettingsError, match="formato invalido"):
        load_settings(settings_path)


def test_invalid_values(settings_path):
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps({"settings": {"runs": 0}}), encoding="utf-8")

    with pytest.raises(SettingsError, match="runs"):
        load_settings(settings_path)


@pytest.mark.parametrize(
    "kwargs",
    [{"runs": 0}, {"warmup": -1}, {"max_value": 0}, {"sizes": [10, -1]}],
)
def test_constructor_validation(kwargs):
    with pytest.raises(SettingsError):
        BenchSettings(**kwargs)
