import json

import pytest
from pydantic import ValidationError

from ducksmart import catalog as catalog_mod
from ducksmart.catalog import CatalogError, default_catalog, load_catalog
from ducksmart.config import settings
from ducksmart.domain import PressureLevel


def _spread(key, **extra):
    data = {
        "key": key,
        "name": key.title(),
        "type": "Test",
        "water_types": ["pond"],
        "weather": ["calm"],
        "seasons": ["early"],
        "species": ["teal"],
        "pressure": "low",
    }
    data.update(extra)
    return data


def _write_catalog(path, spreads):
    payload = {
        "options": {"water_types": ["Pond"], "weather": ["Calm"], "seasons": ["Early"], "pressure": ["Low"], "species": ["Teal"]},
        "spreads": spreads,
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_bundled_catalog_shape():
    catalog = load_catalog()
    assert len(catalog.spreads) == 8
    assert [s.key for s in catalog.spreads if s.is_addon] == ["confidence_spread"]
    assert catalog.addon.pressure == PressureLevel.ANY
    j_hook = catalog.get("j_hook")
    assert j_hook.name == "J-Hook"
    assert j_hook.seasons == ("mid", "late")
    assert catalog.get("missing") is None


def test_bundled_options():
    options = load_catalog().options
    assert len(options.water_types) == 8
    assert len(options.weather) == 5
    assert len(options.seasons) == 3
    assert len(options.pressure) == 3
    assert len(options.species) == 7


def test_profiles_are_immutable():
    j_hook = load_catalog().get("j_hook")
    with pytest.raises(ValidationError):
        j_hook.name = "Fish Hook"


def test_duplicate_keys_rejected(tmp_path):
    path = _write_catalog(tmp_path / "dupe.json", [_spread("a"), _spread("a")])
    with pytest.raises(CatalogError, match="duplicate"):
        load_catalog(path)


def test_multiple_addons_rejected(tmp_path):
    path = _write_catalog(tmp_path / "addons.json", [_spread("a", is_addon=True), _spread("b", is_addon=True)])
    with pytest.raises(CatalogError, match="add-on"):
        load_catalog(path)


def test_unknown_pressure_rejected(tmp_path):
    path = _write_catalog(tmp_path / "pressure.json", [_spread("a", pressure="extreme")])
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_missing_and_malformed_files(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "nope.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(bad)


def test_default_catalog_honours_configured_path(tmp_path, monkeypatch):
    path = _write_catalog(tmp_path / "custom.json", [_spread("only")])
    monkeypatch.setattr(settings, "spread_catalog_path", str(path))
    catalog_mod.default_catalog.cache_clear()
    try:
        assert [s.key for s in default_catalog().spreads] == ["only"]
    finally:
        monkeypatch.undo()
        catalog_mod.default_catalog.cache_clear()
    assert len(default_catalog().spreads) == 8


def test_default_catalog_is_loaded_once():
    assert default_catalog() is default_catalog()
