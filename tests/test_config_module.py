from __future__ import annotations

import json

import locale_keeper.config as cfg


def test_load_config_default(tmp_path, monkeypatch):
    path = tmp_path / "locale_keeper_config.json"
    monkeypatch.setattr(cfg, "CONFIG_PATH", path)
    data = cfg.load_config()
    assert data["locales_dir"] == "locales"
    assert data["indent"] == "\t"
    assert data["skip_empty"] is False


def test_save_and_load_config(tmp_path, monkeypatch):
    path = tmp_path / "nested" / "locale_keeper_config.json"
    monkeypatch.setattr(cfg, "CONFIG_PATH", path)
    cfg.save_config({"indent": 2, "locales_dir": "i18n"})
    loaded = cfg.load_config()
    assert loaded["indent"] == "  "
    assert loaded["locales_dir"] == "i18n"
    raw = json.loads(path.read_text())
    assert raw["indent"] == "  "


def test_load_config_ignores_broken_file(tmp_path):
    path = tmp_path / "locale_keeper_config.json"
    path.write_text("{broken")
    assert cfg.load_config_at(path) == cfg.DEFAULT_CONFIG


def test_normalise_indent():
    assert cfg.normalise_indent("tab") == "\t"
    assert cfg.normalise_indent("\t") == "\t"
    assert cfg.normalise_indent("4") == "    "
    assert cfg.normalise_indent(2) == "  "
    assert cfg.normalise_indent("   ") == "   "
    assert cfg.normalise_indent(0) == "\t"
    assert cfg.normalise_indent(None) == "\t"
    assert cfg.normalise_indent("x") == "\t"


def test_load_config_resets_invalid_locales_dir(tmp_path):
    path = tmp_path / "locale_keeper_config.json"
    for value in (None, 3, "  "):
        path.write_text(json.dumps({"locales_dir": value}))
        assert cfg.load_config_at(path)["locales_dir"] == "locales"
