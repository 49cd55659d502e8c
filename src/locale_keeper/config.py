"""Configuration helpers shared across modules."""

from __future__ import annotations

import json
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any

from locale_keeper import utils

CONFIG_PATH = utils.CONFIG_FILE

_INDENT_KEY = "indent"
_INDENT_DEFAULT = "\t"
_INDENT_ALIASES: dict[str, str] = {
    "tab": "\t",
    "tabs": "\t",
    "\\t": "\t",
}

DEFAULT_CONFIG = {
    "locales_dir": "locales",
    _INDENT_KEY: _INDENT_DEFAULT,
    "skip_empty": False,
    "log_level": "INFO",
}


def normalise_indent(value: Any) -> str:
    """Return the indentation string described by ``value``.

    Accepts the literal string, an alias such as ``"tab"`` or a number of
    spaces.
    """
    if value is None:
        return _INDENT_DEFAULT
    if isinstance(value, bool):
        return _INDENT_DEFAULT
    if isinstance(value, int):
        return " " * value if value > 0 else _INDENT_DEFAULT
    if isinstance(value, str):
        alias = _INDENT_ALIASES.get(value.strip().lower())
        if alias:
            return alias
        if value.strip().isdigit():
            return normalise_indent(int(value.strip()))
        if value and not value.strip():
            return value
    return _INDENT_DEFAULT


def load_config_at(path: Path) -> dict:
    """Load configuration from a specific path."""
    cfg = DEFAULT_CONFIG.copy()
    if path.exists():
        with suppress(Exception):
            cfg.update(json.loads(path.read_text(encoding="utf-8")))
    cfg[_INDENT_KEY] = normalise_indent(cfg.get(_INDENT_KEY))
    cfg["skip_empty"] = bool(cfg.get("skip_empty"))
    locales_dir = cfg.get("locales_dir")
    if not isinstance(locales_dir, str) or not locales_dir.strip():
        cfg["locales_dir"] = DEFAULT_CONFIG["locales_dir"]
    return cfg


def save_config_at(path: Path, cfg: Mapping[str, Any]) -> None:
    """Persist configuration to a specific path."""
    data = dict(cfg)
    if _INDENT_KEY in data:
        data[_INDENT_KEY] = normalise_indent(data[_INDENT_KEY])
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def load_config() -> dict:
    """Load configuration using :data:`CONFIG_PATH`."""
    return load_config_at(CONFIG_PATH)


def save_config(cfg: Mapping[str, Any]) -> None:
    """Persist configuration using :data:`CONFIG_PATH`."""
    save_config_at(CONFIG_PATH, cfg)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_CONFIG",
    "load_config",
    "load_config_at",
    "normalise_indent",
    "save_config",
    "save_config_at",
]
