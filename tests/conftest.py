import json
from pathlib import Path

import pytest

from locale_keeper import config as config_mod


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    path = tmp_path / "locale_keeper_config.json"
    monkeypatch.setattr(config_mod, "CONFIG_PATH", path)
    return path


@pytest.fixture
def write_locales(tmp_path: Path):
    """Return a helper writing ``{name: tree}`` as JSON files into a directory."""

    def _write(locales: dict, directory: str = "locales") -> Path:
        target = tmp_path / directory
        target.mkdir(exist_ok=True)
        for name, tree in locales.items():
            (target / f"{name}.json").write_text(
                json.dumps(tree, indent="\t", ensure_ascii=False), encoding="utf-8"
            )
        return target

    return _write
