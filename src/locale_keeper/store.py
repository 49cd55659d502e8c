"""File system store holding one JSON file per locale."""

from __future__ import annotations

import concurrent.futures
import json
from collections.abc import Mapping, Sequence
from pathlib import Path

from locale_keeper.tree import LocaleSet, MalformedTreeError, validate_tree
from locale_keeper.utils import logger

LOCALE_SUFFIX = ".json"
MAX_WRITERS = 8

ERR_NOT_DIRECTORY = "Locales directory not found: {path}"
ERR_READ = "Could not read locale file: {path}"
ERR_PARSE = "Could not parse locale file: {path}"
ERR_NOT_OBJECT = "Locale file must contain a JSON object: {path}"
ERR_WRITE = "Could not write locale file: {path}"
ERR_BAD_NAME = "Invalid locale name: {name!r}"


class StoreError(RuntimeError):
    """Raised when a locale file cannot be read, parsed or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialise the error with the file it concerns."""
        super().__init__(message)
        self.path = path


def locale_name(path: Path) -> str:
    """Return the locale identifier for ``path`` (``en-us.json`` -> ``en-us``)."""
    return path.name.split(".", 1)[0]


class LocaleStore:
    """Load and write locale trees stored under ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        """Remember the directory; nothing is read until :meth:`load_locales`."""
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        """Return the file path used for locale ``name``."""
        if not name or "/" in name or "\\" in name or name in {".", ".."}:
            raise StoreError(ERR_BAD_NAME.format(name=name))
        return self.directory / f"{name}{LOCALE_SUFFIX}"

    def locale_files(self) -> list[Path]:
        """Return the locale files of the directory sorted by name."""
        if not self.directory.is_dir():
            raise StoreError(
                ERR_NOT_DIRECTORY.format(path=self.directory), path=self.directory
            )
        return sorted(
            p for p in self.directory.glob(f"*{LOCALE_SUFFIX}") if p.is_file()
        )

    def load_locale(self, path: Path) -> dict:
        """Parse a single locale file into a tree."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreError(ERR_READ.format(path=path), path=path) from exc
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise StoreError(ERR_PARSE.format(path=path), path=path) from exc
        if not isinstance(data, dict):
            raise StoreError(ERR_NOT_OBJECT.format(path=path), path=path)
        try:
            validate_tree(data)
        except MalformedTreeError as exc:
            raise StoreError(f"{path}: {exc}", path=path) from exc
        return data

    def load_locales(self) -> LocaleSet:
        """Return every locale of the directory keyed by locale identifier."""
        locales: LocaleSet = {}
        for path in self.locale_files():
            locales[locale_name(path)] = self.load_locale(path)
            logger.debug("loaded %s", path)
        logger.info("loaded %d locales from %s", len(locales), self.directory)
        return locales

    def write_locale(self, name: str, lines: Sequence[str]) -> Path:
        """Join ``lines`` with newlines and overwrite the file of ``name``."""
        path = self.path_for(name)
        try:
            path.write_text("\n".join(lines), encoding="utf-8")
        except OSError as exc:
            raise StoreError(ERR_WRITE.format(path=path), path=path) from exc
        logger.info("wrote %s", path)
        return path

    def write_locales(self, documents: Mapping[str, Sequence[str]]) -> list[Path]:
        """Write several locales concurrently, one task per locale.

        Returns the written paths in the order of ``documents``. The first
        failure is re-raised once all tasks have finished.
        """
        if not documents:
            return []
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=min(len(documents), MAX_WRITERS)
        ) as executor:
            futures = [
                executor.submit(self.write_locale, name, lines)
                for name, lines in documents.items()
            ]
            concurrent.futures.wait(futures)
        return [future.result() for future in futures]


__all__ = ["LOCALE_SUFFIX", "LocaleStore", "StoreError", "locale_name"]
