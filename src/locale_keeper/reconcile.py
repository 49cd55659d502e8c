"""Cross-locale key reconciliation.

:func:`compare` lists, for every ordered pair of locales, the key paths the
first locale has and the second lacks. :func:`fix` back-fills those keys so
that every locale ends up with the union of all key sets. Existing values are
never replaced.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from locale_keeper.tree import LocaleSet, LocaleTree, is_branch, iter_paths, join_path
from locale_keeper.utils import logger

DiffRecord = dict[str, dict[str, list[str]]]

_EMPTY: Mapping[str, Any] = {}


def missing_paths(master: LocaleTree, other: object, prefix: str = "") -> list[str]:
    """Return the dotted paths present in ``master`` but absent in ``other``.

    When a whole mapping is missing its own path is listed first, followed by
    every path beneath it. A scalar in ``other`` where ``master`` holds a
    mapping counts as lacking all of the mapping's children.
    """
    if not is_branch(other):
        other = _EMPTY
    missing: list[str] = []
    for key, value in master.items():
        path = join_path(prefix, key)
        if key not in other:
            missing.append(path)
            if is_branch(value):
                missing.extend(iter_paths(value, path))
            continue
        if is_branch(value):
            missing.extend(missing_paths(value, other[key], path))
    return missing


def compare(locales: Mapping[str, LocaleTree]) -> DiffRecord:
    """Return ``{master: {other: [missing paths]}}`` for all ordered pairs."""
    record: DiffRecord = {}
    for master, master_tree in locales.items():
        record[master] = {}
        for other, other_tree in locales.items():
            if other == master:
                continue
            record[master][other] = missing_paths(master_tree, other_tree)
    return record


def is_consistent(record: Mapping[str, Mapping[str, list[str]]]) -> bool:
    """Return ``True`` when no locale lacks any key of another."""
    return not any(paths for others in record.values() for paths in others.values())


def backfill(
    master: LocaleTree,
    other: dict[str, Any],
    prefix: str = "",
    *,
    locale: str = "",
) -> int:
    """Copy keys of ``master`` missing from ``other`` into ``other`` in place.

    Nested mappings present on both sides are merged recursively. Values
    already in ``other`` are kept as they are, including scalars standing
    where ``master`` has a mapping. Returns the number of keys added.
    """
    added = 0
    for key, value in master.items():
        path = join_path(prefix, key)
        if key not in other:
            other[key] = copy.deepcopy(value)
            added += 1
            continue
        if not is_branch(value):
            continue
        if is_branch(other[key]):
            added += backfill(value, other[key], path, locale=locale)
        else:
            logger.warning(
                "%s: keeping scalar at %s where another locale has a mapping",
                locale or "<locale>",
                path,
            )
    return added


def fix(locales: Mapping[str, LocaleTree]) -> LocaleSet:
    """Return a new locale set where every locale holds the union of all keys.

    The input is left untouched. Each locale in turn acts as the source for
    every other one; a single pass over all ordered pairs is enough because
    keys are only ever added.
    """
    results: LocaleSet = copy.deepcopy(
        {name: dict(tree) for name, tree in locales.items()}
    )
    for master in results:
        for other in results:
            if other == master:
                continue
            added = backfill(results[master], results[other], locale=other)
            if added:
                logger.debug("%s: added %d keys from %s", other, added, master)
    return results


__all__ = [
    "DiffRecord",
    "backfill",
    "compare",
    "fix",
    "is_consistent",
    "missing_paths",
]
