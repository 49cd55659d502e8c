"""Line-tracking key sorter.

:func:`sort_tree` reorders every level of a locale tree alphabetically and
records, for each key, the line it occupies in the current layout and the line
it will occupy once the sorted tree is written by
:func:`locale_keeper.serializer.serialize`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from locale_keeper.tree import (
    ERR_MALFORMED,
    LocaleTree,
    MalformedTreeError,
    check_value,
    is_branch,
    join_path,
    tree_size,
)
from locale_keeper.utils import logger


@dataclass(frozen=True)
class SortedEntry:
    """A key with its (possibly nested) value and its old and new line."""

    key: str
    value: Any
    previous_line: int
    new_line: int

    @property
    def is_branch(self) -> bool:
        """Return ``True`` when ``value`` holds nested sorted entries."""
        return isinstance(self.value, list)

    @property
    def moved(self) -> bool:
        """Return ``True`` when sorting changes the line of this key."""
        return self.previous_line != self.new_line


def _span(value: object, path: str) -> int:
    """Return how many lines the key holding ``value`` reserves."""
    if is_branch(value):
        return tree_size(value, True, path=path)
    return 1


def sort_tree(
    tree: LocaleTree,
    start_line: int = 1,
    new_start_line: int = 1,
    *,
    _path: str = "",
) -> list[SortedEntry]:
    """Return the entries of ``tree`` sorted by key with line bookkeeping.

    ``start_line`` is the line of the opening brace in the current layout and
    ``new_start_line`` the line it will have after sorting. Nested mappings
    are sorted independently and recursed with the parent key's old and new
    lines as their starting points.
    """
    if not is_branch(tree):
        raise MalformedTreeError(
            ERR_MALFORMED.format(kind=type(tree).__name__, path=_path or "<root>"),
            path=_path,
        )
    previous_lines: dict[str, int] = {}
    cursor = start_line + 1
    for key, value in tree.items():
        previous_lines[key] = cursor
        cursor += _span(value, join_path(_path, key))

    entries: list[SortedEntry] = []
    cursor = new_start_line + 1
    for key in sorted(tree):
        value = tree[key]
        path = join_path(_path, key)
        check_value(value, path)
        span = _span(value, path)
        if is_branch(value):
            value = sort_tree(value, previous_lines[key], cursor, _path=path)
        entries.append(
            SortedEntry(
                key=key,
                value=value,
                previous_line=previous_lines[key],
                new_line=cursor,
            )
        )
        cursor += span

    if not _path:
        logger.debug("sorted %d top-level keys", len(entries))
    return entries


def iter_entries(entries: list[SortedEntry]) -> Iterator[SortedEntry]:
    """Yield every entry of a sorted result, children before their parent."""
    for entry in entries:
        if entry.is_branch:
            yield from iter_entries(entry.value)
        yield entry


def is_sorted(entries: list[SortedEntry]) -> bool:
    """Return ``True`` when no entry at any depth changes line."""
    return not any(entry.moved for entry in iter_entries(entries))


def to_tree(entries: list[SortedEntry]) -> dict[str, Any]:
    """Return a plain mapping in sorted order built from ``entries``."""
    return {
        entry.key: to_tree(entry.value) if entry.is_branch else entry.value
        for entry in entries
    }


__all__ = ["SortedEntry", "is_sorted", "iter_entries", "sort_tree", "to_tree"]
