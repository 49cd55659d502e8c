"""Render locale trees and sorted entries as indented JSON lines."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from locale_keeper.sorter import SortedEntry
from locale_keeper.tree import check_value, is_branch, join_path

DEFAULT_INDENT = "\t"


def _items(source: Mapping[str, Any] | list[SortedEntry]) -> Iterable[tuple[str, Any]]:
    if isinstance(source, Mapping):
        return source.items()
    return ((entry.key, entry.value) for entry in source)


def _is_nested(value: object, source: object) -> bool:
    # sorted entries carry their children as lists
    return is_branch(value) or (
        isinstance(value, list) and not isinstance(source, Mapping)
    )


def _literal(value: object) -> str:
    return json.dumps(value, ensure_ascii=False)


def serialize(
    source: Mapping[str, Any] | list[SortedEntry],
    indent_depth: int = 1,
    *,
    indent: str = DEFAULT_INDENT,
    _path: str = "",
) -> list[str]:
    """Return the lines of ``source`` written as JSON.

    ``source`` is either a plain locale tree, written in insertion order, or
    the result of :func:`locale_keeper.sorter.sort_tree`, written in sorted
    order. Each key takes one line; a nested value takes an opening line, its
    children and a closing line. Only the outermost level (``indent_depth``
    of 1) is wrapped in braces. Joined with ``"\\n"`` the lines form valid
    JSON and their count equals :func:`locale_keeper.tree.tree_size`.
    """
    lines: list[str] = []
    pad = indent * indent_depth
    for key, value in _items(source):
        path = join_path(_path, key)
        if _is_nested(value, source):
            lines.append(f"{pad}{_literal(key)}: {{")
            lines.extend(
                serialize(value, indent_depth + 1, indent=indent, _path=path)
            )
            lines.append(f"{pad}}},")
        else:
            check_value(value, path)
            lines.append(f"{pad}{_literal(key)}: {_literal(value)},")

    if lines:
        # trailing comma is invalid JSON
        lines[-1] = lines[-1][:-1]

    if indent_depth == 1:
        lines = ["{", *lines, "}"]
    return lines


def render(
    source: Mapping[str, Any] | list[SortedEntry], *, indent: str = DEFAULT_INDENT
) -> str:
    """Return ``source`` serialized as a single JSON document."""
    return "\n".join(serialize(source, indent=indent))


__all__ = ["DEFAULT_INDENT", "render", "serialize"]
