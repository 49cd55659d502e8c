"""Locale tree shape helpers and the line sizer.

A locale tree is a mapping of string keys to either a JSON scalar or another
locale tree. Every helper here branches only on "mapping or scalar"; any other
value is rejected with :class:`MalformedTreeError`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, TypeAlias

Scalar: TypeAlias = str | int | float | bool | None
LocaleTree: TypeAlias = Mapping[str, Any]
LocaleSet: TypeAlias = dict[str, dict[str, Any]]

ERR_MALFORMED = "unsupported value of type {kind} at {path}"
ERR_KEY_TYPE = "key {key!r} at {path} must be a string"

_SCALAR_TYPES = (str, int, float, bool, type(None))


class MalformedTreeError(ValueError):
    """Raised when a tree holds a value that is neither a scalar nor a mapping."""

    def __init__(self, message: str, *, path: str = "") -> None:
        """Initialise the error with the dotted path of the offending key."""
        super().__init__(message)
        self.path = path


def join_path(prefix: str, key: str) -> str:
    """Return ``prefix.key`` or ``key`` when there is no prefix."""
    return f"{prefix}.{key}" if prefix else key


def is_branch(value: object) -> bool:
    """Return ``True`` when ``value`` is a nested mapping."""
    return isinstance(value, Mapping)


def check_value(value: object, path: str = "") -> None:
    """Raise :class:`MalformedTreeError` unless ``value`` is a mapping or scalar."""
    if is_branch(value) or isinstance(value, _SCALAR_TYPES):
        return
    raise MalformedTreeError(
        ERR_MALFORMED.format(kind=type(value).__name__, path=path or "<root>"),
        path=path,
    )


def iter_paths(tree: LocaleTree, prefix: str = "") -> Iterator[str]:
    """Yield every dotted key path of ``tree`` in pre-order."""
    for key, value in tree.items():
        path = join_path(prefix, key)
        yield path
        if is_branch(value):
            yield from iter_paths(value, path)


def validate_tree(tree: object, prefix: str = "") -> None:
    """Check recursively that ``tree`` only holds string keys, scalars and mappings."""
    if not is_branch(tree):
        raise MalformedTreeError(
            ERR_MALFORMED.format(kind=type(tree).__name__, path=prefix or "<root>"),
            path=prefix,
        )
    for key, value in tree.items():
        if not isinstance(key, str):
            raise MalformedTreeError(
                ERR_KEY_TYPE.format(key=key, path=prefix or "<root>"), path=prefix
            )
        path = join_path(prefix, key)
        check_value(value, path)
        if is_branch(value):
            validate_tree(value, path)


def is_empty(value: object) -> bool:
    """Return ``True`` for values the ``skip_empty`` policy treats as absent."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return is_branch(value) and not value


def prune_empty(tree: LocaleTree) -> dict[str, Any]:
    """Return a copy of ``tree`` without empty strings, nulls and empty mappings.

    Mappings that only become empty because their children were pruned are
    dropped as well.
    """
    pruned: dict[str, Any] = {}
    for key, value in tree.items():
        if is_branch(value):
            value = prune_empty(value)
        if is_empty(value):
            continue
        pruned[key] = value
    return pruned


def tree_size(
    value: object,
    count_opening_closing: bool = True,
    *,
    outermost: bool = True,
    path: str = "",
) -> int:
    """Return the number of serialized lines ``value`` occupies.

    A scalar adds nothing beyond the line of the key holding it. For a mapping
    every direct key takes one line; nested mappings add their own size plus
    one closing line when ``count_opening_closing`` is set. The outermost call
    adds two lines for the surrounding braces, so for a nested mapping the
    result equals the key line, the children and the closing line.
    """
    check_value(value, path)
    if not is_branch(value):
        return 0
    size = 0
    for key, child in value.items():
        size += 1
        if is_branch(child):
            size += tree_size(
                child,
                count_opening_closing,
                outermost=False,
                path=join_path(path, key),
            )
            if count_opening_closing:
                size += 1
        else:
            check_value(child, join_path(path, key))
    if outermost:
        size += 2
    return size


__all__ = [
    "LocaleSet",
    "LocaleTree",
    "MalformedTreeError",
    "Scalar",
    "check_value",
    "is_branch",
    "is_empty",
    "iter_paths",
    "join_path",
    "prune_empty",
    "tree_size",
    "validate_tree",
]
