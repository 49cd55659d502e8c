"""Human readable reports for sorting and integrity results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from locale_keeper.sorter import SortedEntry

MSG_MOVED = "{key} moved from line {previous} to line {new}"
MSG_MISSING = "Missing {path} (present in {master})"


def sorting_diff(entries: Sequence[SortedEntry]) -> list[str]:
    """Return one line per key whose position changes.

    Nested entries are reported before the key that holds them, so deeper
    moves always precede shallower ones.
    """
    diff: list[str] = []
    for entry in entries:
        if entry.is_branch:
            diff.extend(sorting_diff(entry.value))
        if entry.moved:
            diff.append(
                MSG_MOVED.format(
                    key=entry.key, previous=entry.previous_line, new=entry.new_line
                )
            )
    return diff


def integrity_report(
    record: Mapping[str, Mapping[str, Sequence[str]]],
) -> dict[str, list[str]]:
    """Group missing paths by the locale that lacks them.

    ``record`` is the result of :func:`locale_keeper.reconcile.compare`.
    Locales with nothing missing are left out.
    """
    by_locale: dict[str, list[str]] = {}
    for master, others in record.items():
        for other, paths in others.items():
            by_locale.setdefault(other, []).extend(
                MSG_MISSING.format(path=path, master=master) for path in paths
            )
    return {locale: lines for locale, lines in by_locale.items() if lines}


__all__ = ["MSG_MISSING", "MSG_MOVED", "integrity_report", "sorting_diff"]
