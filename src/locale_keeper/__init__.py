"""Sort locale JSON files with line tracking and reconcile their key sets."""

from locale_keeper.diff import integrity_report, sorting_diff
from locale_keeper.reconcile import compare, fix
from locale_keeper.serializer import serialize
from locale_keeper.sorter import SortedEntry, sort_tree
from locale_keeper.store import LocaleStore, StoreError
from locale_keeper.tree import MalformedTreeError, tree_size
from locale_keeper.utils import configure_logging, logger

__all__ = [
    "LocaleStore",
    "MalformedTreeError",
    "SortedEntry",
    "StoreError",
    "compare",
    "configure_logging",
    "fix",
    "integrity_report",
    "logger",
    "serialize",
    "sort_tree",
    "sorting_diff",
    "tree_size",
]
