from __future__ import annotations

from locale_keeper.diff import integrity_report, sorting_diff
from locale_keeper.reconcile import compare
from locale_keeper.sorter import sort_tree


def test_sorting_diff_flat():
    assert sorting_diff(sort_tree({"b": "2", "a": "1"})) == [
        "a moved from line 3 to line 2",
        "b moved from line 2 to line 3",
    ]


def test_sorting_diff_reports_children_before_parent():
    tree = {"z": "1", "m": {"b": "2", "a": "3"}, "a": "4"}
    assert sorting_diff(sort_tree(tree)) == [
        "a moved from line 7 to line 2",
        "a moved from line 5 to line 4",
        "b moved from line 4 to line 5",
        "z moved from line 2 to line 7",
    ]


def test_sorting_diff_nested_before_moved_parent():
    tree = {"b": "1", "a": {"d": "2", "c": "3"}}
    assert sorting_diff(sort_tree(tree)) == [
        "c moved from line 5 to line 3",
        "a moved from line 3 to line 2",
        "b moved from line 2 to line 6",
    ]


def test_sorting_diff_empty_when_sorted():
    assert sorting_diff(sort_tree({"a": "1", "b": {"c": "2", "d": "3"}})) == []


def test_integrity_report_groups_by_lacking_locale():
    locales = {
        "de": {"a": "1"},
        "en": {"a": "1", "b": "2"},
        "pt": {"c": "3"},
    }
    report = integrity_report(compare(locales))
    assert report == {
        "pt": [
            "Missing a (present in de)",
            "Missing a (present in en)",
            "Missing b (present in en)",
        ],
        "de": ["Missing b (present in en)", "Missing c (present in pt)"],
        "en": ["Missing c (present in pt)"],
    }


def test_integrity_report_empty_when_consistent():
    assert integrity_report(compare({"en": {"a": "1"}, "pt": {"a": "2"}})) == {}
