from __future__ import annotations

import copy
import logging

import pytest

from locale_keeper.reconcile import (
    backfill,
    compare,
    fix,
    is_consistent,
    missing_paths,
)
from locale_keeper.tree import iter_paths


@pytest.fixture
def divergent() -> dict:
    return {
        "en-us": {"a": "1", "b": {"c": "2", "d": {"e": "3"}}, "x": "en"},
        "pt-br": {"a": "um", "b": {"c": "dois"}, "y": "pt"},
        "de": {"z": {"w": "de"}},
        "fr": {},
    }


def test_compare_reports_missing_nested_paths():
    locales = {"en": {"a": "1", "b": {"c": "2"}}, "pt": {"a": "1"}}
    assert compare(locales) == {"en": {"pt": ["b", "b.c"]}, "pt": {"en": []}}


def test_fix_backfills_missing_mapping():
    locales = {"en": {"a": "1", "b": {"c": "2"}}, "pt": {"a": "1"}}
    assert fix(locales)["pt"] == {"a": "1", "b": {"c": "2"}}


def test_compare_covers_every_ordered_pair(divergent):
    record = compare(divergent)
    assert set(record) == set(divergent)
    for master, others in record.items():
        assert set(others) == set(divergent) - {master}
    assert record["en-us"]["pt-br"] == ["b.d", "b.d.e", "x"]
    assert record["pt-br"]["en-us"] == ["y"]
    assert record["fr"] == {"en-us": [], "pt-br": [], "de": []}


def test_compare_uses_presence_not_truthiness():
    record = compare({"en": {"a": "", "b": {}}, "pt": {"a": "x", "b": {}}})
    assert is_consistent(record)


def test_fix_makes_locales_consistent(divergent):
    fixed = fix(divergent)
    assert is_consistent(compare(fixed))
    paths = {name: set(iter_paths(tree)) for name, tree in fixed.items()}
    assert len({frozenset(p) for p in paths.values()}) == 1


def test_fix_never_overwrites_existing_values(divergent):
    fixed = fix(divergent)
    for name, tree in divergent.items():
        for key, value in tree.items():
            if isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    assert fixed[name][key][sub_key] == sub_value
            else:
                assert fixed[name][key] == value
    assert fixed["pt-br"]["b"]["c"] == "dois"


def test_fix_leaves_input_untouched(divergent):
    before = copy.deepcopy(divergent)
    fix(divergent)
    assert divergent == before


def test_fix_does_not_share_subtrees_between_locales():
    fixed = fix({"en": {"b": {"c": "2"}}, "pt": {}})
    fixed["pt"]["b"]["c"] = "changed"
    assert fixed["en"]["b"]["c"] == "2"


def test_fix_single_locale_returns_copy():
    locales = {"en": {"a": "1"}}
    fixed = fix(locales)
    assert fixed == locales
    assert fixed["en"] is not locales["en"]


def test_compare_empty_set():
    assert compare({}) == {}
    assert is_consistent({})


def test_shape_conflict_is_reported_and_kept(caplog):
    locales = {"en": {"a": {"b": "1"}}, "pt": {"a": "flat"}}
    assert compare(locales)["en"]["pt"] == ["a.b"]
    logger = logging.getLogger("locale_keeper")
    logger.addHandler(caplog.handler)
    try:
        fixed = fix(locales)
    finally:
        logger.removeHandler(caplog.handler)
    assert fixed["pt"] == {"a": "flat"}
    assert "keeping scalar at a" in caplog.text


def test_missing_paths_with_prefix():
    assert missing_paths({"a": {"b": "1"}}, {}, "root") == ["root.a", "root.a.b"]


def test_backfill_counts_added_keys():
    other = {"a": {"x": "1"}}
    added = backfill({"a": {"x": "2", "y": "3"}, "b": "4"}, other)
    assert added == 2
    assert other == {"a": {"x": "1", "y": "3"}, "b": "4"}
