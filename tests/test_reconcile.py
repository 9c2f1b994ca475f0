from __future__ import annotations

import copy
from typing import Any

import pytest

from pydatastore.paths import MISSING, leaf_paths, resolve
from pydatastore.reconcile import reconcile

TEMPLATE: dict[str, Any] = {
    "theme": {
        "primary": "#000000",
        "secondary": "#ffffff",
        "colors": {"success": "#00ff00", "error": "#ff0000"},
    },
    "notifications": {"enabled": True, "sound": True},
    "recent": ["a.txt"],
    "window": None,
}

PARTIALS: list[Any] = [
    {},
    {"theme": {"primary": "#111111"}},
    {"theme": {"colors": {"success": "#22ff22"}}, "extra": {"k": 1}},
    {"theme": "flat-string"},
    {"notifications": None, "recent": []},
    {"theme": {"colors": ["not", "a", "dict"]}},
    {"window": {"width": 800}},
    ["not", "a", "dict"],
    None,
    42,
]


def _branch_replaced(partial: Any, path: str) -> bool:
    """True when *partial* replaces a dict on the way to *path* with a leaf value."""
    node = partial
    for segment in path.split(".")[:-1]:
        if not isinstance(node, dict) or segment not in node:
            return False
        node = node[segment]
        if not isinstance(node, dict):
            return True
    return False


def test_missing_fields_are_filled_from_template() -> None:
    result = reconcile(TEMPLATE, {"theme": {"primary": "#111111"}})

    assert result["theme"]["primary"] == "#111111"
    assert result["theme"]["secondary"] == "#ffffff"
    assert result["theme"]["colors"] == {"success": "#00ff00", "error": "#ff0000"}
    assert result["notifications"] == {"enabled": True, "sound": True}


def test_unknown_keys_are_preserved() -> None:
    result = reconcile(TEMPLATE, {"plugins": {"spell": {"lang": "en"}}, "theme": {"font": "mono"}})

    assert result["plugins"] == {"spell": {"lang": "en"}}
    assert result["theme"]["font"] == "mono"
    assert result["theme"]["primary"] == "#000000"


def test_lists_replace_template_lists_wholesale() -> None:
    result = reconcile(TEMPLATE, {"recent": ["b.txt", "c.txt"]})
    assert result["recent"] == ["b.txt", "c.txt"]

    result = reconcile(TEMPLATE, {"recent": []})
    assert result["recent"] == []


def test_type_mismatch_takes_partial_value() -> None:
    assert reconcile(TEMPLATE, {"theme": "dark"})["theme"] == "dark"
    assert reconcile(TEMPLATE, {"window": {"width": 800}})["window"] == {"width": 800}


def test_none_is_a_scalar() -> None:
    result = reconcile(TEMPLATE, {"notifications": None})
    assert result["notifications"] is None


def test_non_string_keys_are_ignored() -> None:
    result = reconcile(TEMPLATE, {1: "one", "theme": {2: "two", "primary": "#123456"}})

    assert 1 not in result
    assert 2 not in result["theme"]
    assert result["theme"]["primary"] == "#123456"


def test_non_dict_partial_yields_template() -> None:
    assert reconcile(TEMPLATE, ["x"]) == TEMPLATE
    assert reconcile(TEMPLATE, None) == TEMPLATE


def test_inputs_are_not_mutated_or_aliased() -> None:
    template = copy.deepcopy(TEMPLATE)
    partial = {"theme": {"colors": {"success": "#22ff22"}}, "extra": {"nested": [1, 2]}}
    partial_before = copy.deepcopy(partial)

    result = reconcile(template, partial)
    result["theme"]["colors"]["error"] = "#000001"
    result["extra"]["nested"].append(3)
    result["recent"].append("z.txt")

    assert template == TEMPLATE
    assert partial == partial_before


@pytest.mark.parametrize("partial", PARTIALS)
def test_every_template_leaf_is_present(partial: Any) -> None:
    result = reconcile(TEMPLATE, partial)

    for path in leaf_paths(TEMPLATE):
        if _branch_replaced(partial, path):
            continue
        assert resolve(result, path) is not MISSING, path


@pytest.mark.parametrize("partial", PARTIALS)
def test_reconcile_is_idempotent(partial: Any) -> None:
    once = reconcile(TEMPLATE, partial)
    assert reconcile(TEMPLATE, once) == once


def test_top_level_keys_always_cover_template() -> None:
    for partial in PARTIALS:
        assert set(TEMPLATE) <= set(reconcile(TEMPLATE, partial))
