"""Dot-notation path access into nested dict trees.

``"theme.colors.primary"`` addresses ``root["theme"]["colors"]["primary"]``.
A path without a separator addresses a top-level key directly.

Reads never fail: walking through a missing key or a non-dict value yields
:data:`MISSING`. Writes never fail either: missing or non-dict intermediate
values are replaced with empty dicts so the final assignment always lands.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import Any, Final

SEPARATOR: Final = "."


class _MissingType(enum.Enum):
    MISSING = enum.auto()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


#: Marker returned by :func:`resolve` when nothing lives at the path.
MISSING: Final = _MissingType.MISSING


class AssignOutcome(enum.StrEnum):
    """What :func:`assign` had to do to reach the target container."""

    ASSIGNED = "assigned"
    """Every intermediate container already existed."""
    CREATED = "created"
    """At least one missing intermediate was created."""
    OVERWRITTEN = "overwritten"
    """At least one non-dict intermediate value was replaced by a dict."""


def split_path(path: str) -> list[str]:
    """Split *path* into its segments."""
    return path.split(SEPARATOR)


def resolve(root: Any, path: str) -> Any:
    """Return the value at *path* in *root*, or :data:`MISSING`."""
    current = root
    for segment in split_path(path):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def assign(root: dict[str, Any], path: str, value: Any) -> AssignOutcome:
    """Set *value* at *path* inside *root*, creating containers as needed.

    Intermediate values that are absent, ``None`` or not a dict are replaced
    with a fresh ``{}``. This is destructive for non-dict values and is
    reported through the returned :class:`AssignOutcome`.
    """
    segments = split_path(path)
    outcome = AssignOutcome.ASSIGNED
    current = root
    for segment in segments[:-1]:
        if segment not in current:
            current[segment] = {}
            if outcome is AssignOutcome.ASSIGNED:
                outcome = AssignOutcome.CREATED
        elif not isinstance(current[segment], dict):
            current[segment] = {}
            outcome = AssignOutcome.OVERWRITTEN
        current = current[segment]
    current[segments[-1]] = value
    return outcome


def iter_leaf_paths(tree: Any, prefix: str = "") -> Iterator[str]:
    """Yield the dot path of every leaf in *tree*.

    Non-empty dicts are descended into; everything else, including empty
    dicts and lists, is a leaf.
    """
    if not isinstance(tree, dict) or not tree:
        if prefix:
            yield prefix
        return
    for key, value in tree.items():
        child = f"{prefix}{SEPARATOR}{key}" if prefix else str(key)
        yield from iter_leaf_paths(value, child)


def leaf_paths(tree: Any) -> list[str]:
    """Return the dot paths of every leaf in *tree* in insertion order."""
    return list(iter_leaf_paths(tree))


__all__ = [
    "MISSING",
    "SEPARATOR",
    "AssignOutcome",
    "assign",
    "iter_leaf_paths",
    "leaf_paths",
    "resolve",
    "split_path",
]
