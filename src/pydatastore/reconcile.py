"""Template reconciliation.

The template is the canonical default structure of a store. Persisted data
may be incomplete (written by an older release with fewer fields), carry
keys the template does not know, or be missing entirely. :func:`reconcile`
turns any such input into a tree that holds every template field:

* fields present in the data keep the data's value,
* fields missing from the data take the template default,
* fields unknown to the template are kept as-is.

Only dicts are merged. Lists, ``None`` and scalars are leaves: a value from
the data replaces the template's value wholesale, including when the two
have different types.
"""

from __future__ import annotations

import copy
from typing import Any


def deep_copy(value: Any) -> Any:
    """Return an independent copy of a JSON-like tree."""
    return copy.deepcopy(value)


def _merge_into(target: dict[str, Any], source: dict[Any, Any]) -> None:
    for key, value in source.items():
        if not isinstance(key, str):
            continue
        if key not in target:
            target[key] = copy.deepcopy(value)
        elif isinstance(target[key], dict) and isinstance(value, dict):
            _merge_into(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


def reconcile(template: dict[str, Any], partial: Any) -> dict[str, Any]:
    """Merge *partial* over a deep copy of *template*.

    Parameters
    ----------
    template : dict
        Canonical default tree. Never mutated.
    partial : Any
        Data to merge, typically parsed from disk. Anything that is not a
        dict is treated as "no data" and the template copy is returned.

    Returns
    -------
    dict
        A new tree sharing no containers with either input.
    """
    result: dict[str, Any] = copy.deepcopy(template)
    if isinstance(partial, dict):
        _merge_into(result, partial)
    return result


__all__ = ["deep_copy", "reconcile"]
