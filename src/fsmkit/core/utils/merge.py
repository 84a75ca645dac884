"""Layered configuration merging.

Mappings merge recursively. Lists are replaced by the higher layer unless the
higher layer starts with a marker:
- ``"+"``: append the remaining items to the lower layer's list
- ``"="``: replace with the remaining items (same as no marker)
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Mapping

APPEND_MARKER = "+"
REPLACE_MARKER = "="


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Combine two list values from adjacent layers.

    Example:
        >>> merge_arrays(["core:A"], ["+", "proj:B"])
        ['core:A', 'proj:B']
    """
    if not override:
        return list(base)
    marker, rest = override[0], override[1:]
    if marker == APPEND_MARKER:
        return [*base, *rest]
    if marker == REPLACE_MARKER:
        return list(rest)
    return list(override)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return ``override`` merged over ``base``; neither input is mutated."""
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = merge_arrays(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def merge_layers(layers: Iterable[Mapping[str, Any] | None]) -> Dict[str, Any]:
    """Fold configuration layers, lowest priority first."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    return merged


__all__ = ["APPEND_MARKER", "REPLACE_MARKER", "merge_arrays", "deep_merge", "merge_layers"]
