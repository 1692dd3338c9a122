"""Nested mapping utilities for dotted setting names.

This module is the single source of truth for merging and walking the nested
dictionaries that hold Lazybones settings. Every function here is pure: inputs
are never mutated and fresh containers are returned.

Features:
- Recursive dictionary merging (later layers win, lists are replaced)
- Flattening to ``{"dotted.key": value}`` form
- Copy-on-write get/set/remove of dotted paths
- Structural key intersection of two nested mappings
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

NAME_SEPARATOR = "."


def split_name(dotted: str) -> List[str]:
    """Split a dotted setting name into its path segments."""
    return dotted.split(NAME_SEPARATOR)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = {k: _copy_value(v) for k, v in base.items()}
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = _copy_value(value)
    return result


def merge_layers(*layers: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge any number of layers, lowest precedence first."""
    result: Dict[str, Any] = {}
    for layer in layers:
        result = deep_merge(result, layer)
    return result


def flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    Lists and scalars are leaves. Empty mappings produce no keys.

    Example:
        >>> flatten({"a": {"b": 1, "c": [1, 2]}})
        {'a.b': 1, 'a.c': [1, 2]}
    """
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{NAME_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, name))
        else:
            flat[name] = value
    return flat


def get_path(data: Mapping[str, Any], dotted: str) -> Any:
    """Return the value at ``dotted`` or ``None`` when any segment is missing."""
    current: Any = data
    for part in split_name(dotted):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def has_path(data: Mapping[str, Any], dotted: str) -> bool:
    """Return True if ``dotted`` resolves to a value (which may be falsy)."""
    current: Any = data
    for part in split_name(dotted):
        if not isinstance(current, Mapping) or part not in current:
            return False
        current = current[part]
    return True


def set_path(data: Mapping[str, Any], dotted: str, value: Any) -> Dict[str, Any]:
    """Return a copy of ``data`` with ``value`` stored at ``dotted``.

    Intermediate mappings are created as needed. A non-mapping value sitting
    on an intermediate segment is replaced by a mapping.
    """
    parts = split_name(dotted)
    return _set_parts(data, parts, value)


def _set_parts(data: Mapping[str, Any], parts: Sequence[str], value: Any) -> Dict[str, Any]:
    result = dict(data)
    head = parts[0]
    if len(parts) == 1:
        result[head] = _copy_value(value)
        return result
    child = result.get(head)
    result[head] = _set_parts(child if isinstance(child, Mapping) else {}, parts[1:], value)
    return result


def remove_path(data: Mapping[str, Any], dotted: str) -> Dict[str, Any]:
    """Return a copy of ``data`` without the leaf at ``dotted``.

    After the leaf is removed, ancestor mappings left empty are pruned from
    the leaf towards the root, stopping at the first ancestor that still has
    other entries. Missing paths leave the data unchanged.
    """
    parts = split_name(dotted)
    pruned = _remove_parts(data, parts)
    return pruned if pruned is not None else {}


def _remove_parts(data: Mapping[str, Any], parts: Sequence[str]) -> Optional[Dict[str, Any]]:
    # Returns None when the resulting mapping is empty so the caller can prune it.
    result = dict(data)
    head = parts[0]
    if head not in result:
        return result
    if len(parts) == 1:
        del result[head]
    else:
        child = result[head]
        if not isinstance(child, Mapping):
            return result
        new_child = _remove_parts(child, parts[1:])
        if new_child is None:
            del result[head]
        else:
            result[head] = new_child
    return result or None


def find_shared_keys(first: Mapping[str, Any], second: Mapping[str, Any]) -> List[str]:
    """Return the dotted keys present in both nested mappings.

    Keys whose values are mappings on both sides are not reported themselves;
    the comparison recurses into them instead.

    Example:
        >>> find_shared_keys({"a": {"b": 1}}, {"a": {"b": 2}})
        ['a.b']
        >>> find_shared_keys({"a": {"b": 1}}, {"a": {"c": 2}})
        []
    """
    shared: List[str] = []
    for key in first:
        if key not in second:
            continue
        left, right = first[key], second[key]
        if isinstance(left, Mapping) and isinstance(right, Mapping):
            shared.extend(
                f"{key}{NAME_SEPARATOR}{sub}" for sub in find_shared_keys(left, right)
            )
        else:
            shared.append(str(key))
    return shared


def _copy_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy_value(v) for v in value]
    return value


__all__ = [
    "NAME_SEPARATOR",
    "split_name",
    "deep_merge",
    "merge_layers",
    "flatten",
    "get_path",
    "has_path",
    "set_path",
    "remove_path",
    "find_shared_keys",
]
