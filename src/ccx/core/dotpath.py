"""Dot-path access over nested JSON objects.

Keys such as ``env.MY_KEY`` address nested dictionaries. Lists are opaque
leaves: they are never indexed into, expanded or created. Every mutating
helper returns a deep copy and leaves its input untouched.
"""

from __future__ import annotations

import copy
from typing import Any, List, Mapping, MutableMapping


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str) -> List[str]:
    return path.split(".")


def get_by_path(obj: Mapping[str, Any], path: str) -> Any:
    """Return the value at ``path`` or :data:`MISSING` when it does not resolve."""

    current: Any = obj
    for key in split_path(path):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


def set_by_path(obj: Mapping[str, Any], path: str, value: Any) -> dict:
    """Return a copy of ``obj`` with ``value`` assigned at ``path``.

    Missing or non-object intermediate nodes are replaced with ``{}``.
    """

    keys = split_path(path)
    result = copy.deepcopy(dict(obj))
    current: MutableMapping[str, Any] = result
    for key in keys[:-1]:
        if not isinstance(current.get(key), MutableMapping):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = copy.deepcopy(value)
    return result


def delete_by_path(obj: Mapping[str, Any], path: str) -> dict:
    """Return a copy of ``obj`` without the leaf at ``path`` (no-op if absent)."""

    keys = split_path(path)
    result = copy.deepcopy(dict(obj))
    current: Any = result
    for key in keys[:-1]:
        current = current.get(key)
        if not isinstance(current, MutableMapping):
            return result
    current.pop(keys[-1], None)
    return result


def flatten_keys(obj: Mapping[str, Any], prefix: str = "") -> List[str]:
    """Return every leaf dot-path in ``obj``; lists count as leaves."""

    keys: List[str] = []
    for key, value in obj.items():
        full_path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            keys.extend(flatten_keys(value, full_path))
        else:
            keys.append(full_path)
    return keys


__all__ = ["MISSING", "delete_by_path", "flatten_keys", "get_by_path", "set_by_path", "split_path"]
