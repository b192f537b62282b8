"""Deep merge used for layered configuration.

Semantics:
- Dictionaries merge recursively
- Arrays are replaced by the override, unless the override's first element
  is ``"+"`` (append) or ``"="`` (explicit replace)
- Anything else: override wins
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> deep_merge({"resources": {"templates": ["default"]}}, {"resources": {"overwrite": True}})
        {'resources': {'templates': ['default'], 'overwrite': True}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Example:
        >>> merge_arrays(["default"], ["custom"])
        ['custom']
        >>> merge_arrays(["default"], ["+", "custom"])
        ['default', 'custom']
        >>> merge_arrays(["default"], ["=", "custom"])
        ['custom']
    """
    if not override:
        return list(override)
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
