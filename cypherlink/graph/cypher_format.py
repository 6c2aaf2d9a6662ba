"""
Helpers that format Python mappings as Cypher text.

These build clause text for use with QueryBuilder. Named forms
reference a parameter map (``{name}.key``) instead of inlining values.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from cypherlink.graph.exceptions import UnsupportedPropertyTypeError


def _literal(key: str, value: Any) -> str:
    # bool first: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return repr(value)
    if isinstance(value, float):
        # Cypher has no literal for NaN or infinity
        if not math.isfinite(value):
            raise UnsupportedPropertyTypeError(key, value)
        return repr(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    raise UnsupportedPropertyTypeError(key, value)


def to_props(obj: Mapping[str, Any]) -> str:
    """Convert a mapping to an inline Cypher property list.

    Example:
        to_props({"name": "Ada", "age": 36}) == 'name:"Ada", age:36'

    Raises:
        UnsupportedPropertyTypeError: For values other than str, int, bool, or
            finite float
    """
    return ", ".join(f"{key}:{_literal(key, value)}" for key, value in obj.items())


def to_named_props(name: str, obj: Mapping[str, Any]) -> str:
    """Convert a mapping to properties read from the parameter ``name``.

    Example:
        to_named_props("user", {"id": 1}) == "id:{user}.id"
    """
    return ", ".join(f"{key}:{{{name}}}.{key}" for key in obj)


def to_sets(var: str, obj_name: str, obj: Mapping[str, Any]) -> str:
    """Convert a mapping to SET clauses assigning from parameter ``obj_name``.

    Produces one ``SET var.key = {obj_name}.key`` line per key, preceded
    by a blank line so the result can be appended after a MATCH clause.
    """
    lines = ["\n"]
    lines.extend(f"  SET {var}.{key} = {{{obj_name}}}.{key}" for key in obj)
    return "\n".join(lines)
