"""Path building and JSON type naming helpers."""

from __future__ import annotations

import re
from typing import Any

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def join_key(path: str, key: str) -> str:
    """Extend a path with an object member.

    Identifier-like keys use dot notation, anything else is quoted:

    >>> join_key("$", "address")
    '$.address'
    >>> join_key("$.address", "postal code")
    '$.address["postal code"]'
    """
    if _IDENTIFIER_RE.match(key):
        return f"{path}.{key}"
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'{path}["{escaped}"]'


def join_index(path: str, index: int) -> str:
    """Extend a path with an array element index."""
    return f"{path}[{index}]"


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a value, or its Python type name."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def nesting_depth(value: Any) -> int:
    """Return the container nesting depth of a JSON value tree.

    Scalars have depth 0, ``[]`` and ``{}`` have depth 1. Walks the tree
    iteratively so arbitrarily deep input cannot exhaust the call stack.
    """
    deepest = 0
    stack: list[tuple[Any, int]] = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            deepest = max(deepest, depth)
            continue
        depth += 1
        deepest = max(deepest, depth)
        stack.extend((child, depth) for child in children)
    return deepest
