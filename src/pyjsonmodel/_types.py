"""Value and enum types shared across the package."""

from __future__ import annotations

import enum
from typing import Union

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]
"""Untyped JSON value tree as produced by the ``json`` module."""


class FieldType(enum.StrEnum):
    """Declared type of a schema field."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ANY = "any"


class ErrorKind(enum.StrEnum):
    """Category of a conversion failure."""

    MALFORMED_TEXT = "malformed_text"
    MISSING_KEY = "missing_key"
    TYPE_MISMATCH = "type_mismatch"
    TOO_DEEP = "too_deep"
    INVALID_SCHEMA = "invalid_schema"
    UNSUPPORTED_TYPE = "unsupported_type"
