"""pyjsonmodel - Convert between JSON values and typed models."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyjsonmodel")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0.dev0"

from typing import Any

from pyjsonmodel._constants import ARRAY_KEY, DEFAULT_INDENT, DEFAULT_MAX_DEPTH, ROOT_PATH
from pyjsonmodel._converter import Converter
from pyjsonmodel._errors import (
    ConversionError,
    InvalidSchemaError,
    MalformedTextError,
    MissingKeyError,
    TooDeepError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from pyjsonmodel._report import describe
from pyjsonmodel._text import parse_text as _parse_text
from pyjsonmodel._text import serialize_text
from pyjsonmodel._types import ErrorKind, FieldType, JsonValue
from pyjsonmodel.introspect import as_schema, schema_for
from pyjsonmodel.schema import FieldSchema, Schema

__all__ = [
    "ARRAY_KEY",
    "as_object",
    "decode",
    "decode_text",
    "describe",
    "encode",
    "encode_text",
    "parse_text",
    "schema_for",
    "serialize_text",
    "ModelJsonConverter",
    "ConversionError",
    "InvalidSchemaError",
    "MalformedTextError",
    "MissingKeyError",
    "TooDeepError",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "ErrorKind",
    "FieldSchema",
    "FieldType",
    "JsonValue",
    "Schema",
]


def decode(
    value: JsonValue,
    schema: Schema | type,
    *,
    max_depth: int | None = None,
) -> Any:
    """Decode a JSON object into a model.

    Args:
        value: The JSON value tree, expected to be an object.
        schema: A Schema, or a dataclass type whose schema is derived.
        max_depth: Maximum nesting depth. Defaults to 100.

    Returns:
        The model built by the schema, with every required field set.

    Raises:
        MissingKeyError: If a required key is absent.
        TypeMismatchError: If a value has the wrong shape.
        TooDeepError: If nesting exceeds ``max_depth``.
        InvalidSchemaError: If the schema cannot be derived or cannot
            build the model.
    """
    converter = Converter(_depth_limit(max_depth))
    return converter.decode(value, as_schema(schema))


def encode(
    model: Any,
    schema: Schema | type | None = None,
    *,
    max_depth: int | None = None,
) -> dict[str, JsonValue]:
    """Encode a model into a JSON object.

    Optional fields holding None are omitted from the result.

    Args:
        model: The model to encode.
        schema: A Schema or dataclass type. Defaults to the schema derived
            from ``type(model)``.
        max_depth: Maximum nesting depth. Defaults to 100.

    Raises:
        TypeMismatchError: If a field value does not match its declared type
            or a required field is None.
        UnsupportedTypeError: If a passthrough value has no JSON representation.
        TooDeepError: If nesting exceeds ``max_depth``.
        InvalidSchemaError: If no schema is given and ``model`` is not a
            dataclass instance.
    """
    resolved = as_schema(type(model) if schema is None else schema)
    converter = Converter(_depth_limit(max_depth))
    return converter.encode(model, resolved)


def parse_text(
    text: str | bytes | bytearray,
    *,
    max_depth: int | None = None,
) -> JsonValue:
    """Parse JSON text into a JSON value tree.

    Raises:
        MalformedTextError: If the text is not valid JSON.
        TooDeepError: If nesting exceeds ``max_depth``.
    """
    return _parse_text(text, _depth_limit(max_depth))


def decode_text(
    text: str | bytes | bytearray,
    schema: Schema | type,
    *,
    max_depth: int | None = None,
) -> Any:
    """Parse JSON text and decode it into a model."""
    return decode(parse_text(text, max_depth=max_depth), schema, max_depth=max_depth)


def encode_text(
    model: Any,
    schema: Schema | type | None = None,
    *,
    pretty: bool = False,
    max_depth: int | None = None,
) -> str:
    """Encode a model and render it as JSON text."""
    return serialize_text(encode(model, schema, max_depth=max_depth), pretty)


def as_object(value: JsonValue) -> dict[str, JsonValue]:
    """Present a JSON value as an object.

    A top-level array is wrapped under the ``"items"`` key so that it can be
    decoded with a schema declaring a repeated ``items`` field.
    """
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return {ARRAY_KEY: value}
    raise TypeMismatchError("object or array", value, ROOT_PATH)


def _depth_limit(max_depth: int | None) -> int:
    return DEFAULT_MAX_DEPTH if max_depth is None else max_depth


class ModelJsonConverter:
    """Bundles conversion settings and exposes the conversion operations."""

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        indent: int = DEFAULT_INDENT,
    ) -> None:
        self.max_depth = max_depth
        self.indent = indent

    def decode(self, value: JsonValue, schema: Schema | type) -> Any:
        return decode(value, schema, max_depth=self.max_depth)

    def encode(self, model: Any, schema: Schema | type | None = None) -> dict[str, JsonValue]:
        return encode(model, schema, max_depth=self.max_depth)

    def parse_text(self, text: str | bytes | bytearray) -> JsonValue:
        return parse_text(text, max_depth=self.max_depth)

    def serialize_text(self, value: JsonValue, pretty: bool = False) -> str:
        return serialize_text(value, pretty, self.indent)

    def decode_text(self, text: str | bytes | bytearray, schema: Schema | type) -> Any:
        return self.decode(self.parse_text(text), schema)

    def encode_text(
        self, model: Any, schema: Schema | type | None = None, pretty: bool = False
    ) -> str:
        return self.serialize_text(self.encode(model, schema), pretty)

    def describe(self, error: ConversionError) -> str:
        return describe(error)

    def __repr__(self) -> str:
        return f"ModelJsonConverter(max_depth={self.max_depth}, indent={self.indent})"
