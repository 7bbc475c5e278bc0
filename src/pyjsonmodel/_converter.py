"""Core Converter class - schema-driven decode/encode between JSON values and models."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyjsonmodel._constants import DEFAULT_MAX_DEPTH, ROOT_PATH
from pyjsonmodel._errors import (
    ERR_MSG_UNSUPPORTED_TYPE,
    ConversionError,
    MissingKeyError,
    TooDeepError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from pyjsonmodel._types import FieldType, JsonValue
from pyjsonmodel._utils import join_index, join_key
from pyjsonmodel.schema import FieldSchema, Schema

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)
_ABSENT: Any = object()


def _read_field(model: Any, name: str) -> Any:
    if isinstance(model, Mapping):
        return model.get(name)
    return getattr(model, name, _ABSENT)


class Converter:
    """Converts between JSON value trees and models described by a Schema.

    A Converter tracks the nesting depth of a single call and must not be
    shared between concurrent calls.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth
        self._depth = 0
        self._deepest = 0
        self._deepest_path = ROOT_PATH

    def decode(self, value: JsonValue, schema: Schema) -> Any:
        """Decode a JSON object into a model, raising on the first failure."""
        try:
            return self._decode_object(value, schema, ROOT_PATH)
        except RecursionError as exc:
            raise self._recursion_error(exc) from exc
        except ConversionError as exc:
            logger.debug("decode into %s failed: %s", schema.name or "model", exc.internal())
            raise

    def encode(self, model: Any, schema: Schema) -> JsonValue:
        """Encode a model into a JSON object."""
        try:
            return self._encode_object(model, schema, ROOT_PATH)
        except RecursionError as exc:
            raise self._recursion_error(exc) from exc
        except ConversionError as exc:
            logger.debug("encode of %s failed: %s", schema.name or "model", exc.internal())
            raise

    def copy_value(self, value: Any, path: str = ROOT_PATH) -> JsonValue:
        """Deep-copy a JSON value tree, rejecting anything that is not JSON."""
        if value is None or isinstance(value, _SCALARS):
            return value
        if isinstance(value, (list, tuple)):
            self._enter(path)
            try:
                return [
                    self.copy_value(item, join_index(path, i))
                    for i, item in enumerate(value)
                ]
            finally:
                self._leave()
        if isinstance(value, Mapping):
            self._enter(path)
            try:
                result: dict[str, JsonValue] = {}
                for key, item in value.items():
                    if not isinstance(key, str):
                        raise UnsupportedTypeError(
                            ERR_MSG_UNSUPPORTED_TYPE,
                            f"object key {key!r} at {path} is not a string",
                            path=path,
                        )
                    result[key] = self.copy_value(item, join_key(path, key))
                return result
            finally:
                self._leave()
        raise UnsupportedTypeError(
            ERR_MSG_UNSUPPORTED_TYPE,
            f"{type(value).__name__} at {path} has no JSON representation",
            path=path,
        )

    # --- Depth tracking ---

    def _enter(self, path: str) -> None:
        self._depth += 1
        if self._depth > self._deepest:
            self._deepest = self._depth
            self._deepest_path = path
        if self._depth > self._max_depth:
            depth = self._depth
            self._depth -= 1
            raise TooDeepError(depth, self._max_depth, path)

    def _leave(self) -> None:
        self._depth -= 1

    def _recursion_error(self, exc: RecursionError) -> TooDeepError:
        # The stack ran out before max_depth; report where the walk got to.
        return TooDeepError(
            self._deepest, self._max_depth, self._deepest_path, wrapped=exc
        )

    # --- Decoding ---

    def _decode_object(self, value: JsonValue, schema: Schema, path: str) -> Any:
        if not isinstance(value, dict):
            raise TypeMismatchError(FieldType.OBJECT.value, value, path)
        self._enter(path)
        try:
            values: dict[str, Any] = {}
            for f in schema.fields:
                key = f.json_key
                if key not in value:
                    if f.required:
                        raise MissingKeyError(key, path, value)
                    values[f.name] = None
                    continue
                raw = value[key]
                if raw is None and not f.required:
                    values[f.name] = None
                    continue
                values[f.name] = self._decode_field(
                    raw, f, join_key(path, key), f.array_dimensions
                )
            return schema.build(values)
        finally:
            self._leave()

    def _decode_field(
        self, raw: JsonValue, f: FieldSchema, path: str, dimensions: int
    ) -> Any:
        if not dimensions:
            return self._decode_element(raw, f, path)
        if not isinstance(raw, list):
            raise TypeMismatchError("array", raw, path)
        self._enter(path)
        try:
            return [
                self._decode_field(item, f, join_index(path, i), dimensions - 1)
                for i, item in enumerate(raw)
            ]
        finally:
            self._leave()

    def _decode_element(self, raw: JsonValue, f: FieldSchema, path: str) -> Any:
        t = f.type
        if t is FieldType.OBJECT:
            if f.schema is not None:
                return self._decode_object(raw, f.schema, path)
            if not isinstance(raw, dict):
                raise TypeMismatchError(t.value, raw, path)
            return self.copy_value(raw, path)
        if t is FieldType.ANY:
            return self.copy_value(raw, path)
        if t is FieldType.STRING and isinstance(raw, str):
            return raw
        if t is FieldType.BOOLEAN and isinstance(raw, bool):
            return raw
        if not isinstance(raw, bool):
            if t is FieldType.NUMBER and isinstance(raw, (int, float)):
                return raw
            if t is FieldType.INTEGER:
                if isinstance(raw, int):
                    return raw
                if isinstance(raw, float) and raw.is_integer():
                    return int(raw)
        raise TypeMismatchError(t.value, raw, path)

    # --- Encoding ---

    def _encode_object(self, model: Any, schema: Schema, path: str) -> dict[str, JsonValue]:
        if model is None or isinstance(model, (*_SCALARS, list, tuple)):
            raise TypeMismatchError(FieldType.OBJECT.value, model, path)
        self._enter(path)
        try:
            result: dict[str, JsonValue] = {}
            for f in schema.fields:
                key = f.json_key
                value = _read_field(model, f.name)
                if value is _ABSENT:
                    raise TypeMismatchError(schema.name or FieldType.OBJECT.value, model, path)
                if value is None:
                    if f.required and f.type is FieldType.ANY and not f.repeated:
                        result[key] = None
                        continue
                    if f.required:
                        raise TypeMismatchError(_expected(f), None, join_key(path, key))
                    continue
                result[key] = self._encode_field(
                    value, f, join_key(path, key), f.array_dimensions
                )
            return result
        finally:
            self._leave()

    def _encode_field(self, value: Any, f: FieldSchema, path: str, dimensions: int) -> JsonValue:
        if not dimensions:
            return self._encode_element(value, f, path)
        if not isinstance(value, (list, tuple)):
            raise TypeMismatchError("array", value, path)
        self._enter(path)
        try:
            return [
                self._encode_field(item, f, join_index(path, i), dimensions - 1)
                for i, item in enumerate(value)
            ]
        finally:
            self._leave()

    def _encode_element(self, value: Any, f: FieldSchema, path: str) -> JsonValue:
        t = f.type
        if t is FieldType.OBJECT:
            if f.schema is not None:
                return self._encode_object(value, f.schema, path)
            if not isinstance(value, Mapping):
                raise TypeMismatchError(t.value, value, path)
            return self.copy_value(value, path)
        if t is FieldType.ANY:
            return self.copy_value(value, path)
        if t is FieldType.STRING and isinstance(value, str):
            return value
        if t is FieldType.BOOLEAN and isinstance(value, bool):
            return value
        if not isinstance(value, bool):
            if t is FieldType.NUMBER and isinstance(value, (int, float)):
                return value
            if t is FieldType.INTEGER and isinstance(value, int):
                return value
        raise TypeMismatchError(t.value, value, path)


def _expected(f: FieldSchema) -> str:
    if f.repeated:
        return "array"
    return f.type.value
