"""Schema derivation from dataclass type hints.

Auto-discover model schemas from dataclass declarations instead of
listing every :class:`~pyjsonmodel.schema.FieldSchema` by hand.
"""

from __future__ import annotations

import dataclasses
import functools
import threading
import types
import typing
from typing import Any, Union

from pyjsonmodel._constants import JSON_KEY_METADATA
from pyjsonmodel._errors import ERR_MSG_INVALID_SCHEMA, InvalidSchemaError
from pyjsonmodel._types import FieldType
from pyjsonmodel.schema import FieldSchema, Schema

__all__ = ["as_schema", "schema_for"]

_SCALAR_TYPES: dict[Any, FieldType] = {
    str: FieldType.STRING,
    bool: FieldType.BOOLEAN,
    int: FieldType.INTEGER,
    float: FieldType.NUMBER,
}

_in_progress = threading.local()


def schema_for(cls: type, *, keys: dict[str, str] | None = None) -> Schema:
    """Derive a schema from a dataclass.

    JSON keys are taken from ``keys`` (field name to JSON key), then from
    ``dataclasses.field(metadata={"json_key": ...})``, then the field name.

    Supported annotations:

    * ``str``, ``int``, ``float``, ``bool``
    * ``X | None`` / ``Optional[X]``, making the field optional
    * ``list[X]``, nested lists adding array dimensions
    * another dataclass, decoded into a nested model
    * ``dict`` (any JSON object) and ``Any`` (any JSON value, optional)

    Schemas derived without ``keys`` are cached per class.

    Raises:
        InvalidSchemaError: If ``cls`` is not a dataclass, an annotation is
            unsupported, the dataclass refers to itself, or ``keys`` names
            an unknown field.
    """
    if keys:
        return _derive(cls, keys)
    return _cached_schema(cls)


def as_schema(schema: Schema | type) -> Schema:
    """Return ``schema`` itself, or the schema derived from a dataclass type."""
    if isinstance(schema, Schema):
        return schema
    return schema_for(schema)


@functools.cache
def _cached_schema(cls: type) -> Schema:
    return _derive(cls, {})


def _derive(cls: type, keys: dict[str, str]) -> Schema:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise InvalidSchemaError(
            ERR_MSG_INVALID_SCHEMA,
            f"{cls!r} is not a dataclass type",
        )

    building: set[type] = getattr(_in_progress, "classes", None) or set()
    if cls in building:
        raise InvalidSchemaError(
            ERR_MSG_INVALID_SCHEMA,
            f"recursive dataclass {cls.__qualname__} is not supported",
        )
    building.add(cls)
    _in_progress.classes = building
    try:
        return _derive_fields(cls, keys)
    finally:
        building.discard(cls)


def _derive_fields(cls: type, keys: dict[str, str]) -> Schema:
    try:
        hints = typing.get_type_hints(cls)
    except NameError as exc:
        raise InvalidSchemaError(
            ERR_MSG_INVALID_SCHEMA,
            f"cannot resolve type hints of {cls.__qualname__}: {exc}",
            exc,
        ) from exc

    init_fields = [f for f in dataclasses.fields(cls) if f.init]
    unknown = set(keys) - {f.name for f in init_fields}
    if unknown:
        raise InvalidSchemaError(
            ERR_MSG_INVALID_SCHEMA,
            f"key mapping names unknown fields of {cls.__qualname__}: {sorted(unknown)}",
        )

    fields = []
    for f in init_fields:
        key = keys.get(f.name) or f.metadata.get(JSON_KEY_METADATA, "")
        fields.append(_field_from_hint(f.name, hints[f.name], key, cls))
    return Schema(fields, model=cls, name=cls.__qualname__)


def _field_from_hint(name: str, hint: Any, key: str, owner: type) -> FieldSchema:
    required = hint is not Any
    if _is_union(hint):
        args = typing.get_args(hint)
        non_null = [a for a in args if a is not type(None)]
        if len(non_null) != 1 or len(args) != 2:
            raise _unsupported(owner, name, hint)
        required = False
        hint = non_null[0]

    dimensions = 0
    while hint is list or typing.get_origin(hint) is list:
        dimensions += 1
        args = typing.get_args(hint)
        hint = args[0] if args else Any

    field_type, nested = _resolve_type(hint, owner, name)
    return FieldSchema(
        name=name,
        type=field_type,
        key=key,
        required=required,
        repeated=dimensions > 0,
        dimensions=dimensions if dimensions > 1 else 0,
        schema=nested,
    )


def _resolve_type(hint: Any, owner: type, name: str) -> tuple[FieldType, Schema | None]:
    if hint in _SCALAR_TYPES:
        return _SCALAR_TYPES[hint], None
    if hint is Any:
        return FieldType.ANY, None
    if hint is dict or typing.get_origin(hint) is dict:
        return FieldType.OBJECT, None
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return FieldType.OBJECT, _cached_schema(hint)
    raise _unsupported(owner, name, hint)


def _is_union(hint: Any) -> bool:
    origin = typing.get_origin(hint)
    return origin is Union or origin is types.UnionType


def _unsupported(owner: type, name: str, hint: Any) -> InvalidSchemaError:
    return InvalidSchemaError(
        ERR_MSG_INVALID_SCHEMA,
        f"field {owner.__qualname__}.{name} has unsupported annotation {hint!r}",
    )
