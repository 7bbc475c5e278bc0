"""Schema types for JSON/model conversion."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from pyjsonmodel._errors import (
    ConversionError,
    ERR_MSG_INVALID_SCHEMA,
    ERR_MSG_MODEL_CONSTRUCTION_FAILED,
    InvalidSchemaError,
)
from pyjsonmodel._types import FieldType


@dataclass(frozen=True)
class FieldSchema:
    """Schema for a single model field.

    ``key`` is the JSON object key and defaults to ``name``. A ``repeated``
    field holds an array of ``type``; ``dimensions`` greater than 1 nests
    arrays that many levels deep. ``schema`` describes the members of an
    ``object`` field.
    """

    name: str
    type: str = FieldType.STRING
    key: str = ""
    required: bool = True
    repeated: bool = False
    dimensions: int = 0
    schema: Schema | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidSchemaError(
                ERR_MSG_INVALID_SCHEMA,
                "field name cannot be empty",
            )
        try:
            field_type = FieldType(self.type)
        except ValueError as exc:
            raise InvalidSchemaError(
                ERR_MSG_INVALID_SCHEMA,
                f"field {self.name!r} has unknown type {self.type!r}",
                exc,
            ) from exc
        object.__setattr__(self, "type", field_type)
        if self.schema is not None and field_type is not FieldType.OBJECT:
            raise InvalidSchemaError(
                ERR_MSG_INVALID_SCHEMA,
                f"field {self.name!r} has a nested schema but type {field_type}",
            )
        if self.dimensions < 0 or (self.dimensions and not self.repeated):
            raise InvalidSchemaError(
                ERR_MSG_INVALID_SCHEMA,
                f"field {self.name!r} has dimensions {self.dimensions} "
                f"with repeated={self.repeated}",
            )

    @property
    def json_key(self) -> str:
        return self.key or self.name

    @property
    def array_dimensions(self) -> int:
        """Number of array levels wrapping the element type."""
        if not self.repeated:
            return 0
        return max(self.dimensions, 1)


class Schema:
    """Model schema with O(1) field lookup by name and by JSON key.

    ``model`` is called with one keyword argument per field to build a
    decoded value. The default builds plain dicts.
    """

    def __init__(
        self,
        fields: Iterable[FieldSchema],
        model: Callable[..., Any] = dict,
        name: str = "",
    ) -> None:
        self._fields = list(fields)
        self._model = model
        self.name = name or getattr(model, "__name__", "")
        self._index: dict[str, FieldSchema] = {}
        self._key_index: dict[str, FieldSchema] = {}
        for f in self._fields:
            if f.name in self._index:
                raise InvalidSchemaError(
                    ERR_MSG_INVALID_SCHEMA,
                    f"duplicate field name {f.name!r} in schema {self.name!r}",
                )
            if f.json_key in self._key_index:
                raise InvalidSchemaError(
                    ERR_MSG_INVALID_SCHEMA,
                    f"duplicate JSON key {f.json_key!r} in schema {self.name!r}",
                )
            self._index[f.name] = f
            self._key_index[f.json_key] = f

    @property
    def fields(self) -> list[FieldSchema]:
        return list(self._fields)

    @property
    def model(self) -> Callable[..., Any]:
        return self._model

    def find_field(self, name: str) -> FieldSchema | None:
        return self._index.get(name)

    def find_key(self, key: str) -> FieldSchema | None:
        return self._key_index.get(key)

    def build(self, values: dict[str, Any]) -> Any:
        """Construct a model from decoded field values keyed by field name."""
        try:
            return self._model(**values)
        except ConversionError:
            raise
        except Exception as exc:
            raise InvalidSchemaError(
                ERR_MSG_MODEL_CONSTRUCTION_FAILED,
                f"cannot build {self.name or 'model'} from fields "
                f"{sorted(values)}: {exc}",
                exc,
            ) from exc

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, fields={[f.name for f in self._fields]})"
