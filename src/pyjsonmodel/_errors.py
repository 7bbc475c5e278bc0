"""Exception hierarchy for JSON/model conversion."""

from __future__ import annotations

from typing import Any

from pyjsonmodel._constants import ROOT_PATH
from pyjsonmodel._types import ErrorKind
from pyjsonmodel._utils import json_type_name

_NO_VALUE: Any = object()


class ConversionError(Exception):
    """Base exception for JSON/model conversion errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (CWE-209 prevention). ``path`` locates
    the failure inside the JSON tree and ``value`` holds the offending
    subtree, when there is one.
    """

    kind: str = "conversion_error"

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
        *,
        path: str = ROOT_PATH,
        value: Any = _NO_VALUE,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped
        self.path = path
        self.value = value

    def internal(self) -> str:
        return self.internal_details

    @property
    def has_value(self) -> bool:
        """Whether the error carries an offending JSON value."""
        return self.value is not _NO_VALUE


class MalformedTextError(ConversionError):
    """Raised when input text is not valid JSON."""

    kind = ErrorKind.MALFORMED_TEXT

    def __init__(self, reason: str, wrapped: Exception | None = None) -> None:
        super().__init__(ERR_MSG_MALFORMED_TEXT, reason, wrapped)
        self.reason = reason


class MissingKeyError(ConversionError):
    """Raised when a required key is absent from a JSON object.

    ``path`` is the path of the object that lacks the key.
    """

    kind = ErrorKind.MISSING_KEY

    def __init__(self, key: str, path: str, obj: Any = _NO_VALUE) -> None:
        super().__init__(
            ERR_MSG_MISSING_KEY,
            f"key {key!r} not found in object at {path}",
            path=path,
            value=obj,
        )
        self.key = key


class TypeMismatchError(ConversionError):
    """Raised when a value is present but has the wrong shape."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, expected: str, value: Any, path: str) -> None:
        super().__init__(
            f"{ERR_MSG_TYPE_MISMATCH}: expected {expected}",
            f"expected {expected} at {path}, got {json_type_name(value)}",
            path=path,
            value=value,
        )
        self.expected = expected


class TooDeepError(ConversionError):
    """Raised when nesting depth exceeds the configured limit."""

    kind = ErrorKind.TOO_DEEP

    def __init__(
        self,
        depth: int,
        limit: int,
        path: str = ROOT_PATH,
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(
            ERR_MSG_TOO_DEEP,
            f"depth {depth} exceeds limit {limit}",
            wrapped,
            path=path,
        )
        self.depth = depth
        self.limit = limit


class InvalidSchemaError(ConversionError):
    """Raised when a schema cannot be built or cannot build its model."""

    kind = ErrorKind.INVALID_SCHEMA


class UnsupportedTypeError(ConversionError):
    """Raised when a value has no JSON representation."""

    kind = ErrorKind.UNSUPPORTED_TYPE


# Sanitized user-facing error message constants
ERR_MSG_MALFORMED_TEXT = "malformed JSON text"
ERR_MSG_MISSING_KEY = "required key missing"
ERR_MSG_TYPE_MISMATCH = "type mismatch"
ERR_MSG_TOO_DEEP = "maximum nesting depth exceeded"
ERR_MSG_INVALID_SCHEMA = "invalid schema"
ERR_MSG_MODEL_CONSTRUCTION_FAILED = "model construction failed"
ERR_MSG_UNSUPPORTED_TYPE = "unsupported type"
ERR_MSG_NOT_SERIALIZABLE = "value is not JSON serializable"
