"""JSON text parsing and serialization on top of the ``json`` module."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from pyjsonmodel._constants import DEFAULT_INDENT, DEFAULT_MAX_DEPTH, ROOT_PATH
from pyjsonmodel._errors import (
    ERR_MSG_NOT_SERIALIZABLE,
    MalformedTextError,
    TooDeepError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from pyjsonmodel._types import JsonValue
from pyjsonmodel._utils import nesting_depth

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name} is not valid JSON")


def parse_text(
    text: str | bytes | bytearray,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> JsonValue:
    """Parse JSON text into a JSON value tree.

    Raises:
        MalformedTextError: If the text is not valid JSON.
        TooDeepError: If the parsed tree nests deeper than ``max_depth``.
        TypeMismatchError: If ``text`` is not str, bytes or bytearray.
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise TypeMismatchError("string", text, ROOT_PATH)
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        logger.debug("JSON parse failed: %s", exc)
        raise MalformedTextError(
            f"{exc.msg}: line {exc.lineno} column {exc.colno} (char {exc.pos})", exc
        ) from exc
    except UnicodeDecodeError as exc:
        logger.debug("JSON text decoding failed: %s", exc)
        raise MalformedTextError(f"invalid text encoding: {exc.reason}", exc) from exc
    except ValueError as exc:
        logger.debug("JSON parse failed: %s", exc)
        raise MalformedTextError(str(exc), exc) from exc
    except RecursionError as exc:
        # Exact depth unknown, the interpreter gave up first.
        raise TooDeepError(max_depth + 1, max_depth, wrapped=exc) from exc

    depth = nesting_depth(value)
    if depth > max_depth:
        raise TooDeepError(depth, max_depth)
    return value


def serialize_text(
    value: JsonValue,
    pretty: bool = False,
    indent: int = DEFAULT_INDENT,
) -> str:
    """Render a JSON value tree as text.

    ``pretty`` only changes whitespace. Object key order is preserved and
    non-ASCII characters are written as-is.

    Raises:
        UnsupportedTypeError: If the tree holds a non-JSON value or NaN/Infinity.
        TooDeepError: If the tree is too deep for the interpreter to render.
    """
    try:
        if pretty:
            return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as exc:
        logger.debug("JSON serialization failed: %s", exc)
        raise UnsupportedTypeError(ERR_MSG_NOT_SERIALIZABLE, str(exc), exc) from exc
    except RecursionError as exc:
        raise TooDeepError(
            nesting_depth(value), sys.getrecursionlimit(), wrapped=exc
        ) from exc
