"""Human-readable rendering of conversion errors."""

from __future__ import annotations

import reprlib

from pyjsonmodel._constants import MAX_SNIPPET_LENGTH
from pyjsonmodel._errors import ConversionError
from pyjsonmodel._text import serialize_text


def describe(error: ConversionError, max_snippet: int = MAX_SNIPPET_LENGTH) -> str:
    """Render an error as a message for logs and consoles.

    The first line names the error kind, the user message and the path.
    Internal details follow when they add anything, then a pretty-printed
    snippet of the offending JSON value when the error carries one.
    """
    lines = [f"{error.kind}: {error.user_message} at {error.path}"]
    details = error.internal()
    if details and details != error.user_message:
        lines.append(details)
    if error.has_value:
        lines.append(_snippet(error.value, max_snippet))
    return "\n".join(lines)


def _snippet(value: object, max_length: int) -> str:
    try:
        text = serialize_text(value, pretty=True)
    except ConversionError:
        text = reprlib.repr(value)
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text
