"""Text conversion and escaping applied to interpolated values."""

import math
from collections.abc import Callable
from typing import Any

from mustachio.types import EscapeMode

# Floats at or above this magnitude keep exponent notation
_INTEGRAL_FLOAT_LIMIT = 1e16


def escape_html(text: str) -> str:
    """Escape text for HTML.

    Replaces ``&``, ``<``, ``>`` and ``"``; double quotes use the named
    ``&quot;`` entity.

    Args:
        text: Text to escape

    Returns:
        Escaped text
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def no_escape(text: str) -> str:
    """Return text unchanged."""
    return text


def stringify(value: Any) -> str:
    """Convert a value to the text written for it.

    Booleans render as ``true``/``false``, integral floats without a
    fractional part, other values via ``str()``. None renders empty.

    Args:
        value: Value to convert

    Returns:
        Text form of value
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
            return str(int(value))
        return repr(value)
    return str(value)


# Registry of escape functions by mode
ESCAPERS: dict[EscapeMode, Callable[[str], str]] = {
    EscapeMode.HTML: escape_html,
    EscapeMode.NONE: no_escape,
}
