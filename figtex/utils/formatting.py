"""Deterministic text formatting of values written into PGFPlots source."""

import math
from enum import Enum
from typing import Any

# Beyond this magnitude int(value) would print digits a float cannot represent
_MAX_PLAIN_INTEGRAL = 1e16


def format_number(value) -> str:
    """
    Format a number the same way on every platform.

    Integral finite floats drop their fractional part so that ``1.0`` and ``1``
    produce the same markup. Every other float uses the shortest round-trip
    representation (``repr``), which never depends on locale.

    Examples:
        format_number(1.0)    # "1"
        format_number(-0.25)  # "-0.25"
        format_number(1e-7)   # "1e-07"
        format_number(True)   # "true"
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    value = float(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < _MAX_PLAIN_INTEGRAL:
        return str(int(value))
    return repr(value)


def format_value(value: Any) -> str:
    """
    Format an attribute value for markup.

    Numbers go through format_number, enums render their value, sequences are
    joined with ", " and anything else uses str().
    """
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, (bool, int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    return str(value)
