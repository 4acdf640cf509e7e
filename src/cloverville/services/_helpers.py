"""Shared service-layer utilities."""

from __future__ import annotations

import math
from decimal import Decimal

_NON_FINITE = {math.inf: "Infinity", -math.inf: "-Infinity"}


def format_number(value: int | float) -> str:
    """Format a number the way the page prints it.

    Integral values drop the decimal point (``50.0`` -> ``"50"``); other
    floats use the shortest round-trip digits (``12.5`` -> ``"12.5"``),
    written out in full between 1e-6 and 1e21 (``1e-05`` ->
    ``"0.00001"``) and as ``1e-7`` / ``1e+21`` outside that range.
    """
    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if value in _NON_FINITE:
        return _NON_FINITE[value]
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, _, exponent = text.partition("e")
    return f"{mantissa}e{exponent[0]}{exponent[1:].lstrip('0')}"
