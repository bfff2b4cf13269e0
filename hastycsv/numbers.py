"""
Numeric parsers for hastycsv fields.

Both parsers work directly on a byte buffer (``bytes``, ``bytearray``
or ``memoryview``) between ``start`` and ``end`` so that ``Field`` can
hand over its span without slicing the line first.

- ``parse_uint32``: ASCII digits only. No sign, no whitespace, no
  separators. An empty span is 0.
- ``parse_float32``: decimal literal (sign, digits, optional point,
  optional exponent) narrowed to ``numpy.float32``.

Both raise ``FieldParseError`` subclasses. Deferring the error is the
caller's job (see ``field.py``).
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

import numpy as np

from hastycsv.exceptions import (
    FloatRangeError,
    InvalidDigitError,
    InvalidFloatError,
    TooLongError,
    Uint32OverflowError,
)

MAX_UINT32 = 4294967295

# 4294967295 is 10 digits long
_MAX_UINT32_DIGITS = 10

_ZERO = ord("0")
_NINE = ord("9")

# Positional weights, indexed by the number of digits to the right.
_BASE10_EXP = (
    1,
    10,
    100,
    1000,
    10000,
    100000,
    1000000,
    10000000,
    100000000,
    1000000000,
    10000000000,
    100000000000,
    1000000000000,
    10000000000000,
    100000000000000,
    1000000000000000,
    10000000000000000,
    100000000000000000,
    1000000000000000000,
    10000000000000000000,
)

_FLOAT32_MAX = float(np.finfo(np.float32).max)

# Halfway between the largest float32 and 2**128; at or past it a
# literal rounds to infinity.
_FLOAT32_ROUNDING_LIMIT = float(2**128 - 2**103)

_FLOAT_LITERAL = re.compile(
    rb"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)


def _literal(data, start: int, end: int) -> str:
    """Render the span for error messages."""
    return bytes(data[start:end]).decode("utf-8", errors="replace")


def parse_uint32(data, start: int = 0, end: int | None = None) -> int:
    """Parse an ASCII digit span as an unsigned 32-bit integer.

    Args:
        data: Bytes-like buffer holding the literal.
        start: Offset of the first byte of the literal.
        end: Offset just past the literal. Defaults to ``len(data)``.

    Returns:
        The parsed value as ``int`` in ``[0, 4294967295]``. An empty
        span parses to 0.

    Raises:
        TooLongError: If the span has more than 10 bytes.
        InvalidDigitError: On the first byte outside ``0``-``9``.
        Uint32OverflowError: If the value exceeds 4294967295.
    """
    if end is None:
        end = len(data)

    d = end - start
    if d > _MAX_UINT32_DIGITS:
        raise TooLongError(_literal(data, start, end))

    value = 0
    for i in range(start, end):
        ch = data[i]
        if ch < _ZERO or ch > _NINE:
            raise InvalidDigitError(_literal(data, start, end), chr(ch))
        d -= 1
        value += (ch - _ZERO) * _BASE10_EXP[d]

    if value > MAX_UINT32:
        raise Uint32OverflowError(_literal(data, start, end))

    return value


def parse_float32(data, start: int = 0, end: int | None = None) -> np.float32:
    """Parse a decimal floating-point span and narrow it to float32.

    Accepted grammar: ``[+-]? (digits [. digits?] | . digits)
    ([eE] [+-]? digits)?``. Whitespace, ``inf``/``nan``, hex floats and
    underscores are rejected, as is the empty span.

    Raises:
        InvalidFloatError: If the span does not match the grammar.
        FloatRangeError: If the value does not fit in float32.
    """
    if end is None:
        end = len(data)

    if _FLOAT_LITERAL.fullmatch(data, start, end) is None:
        raise InvalidFloatError(_literal(data, start, end))

    text = bytes(data[start:end]).decode("ascii")
    narrowed = _round_to_float32(text, float(text))
    if not np.isfinite(narrowed):
        raise FloatRangeError(text)
    return narrowed


def _round_to_float32(text: str, value: float) -> np.float32:
    """Narrow *value*, the nearest double to *text*, to the nearest float32.

    ``np.float32(value)`` on its own rounds twice. That only goes wrong
    when *value* lands exactly halfway between two float32 neighbours, so
    such ties are settled against the exact decimal literal.
    """
    with np.errstate(over="ignore"):
        narrowed = np.float32(value)
        if float(narrowed) == value:
            return narrowed
        if np.isinf(narrowed):
            if abs(value) != _FLOAT32_ROUNDING_LIMIT:
                return narrowed
            other = np.float32(math.copysign(_FLOAT32_MAX, value))
        else:
            toward = np.float32(math.copysign(math.inf, value - float(narrowed)))
            other = np.nextafter(narrowed, toward)
            if (float(narrowed) + float(other)) / 2 != value:
                return narrowed

    exact = abs(Decimal(text))
    halfway = abs(Decimal(value))
    if exact == halfway:
        # a true tie; np.float32 already rounded it to even
        return narrowed
    if (abs(other) > abs(narrowed)) == (exact > halfway):
        return other
    return narrowed
