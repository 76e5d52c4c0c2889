"""Number formatting and parsing helpers."""

from __future__ import annotations

import math

_DIGITS = "0123456789abcdef"
_DTOSTRF_LIMIT = 4294967040.0
_U64 = 1 << 64


def dtostrf(number: float, prec: int) -> str:
    """Format ``number`` with ``prec`` digits after the decimal point.

    Returns "nan", "inf" or "ovf" for values that cannot be printed.
    """
    if prec < 0:
        raise ValueError("precision must not be negative")
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf"
    if number > _DTOSTRF_LIMIT or number < -_DTOSTRF_LIMIT:
        return "ovf"

    parts = []
    if number < 0.0:
        parts.append("-")
        number = -number

    rounding = 0.5
    for _ in range(prec):
        rounding /= 10.0
    number += rounding

    int_part = int(number)
    remainder = number - int_part
    parts.append(str(int_part))
    if prec > 0:
        parts.append(".")

    for _ in range(prec):
        remainder *= 10.0
        if int(remainder) == 0:
            parts.append("0")
    if int(remainder) != 0:
        parts.append(str(int(remainder)))
    return "".join(parts)


def atoll(text: str) -> int:
    """Parse a string of decimal digits into a signed 64-bit integer.

    No sign or whitespace handling is done; every character is taken as a
    digit, and the result wraps like a 64-bit integer.
    """
    value = 0
    for ch in text:
        value = 10 * value + (ord(ch) - ord("0"))
    value %= _U64
    return value - _U64 if value >= _U64 // 2 else value


def _format_digits(value: int, base: int) -> str:
    if not 2 <= base <= 16:
        raise ValueError("base must be between 2 and 16")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, base)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))


def lltoa(val: int, base: int = 10) -> str:
    """Format a signed integer in the given base with lower-case digits."""
    digits = _format_digits(abs(val), base)
    return "-" + digits if val < 0 else digits


def ulltoa(val: int, base: int = 10) -> str:
    """Format an integer as an unsigned 64-bit value in the given base."""
    return _format_digits(val % _U64, base)