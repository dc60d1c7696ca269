"""Static digit tables and decimal digit routines.

The tables are module-level ``bytes`` constants: built once at import time,
never mutated, safe for concurrent reads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .buffer import Buffer

__all__ = [
    "DIGITS",
    "HEX_DIGITS_LOWER",
    "HEX_DIGITS_UPPER",
    "count_digits",
    "format_decimal",
]

HEX_DIGITS_LOWER: bytes = b"0123456789abcdef"
HEX_DIGITS_UPPER: bytes = b"0123456789ABCDEF"

# Two-digit pairs "00" .. "99": DIGITS[2 * n] and DIGITS[2 * n + 1] spell n.
DIGITS: bytes = b"".join(b"%02d" % n for n in range(100))


def count_digits(n: int) -> int:
    """Return the number of decimal digits in a non-negative integer.

    Compares against four powers of ten per division by 10000 instead of
    dividing once per digit.

    Example:
        >>> count_digits(0)
        1
        >>> count_digits(12345)
        5
    """
    count = 1
    while True:
        if n < 10:
            return count
        if n < 100:
            return count + 1
        if n < 1000:
            return count + 2
        if n < 10000:
            return count + 3
        n //= 10000
        count += 4


def format_decimal(out: Buffer | bytearray, start: int, value: int, num_digits: int) -> None:
    """Write ``value`` as exactly ``num_digits`` decimal digits at ``start``.

    Digits are produced two at a time from the least significant end using
    the DIGITS pair table. ``num_digits`` must equal ``count_digits(value)``.
    """
    pos = start + num_digits - 1
    while value >= 100:
        index = (value % 100) * 2
        value //= 100
        out[pos] = DIGITS[index + 1]
        out[pos - 1] = DIGITS[index]
        pos -= 2
    if value < 10:
        out[start] = 0x30 + value
        return
    index = value * 2
    out[start + 1] = DIGITS[index + 1]
    out[start] = DIGITS[index]
