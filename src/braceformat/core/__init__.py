"""Core infrastructure: output buffer and digit tables.

Python 3.13+. Zero external dependencies.
"""

from .buffer import AppendTransaction, Buffer
from .digits import DIGITS, HEX_DIGITS_LOWER, HEX_DIGITS_UPPER, count_digits, format_decimal

__all__ = [
    "DIGITS",
    "HEX_DIGITS_LOWER",
    "HEX_DIGITS_UPPER",
    "AppendTransaction",
    "Buffer",
    "count_digits",
    "format_decimal",
]
