"""Shared constants for braceformat.

This module provides centralized configuration constants used across
the core, syntax and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Buffer limits: Inline capacities and growth policy
- Numeric limits: Ranges of the built-in integer argument categories
- Parser limits: Largest number accepted in a format string

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Buffer limits
    "INLINE_BUFFER_SIZE",
    "BUFFER_GROWTH_NUMERATOR",
    "BUFFER_GROWTH_DENOMINATOR",
    "MAX_TRANSACTION_SIZE",
    # Numeric limits
    "INT32_MIN",
    "INT32_MAX",
    "UINT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "POINTER_MAX",
    # Parser limits
    "MAX_FORMAT_NUMBER",
]

# ============================================================================
# BUFFER LIMITS
# ============================================================================

# Bytes preallocated by every output buffer. Short outputs never reallocate.
INLINE_BUFFER_SIZE: int = 500

# Geometric growth factor 3/2: new capacity = max(needed, capacity * 3 // 2).
BUFFER_GROWTH_NUMERATOR: int = 3
BUFFER_GROWTH_DENOMINATOR: int = 2

# Upper bound on the spare space offered to a single append transaction.
# A transaction still refusing to write at this size is treated as broken.
MAX_TRANSACTION_SIZE: int = 64 * 1024 * 1024

# ============================================================================
# NUMERIC LIMITS
# ============================================================================

INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1
UINT32_MAX: int = 2**32 - 1
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1
UINT64_MAX: int = 2**64 - 1

# Pointers are rendered as uintptr_t on a 64-bit platform.
POINTER_MAX: int = UINT64_MAX

# ============================================================================
# PARSER LIMITS
# ============================================================================

# Width, precision and argument index literals must fit a signed 32-bit int.
MAX_FORMAT_NUMBER: int = INT32_MAX
