"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Syntax errors (braces, numbers, fill characters)
        2000-2999: Argument indexing errors
        3000-3999: Specification errors (option not legal for the argument)
        4000-4999: Output errors (null string data, broken appenders)
    """

    # Syntax errors (1000-1999)
    UNMATCHED_OPEN_BRACE = 1001
    UNMATCHED_CLOSE_BRACE = 1002
    INVALID_ARGUMENT_INDEX = 1003
    INVALID_FILL_CHARACTER = 1004
    MISSING_PRECISION = 1005
    NUMBER_TOO_BIG = 1006

    # Argument indexing errors (2000-2999)
    ARGUMENT_INDEX_OUT_OF_RANGE = 2001
    MANUAL_TO_AUTOMATIC_INDEXING = 2002
    AUTOMATIC_TO_MANUAL_INDEXING = 2003

    # Specification errors (3000-3999)
    REQUIRES_NUMERIC_ARGUMENT = 3001
    REQUIRES_SIGNED_ARGUMENT = 3002
    PRECISION_NOT_INTEGER = 3003
    NEGATIVE_PRECISION = 3004
    PRECISION_REQUIRES_FLOAT = 3005
    UNKNOWN_FORMAT_CODE = 3006

    # Output errors (4000-4999)
    NULL_STRING_POINTER = 4001
    TRANSACTION_FAILED = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        position: Byte offset in the format string (None if not applicable)
        hint: Suggestion for fixing the error
        argument_type: Category of the argument involved (spec errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    position: int | None = None
    hint: str | None = None
    argument_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[UNMATCHED_OPEN_BRACE]: unmatched '{' in format
              --> byte 7
              = help: Close the field with '}' or escape the brace as '{{'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
