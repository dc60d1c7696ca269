"""Enumerations for braceformat type-safe constants.

Uses StrEnum for alignment (members are their own spelling in the
mini-language), IntEnum for argument categories (ordering matters) and
IntFlag for the per-field flag bits.

Python 3.13+.
"""

from enum import IntEnum, IntFlag, StrEnum


class Alignment(StrEnum):
    """Field alignment.

    StrEnum provides automatic string conversion: str(Alignment.LEFT) == "<"
    """

    DEFAULT = ""
    """No alignment requested: strings go left, numbers go right."""

    LEFT = "<"
    """Content first, padding after: {:<10}"""

    RIGHT = ">"
    """Padding first, content after: {:>10}"""

    CENTER = "^"
    """Padding split around content, odd byte on the right: {:^10}"""

    NUMERIC = "="
    """Padding between sign and first digit: {:=+10}"""


class ArgType(IntEnum):
    """Category of a format argument.

    Numeric categories come first so that ``arg.type <= LAST_NUMERIC_TYPE``
    is the numeric test used by the parser.
    """

    INT = 0
    UINT = 1
    LONG = 2
    ULONG = 3
    DOUBLE = 4
    LONG_DOUBLE = 5
    CHAR = 6
    STRING = 7
    POINTER = 8
    CUSTOM = 9

    @property
    def is_numeric(self) -> bool:
        """True for integer and floating-point categories."""
        return self <= LAST_NUMERIC_TYPE

    @property
    def is_integer(self) -> bool:
        """True for the four integer categories."""
        return self <= ArgType.ULONG

    @property
    def is_unsigned(self) -> bool:
        """True for UINT and ULONG."""
        return self in (ArgType.UINT, ArgType.ULONG)

    @property
    def is_floating(self) -> bool:
        """True for DOUBLE and LONG_DOUBLE."""
        return self in (ArgType.DOUBLE, ArgType.LONG_DOUBLE)


LAST_NUMERIC_TYPE: ArgType = ArgType.LONG_DOUBLE


class FormatFlag(IntFlag):
    """Per-field flag bits. Not mutually exclusive."""

    NONE = 0
    SIGN = 1
    """A sign column is always emitted (space or plus)."""

    PLUS = 2
    """The sign column shows '+' for non-negative values."""

    HASH = 4
    """Alternate form: base prefixes, forced decimal point."""


class BuilderState(StrEnum):
    """Lifecycle of one format operation, as seen by its builder."""

    ACCUMULATING = "accumulating"
    COMPLETED = "completed"
    FAILED = "failed"
    DISCARDED = "discarded"


__all__ = [
    "LAST_NUMERIC_TYPE",
    "Alignment",
    "ArgType",
    "BuilderState",
    "FormatFlag",
]
