"""Immutable byte cursor for the field parser.

The source is the UTF-8 encoding of the format string and positions are
byte offsets. Moving returns a new cursor; reading past the end yields the
0 sentinel from ``code``, so EOF never needs a separate check at each token.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["Cursor", "ParseResult"]

_DIGIT_ZERO = 0x30
_DIGIT_NINE = 0x39

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable byte position tracker.

    Example:
        >>> cursor = Cursor(b"{:>8}", 0)
        >>> cursor.code == ord("{")
        True
        >>> cursor.advance().peek()
        b':'
        >>> cursor.peek(2)
        b'>'
        >>> Cursor(b"hi", 2).is_eof
        True
    """

    source: bytes
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def code(self) -> int:
        """Get the current byte value, 0 at end of input.

        The 0 sentinel mirrors a NUL terminator: it never matches any token
        of the mini-language.
        """
        if self.pos >= len(self.source):
            return 0
        return self.source[self.pos]

    @property
    def is_digit(self) -> bool:
        """True if the current byte is an ASCII decimal digit."""
        return _DIGIT_ZERO <= self.code <= _DIGIT_NINE

    def peek(self, offset: int = 0) -> bytes | None:
        """Peek at the byte ``offset`` positions ahead without advancing.

        Returns:
            One-byte ``bytes``, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos : target_pos + 1]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def find_brace(self) -> "Cursor":
        """Advance to the next '{' or '}' byte, or to EOF.

        Literal runs between fields are skipped in one step.
        """
        source = self.source
        open_pos = source.find(b"{", self.pos)
        close_pos = source.find(b"}", self.pos)
        candidates = [p for p in (open_pos, close_pos) if p >= 0]
        return Cursor(source, min(candidates) if candidates else len(source))


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> cursor = Cursor(b"42}", 0)
        >>> result = ParseResult(42, cursor.advance(2))
        >>> result.value
        42
        >>> result.cursor.peek()
        b'}'
    """

    value: T
    cursor: Cursor
