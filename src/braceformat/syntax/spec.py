"""Per-field format specification.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from braceformat.enums import Alignment, FormatFlag

__all__ = ["FormatSpec"]


@dataclass(frozen=True, slots=True)
class FormatSpec:
    """Parsed directive of one replacement field.

    Built fresh for each field by the parser. ``fill`` and ``type`` hold a
    single byte each, carried as a one-character string in the range
    U+0000..U+00FF (the byte value is the code point).

    Attributes:
        align: Field alignment (DEFAULT lets the writer choose)
        flags: SIGN / PLUS / HASH bits
        width: Minimum field width in bytes, 0 for unconstrained
        precision: Digits after the point (f) or significant digits (g), -1 if absent
        type: Presentation type code, "" if absent
        fill: Padding byte

    Example:
        >>> spec = FormatSpec(align=Alignment.RIGHT, width=6, fill="*")
        >>> spec.fill_byte
        42
        >>> spec.type_code
        0
    """

    align: Alignment = Alignment.DEFAULT
    flags: FormatFlag = FormatFlag.NONE
    width: int = 0
    precision: int = -1
    type: str = ""
    fill: str = " "

    def __post_init__(self) -> None:
        """Validate field ranges.

        Raises:
            ValueError: If a field is outside its domain
        """
        if self.width < 0:
            msg = f"width must be non-negative, got {self.width}"
            raise ValueError(msg)
        if self.precision < -1:
            msg = f"precision must be -1 (absent) or non-negative, got {self.precision}"
            raise ValueError(msg)
        if len(self.type) > 1 or (self.type and ord(self.type) > 0xFF):
            msg = f"type must be a single byte character, got {self.type!r}"
            raise ValueError(msg)
        if len(self.fill) != 1 or ord(self.fill) > 0xFF:
            msg = f"fill must be a single byte character, got {self.fill!r}"
            raise ValueError(msg)

    @property
    def fill_byte(self) -> int:
        """Fill character as a byte value."""
        return ord(self.fill)

    @property
    def type_code(self) -> int:
        """Type character as a byte value, 0 if absent."""
        return ord(self.type) if self.type else 0

    def has(self, flag: FormatFlag) -> bool:
        """Check whether ``flag`` is set."""
        return bool(self.flags & flag)
