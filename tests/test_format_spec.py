"""Tests for FormatSpec and the enumerations it is built from."""

from __future__ import annotations

import pytest

from braceformat import Alignment, ArgType, FormatFlag, FormatSpec
from braceformat.enums import LAST_NUMERIC_TYPE


class TestFormatSpecDefaults:
    """Test the default directive."""

    def test_defaults(self) -> None:
        """A bare spec has no options."""
        spec = FormatSpec()

        assert spec.align is Alignment.DEFAULT
        assert spec.flags == FormatFlag.NONE
        assert spec.width == 0
        assert spec.precision == -1
        assert spec.type == ""
        assert spec.fill == " "

    def test_byte_accessors(self) -> None:
        """fill_byte and type_code expose byte values."""
        spec = FormatSpec(fill="*", type="x")

        assert spec.fill_byte == 0x2A
        assert spec.type_code == ord("x")
        assert FormatSpec().type_code == 0

    def test_has_flag(self) -> None:
        """has() tests individual flag bits."""
        spec = FormatSpec(flags=FormatFlag.SIGN | FormatFlag.PLUS)

        assert spec.has(FormatFlag.SIGN)
        assert spec.has(FormatFlag.PLUS)
        assert not spec.has(FormatFlag.HASH)

    def test_frozen(self) -> None:
        """FormatSpec is immutable."""
        with pytest.raises(AttributeError):
            FormatSpec().width = 3  # type: ignore[misc]

    def test_latin1_fill_allowed(self) -> None:
        """Any single byte value is a valid fill."""
        assert FormatSpec(fill="\xff").fill_byte == 0xFF


class TestFormatSpecValidation:
    """Test __post_init__ range checks."""

    def test_negative_width(self) -> None:
        """Width must be non-negative."""
        with pytest.raises(ValueError, match="width"):
            FormatSpec(width=-1)

    def test_precision_below_absent(self) -> None:
        """Precision is -1 or non-negative."""
        with pytest.raises(ValueError, match="precision"):
            FormatSpec(precision=-2)

    @pytest.mark.parametrize("type_code", ["xx", "Ā"])
    def test_type_must_be_one_byte(self, type_code: str) -> None:
        """Type is at most one byte-sized character."""
        with pytest.raises(ValueError, match="type"):
            FormatSpec(type=type_code)

    @pytest.mark.parametrize("fill", ["", "ab", "€"])
    def test_fill_must_be_one_byte(self, fill: str) -> None:
        """Fill is exactly one byte-sized character."""
        with pytest.raises(ValueError, match="fill"):
            FormatSpec(fill=fill)


class TestEnums:
    """Test enumeration helpers."""

    def test_alignment_spelling(self) -> None:
        """Alignment members are their mini-language tokens."""
        assert [str(a) for a in Alignment] == ["", "<", ">", "^", "="]

    def test_numeric_categories(self) -> None:
        """Numeric categories precede the rest."""
        numeric = [t for t in ArgType if t.is_numeric]

        assert numeric == [t for t in ArgType if t <= LAST_NUMERIC_TYPE]
        assert ArgType.CHAR not in numeric
        assert ArgType.LONG_DOUBLE in numeric

    def test_category_predicates(self) -> None:
        """is_integer, is_unsigned and is_floating partition the numbers."""
        assert {t for t in ArgType if t.is_integer} == {
            ArgType.INT,
            ArgType.UINT,
            ArgType.LONG,
            ArgType.ULONG,
        }
        assert {t for t in ArgType if t.is_unsigned} == {ArgType.UINT, ArgType.ULONG}
        assert {t for t in ArgType if t.is_floating} == {ArgType.DOUBLE, ArgType.LONG_DOUBLE}

    def test_flags_combine(self) -> None:
        """FormatFlag bits are independent."""
        flags = FormatFlag.SIGN | FormatFlag.HASH

        assert FormatFlag.SIGN in flags
        assert FormatFlag.PLUS not in flags
