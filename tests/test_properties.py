"""Property-based tests for format operations.

Where this engine and Python's built-in ``format()`` are meant to agree
(integers, finite floats, ASCII strings with the common options) the two
are compared directly. Other properties cover escaping, indexing modes,
field widths and robustness against arbitrary format strings.
"""

from __future__ import annotations

import builtins
import re
from typing import Any

from hypothesis import assume, event, given
from hypothesis import strategies as st

from braceformat import Char, FormatError, Formatter, format
from tests.strategies import (
    brace_free_text,
    brace_soup,
    finite_floats,
    float_specs,
    int64_values,
    int_specs,
    string_specs,
    utf8_text,
)

ascii_text = st.text(alphabet=st.characters(min_codepoint=0x20, max_codepoint=0x7E), max_size=20)

# Operands for robustness runs: one of each common category
_MIXED_ARGS: tuple[Any, ...] = (7, -2.5, "str", Char("c"), 3, 1.0)


def _render(format_string: str, *args: Any) -> str:
    return format(format_string, *args).finish()


# ============================================================================
# AGREEMENT WITH PYTHON'S format()
# ============================================================================


class TestPythonAgreement:
    """Compare rendering with Python's format() on shared ground."""

    @given(value=int64_values, spec=int_specs())
    def test_integers(self, value: int, spec: str) -> None:
        """Integer fields render like format(value, spec)."""
        assert _render("{:" + spec + "}", value) == builtins.format(value, spec)

    @given(value=finite_floats, spec=float_specs())
    def test_floats(self, value: float, spec: str) -> None:
        """Float fields render like format(value, spec)."""
        event(f"negative={value < 0}")
        assert _render("{:" + spec + "}", value) == builtins.format(value, spec)

    @given(value=ascii_text, spec=string_specs())
    def test_strings(self, value: str, spec: str) -> None:
        """ASCII string fields render like format(value, spec)."""
        assert _render("{:" + spec + "}", value) == builtins.format(value, spec)

    @given(value=int64_values)
    def test_default_integer_is_str(self, value: int) -> None:
        """'{}' renders an int like str()."""
        assert _render("{}", value) == str(value)

    @given(value=finite_floats)
    def test_default_float_is_percent_g(self, value: float) -> None:
        """'{}' renders a float like '%g'."""
        assert _render("{}", value) == "%g" % value  # noqa: UP031 - reference rendering


# ============================================================================
# LITERALS AND INDEXING
# ============================================================================


class TestLiteralsAndIndexing:
    """Test literal copying, escapes and argument indexing."""

    @given(text=brace_free_text)
    def test_literal_text_unchanged(self, text: str) -> None:
        """Text without braces is copied verbatim."""
        assert _render(text) == text

    @given(text=utf8_text)
    def test_escaped_braces_round_trip(self, text: str) -> None:
        """Doubling every brace yields the original text."""
        escaped = text.replace("{", "{{").replace("}", "}}")

        assert _render(escaped) == text

    @given(values=st.lists(int64_values, min_size=1, max_size=8))
    def test_automatic_equals_manual(self, values: list[int]) -> None:
        """'{}' fields match '{0}', '{1}', ... in order."""
        automatic = "|".join("{}" for _ in values)
        manual = "|".join(f"{{{i}}}" for i in range(len(values)))

        assert _render(automatic, *values) == _render(manual, *values)

    @given(
        values=st.lists(st.integers(min_value=0, max_value=999), min_size=1, max_size=5),
        data=st.data(),
    )
    def test_manual_permutation(self, values: list[int], data: st.DataObject) -> None:
        """Manual indices select arguments in any order."""
        order = data.draw(st.permutations(range(len(values))))
        fmt = ",".join(f"{{{i}}}" for i in order)

        assert _render(fmt, *values) == ",".join(str(values[i]) for i in order)

    @given(prefix=brace_free_text, suffix=brace_free_text, value=int64_values)
    def test_field_between_literals(self, prefix: str, suffix: str, value: int) -> None:
        """Literal text around a field is kept in place."""
        assert _render(prefix + "{}" + suffix, value) == f"{prefix}{value}{suffix}"


# ============================================================================
# WIDTH
# ============================================================================


class TestWidth:
    """Test that width is a minimum."""

    @given(
        value=int64_values,
        width=st.integers(min_value=0, max_value=40),
        align=st.sampled_from(["", "<", ">", "^", "="]),
    )
    def test_integer_width(self, value: int, width: int, align: str) -> None:
        """Output length is max(width, natural length)."""
        result = _render(f"{{:{align}{width or ''}}}", value)

        assert len(result) == max(width, len(str(value)))
        assert result.strip() == str(value) or align == "="

    @given(
        text=ascii_text,
        width=st.integers(min_value=0, max_value=40),
        align=st.sampled_from(["", "<", ">", "^"]),
    )
    def test_string_width(self, text: str, width: int, align: str) -> None:
        """Strings are padded, never truncated."""
        result = _render(f"{{:*{align}{width or ''}}}" if align else f"{{:{width or ''}}}", text)

        assert len(result) == max(width, len(text))
        assert text in result


# ============================================================================
# REUSE AND ROBUSTNESS
# ============================================================================


class TestReuseAndRobustness:
    """Test formatter reuse and arbitrary format strings."""

    @given(
        items=st.lists(
            st.tuples(st.sampled_from(["{}", "{:>6}", "{:x}", "{:+d}"]), int64_values),
            min_size=1,
            max_size=10,
        )
    )
    def test_reused_formatter_matches_fresh(self, items: list[tuple[str, int]]) -> None:
        """A reused Formatter gives the same output as one-shot formats."""
        fmt = Formatter()
        for format_string, value in items:
            reused = (fmt(format_string) << value).finish()
            assert reused == _render(format_string, value)

    @given(source=brace_soup())
    def test_only_format_errors(self, source: str) -> None:
        """Arbitrary format strings either render or raise FormatError."""
        # Long digit runs ask for huge widths; they are covered elsewhere
        assume(re.search(r"\d{4}", source) is None)
        try:
            result = _render(source, *_MIXED_ARGS)
        except FormatError as e:
            event(f"error={e.code.name if e.code else 'none'}")
        else:
            event("rendered")
            assert isinstance(result, str)

    @given(source=brace_soup())
    def test_errors_leave_no_output(self, source: str) -> None:
        """A failed operation leaves the formatter's buffer empty."""
        assume(re.search(r"\d{4}", source) is None)
        fmt = Formatter()
        builder = fmt(source)
        for arg in _MIXED_ARGS:
            builder.append(arg)
        try:
            builder.finish()
        except FormatError:
            assert fmt.size == 0
