"""Hypothesis strategies for braceformat property-based testing.

Usage:
    from tests.strategies import int_specs, float_specs, brace_free_text
"""

from .format import (
    brace_free_text,
    brace_soup,
    finite_floats,
    float_specs,
    int64_values,
    int_specs,
    string_specs,
    utf8_text,
)

__all__ = [
    "brace_free_text",
    "brace_soup",
    "finite_floats",
    "float_specs",
    "int64_values",
    "int_specs",
    "string_specs",
    "utf8_text",
]
