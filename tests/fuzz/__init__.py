"""Fuzz testing for braceformat.

This package contains:
- test_format_oracle: differential fuzzing against Python's str.format

Python 3.13+.
"""
