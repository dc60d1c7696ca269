"""Format-string syntax package.

Provides the byte cursor, the FormatSpec directive and the replacement-field
parser. Separate from runtime so the grammar can be checked without
rendering anything.

Python 3.13+.
"""

from .cursor import Cursor, ParseResult
from .parser import (
    FieldArgument,
    ParseContext,
    parse_arg_index,
    parse_field,
    parse_uint,
    report_error,
)
from .spec import FormatSpec

__all__ = [
    "Cursor",
    "FieldArgument",
    "FormatSpec",
    "ParseContext",
    "ParseResult",
    "parse_arg_index",
    "parse_field",
    "parse_uint",
    "report_error",
]
