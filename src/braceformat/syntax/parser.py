"""Replacement-field parser for the format mini-language.

This module parses the inside of one replacement field, from the byte after
the opening '{' to the byte after the closing '}':

    field     := "{" [index] [":" spec] "}"
    spec      := [[fill] align] [sign] ["#"] ["0"] [width] ["." precision] [type]
    precision := digit+ | "{" [index] "}"

Literal runs and the '{{' / '}}' escapes are handled by the formatter that
drives this parser over the whole format string.

Options are validated against the category of the argument the field
refers to while they are parsed, so the argument is resolved first.

Error precedence:
    When an option is illegal the rest of the format string is scanned for
    the '}' that closes the field. If the field is never closed, the error
    is reported as an unmatched '{' instead: an unclosed field overrides
    every other error inside it.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NoReturn, Protocol

from braceformat.constants import MAX_FORMAT_NUMBER, UINT32_MAX
from braceformat.diagnostics import Diagnostic, ErrorTemplate, FormatError
from braceformat.enums import Alignment, ArgType, FormatFlag
from braceformat.syntax.cursor import Cursor, ParseResult
from braceformat.syntax.spec import FormatSpec

__all__ = [
    "FieldArgument",
    "ParseContext",
    "parse_arg_index",
    "parse_field",
    "parse_uint",
    "report_error",
]

_OPEN_BRACE = 0x7B
_CLOSE_BRACE = 0x7D
_COLON = 0x3A
_DOT = 0x2E
_HASH = 0x23
_ZERO = 0x30
_PLUS = 0x2B
_MINUS = 0x2D
_SPACE = 0x20

_ALIGN_CODES: dict[int, Alignment] = {ord(a.value): a for a in Alignment if a.value}


class FieldArgument(Protocol):
    """What the parser needs to know about an argument."""

    @property
    def type(self) -> ArgType: ...

    @property
    def value(self) -> object: ...


@dataclass(slots=True)
class ParseContext:
    """Mutable state of one format operation.

    Attributes:
        args: Arguments of the operation, in call order
        max_number: Largest width, precision or index literal accepted
        next_arg_index: Next automatic index; -1 once manual indexing is used
        open_braces: Unclosed braces of the field being parsed
        field_start: Byte offset of the '{' opening the current field
    """

    args: Sequence[FieldArgument] = field(default_factory=tuple)
    max_number: int = MAX_FORMAT_NUMBER
    next_arg_index: int = 0
    open_braces: int = 0
    field_start: int = 0


# =============================================================================
# Error Reporting
# =============================================================================


def report_error(cursor: Cursor, ctx: ParseContext, diagnostic: Diagnostic) -> NoReturn:
    """Raise ``diagnostic`` if the current field is closed later on.

    Scans from the cursor to the end of the source, tracking brace depth
    from ``ctx.open_braces``. Reaching depth zero means the field is closed
    and the original error stands; otherwise an unmatched '{' is raised.

    Raises:
        FormatError: Always
    """
    open_braces = ctx.open_braces
    for byte in cursor.source[cursor.pos :]:
        if byte == _OPEN_BRACE:
            open_braces += 1
        elif byte == _CLOSE_BRACE:
            open_braces -= 1
            if open_braces == 0:
                raise FormatError(diagnostic)
    raise FormatError(ErrorTemplate.unmatched_open_brace(ctx.field_start))


# =============================================================================
# Numbers and Indices
# =============================================================================


def parse_uint(cursor: Cursor, ctx: ParseContext) -> ParseResult[int]:
    """Parse a decimal literal. The cursor must be on a digit.

    Raises:
        FormatError: If the value exceeds the 32-bit unsigned range
    """
    value = 0
    while cursor.is_digit:
        value = value * 10 + (cursor.code - _ZERO)
        cursor = cursor.advance()
        if value > UINT32_MAX:
            report_error(cursor, ctx, ErrorTemplate.number_too_big(cursor.pos))
    return ParseResult(value, cursor)


def _parse_bounded(cursor: Cursor, ctx: ParseContext) -> ParseResult[int]:
    """Parse a width or precision literal (at most ``ctx.max_number``)."""
    result = parse_uint(cursor, ctx)
    if result.value > ctx.max_number:
        report_error(result.cursor, ctx, ErrorTemplate.number_too_big(result.cursor.pos))
    return result


def parse_arg_index(cursor: Cursor, ctx: ParseContext) -> ParseResult[FieldArgument]:
    """Resolve the argument a field (or nested precision) refers to.

    An empty index takes the next automatic index; digits select an
    argument explicitly. The first kind used fixes the mode for the rest
    of the operation.

    Raises:
        FormatError: On a malformed index, a switch of indexing mode, or an
            index past the last argument
    """
    if not cursor.is_digit:
        if cursor.code not in (_CLOSE_BRACE, _COLON):
            report_error(cursor, ctx, ErrorTemplate.invalid_argument_index(cursor.pos))
        if ctx.next_arg_index < 0:
            report_error(cursor, ctx, ErrorTemplate.manual_to_automatic(cursor.pos))
        index = ctx.next_arg_index
        ctx.next_arg_index += 1
    else:
        if ctx.next_arg_index > 0:
            report_error(cursor, ctx, ErrorTemplate.automatic_to_manual(cursor.pos))
        ctx.next_arg_index = -1
        result = parse_uint(cursor, ctx)
        index, cursor = result.value, result.cursor
    if index >= len(ctx.args):
        report_error(cursor, ctx, ErrorTemplate.argument_index_out_of_range(cursor.pos))
    return ParseResult(ctx.args[index], cursor)


# =============================================================================
# Specification
# =============================================================================


def _parse_fill_align(
    cursor: Cursor, ctx: ParseContext, arg: FieldArgument
) -> ParseResult[tuple[Alignment, str]]:
    """Parse ``[[fill] align]``.

    The byte after the current one is tried first: if it is an alignment
    token the current byte is the fill. Otherwise the current byte itself
    may be an alignment token with no fill.
    """
    if cursor.is_eof:
        return ParseResult((Alignment.DEFAULT, " "), cursor)
    fill_code = cursor.code
    fill = " "
    next_code = cursor.peek(1)
    align = _ALIGN_CODES.get(next_code[0]) if next_code else None
    if align is not None:
        if fill_code == _CLOSE_BRACE:
            # '{:}<': the field ends here, the token after it is literal text
            return ParseResult((Alignment.DEFAULT, " "), cursor)
        if fill_code == _OPEN_BRACE:
            report_error(cursor, ctx, ErrorTemplate.invalid_fill_character(cursor.pos))
        fill = chr(fill_code)
        cursor = cursor.advance(2)
    else:
        align = _ALIGN_CODES.get(fill_code)
        if align is None:
            return ParseResult((Alignment.DEFAULT, " "), cursor)
        cursor = cursor.advance()
    if align is Alignment.NUMERIC and not arg.type.is_numeric:
        report_error(cursor, ctx, ErrorTemplate.requires_numeric("=", cursor.pos))
    return ParseResult((align, fill), cursor)


def _check_sign(cursor: Cursor, ctx: ParseContext, arg: FieldArgument) -> None:
    specifier = chr(cursor.code)
    if not arg.type.is_numeric:
        report_error(cursor, ctx, ErrorTemplate.requires_numeric(specifier, cursor.pos))
    if arg.type.is_unsigned:
        report_error(cursor, ctx, ErrorTemplate.requires_signed(specifier, cursor.pos))


def _parse_precision(
    cursor: Cursor, ctx: ParseContext, arg: FieldArgument
) -> ParseResult[int]:
    """Parse the precision after '.': a literal or a nested ``{index}``."""
    if cursor.is_digit:
        result = _parse_bounded(cursor, ctx)
        precision, cursor = result.value, result.cursor
    elif cursor.code == _OPEN_BRACE:
        cursor = cursor.advance()
        ctx.open_braces += 1
        nested = parse_arg_index(cursor, ctx)
        precision_arg, cursor = nested.value, nested.cursor
        if not precision_arg.type.is_integer:
            report_error(cursor, ctx, ErrorTemplate.precision_not_integer(cursor.pos))
        precision = precision_arg.value
        if not isinstance(precision, int):
            report_error(cursor, ctx, ErrorTemplate.precision_not_integer(cursor.pos))
        if precision < 0:
            report_error(cursor, ctx, ErrorTemplate.negative_precision(cursor.pos))
        if precision > ctx.max_number:
            report_error(cursor, ctx, ErrorTemplate.number_too_big(cursor.pos))
        if cursor.code != _CLOSE_BRACE:
            raise FormatError(ErrorTemplate.unmatched_open_brace(ctx.field_start))
        cursor = cursor.advance()
        ctx.open_braces -= 1
    else:
        report_error(cursor, ctx, ErrorTemplate.missing_precision(cursor.pos))
    if not arg.type.is_floating:
        report_error(cursor, ctx, ErrorTemplate.precision_requires_float(cursor.pos))
    return ParseResult(precision, cursor)


def parse_field(
    cursor: Cursor, ctx: ParseContext
) -> ParseResult[tuple[FieldArgument, FormatSpec]]:
    """Parse one replacement field.

    Args:
        cursor: Positioned on the byte after the opening '{'
        ctx: Operation state (arguments, indexing mode)

    Returns:
        The referenced argument and its FormatSpec, with the cursor past '}'

    Raises:
        FormatError: On any violation of the mini-language or of an option's
            argument constraint
    """
    ctx.field_start = cursor.pos - 1
    ctx.open_braces = 1

    index_result = parse_arg_index(cursor, ctx)
    arg, cursor = index_result.value, index_result.cursor

    align = Alignment.DEFAULT
    fill = " "
    flags = FormatFlag.NONE
    width = 0
    precision = -1
    type_code = ""

    if cursor.code == _COLON:
        cursor = cursor.advance()

        fill_align = _parse_fill_align(cursor, ctx, arg)
        (align, fill), cursor = fill_align.value, fill_align.cursor

        sign_code = cursor.code
        if sign_code in (_PLUS, _MINUS, _SPACE):
            _check_sign(cursor, ctx, arg)
            if sign_code == _PLUS:
                flags |= FormatFlag.SIGN | FormatFlag.PLUS
            elif sign_code == _SPACE:
                flags |= FormatFlag.SIGN
            cursor = cursor.advance()

        if cursor.code == _HASH:
            if not arg.type.is_numeric:
                report_error(cursor, ctx, ErrorTemplate.requires_numeric("#", cursor.pos))
            flags |= FormatFlag.HASH
            cursor = cursor.advance()

        if cursor.is_digit:
            if cursor.code == _ZERO:
                if not arg.type.is_numeric:
                    report_error(cursor, ctx, ErrorTemplate.requires_numeric("0", cursor.pos))
                align = Alignment.NUMERIC
                fill = "0"
            # The zero flag is parsed again as part of the width
            width_result = _parse_bounded(cursor, ctx)
            width, cursor = width_result.value, width_result.cursor

        if cursor.code == _DOT:
            precision_result = _parse_precision(cursor.advance(), ctx, arg)
            precision, cursor = precision_result.value, precision_result.cursor

        if not cursor.is_eof and cursor.code != _CLOSE_BRACE:
            type_code = chr(cursor.code)
            cursor = cursor.advance()

    if cursor.code != _CLOSE_BRACE:
        raise FormatError(ErrorTemplate.unmatched_open_brace(ctx.field_start))

    spec = FormatSpec(
        align=align,
        flags=flags,
        width=width,
        precision=precision,
        type=type_code,
        fill=fill,
    )
    return ParseResult((arg, spec), cursor.advance())
