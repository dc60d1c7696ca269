"""Numeric conversion engine and field writers.

Writes integers (decimal, hex, octal), floating-point values, strings and
single bytes into a Buffer, placing width padding according to the field's
alignment.

Integers are generated in place: the padded field is reserved first, then
digits are written backwards from its last content byte. Finite floats are
rendered by the printf-style ``%`` operator; NaN and infinity are spelled
here so the output does not depend on the platform.

Python 3.13+. Zero external dependencies.
"""

import math
from typing import TYPE_CHECKING

from braceformat.core import HEX_DIGITS_LOWER, HEX_DIGITS_UPPER, Buffer
from braceformat.core import count_digits, format_decimal
from braceformat.diagnostics import ErrorTemplate, FormatError
from braceformat.enums import Alignment, FormatFlag
from braceformat.syntax import FormatSpec

if TYPE_CHECKING:
    from collections.abc import Buffer as BufferLike

__all__ = [
    "fill_padding",
    "format_char",
    "format_double",
    "format_int",
    "format_string",
    "prepare_filled_buffer",
]

_MINUS = 0x2D
_PLUS = 0x2B
_SPACE = 0x20
_ZERO = 0x30

_FLOAT_TYPES = frozenset("eEfFgG")
_UPPER_FLOAT_TYPES = frozenset("EFG")


def fill_padding(buffer: Buffer, start: int, total: int, content: int, fill: int) -> int:
    """Center ``content`` bytes in a ``total``-byte window at ``start``.

    The left side gets half the padding; the odd byte goes to the right.

    Returns:
        Index where the content starts
    """
    padding = total - content
    left = padding // 2
    buffer.fill(start, start + left, fill)
    content_start = start + left
    buffer.fill(content_start + content, start + total, fill)
    return content_start


def prepare_filled_buffer(buffer: Buffer, size: int, spec: FormatSpec, sign: int) -> int:
    """Reserve a padded numeric field and write its padding and sign.

    Args:
        buffer: Output buffer
        size: Content size in bytes, sign included
        spec: Field directive
        sign: Sign byte, 0 for none

    Returns:
        Index of the last content byte; the caller writes digits backwards
        from there
    """
    if spec.width <= size:
        start = buffer.grow(size)
        if sign:
            buffer[start] = sign
        return start + size - 1

    start = buffer.grow(spec.width)
    end = start + spec.width
    fill = spec.fill_byte
    match spec.align:
        case Alignment.LEFT:
            if sign:
                buffer[start] = sign
            buffer.fill(start + size, end, fill)
            return start + size - 1
        case Alignment.CENTER:
            content = fill_padding(buffer, start, spec.width, size, fill)
            if sign:
                buffer[content] = sign
            return content + size - 1
        case Alignment.NUMERIC:
            pos = start
            if sign:
                buffer[pos] = sign
                pos += 1
                size -= 1
            buffer.fill(pos, end - size, fill)
            return end - 1
        case _:
            if sign:
                buffer[end - size] = sign
            buffer.fill(start, end - size, fill)
            return end - 1


def _sign_byte(negative: bool, spec: FormatSpec) -> int:
    if negative:
        return _MINUS
    if spec.has(FormatFlag.SIGN):
        return _PLUS if spec.has(FormatFlag.PLUS) else _SPACE
    return 0


def format_int(buffer: Buffer, value: int, spec: FormatSpec) -> None:
    """Write an integer in decimal, hex or octal.

    Type codes: ``""``/``d`` decimal, ``x``/``X`` hex, ``o`` octal. The
    alternate form prefixes ``0x``/``0X`` or ``0``; the prefix counts
    toward the width.

    Raises:
        FormatError: For any other type code
    """
    sign = _sign_byte(value < 0, spec)
    abs_value = -value if value < 0 else value
    size = 1 if sign else 0

    match spec.type:
        case "" | "d":
            num_digits = count_digits(abs_value)
            last = prepare_filled_buffer(buffer, size + num_digits, spec, sign)
            format_decimal(buffer, last - num_digits + 1, abs_value, num_digits)
        case "x" | "X":
            digits = HEX_DIGITS_LOWER if spec.type == "x" else HEX_DIGITS_UPPER
            print_prefix = spec.has(FormatFlag.HASH)
            if print_prefix:
                size += 2
            n = abs_value
            while True:
                size += 1
                n >>= 4
                if n == 0:
                    break
            pos = prepare_filled_buffer(buffer, size, spec, sign)
            n = abs_value
            while True:
                buffer[pos] = digits[n & 0xF]
                pos -= 1
                n >>= 4
                if n == 0:
                    break
            if print_prefix:
                buffer[pos] = spec.type_code
                buffer[pos - 1] = _ZERO
        case "o":
            print_prefix = spec.has(FormatFlag.HASH)
            if print_prefix:
                size += 1
            n = abs_value
            while True:
                size += 1
                n >>= 3
                if n == 0:
                    break
            pos = prepare_filled_buffer(buffer, size, spec, sign)
            n = abs_value
            while True:
                buffer[pos] = _ZERO + (n & 7)
                pos -= 1
                n >>= 3
                if n == 0:
                    break
            if print_prefix:
                buffer[pos] = _ZERO
        case _:
            raise FormatError(ErrorTemplate.unknown_format_code(spec.type_code, "integer"))


def format_string(buffer: Buffer, data: "BufferLike", spec: FormatSpec) -> int:
    """Write bytes into a field padded by string rules (default left).

    Width counts bytes, so views with wider items are flattened first.

    Returns:
        Index where the content starts
    """
    data = memoryview(data).cast("B")
    size = len(data)
    if spec.width > size:
        start = buffer.grow(spec.width)
        fill = spec.fill_byte
        match spec.align:
            case Alignment.RIGHT:
                out = start + spec.width - size
                buffer.fill(start, out, fill)
            case Alignment.CENTER:
                out = fill_padding(buffer, start, spec.width, size, fill)
            case _:
                out = start
                buffer.fill(start + size, start + spec.width, fill)
    else:
        out = buffer.grow(size)
    buffer.write(out, data)
    return out


def format_char(buffer: Buffer, code: int, spec: FormatSpec) -> None:
    """Write one byte into a field padded by string rules.

    Raises:
        FormatError: If the type code is neither absent nor ``c``
    """
    if spec.type and spec.type != "c":
        raise FormatError(ErrorTemplate.unknown_format_code(spec.type_code, "char"))
    format_string(buffer, bytes((code,)), spec)


def format_double(buffer: Buffer, value: float, spec: FormatSpec) -> None:
    """Write a floating-point value.

    Type codes ``e E f F g G``; absent means ``g``. The sign comes from the
    sign bit so ``-0.0`` keeps its minus. NaN never shows its sign bit: a
    sign glyph appears only when a sign flag is set.

    Raises:
        FormatError: For any other type code
    """
    type_code = spec.type or "g"
    if type_code not in _FLOAT_TYPES:
        raise FormatError(ErrorTemplate.unknown_format_code(spec.type_code, "double"))
    upper = type_code in _UPPER_FLOAT_TYPES

    if math.isnan(value):
        sign = _sign_byte(False, spec)
    else:
        negative = math.copysign(1.0, value) < 0
        sign = _sign_byte(negative, spec)
        if negative:
            value = -value

    if not math.isfinite(value):
        text = b"NAN" if math.isnan(value) else b"INF"
        if not upper:
            text = text.lower()
        if sign:
            text = bytes((sign,)) + text
        format_string(buffer, text, spec)
        return

    width = spec.width
    if sign and width > 0:
        width -= 1

    # %[#][-][*][.*]<type>
    conversion = "%"
    if spec.has(FormatFlag.HASH):
        conversion += "#"
    args: list[int | float] = []
    if spec.align is not Alignment.CENTER:
        if spec.align is Alignment.LEFT:
            conversion += "-"
        if width:
            conversion += "*"
            args.append(width)
    if spec.precision >= 0:
        conversion += ".*"
        args.append(spec.precision)
    conversion += type_code
    args.append(value)
    text = (conversion % tuple(args)).encode("ascii")

    head = b""
    pending_sign = b""
    if sign:
        if spec.align not in (Alignment.RIGHT, Alignment.DEFAULT) or not text.startswith(b" "):
            head = bytes((sign,))
        else:
            # Right-aligned with padding: the sign moves next to the digits
            pending_sign = bytes((sign,))

    if spec.align is Alignment.CENTER and spec.width > len(head) + len(text):
        format_string(buffer, head + text, spec)
        return

    if spec.fill != " " or pending_sign:
        fill = spec.fill.encode("latin-1")
        stripped = text.lstrip(b" ")
        lead = len(text) - len(stripped)
        text = fill * lead + pending_sign + stripped
        if spec.align is Alignment.LEFT:
            body = text.rstrip(b" ")
            text = body + fill * (len(text) - len(body))
    buffer.append(head + text)
