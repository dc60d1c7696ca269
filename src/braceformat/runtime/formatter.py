"""Formatters: buffer owners and the format-string driver.

BasicFormatter owns an output Buffer and offers direct writes that bypass
the format-string parser. Formatter adds format operations: a format string
plus an argument list, rendered in one pass when the operation completes.

Operations are driven by builders (see ``braceformat.runtime.builder``):

    >>> fmt = Formatter()
    >>> fmt("{0}{1}{0}").append("abra").append("cad").finish()
    'abracadabra'

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from braceformat.constants import INLINE_BUFFER_SIZE, MAX_FORMAT_NUMBER, UINT32_MAX
from braceformat.core import Buffer, count_digits, format_decimal
from braceformat.diagnostics import ErrorTemplate, FormatError
from braceformat.enums import ArgType, FormatFlag
from braceformat.syntax import Cursor, FormatSpec, ParseContext, parse_field

from .arguments import Arg, Char, make_arg
from .converters import ArgWriter, ConverterRegistry, get_shared_registry
from .numeric import format_char, format_double, format_int, format_string

if TYPE_CHECKING:
    from braceformat.core import AppendTransaction

    from .builder import ArgInserter

__all__ = ["BasicFormatter", "Formatter", "FormatterConfig"]

logger = logging.getLogger(__name__)

# Format strings in log records are cut to this many characters
_LOG_TRUNCATE: int = 50

_CLOSE_BRACE = 0x7D
_MINUS = 0x2D


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Immutable configuration for a Formatter.

    Attributes:
        inline_buffer_size: Bytes preallocated by the output buffer (default: 500)
        max_format_number: Largest width or precision literal accepted
            (default: 2**31 - 1)

    Example:
        >>> config = FormatterConfig(inline_buffer_size=64)
        >>> Formatter(config).buffer.capacity
        64
    """

    inline_buffer_size: int = INLINE_BUFFER_SIZE
    max_format_number: int = MAX_FORMAT_NUMBER

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If inline_buffer_size is not positive, or
                max_format_number is outside 1..2**32 - 1
        """
        if self.inline_buffer_size <= 0:
            msg = f"inline_buffer_size must be positive, got {self.inline_buffer_size}"
            raise ValueError(msg)
        if not 0 < self.max_format_number <= UINT32_MAX:
            msg = f"max_format_number must be in 1..{UINT32_MAX}, got {self.max_format_number}"
            raise ValueError(msg)


class BasicFormatter:
    """Output buffer with direct, parser-free writes.

    Example:
        >>> out = BasicFormatter()
        >>> out.write_str("answer=")
        >>> out.write_int(-42)
        >>> out.text()
        'answer=-42'
    """

    __slots__ = ("_buffer", "_config")

    def __init__(self, config: FormatterConfig | None = None) -> None:
        self._config = config if config is not None else FormatterConfig()
        self._buffer = Buffer(self._config.inline_buffer_size)

    @property
    def config(self) -> FormatterConfig:
        """Configuration this formatter was built with."""
        return self._config

    @property
    def buffer(self) -> Buffer:
        """The output buffer."""
        return self._buffer

    @property
    def size(self) -> int:
        """Number of bytes written."""
        return self._buffer.size

    def __len__(self) -> int:
        return self._buffer.size

    def data(self) -> bytes:
        """Output without a terminating NUL."""
        return self._buffer.data()

    def c_str(self) -> bytes:
        """Output with a terminating NUL."""
        return self._buffer.c_str()

    def text(self) -> str:
        """Output decoded as UTF-8."""
        return self._buffer.text()

    def __str__(self) -> str:
        return self._buffer.text()

    def clear(self) -> None:
        """Discard the output, keeping the allocated storage."""
        self._buffer.clear()

    def write_int(self, value: int) -> None:
        """Append ``value`` in decimal with no padding."""
        buffer = self._buffer
        abs_value = -value if value < 0 else value
        num_digits = count_digits(abs_value)
        if value < 0:
            start = buffer.grow(num_digits + 1)
            buffer[start] = _MINUS
            start += 1
        else:
            start = buffer.grow(num_digits)
        format_decimal(buffer, start, abs_value, num_digits)

    def write_char(self, char: bytes | str | int) -> None:
        """Append one byte (see Char for accepted values)."""
        self._buffer.push(Char(char).code)

    def write_str(self, text: str | bytes) -> None:
        """Append text verbatim; ``str`` is encoded as UTF-8."""
        if isinstance(text, str):
            text = text.encode("utf-8", "surrogateescape")
        self._buffer.append(text)

    def write(self, value: int, spec: FormatSpec) -> None:
        """Append an integer formatted by an explicit FormatSpec.

        Raises:
            FormatError: If spec.type is not an integer presentation type
        """
        format_int(self._buffer, value, spec)

    def append(self, txn: AppendTransaction) -> int:
        """Let a direct appender write into the buffer.

        Returns:
            Number of bytes appended
        """
        return self._buffer.append_transaction(txn)


class Formatter(BasicFormatter):
    """Runs format operations into its buffer.

    A formatter holds at most one operation at a time. Calling it with a
    format string starts a new operation: the argument list and the buffer
    are cleared, and any builder of the previous, unfinished operation is
    superseded.

    Not thread-safe. Use one instance per thread.

    Example:
        >>> fmt = Formatter()
        >>> b = fmt("{:>6.2f}|{:<4}|")
        >>> str(b << 3.14159 << "ab")
        '  3.14|ab  |'
    """

    __slots__ = ("_args", "_converters", "_format", "_operation", "_writer")

    def __init__(
        self,
        config: FormatterConfig | None = None,
        *,
        converters: ConverterRegistry | None = None,
    ) -> None:
        """Initialize Formatter.

        Args:
            config: Buffer and parser limits
            converters: Registry for custom types. Default: a private copy
                of the shared registry
        """
        super().__init__(config)
        self._converters = (
            converters if converters is not None else get_shared_registry().copy()
        )
        self._args: list[Arg] = []
        self._format: bytes | None = None
        self._operation = 0
        self._writer = ArgWriter(self._buffer)
        logger.debug(
            "Formatter created (inline_buffer_size=%d, converters=%d)",
            self._config.inline_buffer_size,
            len(self._converters),
        )

    @property
    def converters(self) -> ConverterRegistry:
        """Custom-type registry used by this formatter."""
        return self._converters

    @property
    def args(self) -> tuple[Arg, ...]:
        """Arguments of the current operation."""
        return tuple(self._args)

    def __call__(self, format_string: str | bytes) -> ArgInserter:
        """Start a format operation.

        Args:
            format_string: Format string; ``str`` is encoded as UTF-8

        Returns:
            Builder accepting the arguments
        """
        from .builder import ArgInserter  # noqa: PLC0415 - circular

        return ArgInserter(self, self.start(format_string))

    # ------------------------------------------------------------------
    # Operation protocol, driven by builders
    # ------------------------------------------------------------------

    def start(self, format_string: str | bytes) -> int:
        """Begin a new operation and return its id."""
        if isinstance(format_string, str):
            format_string = format_string.encode("utf-8", "surrogateescape")
        self._format = bytes(format_string)
        self._args.clear()
        self._buffer.clear()
        self._operation += 1
        logger.debug(
            "Format operation %d started: %r",
            self._operation,
            self._format[:_LOG_TRUNCATE],
        )
        return self._operation

    def _check_operation(self, operation: int) -> bytes:
        if operation != self._operation or self._format is None:
            msg = f"format operation {operation} is no longer active"
            raise RuntimeError(msg)
        return self._format

    def push_arg(self, operation: int, value: Any) -> None:
        """Wrap ``value`` and append it to the operation's argument list."""
        self._check_operation(operation)
        self._args.append(make_arg(value, self._converters))

    def run(self, operation: int) -> None:
        """Render the operation into the buffer.

        On error the buffer is restored to its size before the operation,
        so no partial output remains.

        Raises:
            FormatError: If the format string or an argument is invalid
            RuntimeError: If the operation was superseded
        """
        source = self._check_operation(operation)
        self._format = None
        mark = self._buffer.size
        try:
            self._render(source)
        except Exception as e:
            self._buffer.truncate(mark)
            logger.debug("Format operation %d failed: %s", operation, e)
            raise
        logger.debug(
            "Format operation %d completed: %d args, %d bytes",
            operation,
            len(self._args),
            self._buffer.size - mark,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, source: bytes) -> None:
        """Scan ``source`` once, copying literals and rendering fields."""
        buffer = self._buffer
        ctx = ParseContext(args=self._args, max_number=self._config.max_format_number)
        cursor = Cursor(source, 0)
        start = 0
        while True:
            cursor = cursor.find_brace()
            if cursor.is_eof:
                break
            brace = cursor.code
            after = cursor.advance()
            if after.code == brace:
                # '{{' or '}}': keep the first brace, skip the second
                buffer.append(source[start : after.pos])
                cursor = after.advance()
                start = cursor.pos
                continue
            if brace == _CLOSE_BRACE:
                raise FormatError(ErrorTemplate.unmatched_close_brace(cursor.pos))
            buffer.append(source[start : cursor.pos])
            result = parse_field(after, ctx)
            (arg, spec), cursor = result.value, result.cursor
            start = cursor.pos
            self._format_arg(arg, spec)
        buffer.append(source[start:])

    def _format_arg(self, arg: Arg, spec: FormatSpec) -> None:
        buffer = self._buffer
        match arg.type:
            case ArgType.INT | ArgType.UINT | ArgType.LONG | ArgType.ULONG:
                format_int(buffer, arg.value, spec)
            case ArgType.DOUBLE | ArgType.LONG_DOUBLE:
                format_double(buffer, arg.value, spec)
            case ArgType.CHAR:
                format_char(buffer, arg.value, spec)
            case ArgType.STRING:
                if spec.type and spec.type != "s":
                    raise FormatError(ErrorTemplate.unknown_format_code(spec.type_code, "string"))
                format_string(buffer, arg.string_data(), spec)
            case ArgType.POINTER:
                if spec.type and spec.type != "p":
                    raise FormatError(ErrorTemplate.unknown_format_code(spec.type_code, "pointer"))
                pointer_spec = dataclasses.replace(spec, flags=FormatFlag.HASH, type="x")
                format_int(buffer, arg.value, pointer_spec)
            case ArgType.CUSTOM:
                if spec.type:
                    raise FormatError(ErrorTemplate.unknown_format_code(spec.type_code, "object"))
                converter = arg.converter or self._converters.resolve(type(arg.value))
                converter(self._writer, arg.value, spec)
