"""Builder protocol for format operations.

An operation moves through ``ACCUMULATING -> COMPLETED`` exactly once:
arguments are appended one at a time, then ``finish()`` renders the format
string in a single pass. String and object arguments are referenced, not
copied, so they are read at completion time.

Completion is explicit. A builder garbage-collected while still
accumulating is a programmer error: it emits ResourceWarning (and a logged
warning) and formats nothing. The context-manager form completes on normal
exit:

    >>> with format("{} + {} = {}") as b:
    ...     _ = b << 1 << 2 << 3
    >>> b.finish()
    '1 + 2 = 3'

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import sys
import warnings
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Self, TextIO, TypeAlias

from braceformat.enums import BuilderState
from braceformat.runtime.formatter import BasicFormatter, Formatter

if TYPE_CHECKING:
    from types import TracebackType

    from braceformat.runtime.converters import ConverterRegistry
    from braceformat.runtime.formatter import FormatterConfig

__all__ = [
    "Action",
    "ArgInserter",
    "TempFormatter",
    "Write",
    "c_str",
    "format",
    "print_format",
    "str_",
]

logger = logging.getLogger(__name__)

Action: TypeAlias = Callable[[BasicFormatter], None]


class ArgInserter:
    """Accumulates the arguments of one format operation.

    Returned by ``Formatter.__call__``. ``append`` (or ``<<``) records an
    argument and returns the builder for chaining. ``finish`` completes the
    operation once; later calls return the same text.

    Example:
        >>> fmt = Formatter()
        >>> b = fmt("{0:d}; {0:#x}; {0:#o}") << 42
        >>> b.finish()
        '42; 0x2a; 052'
        >>> b.finish()
        '42; 0x2a; 052'
    """

    __slots__ = ("_error", "_formatter", "_operation", "_result", "_state")

    def __init__(self, formatter: Formatter, operation: int) -> None:
        self._formatter = formatter
        self._operation = operation
        self._state = BuilderState.ACCUMULATING
        self._result: bytes | None = None
        self._error: Exception | None = None

    @property
    def state(self) -> BuilderState:
        """Current lifecycle state."""
        return self._state

    @property
    def formatter(self) -> Formatter:
        """Formatter running this operation."""
        return self._formatter

    def append(self, value: Any) -> Self:
        """Record ``value`` as the next argument.

        Raises:
            RuntimeError: If the operation is no longer accumulating
            TypeError: For values that cannot be formatted (typed pointers,
                wide characters)
        """
        if self._state is not BuilderState.ACCUMULATING:
            msg = f"cannot append to a {self._state} format operation"
            raise RuntimeError(msg)
        self._formatter.push_arg(self._operation, value)
        return self

    def __lshift__(self, value: Any) -> Self:
        return self.append(value)

    def _complete(self) -> bytes:
        match self._state:
            case BuilderState.COMPLETED:
                assert self._result is not None  # noqa: S101 - set on completion
                return self._result
            case BuilderState.FAILED:
                assert self._error is not None  # noqa: S101 - set on failure
                raise self._error
            case BuilderState.DISCARDED:
                msg = "cannot finish a discarded format operation"
                raise RuntimeError(msg)
        try:
            self._formatter.run(self._operation)
        except Exception as e:
            self._state = BuilderState.FAILED
            self._error = e
            raise
        self._result = self._formatter.data()
        self._state = BuilderState.COMPLETED
        self._on_complete()
        return self._result

    def _on_complete(self) -> None:
        """Hook run once after a successful completion."""

    def finish(self) -> str:
        """Complete the operation and return the output as text.

        Idempotent: a completed operation returns its result again without
        reformatting; a failed one raises its error again.

        Raises:
            FormatError: If the format string or an argument is invalid
        """
        return self._complete().decode("utf-8", "surrogateescape")

    def data(self) -> bytes:
        """Complete the operation and return the output bytes."""
        return self._complete()

    def c_str(self) -> bytes:
        """Complete the operation and return the output with a terminating NUL."""
        return self._complete() + b"\x00"

    def __str__(self) -> str:
        return self.finish()

    def discard(self) -> None:
        """Abandon the operation without formatting anything."""
        if self._state is BuilderState.ACCUMULATING:
            self._state = BuilderState.DISCARDED
            logger.debug("Format operation %d discarded", self._operation)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Complete on normal exit; discard when the block raised."""
        if exc_type is None:
            self._complete()
        else:
            self.discard()

    def __del__(self) -> None:
        # getattr: __init__ may not have run
        if getattr(self, "_state", None) is BuilderState.ACCUMULATING:
            logger.warning(
                "Format operation %d dropped without finish(); nothing was formatted",
                self._operation,
            )
            warnings.warn(
                "format operation was never finished; call finish() or use a with block",
                ResourceWarning,
                stacklevel=2,
                source=self,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(operation={self._operation}, state={self._state})"


class TempFormatter(ArgInserter):
    """Builder owning a private Formatter, with an optional completion action.

    The action runs once, after a successful completion, with the formatter
    holding the output.

    Example:
        >>> TempFormatter("{:^7}", action=None).append("mid").finish()
        '  mid  '
    """

    __slots__ = ("_action",)

    def __init__(
        self,
        format_string: str | bytes,
        action: Action | None = None,
        *,
        config: FormatterConfig | None = None,
        converters: ConverterRegistry | None = None,
    ) -> None:
        formatter = Formatter(config, converters=converters)
        super().__init__(formatter, formatter.start(format_string))
        self._action = action

    def _on_complete(self) -> None:
        if self._action is not None:
            self._action(self._formatter)


class Write:
    """Completion action writing the output to a text stream.

    Args:
        file: Target stream, ``sys.stdout`` (looked up at write time) if None
    """

    __slots__ = ("_file",)

    def __init__(self, file: TextIO | None = None) -> None:
        self._file = file

    def __call__(self, formatter: BasicFormatter) -> None:
        out = self._file if self._file is not None else sys.stdout
        out.write(formatter.text())


def _append_all(builder: TempFormatter, args: tuple[Any, ...]) -> TempFormatter:
    try:
        for arg in args:
            builder.append(arg)
    except Exception:
        builder.discard()
        raise
    return builder


def format(  # noqa: A001 - public name of the one-shot API
    format_string: str | bytes,
    *args: Any,
    config: FormatterConfig | None = None,
    converters: ConverterRegistry | None = None,
) -> TempFormatter:
    """Start a one-shot format operation.

    Positional ``args`` are appended immediately; more can follow with
    ``append`` or ``<<``.

    Example:
        >>> format("{2}, {1}, {0}", "a", "b", "c").finish()
        'c, b, a'
    """
    builder = TempFormatter(format_string, config=config, converters=converters)
    return _append_all(builder, args)


def print_format(
    format_string: str | bytes,
    *args: Any,
    file: TextIO | None = None,
) -> TempFormatter:
    """Start a one-shot operation that writes its output on completion.

    Example:
        >>> print_format("{}-{}\\n", 1, 2).finish()
        1-2
        '1-2\\n'
    """
    return _append_all(TempFormatter(format_string, Write(file)), args)


def str_(builder: ArgInserter) -> str:
    """Complete ``builder`` and return its text."""
    return builder.finish()


def c_str(builder: ArgInserter) -> bytes:
    """Complete ``builder`` and return its output with a terminating NUL."""
    return builder.c_str()
