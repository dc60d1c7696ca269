"""Argument model.

Every value passed to a format operation becomes an ``Arg``: a category tag
plus the value. Numeric and char values are stored inline; strings and
custom objects are stored by reference and read only when the operation
completes.

Category resolution for plain Python values:
    - bool                         -> CUSTOM (renders True/False)
    - int                          -> INT / LONG / ULONG by range, else CUSTOM
    - float                        -> DOUBLE
    - str, bytes, bytearray, memoryview -> STRING
    - ctypes scalars               -> their C category
    - anything else                -> CUSTOM, through the converter registry

The typed wrappers (Int32, UInt64, Char, Pointer, StringRef, ...) pin a
category explicitly.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from braceformat.constants import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    POINTER_MAX,
    UINT32_MAX,
    UINT64_MAX,
)
from braceformat.diagnostics import ErrorTemplate, FormatError
from braceformat.enums import ArgType

if TYPE_CHECKING:
    from .converters import Converter, ConverterRegistry

__all__ = [
    "Arg",
    "Char",
    "Double",
    "Int32",
    "Int64",
    "LongDouble",
    "Pointer",
    "StringRef",
    "TypedValue",
    "UInt32",
    "UInt64",
    "make_arg",
]

_NUL = b"\x00"


@dataclass(frozen=True, slots=True)
class Arg:
    """One format argument.

    Attributes:
        type: Argument category
        value: Inline value (int, float, byte code) or the caller's object
        size: STRING only. None uses the whole object, 0 reads up to the
            first NUL byte, n > 0 reads the first n bytes
        converter: CUSTOM only. Rendering function bound to the value's type
    """

    type: ArgType
    value: Any
    size: int | None = None
    converter: Converter | None = None

    def string_data(self) -> bytes | memoryview:
        """Return the bytes of a STRING argument.

        ``str`` is encoded as UTF-8 (lone surrogates pass through
        ``surrogateescape``); buffer objects are viewed, not copied.

        Raises:
            FormatError: If the string has no backing data
        """
        data = self.value
        if isinstance(data, ctypes.c_char_p):
            data = data.value
        if data is None:
            raise FormatError(ErrorTemplate.null_string_pointer())
        if isinstance(data, str):
            raw: bytes | memoryview = data.encode("utf-8", "surrogateescape")
        else:
            raw = memoryview(data).cast("B")
        if self.size is None:
            return raw
        if self.size == 0:
            end = bytes(raw).find(_NUL) if isinstance(raw, memoryview) else raw.find(_NUL)
            return raw if end < 0 else raw[:end]
        return raw[: self.size]


# ============================================================================
# TYPED WRAPPERS
# ============================================================================


class TypedValue:
    """Base class of the wrappers that fix an argument's category."""

    __slots__ = ()

    def to_arg(self) -> Arg:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class _BoundedInteger(TypedValue):
    value: int

    arg_type: ClassVar[ArgType]
    min_value: ClassVar[int]
    max_value: ClassVar[int]

    def __post_init__(self) -> None:
        name = type(self).__name__
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"{name} requires an int, got {type(self.value).__name__}"
            raise TypeError(msg)
        if not self.min_value <= self.value <= self.max_value:
            msg = f"{name} value {self.value} out of range [{self.min_value}, {self.max_value}]"
            raise OverflowError(msg)

    def to_arg(self) -> Arg:
        return Arg(self.arg_type, self.value)


@dataclass(frozen=True, slots=True)
class Int32(_BoundedInteger):
    """Signed 32-bit integer argument."""

    arg_type: ClassVar[ArgType] = ArgType.INT
    min_value: ClassVar[int] = INT32_MIN
    max_value: ClassVar[int] = INT32_MAX


@dataclass(frozen=True, slots=True)
class UInt32(_BoundedInteger):
    """Unsigned 32-bit integer argument. Sign options are rejected for it."""

    arg_type: ClassVar[ArgType] = ArgType.UINT
    min_value: ClassVar[int] = 0
    max_value: ClassVar[int] = UINT32_MAX


@dataclass(frozen=True, slots=True)
class Int64(_BoundedInteger):
    """Signed 64-bit integer argument."""

    arg_type: ClassVar[ArgType] = ArgType.LONG
    min_value: ClassVar[int] = INT64_MIN
    max_value: ClassVar[int] = INT64_MAX


@dataclass(frozen=True, slots=True)
class UInt64(_BoundedInteger):
    """Unsigned 64-bit integer argument."""

    arg_type: ClassVar[ArgType] = ArgType.ULONG
    min_value: ClassVar[int] = 0
    max_value: ClassVar[int] = UINT64_MAX


@dataclass(frozen=True, slots=True)
class Double(TypedValue):
    """Double-precision argument."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def to_arg(self) -> Arg:
        return Arg(ArgType.DOUBLE, self.value)


@dataclass(frozen=True, slots=True)
class LongDouble(TypedValue):
    """Extended-precision argument, held as a Python float."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def to_arg(self) -> Arg:
        return Arg(ArgType.LONG_DOUBLE, self.value)


@dataclass(frozen=True, slots=True)
class Char(TypedValue):
    """Single-byte character argument.

    Accepts a one-byte ``bytes``, a one-character ASCII ``str`` or an int
    in 0..255. Wider characters are rejected.

    Example:
        >>> Char("A").code
        65
        >>> Char(b"\\n").code
        10
    """

    value: bytes | str | int

    def __post_init__(self) -> None:
        _char_code(self.value)

    @property
    def code(self) -> int:
        """Byte value of the character."""
        return _char_code(self.value)

    def to_arg(self) -> Arg:
        return Arg(ArgType.CHAR, self.code)


def _char_code(value: object) -> int:
    if isinstance(value, (bytes, bytearray)) and len(value) == 1:
        return value[0]
    if isinstance(value, str) and len(value) == 1:
        if ord(value) > 0x7F:
            msg = f"wide character {value!r} is not supported, only single bytes"
            raise TypeError(msg)
        return ord(value)
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF:
        return value
    msg = f"Char requires a single byte, got {value!r}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Pointer(TypedValue):
    """Untyped address argument, rendered as ``0x`` hex.

    None is the null pointer.
    """

    address: int | None

    def __post_init__(self) -> None:
        address = self.address
        if address is None:
            return
        if isinstance(address, bool) or not isinstance(address, int):
            msg = f"Pointer requires an int address, got {type(address).__name__}"
            raise TypeError(msg)
        if not 0 <= address <= POINTER_MAX:
            msg = f"Pointer address {address} out of range"
            raise OverflowError(msg)

    def to_arg(self) -> Arg:
        return Arg(ArgType.POINTER, self.address or 0)


@dataclass(frozen=True, slots=True)
class StringRef(TypedValue):
    """Reference to external character data with an explicit length.

    ``size`` 0 means the data is NUL-terminated: it is read up to the first
    NUL byte (or its end). ``data`` None is a null pointer and fails when
    formatted.

    Example:
        >>> StringRef(b"abc\\x00def").to_arg().string_data()
        b'abc'
        >>> bytes(StringRef(b"abcdef", 2).to_arg().string_data())
        b'ab'
    """

    data: str | bytes | bytearray | memoryview | None
    size: int = 0

    def __post_init__(self) -> None:
        if self.size < 0:
            msg = f"StringRef size cannot be negative, got {self.size}"
            raise ValueError(msg)
        if self.data is None:
            if self.size:
                msg = "StringRef with no data must have size 0"
                raise ValueError(msg)
            return
        if isinstance(self.data, str):
            available = len(self.data.encode("utf-8", "surrogateescape"))
        else:
            available = memoryview(self.data).nbytes
        if self.size > available:
            msg = f"StringRef size {self.size} exceeds the {available} bytes available"
            raise ValueError(msg)

    def to_arg(self) -> Arg:
        return Arg(ArgType.STRING, self.data, self.size)


# ============================================================================
# CTYPES CATEGORIES
# ============================================================================

# Several names alias each other (c_int32 is c_int, c_size_t is c_ulong, ...).
# c_longdouble is listed first: where it aliases c_double the later entry wins.
_CTYPES_CATEGORIES: dict[type, ArgType] = {
    ctypes.c_longdouble: ArgType.LONG_DOUBLE,
    ctypes.c_byte: ArgType.INT,
    ctypes.c_short: ArgType.INT,
    ctypes.c_int: ArgType.INT,
    ctypes.c_int8: ArgType.INT,
    ctypes.c_int16: ArgType.INT,
    ctypes.c_int32: ArgType.INT,
    ctypes.c_ubyte: ArgType.UINT,
    ctypes.c_ushort: ArgType.UINT,
    ctypes.c_uint: ArgType.UINT,
    ctypes.c_uint8: ArgType.UINT,
    ctypes.c_uint16: ArgType.UINT,
    ctypes.c_uint32: ArgType.UINT,
    ctypes.c_long: ArgType.LONG,
    ctypes.c_longlong: ArgType.LONG,
    ctypes.c_int64: ArgType.LONG,
    ctypes.c_ulong: ArgType.ULONG,
    ctypes.c_ulonglong: ArgType.ULONG,
    ctypes.c_uint64: ArgType.ULONG,
    ctypes.c_float: ArgType.DOUBLE,
    ctypes.c_double: ArgType.DOUBLE,
    ctypes.c_char: ArgType.CHAR,
    ctypes.c_char_p: ArgType.STRING,
    ctypes.c_void_p: ArgType.POINTER,
}

_REJECTED_CTYPES: tuple[type, ...] = (
    ctypes._Pointer,  # noqa: SLF001 - base of every ctypes.POINTER(T)
    ctypes.Array,
    ctypes.c_wchar,
    ctypes.c_wchar_p,
)


def _ctypes_arg(value: Any) -> Arg | None:
    """Map a ctypes instance to its category, None if it is not one."""
    if isinstance(value, _REJECTED_CTYPES):
        if isinstance(value, (ctypes.c_wchar, ctypes.c_wchar_p)):
            msg = f"wide character argument {type(value).__name__} is not supported"
        else:
            msg = (
                f"typed pointer argument {type(value).__name__} is not supported; "
                "pass ctypes.c_void_p to format an address"
            )
        raise TypeError(msg)
    for cls in type(value).__mro__:
        arg_type = _CTYPES_CATEGORIES.get(cls)
        if arg_type is None:
            continue
        match arg_type:
            case ArgType.STRING:
                return Arg(ArgType.STRING, value, 0)
            case ArgType.POINTER:
                return Arg(ArgType.POINTER, value.value or 0)
            case ArgType.CHAR:
                return Arg(ArgType.CHAR, value.value[0])
            case _:
                return Arg(arg_type, value.value)
    return None


def make_arg(value: Any, registry: ConverterRegistry) -> Arg:
    """Wrap ``value`` into an Arg, resolving its category.

    Args:
        value: Any Python value
        registry: Converters for values that end up CUSTOM

    Returns:
        The argument, referencing (not copying) strings and objects

    Raises:
        TypeError: For typed ctypes pointers, ctypes arrays and wide characters
    """
    if isinstance(value, TypedValue):
        return value.to_arg()
    # bool is an int subclass; it must not become a number here
    if isinstance(value, bool):
        return Arg(ArgType.CUSTOM, value, converter=registry.resolve(bool))
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return Arg(ArgType.INT, int(value))
        if INT64_MIN <= value <= INT64_MAX:
            return Arg(ArgType.LONG, int(value))
        if 0 <= value <= UINT64_MAX:
            return Arg(ArgType.ULONG, int(value))
        return Arg(ArgType.CUSTOM, value, converter=registry.resolve(type(value)))
    if isinstance(value, float):
        return Arg(ArgType.DOUBLE, float(value))
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return Arg(ArgType.STRING, value)
    if isinstance(value, ctypes._SimpleCData | ctypes._Pointer | ctypes.Array):  # noqa: SLF001
        arg = _ctypes_arg(value)
        if arg is not None:
            return arg
    return Arg(ArgType.CUSTOM, value, converter=registry.resolve(type(value)))
