"""Formatting runtime package.

Provides the argument model, the custom-type hook, the numeric writers,
the formatters and the builder protocol. Depends on the syntax package for
parsing replacement fields.

Python 3.13+.
"""

from .arguments import (
    Arg,
    Char,
    Double,
    Int32,
    Int64,
    LongDouble,
    Pointer,
    StringRef,
    TypedValue,
    UInt32,
    UInt64,
    make_arg,
)
from .builder import ArgInserter, TempFormatter, Write, c_str, format, print_format, str_
from .converters import (
    ArgWriter,
    Converter,
    ConverterRegistry,
    create_default_registry,
    default_converter,
    get_shared_registry,
)
from .formatter import BasicFormatter, Formatter, FormatterConfig

__all__ = [
    "Arg",
    "ArgInserter",
    "ArgWriter",
    "BasicFormatter",
    "Char",
    "Converter",
    "ConverterRegistry",
    "Double",
    "Formatter",
    "FormatterConfig",
    "Int32",
    "Int64",
    "LongDouble",
    "Pointer",
    "StringRef",
    "TempFormatter",
    "TypedValue",
    "UInt32",
    "UInt64",
    "Write",
    "c_str",
    "create_default_registry",
    "default_converter",
    "format",
    "get_shared_registry",
    "make_arg",
    "print_format",
    "str_",
]
