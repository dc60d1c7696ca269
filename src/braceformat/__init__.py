"""braceformat - brace-style string formatting engine with typed arguments.

Formats a string of literal text and ``{...}`` replacement fields against a
list of typed arguments: positional or automatic indexing, fill/alignment,
sign, alternate form, width, precision and presentation types, rendered
into a growable byte buffer.

Public API:
    format - One-shot format operation (returns a builder)
    print_format - One-shot operation writing its result to a stream
    Formatter - Reusable formatter owning an output buffer
    BasicFormatter - Output buffer with direct, parser-free writes
    ConverterRegistry - Custom-type hook
    FormatSpec - Parsed field directive

Exceptions:
    FormatError - Every format-string or argument violation

Submodules:
    braceformat.core - Output buffer and digit tables
    braceformat.syntax - Cursor and replacement-field parser
    braceformat.runtime - Argument model, writers, formatters, builders
    braceformat.diagnostics - Diagnostic codes, templates and rendering
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .core import AppendTransaction, Buffer
from .diagnostics import Diagnostic, DiagnosticCode, FormatError
from .enums import Alignment, ArgType, BuilderState, FormatFlag
from .runtime import (
    ArgInserter,
    ArgWriter,
    BasicFormatter,
    Char,
    ConverterRegistry,
    Double,
    Formatter,
    FormatterConfig,
    Int32,
    Int64,
    LongDouble,
    Pointer,
    StringRef,
    TempFormatter,
    UInt32,
    UInt64,
    Write,
    c_str,
    format,
    get_shared_registry,
    print_format,
    str_,
)
from .syntax import FormatSpec

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("braceformat")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Alignment",
    "AppendTransaction",
    "ArgInserter",
    "ArgType",
    "ArgWriter",
    "BasicFormatter",
    "Buffer",
    "BuilderState",
    "Char",
    "ConverterRegistry",
    "Diagnostic",
    "DiagnosticCode",
    "Double",
    "FormatError",
    "FormatFlag",
    "FormatSpec",
    "Formatter",
    "FormatterConfig",
    "Int32",
    "Int64",
    "LongDouble",
    "Pointer",
    "StringRef",
    "TempFormatter",
    "UInt32",
    "UInt64",
    "Write",
    "__version__",
    "c_str",
    "format",
    "get_shared_registry",
    "print_format",
    "str_",
]
