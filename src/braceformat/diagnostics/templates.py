"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate", "is_printable_code"]


def is_printable_code(code: int) -> bool:
    """Check whether a type-code byte is printable ASCII (C isprint)."""
    return 0x20 <= code <= 0x7E


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def unmatched_open_brace(position: int | None = None) -> Diagnostic:
        """Replacement field opened with '{' and never closed."""
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_OPEN_BRACE,
            message="unmatched '{' in format",
            position=position,
            hint="Close the field with '}' or escape the brace as '{{'",
        )

    @staticmethod
    def unmatched_close_brace(position: int | None = None) -> Diagnostic:
        """Single '}' outside of a replacement field."""
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_CLOSE_BRACE,
            message="unmatched '}' in format",
            position=position,
            hint="Escape a literal closing brace as '}}'",
        )

    @staticmethod
    def invalid_argument_index(position: int | None = None) -> Diagnostic:
        """Field index is neither digits nor empty."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENT_INDEX,
            message="invalid argument index in format string",
            position=position,
            hint="Use a decimal index such as {0}, or leave it empty for automatic indexing",
        )

    @staticmethod
    def argument_index_out_of_range(position: int | None = None) -> Diagnostic:
        """Field index refers past the supplied arguments."""
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_INDEX_OUT_OF_RANGE,
            message="argument index is out of range in format",
            position=position,
            hint="Supply an argument for every replacement field",
        )

    @staticmethod
    def manual_to_automatic(position: int | None = None) -> Diagnostic:
        """Unindexed field after an indexed one."""
        return Diagnostic(
            code=DiagnosticCode.MANUAL_TO_AUTOMATIC_INDEXING,
            message="cannot switch from manual to automatic argument indexing",
            position=position,
            hint="Give every field an explicit index, or none of them",
        )

    @staticmethod
    def automatic_to_manual(position: int | None = None) -> Diagnostic:
        """Indexed field after an unindexed one."""
        return Diagnostic(
            code=DiagnosticCode.AUTOMATIC_TO_MANUAL_INDEXING,
            message="cannot switch from automatic to manual argument indexing",
            position=position,
            hint="Give every field an explicit index, or none of them",
        )

    @staticmethod
    def number_too_big(position: int | None = None) -> Diagnostic:
        """Width, precision or index literal overflows."""
        return Diagnostic(
            code=DiagnosticCode.NUMBER_TOO_BIG,
            message="number is too big in format",
            position=position,
        )

    @staticmethod
    def invalid_fill_character(position: int | None = None) -> Diagnostic:
        """'{' used as fill character."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_FILL_CHARACTER,
            message="invalid fill character '{'",
            position=position,
        )

    @staticmethod
    def requires_numeric(specifier: str, position: int | None = None) -> Diagnostic:
        """Numeric-only option applied to a non-numeric argument.

        Args:
            specifier: The offending option character ('+', '#', '0', '=', ...)
            position: Byte offset of the option
        """
        msg = f"format specifier '{specifier}' requires numeric argument"
        return Diagnostic(
            code=DiagnosticCode.REQUIRES_NUMERIC_ARGUMENT,
            message=msg,
            position=position,
        )

    @staticmethod
    def requires_signed(specifier: str, position: int | None = None) -> Diagnostic:
        """Sign option applied to an unsigned argument."""
        msg = f"format specifier '{specifier}' requires signed argument"
        return Diagnostic(
            code=DiagnosticCode.REQUIRES_SIGNED_ARGUMENT,
            message=msg,
            position=position,
        )

    @staticmethod
    def missing_precision(position: int | None = None) -> Diagnostic:
        """'.' not followed by digits or a nested index."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_PRECISION,
            message="missing precision in format",
            position=position,
        )

    @staticmethod
    def negative_precision(position: int | None = None) -> Diagnostic:
        """Nested precision argument is negative."""
        return Diagnostic(
            code=DiagnosticCode.NEGATIVE_PRECISION,
            message="negative precision in format",
            position=position,
        )

    @staticmethod
    def precision_not_integer(position: int | None = None) -> Diagnostic:
        """Nested precision argument is not an integer."""
        return Diagnostic(
            code=DiagnosticCode.PRECISION_NOT_INTEGER,
            message="precision is not integer",
            position=position,
        )

    @staticmethod
    def precision_requires_float(position: int | None = None) -> Diagnostic:
        """Precision given for a non floating-point argument."""
        return Diagnostic(
            code=DiagnosticCode.PRECISION_REQUIRES_FLOAT,
            message="precision specifier requires floating-point argument",
            position=position,
        )

    @staticmethod
    def unknown_format_code(code: int, type_name: str) -> Diagnostic:
        """Type code not valid for the argument category.

        Args:
            code: The type-code byte
            type_name: Category name used in the message ("integer", "double", ...)

        Returns:
            Diagnostic with the code printed verbatim, or as \\xNN when not printable
        """
        if is_printable_code(code):
            msg = f"unknown format code '{chr(code)}' for {type_name}"
        else:
            msg = f"unknown format code '\\x{code:02x}' for {type_name}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMAT_CODE,
            message=msg,
            argument_type=type_name,
        )

    @staticmethod
    def null_string_pointer() -> Diagnostic:
        """String argument without backing data."""
        return Diagnostic(
            code=DiagnosticCode.NULL_STRING_POINTER,
            message="string pointer is null",
            hint="Pass a str or bytes object, or give StringRef real data",
        )

    @staticmethod
    def transaction_failed(name: str, offered: int) -> Diagnostic:
        """Append transaction refused every offered size.

        Args:
            name: Class name of the transaction
            offered: Largest number of bytes offered
        """
        msg = f"append transaction {name} wrote nothing into {offered} bytes"
        return Diagnostic(
            code=DiagnosticCode.TRANSACTION_FAILED,
            message=msg,
        )
