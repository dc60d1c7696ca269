"""Format error type with structured diagnostics.

Every violation of the mini-language or of an argument constraint is
reported as a FormatError. There is no hierarchy to catch selectively:
the error aborts the whole format operation and callers decide what to do.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["FormatError"]


class FormatError(ValueError):
    """Raised when a format operation cannot produce valid output.

    Subclasses ValueError, matching what ``str.format`` raises for bad
    format strings.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FormatError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def message(self) -> str:
        """Plain error message."""
        return str(self.args[0]) if self.args else ""

    @property
    def code(self) -> DiagnosticCode | None:
        """Diagnostic code, if the error was built from a template."""
        return self.diagnostic.code if self.diagnostic is not None else None
