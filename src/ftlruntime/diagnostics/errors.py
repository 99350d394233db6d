"""Fluent exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information. The
resolver collects them instead of raising; bundle construction returns or
raises them.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class FluentError(Exception):
    """Base exception for all Fluent errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FluentError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def code(self) -> DiagnosticCode | None:
        """Diagnostic code, if the error carries a diagnostic."""
        return self.diagnostic.code if self.diagnostic is not None else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FluentError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class FluentSyntaxError(FluentError):
    """FTL syntax error reported for a Junk entry.

    The parser continues after syntax errors; the bundle skips junk.
    """


class FluentReferenceError(FluentError):
    """Unknown variable, message, term, attribute or function reference.

    Fallback: the reference as written, in braces.
    """


class FluentCyclicReferenceError(FluentReferenceError):
    """Cyclic reference detected (message references itself).

    Example:
        hello = { hello }  <- infinite loop

    Fallback: the reference as written.
    """


class FluentResolutionError(FluentError):
    """Runtime error during message resolution.

    Examples:
    - Resolution depth exceeded
    - Select expression without a default variant
    - Custom function raised
    """


class FluentDuplicateEntryError(FluentError):
    """A resource redefined a message or term already in the bundle.

    The newest definition is kept; the error is returned from add_resource.
    """

    def __init__(self, message: str | Diagnostic, *, entry_id: str) -> None:
        super().__init__(message)
        self.entry_id = entry_id


class FluentDuplicateFunctionError(FluentError):
    """A function name was registered twice on the same bundle."""

    def __init__(self, message: str | Diagnostic, *, function_name: str) -> None:
        super().__init__(message)
        self.function_name = function_name


class FluentFormatterError(FluentError):
    """Formatter construction failed (missing or unusable locale data).

    Attributes:
        locale_code: Locale whose data could not be loaded
    """

    def __init__(self, message: str | Diagnostic, *, locale_code: str = "") -> None:
        super().__init__(message)
        self.locale_code = locale_code
