"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic record carried by every
Fluent error.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Reference errors (missing messages, terms, variables)
        2000-2999: Resolution errors (runtime evaluation failures)
        3000-3999: Syntax errors (junk reported by the parser)
        4000-4999: Configuration errors (bundle construction conflicts)
        5000-5999: Formatting errors (locale data problems)
    """

    # Reference errors (1000-1999)
    UNKNOWN_VARIABLE = 1001
    UNKNOWN_MESSAGE = 1002
    UNKNOWN_TERM = 1003
    UNKNOWN_ATTRIBUTE = 1004
    MESSAGE_NO_VALUE = 1005
    MESSAGE_NOT_FOUND = 1006

    # Resolution errors (2000-2999)
    UNKNOWN_FUNCTION = 2001
    CYCLIC_REFERENCE = 2002
    TOO_MANY_PLACEABLES = 2003
    MISSING_DEFAULT_VARIANT = 2004
    NO_VARIANTS = 2005
    FUNCTION_FAILED = 2006

    # Syntax errors (3000-3999)
    PARSE_JUNK = 3001

    # Configuration errors (4000-4999)
    DUPLICATE_ENTRY_ID = 4001
    DUPLICATE_FUNCTION_NAME = 4002

    # Formatting errors (5000-5999)
    FORMATTER_CONSTRUCTION_FAILURE = 5001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        function_name: Function where the error occurred (function errors)
        locale_code: Locale involved (formatting errors)
        severity: Error severity level
        resolution_path: Entry keys being resolved when the error occurred
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    help_url: str | None = None
    function_name: str | None = None
    locale_code: str | None = None
    severity: Literal["error", "warning"] = "error"
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Example output:
            error[UNKNOWN_MESSAGE]: Unknown message: 'hello'
              = path: welcome -> hello
              = help: Check that the message is defined in the loaded resources
              = note: see https://projectfluent.org/fluent/guide/messages.html

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.function_name:
            lines.append(f"  = function: {self.function_name}")
        if self.locale_code:
            lines.append(f"  = locale: {self.locale_code}")
        if self.resolution_path:
            lines.append(f"  = path: {' -> '.join(self.resolution_path)}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        if self.help_url:
            lines.append(f"  = note: see {self.help_url}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    # User-controlled identifiers end up in log lines; keep them on one line.
    return text.replace("\r", "\\r").replace("\n", "\\n")
