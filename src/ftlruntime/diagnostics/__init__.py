"""Diagnostic system for Fluent errors.

Provides structured error diagnostics with codes, hints, and help URLs.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    FluentCyclicReferenceError,
    FluentDuplicateEntryError,
    FluentDuplicateFunctionError,
    FluentError,
    FluentFormatterError,
    FluentReferenceError,
    FluentResolutionError,
    FluentSyntaxError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FluentCyclicReferenceError",
    "FluentDuplicateEntryError",
    "FluentDuplicateFunctionError",
    "FluentError",
    "FluentFormatterError",
    "FluentReferenceError",
    "FluentResolutionError",
    "FluentSyntaxError",
]
