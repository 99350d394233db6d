"""ftlruntime - Fluent (FTL) localization runtime.

Formats messages from Fluent resources: resolves references, selects plural
and select variants, formats numbers and dates with CLDR data, and falls
back across locales. Parsing is delegated to fluent.syntax.

Public API:
    FluentBundle - Messages and formatting for one primary locale
    FluentResource - Parsed FTL source
    FluentLocalization - Multi-locale orchestration with fallback chains
    PathResourceLoader - Filesystem resource loader
    negotiate_languages - Locale negotiation
    FluentArgs, FluentNumber, FluentDateTime - Runtime values

Exceptions:
    FluentError - Base exception class
    FluentSyntaxError - Junk in a resource
    FluentReferenceError - Unknown message/term/variable/function references
    FluentResolutionError - Runtime resolution errors
    FluentFormatterError - Locale data could not be loaded

Submodules:
    ftlruntime.runtime - Values, formatters, resolver and bundle
    ftlruntime.negotiation - Locale negotiation
    ftlruntime.localization - Resource loaders and fallback orchestration
    ftlruntime.diagnostics - Error types and diagnostic codes
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    FluentCyclicReferenceError,
    FluentDuplicateEntryError,
    FluentDuplicateFunctionError,
    FluentError,
    FluentFormatterError,
    FluentReferenceError,
    FluentResolutionError,
    FluentSyntaxError,
)
from .localization import FluentLocalization, FormattedMessage, PathResourceLoader, ResourceLoader
from .negotiation import NegotiationStrategy, negotiate_languages, parse_accepted_languages
from .runtime import (
    FluentArgs,
    FluentBundle,
    FluentDateTime,
    FluentErrorValue,
    FluentNone,
    FluentNumber,
    FluentResource,
    FluentValue,
)

# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("ftlruntime")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "FluentArgs",
    "FluentBundle",
    "FluentCyclicReferenceError",
    "FluentDateTime",
    "FluentDuplicateEntryError",
    "FluentDuplicateFunctionError",
    "FluentError",
    "FluentErrorValue",
    "FluentFormatterError",
    "FluentLocalization",
    "FluentNone",
    "FluentNumber",
    "FluentReferenceError",
    "FluentResolutionError",
    "FluentResource",
    "FluentSyntaxError",
    "FluentValue",
    "FormattedMessage",
    "NegotiationStrategy",
    "PathResourceLoader",
    "ResourceLoader",
    "__version__",
    "negotiate_languages",
    "parse_accepted_languages",
]
