"""Multi-locale localization package.

Provides locale fallback over several bundles and the resource loading
infrastructure that feeds them.

Submodules:
    loading      - ResourceLoader protocol, PathResourceLoader, LoadStatus,
                   ResourceLoadResult, LoadSummary
    orchestrator - FluentLocalization, FormattedMessage

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from .loading import LoadStatus, LoadSummary, PathResourceLoader, ResourceLoader, ResourceLoadResult
from .orchestrator import FluentLocalization, FormattedMessage

__all__ = [
    # Main orchestrator
    "FluentLocalization",
    "FormattedMessage",
    # Loader protocol and implementations
    "ResourceLoader",
    "PathResourceLoader",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "ResourceLoadResult",
]
