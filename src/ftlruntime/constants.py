"""Shared constants for ftlruntime.

Centralized configuration constants used across the runtime, negotiation
and localization packages. Placing constants here avoids circular imports
and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for resolution
- Bidi isolation: Unicode control characters around placeables
- Fallback strings: Visible tokens rendered in place of failed expressions
- Locale defaults: Locale used when nothing else is configured

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Bidi isolation
    "FSI",
    "PDI",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_MESSAGE",
    "FALLBACK_MISSING_VARIABLE",
    "FALLBACK_MISSING_TERM",
    "FALLBACK_FUNCTION_ERROR",
    # Locale defaults
    "DEFAULT_LOCALE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum resolution depth. Counts message/term reference descents plus
# nested placeables and variant patterns, so both reference chains and
# adversarially deep ASTs stop well before Python's recursion limit.
MAX_DEPTH: int = 100

# ============================================================================
# BIDI ISOLATION
# ============================================================================

# FIRST STRONG ISOLATE
FSI: str = "\u2068"

# POP DIRECTIONAL ISOLATE
PDI: str = "\u2069"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Expression that cannot be rendered at all (e.g. select without variants)
FALLBACK_INVALID: str = "{???}"

# Message reference, optionally with attribute: {id} or {id.attr}
FALLBACK_MISSING_MESSAGE: str = "{{{id}}}"

# Variable reference: {$name}
FALLBACK_MISSING_VARIABLE: str = "{{${name}}}"

# Term reference, optionally with attribute: {-id} or {-id.attr}
FALLBACK_MISSING_TERM: str = "{{-{name}}}"

# Function call: {NUMBER()}
FALLBACK_FUNCTION_ERROR: str = "{{{name}()}}"

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_LOCALE: str = "en-US"
