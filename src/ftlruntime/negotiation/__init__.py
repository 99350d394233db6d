"""Locale negotiation.

Selects which available locales to use for a list of requested locales,
in fallback order, using exact, range, likely-subtag and language-only
matching.

Submodules:
    tags               - LanguageTag parsing and subtag matching
    likely_subtags     - maximize() with the likely-subtags table
    negotiate          - negotiate_languages(), filter_matches(), NegotiationStrategy
    accepted_languages - parse_accepted_languages() for HTTP headers

Python 3.13+. Depends on Babel for tag parsing.
"""

from .accepted_languages import parse_accepted_languages
from .likely_subtags import REGION_MATCHING_KEYS, maximize
from .negotiate import NegotiationStrategy, filter_matches, negotiate_languages
from .tags import LanguageTag

__all__ = [
    "REGION_MATCHING_KEYS",
    "LanguageTag",
    "NegotiationStrategy",
    "filter_matches",
    "maximize",
    "negotiate_languages",
    "parse_accepted_languages",
]
