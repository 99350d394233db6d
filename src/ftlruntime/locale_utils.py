"""Locale utilities for BCP-47 and Babel interoperability.

Centralizes locale code normalization used throughout the codebase so that
cache keys and Babel lookups stay consistent.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError

from .constants import DEFAULT_LOCALE

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
    "to_bcp47",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("sr-Latn-RS")
        'sr_Latn_RS'
    """
    return locale_code.replace("-", "_")


def to_bcp47(locale_code: str) -> str:
    """Convert POSIX locale code to BCP-47 hyphenated form."""
    return locale_code.replace("_", "-")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Tries the full identifier first. If Babel has no data for it, retries with
    progressively shorter identifiers (``sr_Latn_XK`` -> ``sr_Latn`` -> ``sr``)
    before giving up.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If no prefix of the locale is recognized
        ValueError: If locale format is invalid
    """
    normalized = normalize_locale(locale_code)
    try:
        return Locale.parse(normalized)
    except UnknownLocaleError:
        parts = normalized.split("_")
        for end in range(len(parts) - 1, 0, -1):
            candidate = "_".join(parts[:end])
            try:
                locale = Locale.parse(candidate)
            except (UnknownLocaleError, ValueError):
                continue
            logger.debug("Locale '%s' resolved to '%s'", locale_code, candidate)
            return locale
        raise


def _first_configured(names: Sequence[str]) -> str | None:
    for var in names:
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX"):
            # Strip encoding and modifier suffixes (e.g. ".UTF-8", "@euro")
            return value.split(".")[0].split("@")[0]
    return None


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect the environment locale as a BCP-47 code.

    Detection order: ``LC_ALL``, ``LC_MESSAGES``, ``LANG``. The ``C`` and
    ``POSIX`` pseudo-locales are ignored.

    Args:
        raise_on_failure: If True, raise RuntimeError when no locale is set.
            Otherwise fall back to ``DEFAULT_LOCALE``.

    Raises:
        RuntimeError: If raise_on_failure is True and no locale is set.

    Example:
        >>> import os
        >>> os.environ["LANG"] = "de_DE.UTF-8"
        >>> get_system_locale()
        'de-DE'
    """
    value = _first_configured(("LC_ALL", "LC_MESSAGES", "LANG"))
    if value is not None:
        return to_bcp47(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return DEFAULT_LOCALE
