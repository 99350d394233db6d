"""Locale negotiation: match requested locales against available ones.

Each requested locale is compared with the available locales in a series of
increasingly loose steps:

    1. Exact match (case-insensitive, ``_`` and ``-`` equivalent)
    2. Available locales as ranges: ``en`` serves a request for ``en-US``
    3. Requested locale maximized with likely subtags: ``az-IR`` finds ``az-Arab-IR``
    4. Variant dropped: ``de-DE-1996`` finds ``de-DE``
    5. Region dropped, then maximized: ``de-AT`` finds ``de-DE``
    6. Region as a range on both sides: ``en-US`` finds ``en-GB``

An available locale is selected at most once; results keep the caller's
spelling of the available locale.

Python 3.13+. Depends on Babel for tag parsing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import StrEnum

from .likely_subtags import maximize
from .tags import LanguageTag

__all__ = ["NegotiationStrategy", "filter_matches", "negotiate_languages"]

logger = logging.getLogger(__name__)


class NegotiationStrategy(StrEnum):
    """How many available locales each requested locale may select.

    FILTERING: every match of every step, for every requested locale
    MATCHING: the best match for each requested locale
    LOOKUP: the single best match overall
    """

    FILTERING = "filtering"
    MATCHING = "matching"
    LOOKUP = "lookup"


type _Probe = tuple[LanguageTag, bool, bool]


def _parse_all(tags: Iterable[str], role: str) -> list[tuple[LanguageTag, str]]:
    parsed: list[tuple[LanguageTag, str]] = []
    for tag in tags:
        if tag == "*":
            continue
        try:
            parsed.append((LanguageTag.parse(tag), tag))
        except ValueError:
            logger.debug("Skipping unparsable %s locale '%s'", role, tag)
    return parsed


def _probes(requested: LanguageTag) -> Iterator[_Probe]:
    """(tag, available_as_range, requested_as_range) for each matching step."""
    current = requested
    yield (current, False, False)
    yield (current, True, False)

    maximized = maximize(current)
    if maximized is not None:
        current = maximized
        yield (current, True, False)

    current = current.without_variant()
    yield (current, True, False)

    maximized = maximize(current.without_region())
    if maximized is not None:
        current = maximized
        yield (current, True, False)

    yield (current.without_region(), True, True)


def filter_matches(
    requested: Iterable[str],
    available: Iterable[str],
    strategy: NegotiationStrategy,
) -> list[str]:
    """Available locales matching the requested ones, best first.

    Unlike negotiate_languages() no default locale is added.
    """
    candidates = _parse_all(available, "available")
    supported: list[str] = []

    for requested_tag, _ in _parse_all(requested, "requested"):
        for probe, available_as_range, requested_as_range in _probes(requested_tag):
            found = False
            for candidate in list(candidates):
                if found and strategy is not NegotiationStrategy.FILTERING:
                    break
                tag, original = candidate
                if tag.matches(
                    probe, self_as_range=available_as_range, other_as_range=requested_as_range
                ):
                    candidates.remove(candidate)
                    supported.append(original)
                    found = True
            if not found:
                continue
            if strategy is NegotiationStrategy.LOOKUP:
                return supported
            if strategy is NegotiationStrategy.MATCHING:
                break

    return supported


def negotiate_languages(
    requested: Iterable[str],
    available: Iterable[str],
    default_locale: str | None = None,
    strategy: NegotiationStrategy = NegotiationStrategy.FILTERING,
) -> list[str]:
    """Negotiate the locales to use, in fallback order.

    Args:
        requested: Locales the user asked for, most preferred first
        available: Locales the application has resources for
        default_locale: Locale appended when not already selected (FILTERING,
            MATCHING) or returned when nothing matched (LOOKUP)
        strategy: How many locales to select

    Returns:
        Deduplicated available locales, as spelled in ``available``

    Raises:
        ValueError: LOOKUP without a default locale

    Examples:
        >>> negotiate_languages(["en-US", "pl"], ["en-US", "pl", "fr"], "en-US")
        ['en-US', 'pl']
        >>> negotiate_languages(["az-IR"], ["az-Arab-IR"], strategy=NegotiationStrategy.MATCHING)
        ['az-Arab-IR']
        >>> negotiate_languages(["de-AT", "fr"], ["de-DE", "fr-FR", "en"], "en",
        ...                     strategy=NegotiationStrategy.LOOKUP)
        ['de-DE']
    """
    if strategy is NegotiationStrategy.LOOKUP and default_locale is None:
        msg = "LOOKUP strategy requires a default locale"
        raise ValueError(msg)

    supported = list(dict.fromkeys(filter_matches(requested, available, strategy)))

    if default_locale is not None:
        if strategy is NegotiationStrategy.LOOKUP:
            if not supported:
                supported.append(default_locale)
        elif _normalized(default_locale) not in {_normalized(tag) for tag in supported}:
            supported.append(default_locale)

    logger.debug("Negotiated locales (%s): %s", strategy, supported)
    return supported


def _normalized(tag: str) -> str:
    return tag.replace("_", "-").lower()
