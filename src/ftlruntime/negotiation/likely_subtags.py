"""Likely-subtags table used to maximize requested locales.

A compact table, not the full CLDR likely-subtags data: it covers the
languages whose script or region choice changes negotiation results in
practice. Languages in REGION_MATCHING_KEYS gain a region equal to their
language code (``de`` becomes ``de-DE``).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import replace

from .tags import LanguageTag

__all__ = ["REGION_MATCHING_KEYS", "maximize"]

REGION_MATCHING_KEYS: frozenset[str] = frozenset(
    {"az", "bg", "cs", "de", "es", "fi", "fr", "hu", "it", "lt", "lv", "nl", "pl", "ro", "ru"}
)

_LIKELY: dict[str, LanguageTag] = {
    "en": LanguageTag("en", "Latn", "US"),
    "fr": LanguageTag("fr", "Latn", "FR"),
    "sr": LanguageTag("sr", "Cyrl", "SR"),
    "sr-RU": LanguageTag("sr", "Latn", "SR"),
    "az-IR": LanguageTag("az", "Arab", "IR"),
    "zh-GB": LanguageTag("zh", "Hant", "GB"),
    "zh-US": LanguageTag("zh", "Hant", "US"),
}


def maximize(tag: LanguageTag) -> LanguageTag | None:
    """Fill in likely script and region subtags.

    The variant is kept. Returns None when the table has nothing for the tag.

    Examples:
        >>> str(maximize(LanguageTag.parse("az-IR")))
        'az-Arab-IR'
        >>> str(maximize(LanguageTag.parse("de")))
        'de-DE'
        >>> maximize(LanguageTag.parse("ja")) is None
        True
    """
    likely = _LIKELY.get(str(tag.without_variant()))
    if likely is not None:
        return replace(likely, variant=tag.variant)
    if tag.language in REGION_MATCHING_KEYS:
        return replace(tag, region=tag.language.upper())
    return None
