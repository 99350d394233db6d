"""CLDR plural rules using Babel.

Provides plural category selection for all locales using Babel's CLDR data.
Rule tables are cached per locale, separately for cardinal and ordinal rules.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from babel.plural import PluralRule

from .cache import FormatterCache, FormatterFamily
from .formatters import resolve_locale
from .number import FluentNumber, PluralType

__all__ = ["get_plural_rule", "select_plural_category"]

_FAMILIES = {
    PluralType.CARDINAL: FormatterFamily.PLURAL_CARDINAL,
    PluralType.ORDINAL: FormatterFamily.PLURAL_ORDINAL,
}


def get_plural_rule(cache: FormatterCache, locale_code: str, plural_type: PluralType) -> PluralRule:
    """Cached Babel plural rule for a locale.

    Raises:
        FluentFormatterError: If the locale cannot be loaded
    """
    family = _FAMILIES[plural_type]

    def build() -> PluralRule:
        locale = resolve_locale(locale_code, family)
        if plural_type is PluralType.ORDINAL:
            return locale.ordinal_form
        return locale.plural_form

    return cache.get_or_create((family, locale_code, None), build)


def select_plural_category(number: FluentNumber, locale_code: str, cache: FormatterCache) -> str:
    """Select the CLDR plural category for a number.

    The number is shaped by its options first, so visible fraction digits
    count: in English ``1`` is "one" but ``1.0`` is "other".

    Args:
        number: Number to categorize (its ``plural_type`` picks the rule set)
        locale_code: Locale code (e.g., "lv-LV", "en-US", "ar-SA")
        cache: Cache holding the rule tables

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> from ftlruntime.runtime.cache import LocalFormatterCache
        >>> select_plural_category(FluentNumber(1), "en-US", LocalFormatterCache())
        'one'
        >>> select_plural_category(FluentNumber(5), "ru-RU", LocalFormatterCache())
        'many'

    Raises:
        FluentFormatterError: If the locale cannot be loaded
    """
    rule = get_plural_rule(cache, locale_code, number.options.plural_type)
    shaped = number.shaped()
    if not shaped.is_finite():
        return "other"
    return str(rule(shaped))
