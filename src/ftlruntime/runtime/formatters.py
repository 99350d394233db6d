"""Babel-backed formatter objects for numbers and dates.

Formatters are built through a FormatterCache so that CLDR data for a given
locale and option combination is loaded once. This module never touches
Python's ``locale`` module (no global state).

Architecture:
    - DecimalFormatter: renders an already-shaped Decimal with locale
      separators and grouping; keyed by (locale, grouping)
    - DateTimeFormatter: renders one of five kinds (date, time, date+time,
      zoned date+time, zone only); keyed by (locale, styles)
    - get_* helpers: cache lookups that wrap locale failures in
      FluentFormatterError

Python 3.13+. Uses Babel for i18n.
"""

import logging
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from ftlruntime.diagnostics import ErrorTemplate, FluentFormatterError
from ftlruntime.locale_utils import get_babel_locale

from .cache import FormatterCache, FormatterFamily
from .dates import (
    DateTimeStyle,
    FluentDateTimeOptions,
    Iso8601Timezone,
    IsoFormat,
    IsoMinutes,
    TimezoneOption,
)
from .number import Grouping

__all__ = [
    "DateTimeFormatter",
    "DateTimeFormatterKind",
    "DecimalFormatter",
    "get_datetime_formatter",
    "get_decimal_formatter",
    "resolve_locale",
]

logger = logging.getLogger(__name__)


def resolve_locale(locale_code: str, family: FormatterFamily) -> Locale:
    """Load Babel locale data for a formatter.

    Raises:
        FluentFormatterError: If Babel has no usable data for the locale
    """
    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        diagnostic = ErrorTemplate.formatter_construction_failed(locale_code, family, str(e))
        raise FluentFormatterError(diagnostic, locale_code=locale_code) from e


class DecimalFormatter:
    """Locale decimal formatter for one grouping strategy.

    Input values are already rounded; the formatter only chooses separators,
    grouping and zero padding. The pattern it hands to Babel always has
    exactly as many fraction digits as the value, so Babel never re-rounds.

    Example:
        >>> f = DecimalFormatter(Locale.parse("de_DE"), Grouping.AUTO)
        >>> f.format(Decimal("1234.50"))
        '1.234,50'
    """

    __slots__ = ("_grouping", "_locale", "_primary", "_secondary")

    def __init__(self, locale: Locale, grouping: Grouping) -> None:
        self._locale = locale
        self._grouping = grouping
        pattern = locale.decimal_formats.get(None)
        primary, secondary = pattern.grouping if pattern is not None else (3, 3)
        self._primary = primary
        self._secondary = secondary

    @property
    def grouping(self) -> Grouping:
        return self._grouping

    def _groups(self, integer_digits: int) -> bool:
        # Babel reports 1000 for "no grouping" in CLDR patterns without a comma
        if self._primary >= 1000:
            return False
        match self._grouping:
            case Grouping.NEVER:
                return False
            case Grouping.MIN2:
                return integer_digits >= self._primary + 2
            case _:
                return True

    def _integer_pattern(self, minimum_digits: int, grouped: bool) -> str:
        if not grouped:
            return "0" * minimum_digits
        # Two separators pin both group sizes: "#,##,##0" is primary 3, secondary 2
        width = max(minimum_digits, self._primary + self._secondary + 1)
        chars = ["0" if i < minimum_digits else "#" for i in range(width)]
        chars.insert(self._primary, ",")
        chars.insert(self._primary + self._secondary + 1, ",")
        return "".join(reversed(chars)).lstrip(",")

    def format(self, value: Decimal, *, minimum_integer_digits: int = 1) -> str:
        """Render a shaped decimal.

        Args:
            value: Rounded value; its exponent fixes the fraction digits shown
            minimum_integer_digits: Zero-pad the integer part to this width

        Returns:
            Locale-formatted number
        """
        if not value.is_finite():
            return str(babel_numbers.format_decimal(value, locale=self._locale))

        exponent = value.as_tuple().exponent
        assert isinstance(exponent, int)
        fraction_digits = max(-exponent, 0)
        integer_digits = max(value.adjusted() + 1, 1)
        pattern = self._integer_pattern(
            max(minimum_integer_digits, 1), self._groups(integer_digits)
        )
        if fraction_digits:
            pattern = f"{pattern}.{'0' * fraction_digits}"
        return str(babel_numbers.format_decimal(value, format=pattern, locale=self._locale))

    def __repr__(self) -> str:
        return f"DecimalFormatter(locale={self._locale}, grouping={self._grouping})"


def get_decimal_formatter(
    cache: FormatterCache, locale_code: str, grouping: Grouping
) -> DecimalFormatter:
    """Cached DecimalFormatter for (locale, grouping).

    Raises:
        FluentFormatterError: If the locale cannot be loaded
    """
    family = FormatterFamily.DECIMAL
    return cache.get_or_create(
        (family, locale_code, grouping),
        lambda: DecimalFormatter(resolve_locale(locale_code, family), grouping),
    )


class DateTimeFormatterKind(StrEnum):
    """Which parts of an instant a DateTimeFormatter renders."""

    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    ZONED_DATE_TIME = "zoned_date_time"
    TIME_ZONE = "time_zone"

    @classmethod
    def for_options(cls, options: FluentDateTimeOptions) -> "DateTimeFormatterKind | None":
        """Pick the kind from the visible parts; None when nothing is visible."""
        match options.shows_date, options.shows_time, options.shows_zone:
            case False, False, False:
                return None
            case True, False, False:
                return cls.DATE
            case False, True, False:
                return cls.TIME
            case True, True, False:
                return cls.DATE_TIME
            case False, False, True:
                return cls.TIME_ZONE
            case _:
                return cls.ZONED_DATE_TIME

    @property
    def family(self) -> FormatterFamily:
        return FormatterFamily(self.value)


# Long/full time styles include zone names that are rendered separately
# (timezoneStyle), so time output is capped at medium.
_TIME_DOWNGRADE = {DateTimeStyle.FULL, DateTimeStyle.LONG}


class DateTimeFormatter:
    """Locale date/time formatter for one option combination.

    Example:
        >>> from datetime import UTC
        >>> options = FluentDateTimeOptions(time_style=DateTimeStyle.HIDDEN)
        >>> f = DateTimeFormatter(Locale.parse("en_US"), options)
        >>> f.format(datetime(2025, 10, 27, 14, 30, tzinfo=UTC))
        'Oct 27, 2025'
    """

    __slots__ = ("_date_style", "_kind", "_locale", "_time_style", "_timezone_style")

    def __init__(self, locale: Locale, options: FluentDateTimeOptions) -> None:
        kind = DateTimeFormatterKind.for_options(options)
        if kind is None:
            msg = "DateTimeFormatter needs at least one visible part"
            raise ValueError(msg)
        self._locale = locale
        self._kind = kind
        self._date_style = options.date_style
        self._time_style = options.time_style
        self._timezone_style: TimezoneOption = options.timezone_style
        if options.shows_time and options.time_style in _TIME_DOWNGRADE:
            logger.debug(
                "timeStyle '%s' is not supported; using 'medium' for locale %s",
                options.time_style,
                locale,
            )
            self._time_style = DateTimeStyle.MEDIUM

    @property
    def kind(self) -> DateTimeFormatterKind:
        return self._kind

    def format(self, value: datetime) -> str:
        """Render an aware datetime in its own timezone."""
        match self._kind:
            case DateTimeFormatterKind.DATE:
                return self._format_date(value)
            case DateTimeFormatterKind.TIME:
                return self._format_time(value)
            case DateTimeFormatterKind.DATE_TIME:
                return self._combine(self._format_date(value), self._format_time(value))
            case DateTimeFormatterKind.ZONED_DATE_TIME:
                return f"{self._format_wall_clock(value)} {self._format_zone(value)}"
            case DateTimeFormatterKind.TIME_ZONE:
                return self._format_zone(value)

    def _format_date(self, value: datetime) -> str:
        return str(babel_dates.format_date(value, format=self._date_style, locale=self._locale))

    def _format_time(self, value: datetime) -> str:
        return str(babel_dates.format_time(value, format=self._time_style, locale=self._locale))

    def _format_wall_clock(self, value: datetime) -> str:
        if self._date_style is DateTimeStyle.HIDDEN:
            return self._format_time(value)
        if self._time_style is DateTimeStyle.HIDDEN:
            return self._format_date(value)
        return self._combine(self._format_date(value), self._format_time(value))

    def _combine(self, date_text: str, time_text: str) -> str:
        # CLDR glue pattern: {1} is the date, {0} the time; quotes mark literals
        glue = (
            self._locale.datetime_formats.get(self._date_style)
            or self._locale.datetime_formats.get("medium")
            or "{1} {0}"
        )
        return str(glue).replace("'", "").replace("{0}", time_text).replace("{1}", date_text)

    def _format_zone(self, value: datetime) -> str:
        match self._timezone_style:
            case Iso8601Timezone() as iso:
                if iso.minutes is IsoMinutes.OPTIONAL:
                    width = "iso8601_short"
                elif iso.format in (IsoFormat.BASIC, IsoFormat.UTC_BASIC):
                    width = "short"
                else:
                    width = "iso8601"
                return str(
                    babel_dates.get_timezone_gmt(
                        value, width=width, locale=self._locale, return_z=iso.zero_as_z
                    )
                )
            case _:
                return str(babel_dates.get_timezone_gmt(value, width="long", locale=self._locale))

    def __repr__(self) -> str:
        return f"DateTimeFormatter(locale={self._locale}, kind={self._kind})"


def get_datetime_formatter(
    cache: FormatterCache,
    locale_code: str,
    options: FluentDateTimeOptions,
) -> DateTimeFormatter | None:
    """Cached DateTimeFormatter for (locale, styles); None if all parts hidden.

    Raises:
        FluentFormatterError: If the locale cannot be loaded
    """
    kind = DateTimeFormatterKind.for_options(options)
    if kind is None:
        return None
    family = kind.family
    key = (options.date_style, options.time_style, options.timezone_style)
    return cache.get_or_create(
        (family, locale_code, key),
        lambda: DateTimeFormatter(resolve_locale(locale_code, family), options),
    )
