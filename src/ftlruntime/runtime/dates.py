"""Date/time Fluent values and their formatting options.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, time
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cache import FormatterCache

__all__ = [
    "DateTimeStyle",
    "FluentDateTime",
    "FluentDateTimeOptions",
    "Iso8601Timezone",
    "IsoFormat",
    "IsoMinutes",
    "IsoSeconds",
    "TimezoneStyle",
]


class DateTimeStyle(StrEnum):
    """DATETIME(dateStyle: ..., timeStyle: ...) values."""

    FULL = "full"
    LONG = "long"
    MEDIUM = "medium"
    SHORT = "short"
    HIDDEN = "hidden"


class TimezoneStyle(StrEnum):
    """Non-ISO DATETIME(timezoneStyle: ...) values."""

    HIDDEN = "hidden"
    LOCALIZED_GMT = "gmt"


class IsoFormat(StrEnum):
    """ISO 8601 offset layout: ``+0130`` (basic) or ``+01:30`` (extended).

    The UTC variants render a zero offset as ``Z``.
    """

    BASIC = "basic"
    EXTENDED = "extended"
    UTC_BASIC = "utcBasic"
    UTC_EXTENDED = "utcExtended"


class IsoMinutes(StrEnum):
    REQUIRED = "required"
    OPTIONAL = "optional"


class IsoSeconds(StrEnum):
    OPTIONAL = "optional"
    NEVER = "never"


@dataclass(frozen=True, slots=True)
class Iso8601Timezone:
    """ISO 8601 timezone offset style.

    Seconds are carried for completeness; CLDR offsets never render them.
    """

    format: IsoFormat
    minutes: IsoMinutes = IsoMinutes.REQUIRED
    seconds: IsoSeconds = IsoSeconds.OPTIONAL

    @property
    def zero_as_z(self) -> bool:
        return self.format in (IsoFormat.UTC_BASIC, IsoFormat.UTC_EXTENDED)


type TimezoneOption = TimezoneStyle | Iso8601Timezone


def parse_timezone_style(text: str) -> TimezoneOption:
    """Map a ``timezoneStyle`` argument to its option; unknown text hides the zone."""
    if text == TimezoneStyle.LOCALIZED_GMT:
        return TimezoneStyle.LOCALIZED_GMT
    try:
        return Iso8601Timezone(IsoFormat(text))
    except ValueError:
        return TimezoneStyle.HIDDEN


def _parse_style(text: str) -> DateTimeStyle:
    try:
        return DateTimeStyle(text)
    except ValueError:
        return DateTimeStyle.MEDIUM


@dataclass(frozen=True, slots=True)
class FluentDateTimeOptions:
    """Formatting options carried by a FluentDateTime."""

    date_style: DateTimeStyle = DateTimeStyle.MEDIUM
    time_style: DateTimeStyle = DateTimeStyle.MEDIUM
    timezone_style: TimezoneOption = TimezoneStyle.HIDDEN

    def merge(self, named: Mapping[str, object]) -> FluentDateTimeOptions:
        """Return a copy with DATETIME()-style named arguments applied.

        Recognized keys: ``dateStyle``, ``timeStyle``, ``timezoneStyle``.
        """
        changes: dict[str, object] = {}
        for key, value in named.items():
            match key, value:
                case "dateStyle", str():
                    changes["date_style"] = _parse_style(value)
                case "timeStyle", str():
                    changes["time_style"] = _parse_style(value)
                case "timezoneStyle", str():
                    changes["timezone_style"] = parse_timezone_style(value)
                case _:
                    pass
        return replace(self, **changes) if changes else self

    @property
    def shows_date(self) -> bool:
        return self.date_style is not DateTimeStyle.HIDDEN

    @property
    def shows_time(self) -> bool:
        return self.time_style is not DateTimeStyle.HIDDEN

    @property
    def shows_zone(self) -> bool:
        return self.timezone_style is not TimezoneStyle.HIDDEN


@dataclass(frozen=True, slots=True)
class FluentDateTime:
    """Timezone-aware instant with formatting options.

    Naive datetimes are interpreted as UTC.

    Attributes:
        value: The instant to format
        options: Which of date, time and zone to show, and how
    """

    value: datetime
    options: FluentDateTimeOptions = field(default_factory=FluentDateTimeOptions)

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=UTC))

    @classmethod
    def from_date(cls, value: date) -> FluentDateTime:
        """Calendar date at UTC midnight, with the time hidden."""
        return cls(
            datetime.combine(value, time(), tzinfo=UTC),
            FluentDateTimeOptions(time_style=DateTimeStyle.HIDDEN),
        )

    def with_options(self, named: Mapping[str, object]) -> FluentDateTime:
        """Return a copy with named options merged in."""
        merged = self.options.merge(named)
        return self if merged is self.options else replace(self, options=merged)

    def as_string(self, locale: str, cache: FormatterCache) -> str:
        """Render the instant for a locale; empty when everything is hidden.

        Raises:
            FluentFormatterError: If no formatter can be built for the locale
        """
        from .formatters import get_datetime_formatter  # noqa: PLC0415 - circular

        formatter = get_datetime_formatter(cache, locale, self.options)
        if formatter is None:
            return ""
        return formatter.format(self.value)

    def __str__(self) -> str:
        return self.value.isoformat()
