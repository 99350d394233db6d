"""Fluent runtime package.

Provides values and formatters, message resolution, built-in functions,
and the FluentBundle API. FTL parsing is done by fluent.syntax.

Python 3.13+.
"""

from .bundle import FluentBundle
from .cache import FormatterCache, FormatterFamily, LocalFormatterCache, SharedFormatterCache
from .dates import (
    DateTimeStyle,
    FluentDateTime,
    FluentDateTimeOptions,
    Iso8601Timezone,
    IsoFormat,
    IsoMinutes,
    IsoSeconds,
    TimezoneStyle,
)
from .function_bridge import FunctionRegistry
from .functions import create_default_registry, datetime_func, number_func
from .number import (
    CurrencyDisplay,
    FluentNumber,
    FluentNumberOptions,
    Grouping,
    NumberNotation,
    NumberStyle,
    PluralType,
    RoundingMode,
)
from .plural_rules import select_plural_category
from .resolution_context import ResolutionContext
from .resolver import FluentResolver
from .resource import FluentResource
from .value_types import (
    FluentArgs,
    FluentErrorValue,
    FluentFunction,
    FluentNone,
    FluentValue,
    to_fluent_value,
)

__all__ = [
    "CurrencyDisplay",
    "DateTimeStyle",
    "FluentArgs",
    "FluentBundle",
    "FluentDateTime",
    "FluentDateTimeOptions",
    "FluentErrorValue",
    "FluentFunction",
    "FluentNone",
    "FluentNumber",
    "FluentNumberOptions",
    "FluentResolver",
    "FluentResource",
    "FluentValue",
    "FormatterCache",
    "FormatterFamily",
    "FunctionRegistry",
    "Grouping",
    "Iso8601Timezone",
    "IsoFormat",
    "IsoMinutes",
    "IsoSeconds",
    "LocalFormatterCache",
    "NumberNotation",
    "NumberStyle",
    "PluralType",
    "ResolutionContext",
    "RoundingMode",
    "SharedFormatterCache",
    "TimezoneStyle",
    "create_default_registry",
    "datetime_func",
    "number_func",
    "select_plural_category",
    "to_fluent_value",
]
