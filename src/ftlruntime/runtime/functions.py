"""Built-in Fluent functions.

NUMBER and DATETIME do not format anything themselves: they attach options
to a value, and the value is rendered later with the bundle's locale. This
keeps plural selection on ``NUMBER($n, minimumFractionDigits: 1)`` aware of
the fraction digits that will be displayed.

Python 3.13+.
"""

from collections.abc import Sequence
from datetime import datetime

from .dates import FluentDateTime
from .function_bridge import FunctionRegistry
from .number import FluentNumber
from .value_types import FluentArgs, FluentErrorValue, FluentNone, FluentValue

__all__ = [
    "create_default_registry",
    "datetime_func",
    "number_func",
]


def _single_argument(name: str, positional: Sequence[FluentValue]) -> FluentValue:
    if len(positional) != 1:
        msg = f"{name}() expects 1 positional argument, got {len(positional)}"
        raise TypeError(msg)
    return positional[0]


def number_func(positional: Sequence[FluentValue], named: FluentArgs) -> FluentValue:
    """NUMBER(): attach number formatting options.

    FTL usage:
        { NUMBER($price, minimumFractionDigits: 2) }
        { NUMBER($place, type: "ordinal") -> ... }

    Raises:
        TypeError: Wrong number of arguments or a non-numeric argument
    """
    match _single_argument("NUMBER", positional):
        case FluentNumber() as number:
            return number.with_options(named)
        case FluentErrorValue() | FluentNone():
            # The failing argument already reported its own error.
            return FluentErrorValue()
        case other:
            msg = f"NUMBER() expects a number, got {type(other).__name__}"
            raise TypeError(msg)


def datetime_func(positional: Sequence[FluentValue], named: FluentArgs) -> FluentValue:
    """DATETIME(): attach date/time formatting options.

    Accepts a datetime argument or an ISO 8601 string.

    FTL usage:
        { DATETIME($when, dateStyle: "long", timeStyle: "hidden") }

    Raises:
        TypeError: Wrong number of arguments or a non-date argument
        ValueError: String argument that is not ISO 8601
    """
    match _single_argument("DATETIME", positional):
        case FluentDateTime() as moment:
            return moment.with_options(named)
        case str() as text:
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                msg = f"DATETIME() expects an ISO 8601 string, got '{text}'"
                raise ValueError(msg) from None
            return FluentDateTime(parsed).with_options(named)
        case FluentErrorValue() | FluentNone():
            return FluentErrorValue()
        case other:
            msg = f"DATETIME() expects a date, got {type(other).__name__}"
            raise TypeError(msg)


def create_default_registry() -> FunctionRegistry:
    """Create a new FunctionRegistry with the built-in FTL functions.

    Each call returns a new instance, so bundles never share registrations.

    Example:
        >>> registry = create_default_registry()
        >>> "NUMBER" in registry and "DATETIME" in registry
        True
    """
    registry = FunctionRegistry()
    registry.register("NUMBER", number_func)
    registry.register("DATETIME", datetime_func)
    return registry
