"""Core value types for the Fluent runtime.

Defines the closed set of runtime values used throughout resolution:
    - str: plain text
    - FluentNumber: number plus NUMBER() options
    - FluentDateTime: aware datetime plus DATETIME() options
    - FluentNone: absent value
    - FluentErrorValue: marker for an expression that failed

plus FluentArgs, the immutable argument mapping passed to formatting calls,
and FluentFunction, the calling convention of registered functions.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from .dates import FluentDateTime
from .number import FluentNumber

__all__ = [
    "FluentArgs",
    "FluentErrorValue",
    "FluentFunction",
    "FluentNone",
    "FluentValue",
    "to_fluent_value",
]


@dataclass(frozen=True, slots=True)
class FluentNone:
    """Absent value; renders as empty text."""

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class FluentErrorValue:
    """Result of an expression that failed.

    Renders as empty text. The diagnostic was recorded where the value was
    produced, not when it is rendered.
    """

    def __str__(self) -> str:
        return ""


type FluentValue = str | FluentNumber | FluentDateTime | FluentNone | FluentErrorValue


class FluentFunction(Protocol):
    """Protocol for functions callable from FTL.

    Functions receive resolved positional arguments and named options and
    return a FluentValue (native str/int/float/Decimal/datetime results are
    converted by the resolver).
    """

    def __call__(
        self,
        positional: Sequence[FluentValue],
        named: FluentArgs,
        /,
    ) -> object:
        ...  # pragma: no cover  # Protocol stub - not executable


def to_fluent_value(value: object) -> FluentValue:
    """Convert a native Python value to a FluentValue.

    Examples:
        >>> to_fluent_value(True)
        'true'
        >>> to_fluent_value(3).value
        3
    """
    match value:
        case str() | FluentNumber() | FluentDateTime() | FluentNone() | FluentErrorValue():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float() | Decimal():
            return FluentNumber(value)
        case datetime():
            return FluentDateTime(value)
        case date():
            return FluentDateTime.from_date(value)
        case None:
            return FluentNone()
        case _:
            return str(value)


class FluentArgs(Mapping[str, FluentValue]):
    """Immutable mapping of argument names to FluentValues.

    Later duplicates win, both within ``items`` and between ``items`` and
    keyword arguments. Values are converted with to_fluent_value().

    Example:
        >>> args = FluentArgs({"name": "John", "count": 3})
        >>> args["count"].value
        3
    """

    __slots__ = ("_data",)

    def __init__(
        self,
        items: Mapping[str, object] | Iterable[tuple[str, object]] | None = None,
        /,
        **kwargs: object,
    ) -> None:
        data: dict[str, FluentValue] = {}
        if items is not None:
            pairs = items.items() if isinstance(items, Mapping) else items
            for name, value in pairs:
                data[name] = to_fluent_value(value)
        for name, value in kwargs.items():
            data[name] = to_fluent_value(value)
        self._data = data

    @classmethod
    def coerce(cls, args: Mapping[str, object] | None) -> FluentArgs:
        """Return ``args`` as FluentArgs, without copying if it already is one."""
        if isinstance(args, FluentArgs):
            return args
        return cls(args)

    def __getitem__(self, name: str) -> FluentValue:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FluentArgs({self._data!r})"
