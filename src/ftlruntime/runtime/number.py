"""Numeric Fluent values and their formatting options.

FluentNumber pairs a numeric value with FluentNumberOptions. The options
control how the value is shaped (rounded, trimmed, padded) before the
locale-specific decimal formatter renders it, and the shaped value is also
what plural rules see, so ``1`` and ``1.0`` can select different variants.

Option merging follows the NUMBER() named-argument vocabulary
(``minimumFractionDigits``, ``useGrouping``, ...). Keys that are not in the
table are ignored, as are values of the wrong type.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
)
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cache import FormatterCache

__all__ = [
    "CurrencyDisplay",
    "FluentNumber",
    "FluentNumberOptions",
    "Grouping",
    "NumberNotation",
    "NumberStyle",
    "PluralType",
    "RoundingMode",
]


class NumberStyle(StrEnum):
    """NUMBER(style: ...) values."""

    DECIMAL = "decimal"
    CURRENCY = "currency"
    PERCENT = "percent"


class NumberNotation(StrEnum):
    """NUMBER(notation: ...) values."""

    STANDARD = "standard"
    SCIENTIFIC = "scientific"
    ENGINEERING = "engineering"


class CurrencyDisplay(StrEnum):
    """NUMBER(currencyDisplay: ...) values."""

    SYMBOL = "symbol"
    CODE = "code"
    NAME = "name"


class Grouping(StrEnum):
    """NUMBER(useGrouping: ...) values.

    ``min2`` groups only when the integer part has at least two digits more
    than the primary group size (``1000`` stays ungrouped, ``10,000`` not).
    """

    ALWAYS = "always"
    AUTO = "auto"
    MIN2 = "min2"
    NEVER = "never"


class RoundingMode(StrEnum):
    """NUMBER(roundingMode: ...) values, as defined by ECMA-402."""

    CEIL = "ceil"
    FLOOR = "floor"
    EXPAND = "expand"
    TRUNC = "trunc"
    HALF_CEIL = "halfCeil"
    HALF_FLOOR = "halfFloor"
    HALF_EXPAND = "halfExpand"
    HALF_TRUNC = "halfTrunc"
    HALF_EVEN = "halfEven"


class PluralType(StrEnum):
    """NUMBER(type: ...) values; selects the CLDR plural rule set."""

    CARDINAL = "cardinal"
    ORDINAL = "ordinal"


# Sign-independent modes. halfCeil/halfFloor depend on the sign of the value.
_DECIMAL_ROUNDING: dict[RoundingMode, str] = {
    RoundingMode.CEIL: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.EXPAND: ROUND_UP,
    RoundingMode.TRUNC: ROUND_DOWN,
    RoundingMode.HALF_EXPAND: ROUND_HALF_UP,
    RoundingMode.HALF_TRUNC: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
}

_DIGIT_OPTIONS: dict[str, str] = {
    "minimumIntegerDigits": "minimum_integer_digits",
    "minimumFractionDigits": "minimum_fraction_digits",
    "maximumFractionDigits": "maximum_fraction_digits",
    "minimumSignificantDigits": "minimum_significant_digits",
    "maximumSignificantDigits": "maximum_significant_digits",
}

# ECMA-402 caps every digit option at 100.
_MAX_DIGITS = 100


def _parse_enum[E: StrEnum](enum_type: type[E], text: str, default: E) -> E:
    try:
        return enum_type(text)
    except ValueError:
        return default


def _parse_grouping(text: str) -> Grouping:
    match text:
        case "true":
            return Grouping.ALWAYS
        case "false":
            return Grouping.NEVER
        case _:
            return _parse_enum(Grouping, text, Grouping.AUTO)


@dataclass(frozen=True, slots=True)
class FluentNumberOptions:
    """Formatting options carried by a FluentNumber.

    All digit bounds are optional; unset bounds take the defaults of the
    notation being rendered.
    """

    style: NumberStyle = NumberStyle.DECIMAL
    notation: NumberNotation = NumberNotation.STANDARD
    currency: str | None = None
    currency_display: CurrencyDisplay = CurrencyDisplay.SYMBOL
    use_grouping: Grouping = Grouping.AUTO
    minimum_integer_digits: int | None = None
    minimum_fraction_digits: int | None = None
    maximum_fraction_digits: int | None = None
    minimum_significant_digits: int | None = None
    maximum_significant_digits: int | None = None
    rounding_mode: RoundingMode = RoundingMode.HALF_EXPAND
    plural_type: PluralType = PluralType.CARDINAL

    def merge(self, named: Mapping[str, object]) -> FluentNumberOptions:
        """Return a copy with NUMBER()-style named arguments applied.

        Args:
            named: Option name to FluentValue, e.g. ``{"useGrouping": "never"}``

        Returns:
            New options; ``self`` when nothing applied
        """
        changes: dict[str, object] = {}
        for key, value in named.items():
            match key, value:
                case "style", str():
                    changes["style"] = _parse_enum(NumberStyle, value, NumberStyle.DECIMAL)
                case "notation", str():
                    changes["notation"] = _parse_enum(
                        NumberNotation, value, NumberNotation.STANDARD
                    )
                case "currency", str():
                    changes["currency"] = value
                case "currencyDisplay", str():
                    changes["currency_display"] = _parse_enum(
                        CurrencyDisplay, value, CurrencyDisplay.SYMBOL
                    )
                case "useGrouping", str():
                    changes["use_grouping"] = _parse_grouping(value)
                case "roundingMode", str():
                    changes["rounding_mode"] = _parse_enum(
                        RoundingMode, value, RoundingMode.HALF_EXPAND
                    )
                case "type", str():
                    changes["plural_type"] = _parse_enum(PluralType, value, PluralType.CARDINAL)
                case str() as name, FluentNumber() if name in _DIGIT_OPTIONS:
                    count = value.digit_count()
                    if count is not None:
                        changes[_DIGIT_OPTIONS[name]] = count
                case _:
                    pass
        return replace(self, **changes) if changes else self


def _to_decimal(value: int | float | Decimal) -> Decimal:
    match value:
        case Decimal():
            return value
        case float():
            # repr() gives the shortest round-tripping text: 0.1 -> "0.1"
            return Decimal(repr(value))
        case _:
            return Decimal(value)


def _rounding_for(mode: RoundingMode, value: Decimal) -> str:
    match mode:
        case RoundingMode.HALF_CEIL:
            return ROUND_HALF_DOWN if value.is_signed() else ROUND_HALF_UP
        case RoundingMode.HALF_FLOOR:
            return ROUND_HALF_UP if value.is_signed() else ROUND_HALF_DOWN
        case _:
            return _DECIMAL_ROUNDING[mode]


def _context_for(value: Decimal, exponent: int) -> Context:
    # Enough precision that quantizing never overflows the coefficient.
    digits = max(value.adjusted(), 0) - min(exponent, 0) + 2
    return Context(prec=max(digits, 28))


def _round_to(value: Decimal, exponent: int, mode: RoundingMode) -> Decimal:
    """Round ``value`` to a multiple of ``10 ** exponent``."""
    context = _context_for(value, exponent)
    return value.quantize(
        Decimal(1).scaleb(exponent), rounding=_rounding_for(mode, value), context=context
    )


def _trim(value: Decimal, minimum_fraction_digits: int) -> Decimal:
    """Drop trailing fraction zeros, keeping at least the given fraction digits."""
    exponent = value.as_tuple().exponent
    assert isinstance(exponent, int)
    context = _context_for(value, min(exponent, -minimum_fraction_digits))
    if exponent < 0 and not value.is_zero():
        stripped = value.normalize(context=context).as_tuple().exponent
        assert isinstance(stripped, int)
        keep = max(minimum_fraction_digits, -stripped if stripped < 0 else 0)
    else:
        keep = minimum_fraction_digits
    return value.quantize(Decimal(1).scaleb(-keep), context=context)


@dataclass(frozen=True, slots=True)
class FluentNumber:
    """Number value with formatting options.

    Attributes:
        value: Numeric value (int, float, or Decimal)
        options: Formatting options applied when rendering and selecting

    Example:
        >>> FluentNumber.from_literal("1.0").options.minimum_fraction_digits
        1
    """

    value: int | float | Decimal
    options: FluentNumberOptions = field(default_factory=FluentNumberOptions)

    @classmethod
    def from_literal(cls, text: str) -> FluentNumber:
        """Build a number from FTL literal text, keeping its fraction digits."""
        options = FluentNumberOptions()
        if "." in text:
            options = replace(options, minimum_fraction_digits=len(text.partition(".")[2]))
        return cls(Decimal(text), options)

    def with_options(self, named: Mapping[str, object]) -> FluentNumber:
        """Return a copy with named options merged in."""
        merged = self.options.merge(named)
        return self if merged is self.options else replace(self, options=merged)

    def to_decimal(self) -> Decimal:
        """Exact decimal form of the raw value."""
        return _to_decimal(self.value)

    def digit_count(self) -> int | None:
        """Interpret the value as a digit-count option (clamped to 0..100)."""
        number = self.to_decimal()
        if not number.is_finite():
            return None
        return min(max(int(number), 0), _MAX_DIGITS)

    def shaped(self) -> Decimal:
        """Value rounded, trimmed and padded as standard notation displays it.

        The exponent of the result encodes the visible fraction digits, which
        is what CLDR plural operands ``v``/``f`` are computed from.
        """
        number = self.to_decimal()
        if not number.is_finite():
            return number
        opts = self.options
        if (
            opts.minimum_significant_digits is not None
            or opts.maximum_significant_digits is not None
        ):
            return self._shape_significant(number)
        minimum = opts.minimum_fraction_digits or 0
        maximum = opts.maximum_fraction_digits
        if maximum is None:
            maximum = max(minimum, 3)
        rounded = _round_to(number, -maximum, opts.rounding_mode)
        return _trim(rounded, minimum)

    def _shape_significant(self, number: Decimal) -> Decimal:
        opts = self.options
        minimum = opts.minimum_significant_digits or 1
        maximum = max(minimum, opts.maximum_significant_digits or 21)
        if number.is_zero():
            return _trim(number.quantize(Decimal(1)), minimum - 1)
        rounded = _round_to(number, number.adjusted() - maximum + 1, opts.rounding_mode)
        return _trim(rounded, max(0, minimum - rounded.adjusted() - 1))

    def exponential(self, multiple_of: int) -> tuple[Decimal, int]:
        """Split the value into (shaped mantissa, exponent).

        The exponent is a multiple of ``multiple_of`` (1 for scientific, 3 for
        engineering notation). Mantissa defaults: 3 fraction digits.
        """
        number = self.to_decimal()
        opts = self.options
        minimum = 3 if opts.minimum_fraction_digits is None else opts.minimum_fraction_digits
        maximum = opts.maximum_fraction_digits
        if maximum is None:
            maximum = max(minimum, 3)

        exponent = 0 if number.is_zero() else number.adjusted() // multiple_of * multiple_of
        context = Context(prec=max(len(number.as_tuple().digits), 28))
        mantissa = _round_to(number.scaleb(-exponent, context), -maximum, opts.rounding_mode)
        if not mantissa.is_zero() and mantissa.adjusted() >= multiple_of:
            # 9.9996 rounded to 10.000: move one step up the exponent
            exponent += multiple_of
            mantissa = _round_to(number.scaleb(-exponent, context), -maximum, opts.rounding_mode)
        return _trim(mantissa, minimum), exponent

    def as_string(self, locale: str, cache: FormatterCache) -> str:
        """Render the number for a locale.

        Raises:
            FluentFormatterError: If no decimal formatter can be built for the locale
        """
        from .formatters import get_decimal_formatter  # noqa: PLC0415 - circular

        formatter = get_decimal_formatter(cache, locale, self.options.use_grouping)
        number = self.to_decimal()
        if not number.is_finite():
            return formatter.format(number)

        match self.options.notation:
            case NumberNotation.STANDARD:
                return formatter.format(
                    self.shaped(), minimum_integer_digits=self.options.minimum_integer_digits or 1
                )
            case NumberNotation.SCIENTIFIC | NumberNotation.ENGINEERING as notation:
                step = 1 if notation is NumberNotation.SCIENTIFIC else 3
                mantissa, exponent = self.exponential(step)
                sign = "-" if exponent < 0 else "+"
                magnitude = formatter.format(
                    Decimal(abs(exponent)),
                    minimum_integer_digits=self.options.minimum_integer_digits or 2,
                )
                return f"{formatter.format(mantissa)}E{sign}{magnitude}"

    def __str__(self) -> str:
        return str(self.value)
