"""Tests for FluentNumber shaping, option merging and locale rendering."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlruntime.diagnostics import DiagnosticCode, FluentFormatterError
from ftlruntime.runtime.cache import LocalFormatterCache
from ftlruntime.runtime.number import (
    FluentNumber,
    FluentNumberOptions,
    Grouping,
    NumberNotation,
    NumberStyle,
    PluralType,
    RoundingMode,
)


def render(value: int | float | Decimal, locale: str = "en-US", **named: object) -> str:
    number = FluentNumber(value).with_options(
        {key: FluentNumber(v) if isinstance(v, int) else v for key, v in named.items()}
    )
    return number.as_string(locale, LocalFormatterCache())


class TestStandardNotation:
    """Default shaping: up to three fraction digits, trailing zeros dropped."""

    def test_float_with_zero_fraction_renders_as_integer(self) -> None:
        assert render(1.0) == "1"

    def test_grouping_and_fraction(self) -> None:
        assert render(1234.5) == "1,234.5"

    def test_german_separators(self) -> None:
        assert render(1234.5, "de-DE") == "1.234,5"

    def test_default_maximum_three_fraction_digits(self) -> None:
        assert render(Decimal("3.14159")) == "3.142"

    def test_minimum_fraction_digits_pads(self) -> None:
        assert render(5, minimumFractionDigits=2) == "5.00"

    def test_maximum_fraction_zero_half_even(self) -> None:
        assert render(1.5, maximumFractionDigits=0, roundingMode="halfEven") == "2"
        assert render(2.5, maximumFractionDigits=0, roundingMode="halfEven") == "2"

    def test_maximum_fraction_zero_half_expand(self) -> None:
        assert render(2.5, maximumFractionDigits=0) == "3"

    def test_minimum_integer_digits(self) -> None:
        assert render(5, minimumIntegerDigits=3) == "005"

    def test_negative_number(self) -> None:
        assert render(-1234) == "-1,234"

    def test_float_uses_shortest_repr(self) -> None:
        assert FluentNumber(0.1).to_decimal() == Decimal("0.1")


class TestGrouping:
    """useGrouping values."""

    def test_never(self) -> None:
        assert render(1234567, useGrouping="never") == "1234567"

    def test_false_is_never(self) -> None:
        assert render(1234567, useGrouping="false") == "1234567"

    def test_min2_leaves_four_digits_ungrouped(self) -> None:
        assert render(1234, useGrouping="min2") == "1234"
        assert render(12345, useGrouping="min2") == "12,345"

    def test_auto_uses_locale_grouping_sizes(self) -> None:
        assert render(1234567, "en-IN") == "12,34,567"


class TestSignificantDigits:
    """Significant-digit bounds take precedence over fraction bounds."""

    def test_maximum_significant_digits(self) -> None:
        assert render(12345, maximumSignificantDigits=3) == "12,300"

    def test_minimum_significant_digits(self) -> None:
        assert render(1.5, minimumSignificantDigits=3) == "1.50"

    def test_zero(self) -> None:
        assert render(0, minimumSignificantDigits=2) == "0.0"


class TestExponentialNotation:
    """Scientific and engineering notation."""

    def test_scientific(self) -> None:
        assert render(12345, notation="scientific") == "1.235E+04"

    def test_scientific_zero(self) -> None:
        assert render(0, notation="scientific") == "0.000E+00"

    def test_scientific_small(self) -> None:
        assert render(Decimal("0.00012"), notation="scientific") == "1.200E-04"

    def test_engineering(self) -> None:
        assert render(12345, notation="engineering") == "12.345E+03"

    def test_engineering_small(self) -> None:
        assert render(Decimal("0.00012"), notation="engineering") == "120.000E-06"

    def test_exponent_sign_is_ascii_in_every_locale(self) -> None:
        # fi formats negative numbers with U+2212
        assert render(Decimal("0.00012"), "fi", notation="scientific") == "1,200E-04"
        assert render(12345, "fi", notation="scientific") == "1,235E+04"

    def test_mantissa_rounding_up_moves_exponent(self) -> None:
        assert render(Decimal("9.9996"), notation="scientific") == "1.000E+01"

    def test_exponential_split(self) -> None:
        mantissa, exponent = FluentNumber(12345).exponential(3)
        assert (mantissa, exponent) == (Decimal("12.345"), 3)


class TestOptionMerging:
    """NUMBER() named arguments."""

    def test_unknown_key_is_ignored(self) -> None:
        options = FluentNumberOptions()
        assert options.merge({"bogus": "x"}) is options

    def test_wrong_value_type_is_ignored(self) -> None:
        options = FluentNumberOptions()
        assert options.merge({"minimumFractionDigits": "2"}) is options

    def test_unknown_enum_value_falls_back_to_default(self) -> None:
        merged = FluentNumberOptions(style=NumberStyle.PERCENT).merge({"style": "weird"})
        assert merged.style is NumberStyle.DECIMAL

    def test_all_enum_options(self) -> None:
        merged = FluentNumberOptions().merge(
            {
                "style": "currency",
                "currency": "EUR",
                "notation": "engineering",
                "useGrouping": "min2",
                "roundingMode": "halfEven",
                "type": "ordinal",
            }
        )
        assert merged.style is NumberStyle.CURRENCY
        assert merged.currency == "EUR"
        assert merged.notation is NumberNotation.ENGINEERING
        assert merged.use_grouping is Grouping.MIN2
        assert merged.rounding_mode is RoundingMode.HALF_EVEN
        assert merged.plural_type is PluralType.ORDINAL

    def test_digit_options_are_clamped(self) -> None:
        merged = FluentNumberOptions().merge(
            {"maximumFractionDigits": FluentNumber(500), "minimumIntegerDigits": FluentNumber(-3)}
        )
        assert merged.maximum_fraction_digits == 100
        assert merged.minimum_integer_digits == 0

    def test_with_options_keeps_identity_when_nothing_changes(self) -> None:
        number = FluentNumber(3)
        assert number.with_options({}) is number


class TestLiterals:
    """Numbers from FTL literals keep their written precision."""

    def test_fraction_digits_from_literal(self) -> None:
        number = FluentNumber.from_literal("1.50")
        assert number.options.minimum_fraction_digits == 2
        assert number.as_string("en-US", LocalFormatterCache()) == "1.50"

    def test_integer_literal(self) -> None:
        number = FluentNumber.from_literal("-7")
        assert number.options.minimum_fraction_digits is None
        assert number.shaped() == Decimal("-7")


class TestRoundingModes:
    """ECMA-402 rounding modes at zero fraction digits."""

    @pytest.mark.parametrize(
        ("mode", "positive", "negative"),
        [
            ("ceil", "2", "-1"),
            ("floor", "1", "-2"),
            ("expand", "2", "-2"),
            ("trunc", "1", "-1"),
            ("halfCeil", "2", "-1"),
            ("halfFloor", "1", "-2"),
            ("halfExpand", "2", "-2"),
            ("halfTrunc", "1", "-1"),
            ("halfEven", "2", "-2"),
        ],
    )
    def test_mode(self, mode: str, positive: str, negative: str) -> None:
        assert render(Decimal("1.5"), maximumFractionDigits=0, roundingMode=mode) == positive
        assert render(Decimal("-1.5"), maximumFractionDigits=0, roundingMode=mode) == negative


class TestFormatterFailure:
    """Locales without CLDR data."""

    def test_unknown_locale_raises_formatter_error(self) -> None:
        with pytest.raises(FluentFormatterError) as exc_info:
            FluentNumber(5).as_string("xx-YY", LocalFormatterCache())
        assert exc_info.value.code is DiagnosticCode.FORMATTER_CONSTRUCTION_FAILURE
        assert exc_info.value.locale_code == "xx-YY"


class TestShapingProperties:
    """Shaping invariants."""

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_render_exactly_without_grouping(self, value: int) -> None:
        assert render(value, useGrouping="never") == str(value)

    @given(
        st.decimals(
            min_value=-(10**6), max_value=10**6, places=6, allow_nan=False, allow_infinity=False
        ),
        st.integers(min_value=0, max_value=3),
        st.integers(min_value=0, max_value=3),
    )
    def test_visible_fraction_digits_within_bounds(
        self, value: Decimal, minimum: int, extra: int
    ) -> None:
        options = FluentNumberOptions(
            minimum_fraction_digits=minimum, maximum_fraction_digits=minimum + extra
        )
        exponent = FluentNumber(value, options).shaped().as_tuple().exponent
        assert isinstance(exponent, int)
        assert minimum <= -exponent <= minimum + extra
