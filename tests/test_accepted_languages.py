"""Accept-Language header parsing tests."""

from __future__ import annotations

import pytest

from ftlruntime.negotiation import negotiate_languages, parse_accepted_languages


class TestParseAcceptedLanguages:
    def test_quality_order(self) -> None:
        header = "fr-CH, fr;q=0.9, en;q=0.8, de;q=0.7, *;q=0.5"
        assert parse_accepted_languages(header) == ["fr-CH", "fr", "en", "de"]

    def test_sorted_by_quality(self) -> None:
        assert parse_accepted_languages("en;q=0.5, pl") == ["pl", "en"]

    def test_equal_quality_keeps_header_order(self) -> None:
        assert parse_accepted_languages("de;q=0.5, fr;q=0.5, it") == ["it", "de", "fr"]

    @pytest.mark.parametrize("header", ["", " , ", "*", "en;q=0", "en;q=abc"])
    def test_nothing_usable(self, header: str) -> None:
        assert parse_accepted_languages(header) == []

    @pytest.mark.parametrize("quality", ["nan", "inf", "-inf", "1.5", "-0.3"])
    def test_quality_outside_range_is_dropped(self, quality: str) -> None:
        header = f"de;q=0.5, xx;q={quality}, fr;q=0.7"
        assert parse_accepted_languages(header) == ["fr", "de"]

    def test_other_parameters_ignored(self) -> None:
        assert parse_accepted_languages("en;level=1;q=0.4, pl;q=0.6") == ["pl", "en"]

    def test_feeds_negotiation(self) -> None:
        requested = parse_accepted_languages("pl;q=0.9, en-GB;q=0.8")
        assert negotiate_languages(requested, ["en", "pl"], "en") == ["pl", "en"]
