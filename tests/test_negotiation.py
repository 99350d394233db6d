"""Locale negotiation tests."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlruntime.negotiation import (
    LanguageTag,
    NegotiationStrategy,
    filter_matches,
    maximize,
    negotiate_languages,
)

FILTERING = NegotiationStrategy.FILTERING
MATCHING = NegotiationStrategy.MATCHING
LOOKUP = NegotiationStrategy.LOOKUP


class TestLanguageTag:
    def test_parse_normalizes_case(self) -> None:
        assert LanguageTag.parse("zh_hant_tw") == LanguageTag("zh", "Hant", "TW")
        assert str(LanguageTag.parse("EN-us")) == "en-US"

    def test_variant(self) -> None:
        tag = LanguageTag.parse("de-DE-1996")
        assert tag.variant == "1996"
        assert str(tag.without_variant()) == "de-DE"

    @pytest.mark.parametrize("tag", ["!!", "", "en-US-x-private-too-many"])
    def test_unparsable(self, tag: str) -> None:
        with pytest.raises(ValueError):
            LanguageTag.parse(tag)

    def test_range_matching(self) -> None:
        en = LanguageTag.parse("en")
        en_us = LanguageTag.parse("en-US")
        assert en.matches(en_us, self_as_range=True, other_as_range=False)
        assert not en.matches(en_us, self_as_range=False, other_as_range=False)
        assert not en_us.matches(en, self_as_range=True, other_as_range=False)


class TestMaximize:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("en", "en-Latn-US"),
            ("sr", "sr-Cyrl-SR"),
            ("sr-RU", "sr-Latn-SR"),
            ("az-IR", "az-Arab-IR"),
            ("de", "de-DE"),
            ("pl", "pl-PL"),
        ],
    )
    def test_table(self, tag: str, expected: str) -> None:
        result = maximize(LanguageTag.parse(tag))
        assert result is not None
        assert str(result) == expected

    def test_region_matching_language_takes_own_region(self) -> None:
        result = maximize(LanguageTag.parse("de-AT"))
        assert result is not None
        assert result.region == "DE"

    def test_variant_kept(self) -> None:
        result = maximize(LanguageTag.parse("en-POSIX"))
        assert result is not None
        assert result.variant == "POSIX"

    def test_unknown(self) -> None:
        assert maximize(LanguageTag.parse("ja")) is None


class TestStrategies:
    REQUESTED = ["de-DE", "en"]
    AVAILABLE = ["de", "de-AT", "en-US", "fr"]

    def test_filtering_collects_every_match(self) -> None:
        assert negotiate_languages(self.REQUESTED, self.AVAILABLE) == ["de", "de-AT", "en-US"]

    def test_matching_takes_best_per_requested(self) -> None:
        result = negotiate_languages(self.REQUESTED, self.AVAILABLE, strategy=MATCHING)
        assert result == ["de", "en-US"]

    def test_lookup_takes_single_best(self) -> None:
        result = negotiate_languages(self.REQUESTED, self.AVAILABLE, "fr", strategy=LOOKUP)
        assert result == ["de"]

    def test_lookup_falls_back_to_default(self) -> None:
        assert negotiate_languages(["ja"], ["de", "fr"], "fr", strategy=LOOKUP) == ["fr"]

    def test_lookup_requires_default(self) -> None:
        with pytest.raises(ValueError, match="default locale"):
            negotiate_languages(["en"], ["en"], strategy=LOOKUP)

    def test_filter_matches_adds_no_default(self) -> None:
        assert filter_matches(["ja"], ["en"], FILTERING) == []


class TestMatchingSteps:
    def test_exact_match_is_case_and_separator_insensitive(self) -> None:
        assert negotiate_languages(["en-US"], ["en_us"]) == ["en_us"]

    def test_available_as_range(self) -> None:
        assert negotiate_languages(["en-GB"], ["en"]) == ["en"]

    def test_likely_subtags(self) -> None:
        result = negotiate_languages(["az-IR"], ["az-Arab-IR"], strategy=MATCHING)
        assert result == ["az-Arab-IR"]

    def test_variant_dropped(self) -> None:
        assert negotiate_languages(["de-DE-1996"], ["de-DE"]) == ["de-DE"]

    def test_region_replaced(self) -> None:
        assert negotiate_languages(["de-AT"], ["de-DE"], strategy=MATCHING) == ["de-DE"]

    def test_other_region_of_same_language(self) -> None:
        assert negotiate_languages(["en-US"], ["en-GB"]) == ["en-GB"]

    def test_exact_beats_looser_matches(self) -> None:
        result = negotiate_languages(["en-GB"], ["en-US", "en", "en-GB"], strategy=MATCHING)
        assert result == ["en-GB"]

    def test_requested_order_is_preserved(self) -> None:
        result = negotiate_languages(["en-US", "pl"], ["en-US", "pl", "fr"], "en-US")
        assert result == ["en-US", "pl"]


class TestDefaults:
    def test_default_appended(self) -> None:
        assert negotiate_languages(["pl"], ["pl", "en-US"], "en-US") == ["pl", "en-US"]

    def test_default_not_repeated_in_other_spelling(self) -> None:
        assert negotiate_languages(["en-US"], ["en-US"], "en_us") == ["en-US"]

    def test_nothing_matched(self) -> None:
        assert negotiate_languages(["ja"], ["de"], "en") == ["en"]
        assert negotiate_languages(["ja"], ["de"]) == []


class TestInputHandling:
    def test_unparsable_and_wildcard_skipped(self) -> None:
        assert negotiate_languages(["!!", "*", "pl"], ["??", "pl"]) == ["pl"]

    def test_available_selected_once(self) -> None:
        assert negotiate_languages(["en", "en-US"], ["en-US"]) == ["en-US"]

    @given(
        st.lists(st.sampled_from(["en", "en-US", "de", "de-AT", "fr", "sr-RU", "pl", "ja"])),
        st.lists(st.sampled_from(["en", "en-GB", "de-DE", "fr-FR", "sr-Latn-SR", "pl"])),
    )
    def test_result_is_subset_without_duplicates(
        self, requested: list[str], available: list[str]
    ) -> None:
        result = negotiate_languages(requested, available)
        assert len(result) == len(set(result))
        assert set(result) <= set(available)
