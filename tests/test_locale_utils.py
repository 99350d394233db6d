"""Locale code helpers."""

from __future__ import annotations

import pytest
from babel import UnknownLocaleError

from ftlruntime.constants import DEFAULT_LOCALE
from ftlruntime.locale_utils import (
    get_babel_locale,
    get_system_locale,
    normalize_locale,
    to_bcp47,
)

LOCALE_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for var in LOCALE_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestConversion:
    @pytest.mark.parametrize(
        ("bcp47", "posix"), [("en-US", "en_US"), ("sr-Latn-RS", "sr_Latn_RS"), ("de", "de")]
    )
    def test_both_directions(self, bcp47: str, posix: str) -> None:
        assert normalize_locale(bcp47) == posix
        assert to_bcp47(posix) == bcp47


class TestBabelLocale:
    def test_accepts_both_spellings(self) -> None:
        assert get_babel_locale("de-AT") == get_babel_locale("de_AT")
        assert get_babel_locale("de-AT").territory == "AT"

    def test_cached(self) -> None:
        assert get_babel_locale("fr-FR") is get_babel_locale("fr-FR")

    def test_unknown_region_falls_back_to_language(self) -> None:
        assert get_babel_locale("en-ZZ").language == "en"

    def test_unknown_language(self) -> None:
        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx-YY")


class TestSystemLocale:
    def test_lang(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("LANG", "de_DE.UTF-8")
        assert get_system_locale() == "de-DE"

    def test_precedence(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("LANG", "de_DE.UTF-8")
        clean_env.setenv("LC_MESSAGES", "fr_FR")
        clean_env.setenv("LC_ALL", "pl_PL.UTF-8@euro")
        assert get_system_locale() == "pl-PL"

    def test_posix_pseudo_locales_ignored(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("LC_ALL", "C")
        clean_env.setenv("LANG", "POSIX")
        assert get_system_locale() == DEFAULT_LOCALE

    def test_raise_on_failure(self, clean_env: pytest.MonkeyPatch) -> None:
        with pytest.raises(RuntimeError, match="LC_ALL"):
            get_system_locale(raise_on_failure=True)
