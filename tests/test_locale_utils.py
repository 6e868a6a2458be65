"""Tests for locale_utils.py.

Covers normalize_locale, get_babel_locale, coerce_locale,
fallback_candidates, get_system_locale and get_system_babel_locale.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
from babel import Locale
from babel.core import UnknownLocaleError
from hypothesis import event, given

from localize.locale_utils import (
    coerce_locale,
    fallback_candidates,
    get_babel_locale,
    get_system_babel_locale,
    get_system_locale,
    normalize_locale,
)
from tests.strategies import locale_codes


class TestNormalizeLocale:
    """normalize_locale converts BCP-47 hyphens to POSIX underscores."""

    def test_bcp47_to_posix(self) -> None:
        assert normalize_locale("en-US") == "en_US"

    def test_already_normalized(self) -> None:
        assert normalize_locale("en_US") == "en_US"

    def test_multiple_hyphens(self) -> None:
        assert normalize_locale("zh-Hant-TW") == "zh_Hant_TW"


class TestGetBabelLocale:
    """get_babel_locale parses and caches."""

    def test_bcp47_format(self) -> None:
        locale = get_babel_locale("de-AT")
        assert (locale.language, locale.territory) == ("de", "AT")

    def test_caching(self) -> None:
        assert get_babel_locale("fr_CA") is get_babel_locale("fr_CA")

    def test_unknown_locale_raises(self) -> None:
        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx_YY")


class TestCoerceLocale:
    """coerce_locale accepts Locale objects and codes."""

    def test_locale_passthrough(self) -> None:
        locale = Locale.parse("en")
        assert coerce_locale(locale) is locale

    def test_string(self) -> None:
        assert coerce_locale(" en-GB ") == Locale.parse("en_GB")

    def test_empty_string(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            coerce_locale("  ")

    @pytest.mark.parametrize("value", [None, 42, ["en"]])
    def test_wrong_type(self, value: object) -> None:
        with pytest.raises(TypeError):
            coerce_locale(value)  # type: ignore[arg-type]

    @given(code=locale_codes())
    def test_bcp47_and_posix_agree(self, code: str) -> None:
        """Property: hyphenated and underscored codes coerce to the same Locale."""
        event(f"locale_has_territory={'_' in code}")
        assert coerce_locale(code) == coerce_locale(code.replace("_", "-"))


class TestFallbackCandidates:
    """fallback_candidates drops subtags down to root."""

    def test_full_chain(self) -> None:
        assert fallback_candidates(Locale.parse("zh_Hant_TW")) == (
            "zh_Hant_TW",
            "zh_Hant",
            "zh",
            "root",
        )

    def test_language_only(self) -> None:
        assert fallback_candidates(Locale.parse("en")) == ("en", "root")

    @given(code=locale_codes())
    def test_chain_shape(self, code: str) -> None:
        """Property: starts with the locale itself and ends with root."""
        locale = Locale.parse(code)
        chain = fallback_candidates(locale)
        assert chain[0] == str(locale)
        assert chain[-1] == "root"
        assert chain[-2] == locale.language


class TestGetSystemLocale:
    """get_system_locale reads the OS locale, then environment variables."""

    def test_getlocale_success(self) -> None:
        with patch("locale.getlocale", return_value=("en_US", "UTF-8")):
            assert get_system_locale() == "en_US"

    def test_getlocale_with_encoding(self) -> None:
        with patch("locale.getlocale", return_value=("de_DE.UTF-8", "UTF-8")):
            assert get_system_locale() == "de_DE"

    def test_c_utf8_filtered(self) -> None:
        """C.UTF-8 is a pseudo-locale like C."""
        with (
            patch("locale.getlocale", return_value=("C.UTF-8", "UTF-8")),
            patch.dict(os.environ, {"LANG": "fr_FR.UTF-8"}, clear=True),
        ):
            assert get_system_locale() == "fr_FR"

    def test_getlocale_error_falls_back_to_env(self) -> None:
        with (
            patch("locale.getlocale", side_effect=ValueError("mock error")),
            patch.dict(os.environ, {"LANG": "pt_BR"}, clear=True),
        ):
            assert get_system_locale() == "pt_BR"

    def test_lc_all_priority(self) -> None:
        env = {"LC_ALL": "lv_LV", "LC_MESSAGES": "de_DE", "LANG": "en_US"}
        with (
            patch("locale.getlocale", return_value=(None, None)),
            patch.dict(os.environ, env, clear=True),
        ):
            assert get_system_locale() == "lv_LV"

    def test_default_fallback(self) -> None:
        with (
            patch("locale.getlocale", return_value=(None, None)),
            patch.dict(os.environ, {}, clear=True),
        ):
            assert get_system_locale() == "en_US"

    def test_raise_on_failure(self) -> None:
        with (
            patch("locale.getlocale", return_value=("POSIX", None)),
            patch.dict(os.environ, {"LANG": "C"}, clear=True),
            pytest.raises(RuntimeError, match="system locale"),
        ):
            get_system_locale(raise_on_failure=True)


class TestGetSystemBabelLocale:
    """get_system_babel_locale never fails."""

    def test_detected(self) -> None:
        with patch("localize.locale_utils.get_system_locale", return_value="de_DE"):
            assert get_system_babel_locale() == Locale.parse("de_DE")

    def test_unknown_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with (
            patch("localize.locale_utils.get_system_locale", return_value="xx_YY"),
            caplog.at_level(logging.WARNING, logger="localize.locale_utils"),
        ):
            assert get_system_babel_locale() == Locale.parse("en_US")
        assert "xx_YY" in caplog.text
