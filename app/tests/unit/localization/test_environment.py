"""Tests for localization.environment module."""

from localization.environment import (
    DocumentAttributes,
    detect_environment_language,
    language_from_timezone,
)
from localization.models import TextDirection


class TestDetectEnvironmentLanguage:
    """Tests for detect_environment_language()."""

    def test_override_wins(self):
        """An explicit override outranks the environment."""
        environ = {"LANG": "de_DE.UTF-8"}
        assert detect_environment_language(environ, override="fr_CA") == "fr-CA"

    def test_lang_variable(self):
        """LANG is normalized to a BCP 47 tag."""
        assert detect_environment_language({"LANG": "en_GB.UTF-8"}) == "en-GB"

    def test_variable_precedence(self):
        """LC_ALL outranks LANG."""
        environ = {"LC_ALL": "ja_JP.UTF-8", "LANG": "en_US.UTF-8"}
        assert detect_environment_language(environ) == "ja-JP"

    def test_neutral_locales_skipped(self):
        """C and POSIX carry no language."""
        environ = {"LC_ALL": "C", "LC_MESSAGES": "POSIX", "LANG": "C.UTF-8", "LANGUAGE": "ko_KR:en"}
        assert detect_environment_language(environ) == "ko-KR"

    def test_timezone_inference(self):
        """Without locale variables the time zone is used."""
        assert detect_environment_language({"TZ": "Europe/Paris"}) == "fr-FR"

    def test_no_signal(self):
        """An empty environment gives None."""
        assert detect_environment_language({}) is None


class TestLanguageFromTimezone:
    """Tests for language_from_timezone()."""

    def test_known_zone(self):
        """Known zones map to a language."""
        assert language_from_timezone("Asia/Tokyo") == "ja-JP"
        assert language_from_timezone(":Asia/Seoul") == "ko-KR"

    def test_unknown_zone(self):
        """Unknown or empty zones give None."""
        assert language_from_timezone("Antarctica/Troll") is None
        assert language_from_timezone(None) is None


class TestDocumentAttributes:
    """Tests for DocumentAttributes."""

    def test_defaults(self):
        """Documents start left-to-right."""
        document = DocumentAttributes()
        assert document.dir == TextDirection.LTR
        assert not document.is_rtl

    def test_apply(self):
        """apply() sets lang and dir together."""
        document = DocumentAttributes()
        document.apply("ar-SA", TextDirection.RTL)
        assert document.lang == "ar-SA"
        assert document.is_rtl
