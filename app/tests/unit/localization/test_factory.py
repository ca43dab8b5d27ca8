"""Tests for localization.factory module."""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

import localization
from localization import I18n, InMemoryPreferenceStore, factory
from localization.environment import DocumentAttributes
from tests.factories.localization import make_locale, make_settings


@pytest.fixture
def file_settings(tmp_path):
    """Settings using the bundled catalogs and a temporary preference file."""
    return make_settings(LOCALE_PREFERENCE_FILE=str(tmp_path / "preferences.json"))


@pytest.fixture
def reset_instance(monkeypatch):
    """Isolate the process-wide instance."""
    monkeypatch.setattr(factory, "_instance", None)


class TestCreateI18n:
    """Tests for create_i18n()."""

    def test_bundled_catalogs(self, file_settings):
        """The bundled YAML catalogs are loaded."""
        i18n = factory.create_i18n(
            settings=file_settings,
            environment_signal=lambda: None,
            document=DocumentAttributes(),
        )

        assert isinstance(i18n, I18n)
        assert i18n.translate("navigation.home") == "Home"
        assert i18n.translate("common.welcome", {"name": "Ada"}) == "Welcome, Ada!"
        i18n.change_language("zh-CN")
        assert i18n.translate("navigation.home") == "首页"
        assert len(i18n.translate_list("investment.riskItems")) > 1

    def test_environment_signal_selects_locale(self, file_settings):
        """The environment signal picks the best registered match."""
        i18n = factory.create_i18n(
            settings=file_settings,
            environment_signal=lambda: "ja",
            document=DocumentAttributes(),
        )
        assert i18n.get_current_language() == "ja-JP"
        assert i18n.translate("navigation.home") == "ホーム"
        assert i18n.translate("navigation.vcRadar") == "VC Radar"

    def test_language_override_setting(self, tmp_path):
        """LOCALE_LANGUAGE feeds the default environment signal."""
        settings = make_settings(
            LOCALE_PREFERENCE_FILE=str(tmp_path / "preferences.json"),
            LOCALE_LANGUAGE="fr-CA",
        )
        i18n = factory.create_i18n(settings=settings, document=DocumentAttributes())
        assert i18n.get_current_language() == "fr-FR"

    def test_choice_persists_across_restart(self, file_settings):
        """The JSON preference file restores the last choice."""
        document = DocumentAttributes()
        first = factory.create_i18n(
            settings=file_settings, environment_signal=lambda: None, document=document
        )
        first.change_language("ar-SA")

        second = factory.create_i18n(
            settings=file_settings, environment_signal=lambda: "de-DE", document=document
        )

        assert second.get_current_language() == "ar-SA"
        assert document.is_rtl
        assert file_settings.PREFERENCE_FILE.exists()

    def test_unsupported_default_locale(self):
        """A default locale outside the registry is rejected."""
        with pytest.raises(ValueError, match="Default locale is not supported"):
            factory.create_i18n(
                settings=make_settings(LOCALE_DEFAULT="xx-XX"),
                preference_store=InMemoryPreferenceStore(),
            )

    def test_custom_locales(self, file_settings):
        """A custom locale list replaces the defaults."""
        i18n = factory.create_i18n(
            settings=file_settings,
            locales=[make_locale(), make_locale("fr-FR", "Français", "🇫🇷", "FR")],
            environment_signal=lambda: None,
            document=DocumentAttributes(),
        )
        codes = [locale.code for locale in i18n.get_supported_locales()]
        assert codes == ["en-US", "fr-FR"]

    def test_missing_translations_dir(self, tmp_path):
        """A missing translations directory is a configuration error."""
        settings = make_settings(LOCALE_TRANSLATIONS_DIR=str(tmp_path / "nowhere"))
        with pytest.raises(ValueError):
            factory.create_i18n(
                settings=settings, preference_store=InMemoryPreferenceStore()
            )


class TestProcessInstance:
    """Tests for initialize_i18n() and get_i18n()."""

    def test_initialize_is_idempotent(self, reset_instance, file_settings):
        """Later calls return the first instance."""
        first = factory.initialize_i18n(
            settings=file_settings, environment_signal=lambda: None
        )
        assert factory.initialize_i18n() is first
        assert factory.get_i18n() is first

    @patch("localization.factory.logger")
    def test_ignored_arguments_are_logged(self, mock_logger, reset_instance, file_settings):
        """Arguments after initialization are ignored with a warning."""
        factory.initialize_i18n(settings=file_settings, environment_signal=lambda: None)
        factory.initialize_i18n(settings=file_settings)

        mock_logger.warning.assert_called_once_with(
            "i18n_already_initialized", ignored=["settings"]
        )

    def test_get_i18n_builds_on_first_use(self, reset_instance, monkeypatch, file_settings):
        """get_i18n() builds the instance with the module settings."""
        monkeypatch.setattr(factory, "default_settings", file_settings)
        monkeypatch.setattr(
            "localization.environment.detect_environment_language",
            lambda override=None: None,
        )
        i18n = factory.get_i18n()
        assert i18n.get_current_language() == "en-US"
        assert factory.get_i18n() is i18n


class TestModuleShortcuts:
    """Tests for the module-level shortcuts over the process-wide instance."""

    def test_shortcuts_use_shared_instance(self, reset_instance, file_settings):
        """Shortcuts read and change the process-wide engine."""
        i18n = factory.initialize_i18n(
            settings=file_settings,
            environment_signal=lambda: None,
            document=DocumentAttributes(),
        )

        assert localization.t("navigation.home") == "Home"
        localization.change_language("zh-CN")

        assert i18n.get_current_language() == "zh-CN"
        assert localization.get_current_language() == "zh-CN"
        assert localization.translate("common.welcome", {"name": "Ada"}) == "欢迎，Ada！"

    def test_formatting_shortcuts(self, reset_instance, file_settings):
        """Formatting shortcuts follow the shared engine's locale."""
        factory.initialize_i18n(
            settings=file_settings,
            environment_signal=lambda: "de-DE",
            document=DocumentAttributes(),
        )

        assert factory.format_number(1234.5) == "1.234,5"
        assert factory.format_currency(1234.5, "eur").startswith("1.234,50")
        assert factory.format_date(date(2024, 1, 15), {"format": "yyyy-MM-dd"}) == "2024-01-15"
        assert "Tag" in factory.format_relative_time(
            datetime.now(timezone.utc) + timedelta(days=3)
        )
