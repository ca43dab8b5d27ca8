"""Public localization API.

I18n ties the locale registry, translation store, interpolator, formatter
and change notifier together. None of its public methods raise: failures
degrade to a best-effort string and a log line.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from localization.catalog import LocaleCatalog
from localization.environment import DocumentAttributes
from localization.formatting import FormattingBackend, LocaleFormatter
from localization.interpolation import Interpolator
from localization.logging import get_module_logger
from localization.models import MISSING, Locale
from localization.notifier import ChangeNotifier, LocaleListener, Unsubscribe
from localization.preferences import PreferenceStore
from localization.resolvers import LocaleResolver
from localization.store import TranslationStore

logger = get_module_logger()


class I18n:
    """Localization engine for one process.

    The active locale is resolved once, during construction, and changes
    only through change_language().

    Usage:
        i18n = create_i18n()
        i18n.translate("navigation.home")
        unsubscribe = i18n.add_listener(lambda code: refresh(code))
        i18n.change_language("zh-CN")
    """

    def __init__(
        self,
        catalog: LocaleCatalog,
        store: TranslationStore,
        resolver: LocaleResolver,
        preference_store: PreferenceStore,
        preference_key: str,
        formatting_backend: Optional[FormattingBackend] = None,
        clock: Optional[Callable[[], datetime]] = None,
        default_currency: str = "USD",
        interpolator: Optional[Interpolator] = None,
        notifier: Optional[ChangeNotifier] = None,
        document: Optional[DocumentAttributes] = None,
    ):
        self.catalog = catalog
        self.store = store
        self.preference_store = preference_store
        self.preference_key = preference_key
        self.interpolator = interpolator or Interpolator()
        self.notifier = notifier or ChangeNotifier()
        self.document = document or DocumentAttributes()
        self.formatter = LocaleFormatter(
            locale_provider=self.get_current_language,
            backend=formatting_backend,
            clock=clock,
            default_currency=default_currency,
        )

        locale = resolver.resolve_initial_locale()
        self._current_locale: Locale = locale
        self.document.apply(locale.code, locale.direction)
        logger.info("i18n_ready", locale=locale.code, rtl=locale.rtl)

    # Translation

    def translate(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Translate a key for the active locale.

        Args:
            key: Dot-separated key (e.g., "navigation.home").
            params: Values for {{name}} placeholders.

        Returns:
            Interpolated translation, or the key itself when no string
            translation exists.
        """
        if not isinstance(key, str):
            logger.warning("invalid_translation_key", key=repr(key))
            return str(key)

        code = self._current_locale.code
        message = self.store.resolve(code, key)
        if message is MISSING:
            return key
        if not isinstance(message, str):
            self.store.report_missing(key, code, reason="not_a_string")
            return key
        return self.interpolator.interpolate(message, params)

    t = translate

    def translate_list(
        self, key: str, params: Optional[Mapping[str, Any]] = None
    ) -> List[str]:
        """Translate a key whose value is a list of templates.

        A single string value is returned as a one-element list.

        Returns:
            Interpolated templates, or an empty list if the key is missing.
        """
        if not isinstance(key, str):
            logger.warning("invalid_translation_key", key=repr(key))
            return []

        message = self.store.resolve(self._current_locale.code, key)
        if message is MISSING:
            return []
        templates = [message] if isinstance(message, str) else message
        return [self.interpolator.interpolate(template, params) for template in templates]

    def has_translation(self, key: str, code: Optional[str] = None) -> bool:
        """Check whether a locale (default: active) defines key itself."""
        return self.store.has_message(code or self._current_locale.code, key)

    # Locale state

    def change_language(self, code: str) -> None:
        """Activate another supported locale.

        Unsupported codes are logged and ignored. Otherwise the choice is
        persisted, document attributes are updated and every listener has
        been called by the time this returns.

        Args:
            code: Locale code to activate (e.g., "ja-JP").
        """
        locale = self.catalog.get(code)
        if locale is None:
            logger.warning(
                "unsupported_locale_requested",
                requested=code,
                current=self._current_locale.code,
            )
            return

        previous = self._current_locale.code
        self._current_locale = locale

        if not self.preference_store.set(self.preference_key, locale.code):
            logger.warning("locale_preference_not_persisted", locale=locale.code)

        self.document.apply(locale.code, locale.direction)
        logger.info("locale_changed", previous=previous, locale=locale.code)

        self.notifier.publish(locale.code)

    def get_current_language(self) -> str:
        return self._current_locale.code

    def get_current_locale_info(self) -> Optional[Locale]:
        return self.catalog.get(self._current_locale.code)

    def get_supported_locales(self) -> Tuple[Locale, ...]:
        return self.catalog.all()

    def is_rtl(self) -> bool:
        return self._current_locale.rtl

    def add_listener(self, callback: LocaleListener) -> Unsubscribe:
        """Register a locale-change listener; returns its unsubscribe handle."""
        return self.notifier.subscribe(callback)

    # Formatting

    def format_number(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        return self.formatter.format_number(value, options)

    def format_percent(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        return self.formatter.format_percent(value, options)

    def format_currency(self, value: Any, currency: Optional[str] = None) -> str:
        return self.formatter.format_currency(value, currency)

    def format_date(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        return self.formatter.format_date(value, options)

    def format_time(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        return self.formatter.format_time(value, options)

    def format_relative_time(self, value: datetime) -> str:
        return self.formatter.format_relative_time(value)
