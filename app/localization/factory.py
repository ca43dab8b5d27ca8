"""Factory functions for creating the localization engine.

Provides wiring with default configurations and ownership of the single
process-wide I18n instance.
"""

from datetime import datetime
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from localization import environment
from localization.catalog import DEFAULT_LOCALES, LocaleCatalog
from localization.config import LocalizationSettings
from localization.config import settings as default_settings
from localization.facade import I18n
from localization.formatting import FormattingBackend
from localization.loader import TranslationLoader, YAMLTranslationLoader
from localization.logging import get_module_logger
from localization.models import Locale
from localization.preferences import JSONFilePreferenceStore, PreferenceStore
from localization.resolvers import LocaleResolver
from localization.store import TranslationStore

logger = get_module_logger()

_instance: Optional[I18n] = None


def create_i18n(
    settings: Optional[LocalizationSettings] = None,
    locales: Iterable[Locale] = DEFAULT_LOCALES,
    loader: Optional[TranslationLoader] = None,
    preference_store: Optional[PreferenceStore] = None,
    environment_signal: Optional[Callable[[], Optional[str]]] = None,
    formatting_backend: Optional[FormattingBackend] = None,
    clock: Optional[Callable[[], datetime]] = None,
    document: Optional[environment.DocumentAttributes] = None,
) -> I18n:
    """Create and configure an I18n instance.

    Every collaborator defaults to the configured production choice and can
    be replaced, which is how tests avoid touching the real environment.

    Args:
        settings: Localization settings (default: module-level settings).
        locales: Supported locales in display order.
        loader: Translation loader (default: YAML from TRANSLATIONS_DIR).
        preference_store: Persisted preference (default: JSON PREFERENCE_FILE).
        environment_signal: Callable returning the environment language tag
            (default: LOCALE_LANGUAGE override, then POSIX variables and TZ).
        formatting_backend: Formatting facility (default: Babel).
        clock: "Now" for relative time (default: current UTC time).
        document: Document attributes to keep in sync (default: process-wide).

    Returns:
        I18n: Ready engine with its initial locale resolved.

    Raises:
        ValueError: If the locale configuration or translations directory
            is invalid.

    Usage:
        i18n = create_i18n()

        # Custom translations directory
        i18n = create_i18n(
            settings=LocalizationSettings(LOCALE_TRANSLATIONS_DIR="/srv/locales")
        )
    """
    settings = settings or default_settings

    catalog = LocaleCatalog(locales)
    if not catalog.is_supported(settings.DEFAULT_LOCALE):
        raise ValueError(f"Default locale is not supported: {settings.DEFAULT_LOCALE}")

    if loader is None:
        loader = YAMLTranslationLoader(translations_dir=Path(settings.TRANSLATIONS_DIR))
    store = TranslationStore(loader=loader, default_locale=settings.DEFAULT_LOCALE)
    store.load_all()

    if preference_store is None:
        preference_store = JSONFilePreferenceStore(Path(settings.PREFERENCE_FILE))

    if environment_signal is None:
        environment_signal = partial(
            environment.detect_environment_language,
            override=settings.LANGUAGE_OVERRIDE,
        )

    resolver = LocaleResolver(
        catalog=catalog,
        preference_store=preference_store,
        preference_key=settings.PREFERENCE_KEY,
        environment_signal=environment_signal,
        default_locale=settings.DEFAULT_LOCALE,
    )

    i18n = I18n(
        catalog=catalog,
        store=store,
        resolver=resolver,
        preference_store=preference_store,
        preference_key=settings.PREFERENCE_KEY,
        formatting_backend=formatting_backend,
        clock=clock,
        default_currency=settings.DEFAULT_CURRENCY,
        document=document or environment.document,
    )

    logger.info(
        "i18n_created",
        locale=i18n.get_current_language(),
        loaded_locales=store.get_available_locales(),
    )
    return i18n


def initialize_i18n(**kwargs) -> I18n:
    """Build the process-wide I18n instance.

    Idempotent: once built, the same instance is returned and the
    arguments of later calls are ignored.

    Args:
        **kwargs: Passed to create_i18n().

    Returns:
        The process-wide I18n instance.
    """
    global _instance
    if _instance is None:
        _instance = create_i18n(**kwargs)
    elif kwargs:
        logger.warning("i18n_already_initialized", ignored=sorted(kwargs))
    return _instance


def get_i18n() -> I18n:
    """Get the process-wide I18n instance, building it with defaults if needed."""
    return initialize_i18n()


# Module-level shortcuts over the process-wide instance


def translate(key: str, params: Optional[Mapping[str, Any]] = None) -> str:
    return get_i18n().translate(key, params)


t = translate


def change_language(code: str) -> None:
    get_i18n().change_language(code)


def get_current_language() -> str:
    return get_i18n().get_current_language()


def format_number(value: Any, options: Optional[Dict[str, Any]] = None) -> str:
    return get_i18n().format_number(value, options)


def format_currency(value: Any, currency: Optional[str] = None) -> str:
    return get_i18n().format_currency(value, currency)


def format_date(value: Any, options: Optional[Dict[str, Any]] = None) -> str:
    return get_i18n().format_date(value, options)


def format_relative_time(value: datetime) -> str:
    return get_i18n().format_relative_time(value)
