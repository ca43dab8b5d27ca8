"""Localization engine - locale resolution, translation and formatting.

Resolves the active locale, looks up translations by hierarchical key,
substitutes runtime parameters, formats numbers and dates per locale and
notifies listeners when the locale changes.

Main components:
- models: Locale, TranslationKey, TranslationCatalog
- catalog: LocaleCatalog registry of supported locales
- loader: TranslationLoader, YAMLTranslationLoader, DictTranslationLoader
- store: TranslationStore with default-locale fallback
- interpolation: Interpolator for {{name}} placeholders
- resolvers: LocaleResolver for the initial locale
- formatting: LocaleFormatter and its Babel backend
- notifier: ChangeNotifier for locale-change listeners
- facade: I18n public API
- factory: create_i18n, initialize_i18n, get_i18n and module-level
  shortcuts (translate, t, change_language, format_*) over the shared instance
"""

from localization.catalog import DEFAULT_LOCALES, LocaleCatalog
from localization.facade import I18n
from localization.factory import (
    change_language,
    create_i18n,
    format_currency,
    format_date,
    format_number,
    format_relative_time,
    get_current_language,
    get_i18n,
    initialize_i18n,
    t,
    translate,
)
from localization.formatting import (
    BabelFormattingBackend,
    FormattingBackend,
    LocaleFormatter,
)
from localization.interpolation import Interpolator
from localization.loader import (
    DictTranslationLoader,
    TranslationLoader,
    YAMLTranslationLoader,
)
from localization.models import (
    MISSING,
    Locale,
    TextDirection,
    TranslationCatalog,
    TranslationKey,
)
from localization.notifier import ChangeNotifier
from localization.preferences import (
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
)
from localization.resolvers import LocaleResolver
from localization.store import TranslationStore

__all__ = [
    "DEFAULT_LOCALES",
    "MISSING",
    "BabelFormattingBackend",
    "ChangeNotifier",
    "DictTranslationLoader",
    "FormattingBackend",
    "I18n",
    "InMemoryPreferenceStore",
    "Interpolator",
    "JSONFilePreferenceStore",
    "Locale",
    "LocaleCatalog",
    "LocaleFormatter",
    "LocaleResolver",
    "PreferenceStore",
    "TextDirection",
    "TranslationCatalog",
    "TranslationKey",
    "TranslationLoader",
    "TranslationStore",
    "YAMLTranslationLoader",
    "change_language",
    "create_i18n",
    "format_currency",
    "format_date",
    "format_number",
    "format_relative_time",
    "get_current_language",
    "get_i18n",
    "initialize_i18n",
    "t",
    "translate",
]
