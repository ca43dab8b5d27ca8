"""Per-locale translation trees with default-locale fallback."""

from typing import Dict, List, Optional, Set, Union

from localization.loader import TranslationLoader
from localization.logging import get_module_logger
from localization.models import (
    MISSING,
    CatalogLeaf,
    TranslationCatalog,
    TranslationKey,
    _Missing,
)

logger = get_module_logger()


class TranslationStore:
    """Holds translation catalogs and resolves hierarchical keys.

    A key is first looked up in the requested locale, then in the default
    locale. When both fail the store returns MISSING and reports the key
    once; later misses of the same key stay silent.

    Attributes:
        loader: TranslationLoader providing the catalogs.
        default_locale: Locale code consulted when the requested one misses.
        catalogs: Loaded TranslationCatalogs by locale code.
    """

    def __init__(self, loader: TranslationLoader, default_locale: str = "en-US"):
        """Initialize the store.

        Args:
            loader: TranslationLoader instance for loading translations.
            default_locale: Locale code used as fallback (default: en-US).
        """
        self.loader = loader
        self.default_locale = default_locale
        self.catalogs: Dict[str, TranslationCatalog] = {}
        self._reported_missing: Set[str] = set()
        logger.info("initialized_translation_store", default_locale=default_locale)

    def load_all(self) -> None:
        """Load all available locales from loader."""
        self.catalogs = self.loader.load_all()
        if self.default_locale not in self.catalogs:
            logger.warning("default_locale_catalog_missing", locale=self.default_locale)
        logger.info("loaded_all_translations", locale_count=len(self.catalogs))

    def load_locale(self, locale_code: str) -> None:
        """Load specific locale from loader.

        Raises:
            FileNotFoundError: If translation data not found.
        """
        self.catalogs[locale_code] = self.loader.load(locale_code)
        logger.info("loaded_locale_translations", locale=locale_code)

    def reload(self) -> None:
        """Reload all translations from loader.

        Keys already reported missing stay reported for the rest of the run.
        """
        self.catalogs = {}
        self.load_all()
        logger.info("reloaded_all_translations")

    def resolve(
        self, locale_code: str, dot_path: Union[str, TranslationKey]
    ) -> Union[CatalogLeaf, _Missing]:
        """Resolve a key to its template or list of templates.

        Args:
            locale_code: Locale to look the key up in first.
            dot_path: Dot-separated key (e.g., "navigation.home").

        Returns:
            The template string or a copy of the template list, or MISSING
            when neither the requested nor the default locale has the key.
        """
        key = (
            dot_path
            if isinstance(dot_path, TranslationKey)
            else TranslationKey.from_string(dot_path)
        )

        message = self._lookup(locale_code, key)
        if message is MISSING and locale_code != self.default_locale:
            message = self._lookup(self.default_locale, key)
            if message is not MISSING:
                logger.debug(
                    "used_fallback_translation",
                    key=str(key),
                    requested_locale=locale_code,
                    fallback_locale=self.default_locale,
                )

        if message is MISSING:
            self.report_missing(str(key), locale_code)
            return MISSING

        if isinstance(message, list):
            return list(message)
        return message

    def has_message(self, locale_code: str, dot_path: str) -> bool:
        """Check if a key exists in a locale, without fallback."""
        return self._lookup(locale_code, TranslationKey.from_string(dot_path)) is not MISSING

    def get_available_locales(self) -> List[str]:
        """Get list of loaded locale codes."""
        return list(self.catalogs.keys())

    def get_catalog(self, locale_code: str) -> Optional[TranslationCatalog]:
        """Get complete catalog for a locale, or None if not loaded."""
        return self.catalogs.get(locale_code)

    def report_missing(self, key: str, locale_code: str, reason: str = "not_found") -> None:
        """Log a translation problem once per distinct key.

        Args:
            key: Dot-separated key that could not be used.
            locale_code: Locale that was requested.
            reason: "not_found" or "not_a_string".
        """
        if key in self._reported_missing:
            return
        self._reported_missing.add(key)
        event = (
            "translation_not_a_string" if reason == "not_a_string" else "translation_not_found"
        )
        logger.warning(
            event,
            key=key,
            locale=locale_code,
            fallback_locale=self.default_locale,
        )

    def _lookup(
        self, locale_code: str, key: TranslationKey
    ) -> Union[CatalogLeaf, _Missing]:
        catalog = self.catalogs.get(locale_code)
        if catalog is None:
            return MISSING
        return catalog.get_message(key)
