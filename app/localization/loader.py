"""Translation loading interface and implementations.

Defines the contract for loading translation catalogs and provides YAML and
in-memory loaders.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from localization.logging import get_module_logger
from localization.models import TranslationCatalog

logger = get_module_logger()

_LOCALE_CODE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations must define how to load and parse translation data
    for different locales.
    """

    @abstractmethod
    def load(self, locale_code: str) -> TranslationCatalog:
        """Load translations for a specific locale.

        Args:
            locale_code: Code of the locale to load (e.g., "en-US").

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If no translation data exists for the locale.
            ValueError: If translation format is invalid.
        """
        pass

    @abstractmethod
    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load translations for every locale the source provides.

        Returns:
            Dict mapping locale code to TranslationCatalog.
        """
        pass


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML-based translation files.

    Expects files named <locale>.yml or <namespace>.<locale>.yml in the
    translations directory. All files for a locale are deep-merged into a
    single catalog, in file name order.

    Attributes:
        translations_dir: Path to directory containing YAML files.
        cache: Cache of loaded catalogs (locale code -> catalog).
    """

    def __init__(
        self,
        translations_dir: Path,
        use_cache: bool = True,
    ):
        """Initialize YAML translation loader.

        Args:
            translations_dir: Path to directory with YAML translation files.
            use_cache: Whether to cache loaded catalogs in memory.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)
        self.use_cache = use_cache
        self.cache: Dict[str, TranslationCatalog] = {}

        if not self.translations_dir.is_dir():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
            use_cache=use_cache,
        )

    def load(self, locale_code: str) -> TranslationCatalog:
        """Load translations for a locale from YAML files.

        Args:
            locale_code: Locale to load.

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If no YAML files found for locale.
            ValueError: If YAML parsing fails.
        """
        if self.use_cache and locale_code in self.cache:
            logger.debug("loaded_from_cache", locale=locale_code)
            return self.cache[locale_code]

        yaml_files = sorted(
            path
            for path in self.translations_dir.glob("*.yml")
            if _locale_from_filename(path) == locale_code
        )

        if not yaml_files:
            raise FileNotFoundError(
                f"No translation files found for locale {locale_code} in {self.translations_dir}"
            )

        catalog = TranslationCatalog(
            locale_code=locale_code,
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )
        for yaml_file in yaml_files:
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

            if data is None:
                continue
            if not isinstance(data, dict):
                logger.warning(
                    "invalid_yaml_format", file=str(yaml_file), expected="dict"
                )
                continue

            catalog.merge(
                TranslationCatalog(
                    locale_code=locale_code,
                    messages=sanitize_tree(data, source=str(yaml_file)),
                )
            )

        logger.info(
            "loaded_translations",
            locale=locale_code,
            file_count=len(yaml_files),
            namespace_count=len(catalog.messages),
        )

        if self.use_cache:
            self.cache[locale_code] = catalog

        return catalog

    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load translations for all locales found in the directory.

        Returns:
            Dict mapping each locale code to its TranslationCatalog.

        Raises:
            ValueError: If no translation files found at all.
        """
        locales_found = set()
        for yaml_file in self.translations_dir.glob("*.yml"):
            locale_code = _locale_from_filename(yaml_file)
            if locale_code:
                locales_found.add(locale_code)

        if not locales_found:
            raise ValueError(f"No translation files found in {self.translations_dir}")

        result = {}
        for locale_code in sorted(locales_found):
            try:
                result[locale_code] = self.load(locale_code)
            except FileNotFoundError:
                logger.warning("could_not_load_locale", locale=locale_code)

        return result

    def clear_cache(self) -> None:
        """Clear all cached translations."""
        self.cache.clear()
        logger.info("cleared_translation_cache")


class DictTranslationLoader(TranslationLoader):
    """Loader serving catalogs that are already in memory.

    Used when catalogs are embedded in the host application or built in tests.
    """

    def __init__(self, translations: Mapping[str, Mapping[str, Any]]):
        """Initialize the loader.

        Args:
            translations: Mapping of locale code to nested translation tree.
        """
        self.translations = translations

    def load(self, locale_code: str) -> TranslationCatalog:
        if locale_code not in self.translations:
            raise FileNotFoundError(f"No translations provided for {locale_code}")
        return TranslationCatalog(
            locale_code=locale_code,
            messages=sanitize_tree(
                self.translations[locale_code], source=f"dict:{locale_code}"
            ),
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )

    def load_all(self) -> Dict[str, TranslationCatalog]:
        return {code: self.load(code) for code in self.translations}


def sanitize_tree(data: Mapping[str, Any], source: str, path: str = "") -> Dict[str, Any]:
    """Copy a translation tree, keeping only valid sections and leaves.

    A leaf is a string or a list of strings; anything else is dropped with
    a warning.

    Args:
        data: Parsed translation tree.
        source: Where the tree came from (for logging).
        path: Dot path of ``data`` inside the full tree.

    Returns:
        Sanitized copy of the tree.
    """
    result: Dict[str, Any] = {}
    for name, value in data.items():
        name = str(name)
        key = f"{path}.{name}" if path else name
        if isinstance(value, dict):
            result[name] = sanitize_tree(value, source, key)
        elif isinstance(value, str):
            result[name] = value
        elif isinstance(value, list) and all(isinstance(item, str) for item in value):
            result[name] = list(value)
        else:
            logger.warning(
                "invalid_translation_leaf",
                source=source,
                key=key,
                value_type=type(value).__name__,
            )
    return result


def _locale_from_filename(path: Path) -> str:
    # "navigation.en-US.yml" -> "en-US", "en-US.yml" -> "en-US"
    locale_code = path.stem.split(".")[-1]
    if _LOCALE_CODE_PATTERN.match(locale_code):
        return locale_code
    return ""
