"""Registry of supported locales.

The set of locales is fixed when the registry is built; lookups never
mutate it.
"""

from typing import Iterable, Optional, Tuple

from localization.logging import get_module_logger
from localization.models import Locale

logger = get_module_logger()

DEFAULT_LOCALES: Tuple[Locale, ...] = (
    Locale(code="en-US", display_name="English", flag="🇺🇸", short_code="EN"),
    Locale(code="zh-CN", display_name="中文", flag="🇨🇳", short_code="CN"),
    Locale(code="ja-JP", display_name="日本語", flag="🇯🇵", short_code="JP"),
    Locale(code="ko-KR", display_name="한국어", flag="🇰🇷", short_code="KR"),
    Locale(code="es-ES", display_name="Español", flag="🇪🇸", short_code="ES"),
    Locale(code="fr-FR", display_name="Français", flag="🇫🇷", short_code="FR"),
    Locale(code="de-DE", display_name="Deutsch", flag="🇩🇪", short_code="DE"),
    Locale(code="ar-SA", display_name="العربية", flag="🇸🇦", short_code="SA", rtl=True),
)


def normalize_tag(tag: str) -> str:
    """Normalize an OS or browser language tag to BCP 47 form.

    Strips encoding and modifier suffixes and uses "-" as separator
    (e.g., "en_GB.UTF-8" -> "en-GB").

    Args:
        tag: Raw language tag.

    Returns:
        Normalized tag, or an empty string if nothing usable is left.
    """
    tag = tag.strip().split(".")[0].split("@")[0]
    return tag.replace("_", "-")


class LocaleCatalog:
    """Ordered registry of supported locales.

    Attributes:
        locales: Registered locales in registration order.
    """

    def __init__(self, locales: Iterable[Locale] = DEFAULT_LOCALES):
        """Initialize the registry.

        Args:
            locales: Locales to register, in the order they should be listed.

        Raises:
            ValueError: If two locales share a code or the registry is empty.
        """
        self.locales: Tuple[Locale, ...] = tuple(locales)
        self._by_code = {}
        for locale in self.locales:
            if locale.code in self._by_code:
                raise ValueError(f"Duplicate locale code: {locale.code}")
            self._by_code[locale.code] = locale

        if not self.locales:
            raise ValueError("At least one locale must be registered")

        logger.debug(
            "initialized_locale_catalog",
            locale_codes=[locale.code for locale in self.locales],
        )

    def is_supported(self, code: Optional[str]) -> bool:
        """Check whether a code is registered exactly as given."""
        return code is not None and code in self._by_code

    def get(self, code: Optional[str]) -> Optional[Locale]:
        """Get the registered locale for an exact code, or None."""
        if code is None:
            return None
        return self._by_code.get(code)

    def all(self) -> Tuple[Locale, ...]:
        """Get every registered locale in registration order."""
        return self.locales

    def find_best_match(self, requested: Optional[str]) -> Optional[Locale]:
        """Find the registered locale that best matches a requested tag.

        Tries an exact (case-insensitive) match first, then matches the
        language part of the request (e.g., "en" from "en-GB") against the
        language part of each registered code. Ties go to the locale
        registered first.

        Args:
            requested: Requested language tag (e.g., "en-GB", "fr_CA.UTF-8").

        Returns:
            Matching Locale, or None if nothing matches.
        """
        if not requested:
            return None

        tag = normalize_tag(requested)
        if not tag:
            return None

        for locale in self.locales:
            if locale.code.lower() == tag.lower():
                return locale

        language = tag.split("-")[0].lower()
        for locale in self.locales:
            if locale.language.lower() == language:
                return locale

        return None
