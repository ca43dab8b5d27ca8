"""Locale resolution logic for determining the initial active locale."""

from typing import Callable, Optional

from localization.catalog import LocaleCatalog
from localization.logging import get_module_logger
from localization.models import Locale
from localization.preferences import PreferenceStore

logger = get_module_logger()


class LocaleResolver:
    """Resolves the locale to activate at startup.

    Implements fallback chain for determining preferred locale:
    1. Persisted user preference (if supported)
    2. Best match for the environment language signal
    3. Default locale
    """

    def __init__(
        self,
        catalog: LocaleCatalog,
        preference_store: PreferenceStore,
        preference_key: str,
        environment_signal: Callable[[], Optional[str]],
        default_locale: str = "en-US",
    ):
        """Initialize locale resolver.

        Args:
            catalog: Registry of supported locales.
            preference_store: Store holding the persisted choice.
            preference_key: Key of the persisted choice.
            environment_signal: Callable returning the environment language tag.
            default_locale: Fallback locale code when no preference found.

        Raises:
            ValueError: If the default locale is not registered.
        """
        default = catalog.get(default_locale)
        if default is None:
            raise ValueError(f"Default locale is not supported: {default_locale}")

        self.catalog = catalog
        self.preference_store = preference_store
        self.preference_key = preference_key
        self.environment_signal = environment_signal
        self.default_locale: Locale = default
        self.log = logger.bind(default_locale=default.code)

    def resolve_initial_locale(self) -> Locale:
        """Resolve the initial locale using the fallback chain.

        Returns:
            Resolved Locale; never None.
        """
        locale = self.resolve_from_preference()
        if locale is not None:
            self.log.info("resolved_from_preference", locale=locale.code)
            return locale

        locale = self.resolve_from_environment()
        if locale is not None:
            self.log.info("resolved_from_environment", locale=locale.code)
            return locale

        self.log.info("resolved_to_default")
        return self.default_locale

    def resolve_from_preference(self) -> Optional[Locale]:
        """Get the persisted locale if it is still supported."""
        saved = self.preference_store.get(self.preference_key)
        if not saved:
            return None
        if not self.catalog.is_supported(saved):
            self.log.warning("ignored_unsupported_preference", saved=saved)
            return None
        return self.catalog.get(saved)

    def resolve_from_environment(self) -> Optional[Locale]:
        """Get the best registered match for the environment signal."""
        try:
            signal = self.environment_signal()
        except Exception as e:  # pylint: disable=broad-except
            self.log.warning("environment_signal_failed", error=str(e))
            return None

        if not signal:
            return None

        locale = self.catalog.find_best_match(signal)
        if locale is None:
            self.log.info("no_matching_locale_for_environment", signal=signal)
        return locale
