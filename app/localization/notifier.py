"""Observer registry for locale changes.

Subscribers are called synchronously, in registration order, on the thread
that publishes. A failing subscriber is logged and skipped.
"""

import itertools
from typing import Callable, Dict, List

from localization.logging import get_module_logger

logger = get_module_logger()

LocaleListener = Callable[[str], None]
Unsubscribe = Callable[[], None]


class ChangeNotifier:
    """Registry of locale-change listeners.

    Each subscription gets its own token, so the same callable may be
    subscribed twice and each handle removes only its own registration.
    """

    def __init__(self):
        self._listeners: Dict[int, LocaleListener] = {}
        self._tokens = itertools.count(1)

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, callback: LocaleListener) -> Unsubscribe:
        """Register a listener.

        Args:
            callback: Called with the new locale code on every change.

        Returns:
            Idempotent callable removing this registration.
        """
        token = next(self._tokens)
        self._listeners[token] = callback
        logger.debug(
            "registered_locale_listener",
            listener=getattr(callback, "__name__", "unknown"),
            total_listeners=len(self._listeners),
        )

        def unsubscribe() -> None:
            if self._listeners.pop(token, None) is not None:
                logger.debug(
                    "unregistered_locale_listener",
                    total_listeners=len(self._listeners),
                )

        return unsubscribe

    def publish(self, locale_code: str) -> List[LocaleListener]:
        """Call every registered listener with the new locale code.

        Iterates over a snapshot taken on entry: listeners added or removed
        by a callback take effect on the next publish.

        Args:
            locale_code: Code of the locale that just became active.

        Returns:
            Listeners that raised.
        """
        snapshot = list(self._listeners.values())
        failed = []

        logger.debug(
            "publishing_locale_change",
            locale=locale_code,
            listener_count=len(snapshot),
        )

        for callback in snapshot:
            try:
                callback(locale_code)
            except Exception as e:  # pylint: disable=broad-except
                failed.append(callback)
                logger.error(
                    "listener_failed",
                    listener=getattr(callback, "__name__", "unknown"),
                    locale=locale_code,
                    error=str(e),
                )

        return failed

    def clear(self) -> None:
        """Remove every listener (process teardown)."""
        self._listeners.clear()
