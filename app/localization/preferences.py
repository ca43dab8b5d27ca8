"""Durable storage for the active-locale preference."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from localization.logging import get_module_logger

logger = get_module_logger()


class PreferenceStore(ABC):
    """Abstract key/value store for user preferences.

    Implementations must never raise to callers; storage problems are
    logged and reported as a missing value or a failed write.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the stored value for a key.

        Args:
            key: Preference key.

        Returns:
            Stored value, or None if absent or unreadable.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Store a value for a key.

        Args:
            key: Preference key.
            value: Value to store.

        Returns:
            True if the value was stored.
        """
        pass


class InMemoryPreferenceStore(PreferenceStore):
    """Preference store backed by a dict.

    Survives only as long as the instance; share one instance to simulate
    a restart in tests.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True


class JSONFilePreferenceStore(PreferenceStore):
    """Preference store persisted as a flat JSON object on disk.

    Attributes:
        path: File holding the preferences.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            logger.error(
                "preference_write_failed", path=str(self.path), key=key, error=str(e)
            )
            return False

        logger.debug("preference_written", path=str(self.path), key=key)
        return True

    def _read(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(
                "preference_read_failed", path=str(self.path), error=str(e)
            )
            return {}

        if not isinstance(data, dict):
            logger.warning(
                "invalid_preference_format", path=str(self.path), expected="dict"
            )
            return {}
        return data
