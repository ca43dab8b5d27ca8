"""Localization models.

Defines the core data structures shared by the locale registry, the
translation store and the facade.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

# A catalog leaf is either a single template or an ordered list of templates.
CatalogLeaf = Union[str, List[str]]


class _Missing:
    """Sentinel returned when a translation key cannot be resolved."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class TextDirection(str, Enum):
    """Text direction of a document or application surface."""

    LTR = "ltr"
    RTL = "rtl"


@dataclass(frozen=True)
class Locale:
    """A supported locale and its display metadata.

    Frozen so that the registry can hand instances out without copying.

    Attributes:
        code: IETF BCP 47 language tag (e.g., "en-US", "zh-CN").
        display_name: Name of the language in that language (e.g., "Deutsch").
        flag: Flag glyph shown next to the name.
        short_code: Compact label for narrow switchers (e.g., "EN").
        rtl: Whether the script is written right-to-left.
    """

    code: str
    display_name: str
    flag: str = ""
    short_code: str = ""
    rtl: bool = False

    @property
    def language(self) -> str:
        """Get language part of locale (e.g., "en" from "en-US").

        Returns:
            Language code.
        """
        return self.code.split("-")[0]

    @property
    def region(self) -> str:
        """Get region part of locale (e.g., "US" from "en-US").

        Returns:
            Region code.
        """
        parts = self.code.split("-")
        return parts[1] if len(parts) > 1 else ""

    @property
    def direction(self) -> TextDirection:
        """Text direction used when this locale is active."""
        return TextDirection.RTL if self.rtl else TextDirection.LTR


@dataclass(frozen=True)
class TranslationKey:
    """Hierarchical translation key (e.g., "navigation.home").

    Frozen to ensure immutability and hashability for caching.

    Attributes:
        parts: Path segments from the catalog root to the leaf.
    """

    parts: Tuple[str, ...]

    def __str__(self) -> str:
        """Return full dot-separated key path.

        Returns:
            Full key (e.g., "home.features.aiMatching").
        """
        return ".".join(self.parts)

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from dot-separated string.

        Empty segments are kept; they simply never match a catalog section.

        Args:
            key_string: Dot-separated key (e.g., "navigation.home").

        Returns:
            TranslationKey instance.
        """
        return cls(parts=tuple(key_string.split(".")))

    @property
    def namespace(self) -> str:
        """Top-level section of the key (e.g., "navigation")."""
        return self.parts[0]


@dataclass
class TranslationCatalog:
    """Container for the translation tree of a single locale.

    Attributes:
        locale_code: Code of the locale this catalog is for.
        messages: Nested dict; interior nodes are sections, leaves are
            templates or lists of templates.
        loaded_at: Timestamp (ISO 8601) when translations were loaded.
    """

    locale_code: str
    messages: Dict[str, Any] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def lookup(self, key: TranslationKey) -> Any:
        """Walk the tree along the key path.

        Args:
            key: TranslationKey to look up.

        Returns:
            The node found at the end of the path (leaf or section), or
            MISSING if any segment is absent.
        """
        node: Any = self.messages
        for part in key.parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return MISSING
        return node

    def get_message(self, key: TranslationKey) -> Union[CatalogLeaf, _Missing]:
        """Retrieve a leaf by key.

        Args:
            key: TranslationKey to look up.

        Returns:
            The template or list of templates, or MISSING when the path is
            absent or ends on a section.
        """
        node = self.lookup(key)
        if isinstance(node, (str, list)):
            return node
        return MISSING

    def has_message(self, key: TranslationKey) -> bool:
        """Check if a leaf exists for given key.

        Args:
            key: TranslationKey to check.

        Returns:
            True if a leaf exists, False otherwise.
        """
        return self.get_message(key) is not MISSING

    def get_namespace(self, namespace: str) -> Dict[str, Any]:
        """Get the section stored under a top-level namespace.

        Args:
            namespace: Namespace identifier (e.g., "navigation").

        Returns:
            Dictionary of the namespace, empty if absent.
        """
        section = self.messages.get(namespace, {})
        return section if isinstance(section, dict) else {}

    def merge(self, other: "TranslationCatalog") -> None:
        """Deep-merge another catalog into this one.

        Later entries override earlier ones; sections are merged recursively.

        Args:
            other: TranslationCatalog to merge.
        """
        _deep_merge(self.messages, other.messages)


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for name, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(name), dict):
            _deep_merge(target[name], value)
        elif isinstance(value, dict):
            target[name] = {}
            _deep_merge(target[name], value)
        else:
            target[name] = value
