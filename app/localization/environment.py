"""Environment language signal and ambient document attributes.

The environment signal is a best-effort language tag taken from the
process environment. Document attributes are the application-level
``lang`` and ``dir`` values that follow the active locale.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from localization.catalog import normalize_tag
from localization.logging import get_module_logger
from localization.models import TextDirection

logger = get_module_logger()

# Checked in order; the first non-empty value wins.
LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")

# Values that carry no language information.
_NEUTRAL_LOCALES = {"C", "POSIX", "C.UTF-8"}

TIMEZONE_LANGUAGES = {
    "Asia/Shanghai": "zh-CN",
    "Asia/Beijing": "zh-CN",
    "Asia/Hong_Kong": "zh-CN",
    "Asia/Tokyo": "ja-JP",
    "Asia/Seoul": "ko-KR",
    "America/New_York": "en-US",
    "America/Los_Angeles": "en-US",
    "America/Chicago": "en-US",
    "Europe/Madrid": "es-ES",
    "Europe/Paris": "fr-FR",
    "Europe/Berlin": "de-DE",
    "Europe/London": "en-US",
}


def language_from_timezone(tz_name: Optional[str]) -> Optional[str]:
    """Infer a language tag from an IANA time zone name."""
    if not tz_name:
        return None
    # TZ may be written ":Europe/Paris"
    return TIMEZONE_LANGUAGES.get(tz_name.lstrip(":"))


def detect_environment_language(
    environ: Optional[Mapping[str, str]] = None,
    override: Optional[str] = None,
) -> Optional[str]:
    """Read the language signal of the running process.

    Resolution order:
    1. Explicit override (from configuration)
    2. POSIX locale variables (LC_ALL, LC_MESSAGES, LANG, LANGUAGE)
    3. Language inferred from the TZ time zone

    Args:
        environ: Environment mapping (default: os.environ).
        override: Explicit language tag that outranks the environment.

    Returns:
        Normalized language tag (e.g., "en-GB"), or None if no signal.
    """
    if override:
        return normalize_tag(override) or None

    environ = os.environ if environ is None else environ

    for var in LOCALE_ENV_VARS:
        raw = environ.get(var, "")
        # LANGUAGE holds a colon-separated priority list
        candidate = raw.split(":")[0].strip()
        if not candidate or candidate in _NEUTRAL_LOCALES:
            continue
        tag = normalize_tag(candidate)
        if tag and tag not in _NEUTRAL_LOCALES:
            logger.debug("environment_language_detected", source=var, tag=tag)
            return tag

    tz_language = language_from_timezone(environ.get("TZ"))
    if tz_language:
        logger.debug("environment_language_from_timezone", tag=tz_language)
    return tz_language


@dataclass
class DocumentAttributes:
    """Application-level language and text direction.

    Attributes:
        lang: Code of the active locale.
        dir: Text direction of the active locale.
    """

    lang: str = ""
    dir: TextDirection = TextDirection.LTR

    @property
    def is_rtl(self) -> bool:
        return self.dir == TextDirection.RTL

    def apply(self, lang: str, direction: TextDirection) -> None:
        """Update both attributes at once."""
        self.lang = lang
        self.dir = direction
        logger.debug("document_attributes_updated", lang=lang, dir=direction.value)


# Process-wide document attributes, owned by the I18n instance.
document = DocumentAttributes()
