"""Localization engine configuration settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_TRANSLATIONS_DIR = Path(__file__).resolve().parent / "locales"


class LocalizationSettings(BaseSettings):
    """Localization engine configuration.

    Environment Variables:
        LOCALE_DEFAULT: Locale used when nothing better is found (default: en-US)
        LOCALE_TRANSLATIONS_DIR: Directory with YAML catalogs (default: bundled)
        LOCALE_PREFERENCE_FILE: JSON file holding the persisted locale choice
        LOCALE_PREFERENCE_KEY: Key under which the choice is stored
        LOCALE_LANGUAGE: Explicit environment language signal (e.g. "fr-CA")
        LOCALE_DEFAULT_CURRENCY: Currency used by format_currency() (default: USD)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: "development" or "production"

    Example:
        ```python
        from localization.config import settings

        default_locale = settings.DEFAULT_LOCALE
        if settings.is_production:
            ...
        ```
    """

    DEFAULT_LOCALE: str = Field(default="en-US", alias="LOCALE_DEFAULT")
    TRANSLATIONS_DIR: Path = Field(
        default=BUNDLED_TRANSLATIONS_DIR, alias="LOCALE_TRANSLATIONS_DIR"
    )
    PREFERENCE_FILE: Path = Field(
        default=Path.home() / ".config" / "locale-engine" / "preferences.json",
        alias="LOCALE_PREFERENCE_FILE",
    )
    PREFERENCE_KEY: str = Field(default="active_locale", alias="LOCALE_PREFERENCE_KEY")
    LANGUAGE_OVERRIDE: Optional[str] = Field(default=None, alias="LOCALE_LANGUAGE")
    DEFAULT_CURRENCY: str = Field(default="USD", alias="LOCALE_DEFAULT_CURRENCY")

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("LANGUAGE_OVERRIDE", mode="before")
    @classmethod
    def validate_language_override(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty override as unset."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def validate_default_currency(cls, v: str) -> str:
        """Currency codes are upper-case ISO 4217 codes."""
        return v.strip().upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"


settings = LocalizationSettings()
