"""Test data factories for deterministic test data generation."""

from tests.factories.localization import (
    make_i18n,
    make_locale,
    make_settings,
    make_translation_catalog,
    make_translations,
)

__all__ = [
    "make_i18n",
    "make_locale",
    "make_settings",
    "make_translation_catalog",
    "make_translations",
]
