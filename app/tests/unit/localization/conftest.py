"""Feature-level fixtures for localization engine tests.

Provides catalogs, stores and wired engines for locale resolution,
translation and formatting scenarios.
"""

import pytest
import yaml

from localization import (
    DictTranslationLoader,
    InMemoryPreferenceStore,
    LocaleCatalog,
    TranslationStore,
    YAMLTranslationLoader,
)
from localization.environment import DocumentAttributes
from tests.factories.localization import make_i18n, make_translations


@pytest.fixture
def translations():
    """Nested translation trees keyed by locale code."""
    return make_translations()


@pytest.fixture
def dict_loader(translations):
    """DictTranslationLoader over the sample translations."""
    return DictTranslationLoader(translations)


@pytest.fixture
def store(dict_loader):
    """TranslationStore loaded with the sample translations."""
    translation_store = TranslationStore(dict_loader, default_locale="en-US")
    translation_store.load_all()
    return translation_store


@pytest.fixture
def locale_catalog():
    """LocaleCatalog with the default locales."""
    return LocaleCatalog()


@pytest.fixture
def preference_store():
    """Empty in-memory preference store."""
    return InMemoryPreferenceStore()


@pytest.fixture
def document():
    """Document attributes isolated from the process-wide instance."""
    return DocumentAttributes()


@pytest.fixture
def i18n(preference_store, document):
    """I18n starting in en-US with in-memory collaborators."""
    return make_i18n(preference_store=preference_store, document=document)


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - navigation.en-US.yml
    - navigation.zh-CN.yml
    - common.en-US.yml
    - fr-FR.yml
    """
    files = {
        "navigation.en-US.yml": {
            "navigation": {"home": "Home", "projects": "Projects"},
        },
        "navigation.zh-CN.yml": {
            "navigation": {"home": "首页"},
        },
        "common.en-US.yml": {
            "common": {"welcome": "Welcome, {{name}}!"},
            "navigation": {"profile": "Profile"},
        },
        "fr-FR.yml": {
            "navigation": {"home": "Accueil"},
        },
    }
    for name, data in files.items():
        with open(tmp_path / name, "w", encoding="utf-8") as f:
            yaml.dump(data, f, allow_unicode=True)

    return tmp_path


@pytest.fixture
def yaml_loader(temp_translations_dir):
    """Create YAMLTranslationLoader for temporary translations directory."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def yaml_loader_with_cache(temp_translations_dir):
    """Create YAMLTranslationLoader with caching enabled."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=True)
