"""Tests for localization.preferences module."""

import json
from unittest.mock import patch

from localization import InMemoryPreferenceStore, JSONFilePreferenceStore


class TestInMemoryPreferenceStore:
    """Tests for InMemoryPreferenceStore."""

    def test_get_missing(self):
        """Unknown keys give None."""
        assert InMemoryPreferenceStore().get("active_locale") is None

    def test_set_then_get(self):
        """Stored values are returned."""
        store = InMemoryPreferenceStore()
        assert store.set("active_locale", "ja-JP") is True
        assert store.get("active_locale") == "ja-JP"

    def test_initial_values_copied(self):
        """Initial values are copied, not shared."""
        initial = {"active_locale": "fr-FR"}
        store = InMemoryPreferenceStore(initial)
        store.set("active_locale", "de-DE")
        assert initial["active_locale"] == "fr-FR"


class TestJSONFilePreferenceStore:
    """Tests for JSONFilePreferenceStore."""

    def test_get_without_file(self, tmp_path):
        """A missing file means no preference."""
        assert JSONFilePreferenceStore(tmp_path / "prefs.json").get("active_locale") is None

    def test_set_creates_file(self, tmp_path):
        """set() creates parent directories and writes JSON."""
        path = tmp_path / "nested" / "prefs.json"
        assert JSONFilePreferenceStore(path).set("active_locale", "zh-CN") is True
        assert json.loads(path.read_text(encoding="utf-8")) == {"active_locale": "zh-CN"}

    def test_value_survives_new_instance(self, tmp_path):
        """Values persist across store instances."""
        path = tmp_path / "prefs.json"
        JSONFilePreferenceStore(path).set("active_locale", "ko-KR")
        assert JSONFilePreferenceStore(path).get("active_locale") == "ko-KR"

    def test_set_keeps_other_keys(self, tmp_path):
        """set() preserves unrelated keys."""
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        JSONFilePreferenceStore(path).set("active_locale", "es-ES")
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "theme": "dark",
            "active_locale": "es-ES",
        }

    @patch("localization.preferences.logger")
    def test_corrupt_file_reads_as_empty(self, mock_logger, tmp_path):
        """Corrupt JSON is logged and treated as no preference."""
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        assert JSONFilePreferenceStore(path).get("active_locale") is None
        mock_logger.warning.assert_called_once()

    def test_non_string_value_ignored(self, tmp_path):
        """Only string values count as a preference."""
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"active_locale": 42}), encoding="utf-8")
        assert JSONFilePreferenceStore(path).get("active_locale") is None

    @patch("localization.preferences.logger")
    def test_unwritable_location_returns_false(self, mock_logger, tmp_path):
        """Write failures are logged and reported, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = JSONFilePreferenceStore(blocker / "prefs.json")
        assert store.set("active_locale", "de-DE") is False
        mock_logger.error.assert_called_once()
