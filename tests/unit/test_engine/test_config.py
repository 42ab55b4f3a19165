"""Unit tests for environment configuration."""

import logging
from pathlib import Path

from gamespeak.config import DEFAULT_DEBOUNCE_MS, PACKAGE_DATA_DIR, get_data_dir, get_debounce_ms


class TestDebounceSetting:
    """Tests for get_debounce_ms()."""

    def test_default(self, monkeypatch) -> None:
        """Unset means the default."""
        monkeypatch.delenv("GAMESPEAK_DEBOUNCE_MS", raising=False)

        assert get_debounce_ms() == DEFAULT_DEBOUNCE_MS == 150

    def test_from_environment(self, monkeypatch) -> None:
        """The environment value is read on each call."""
        monkeypatch.setenv("GAMESPEAK_DEBOUNCE_MS", "300")

        assert get_debounce_ms() == 300

    def test_unparseable_value(self, monkeypatch, caplog) -> None:
        """A bad value falls back to the default with a warning."""
        monkeypatch.setenv("GAMESPEAK_DEBOUNCE_MS", "fast")

        with caplog.at_level(logging.WARNING, logger="gamespeak.config"):
            assert get_debounce_ms() == DEFAULT_DEBOUNCE_MS

        assert "GAMESPEAK_DEBOUNCE_MS" in caplog.text


class TestDataDir:
    """Tests for get_data_dir()."""

    def test_packaged_data(self, monkeypatch) -> None:
        """By default the packaged data files are used."""
        monkeypatch.delenv("GAMESPEAK_DATA_DIR", raising=False)

        assert get_data_dir() == PACKAGE_DATA_DIR
        assert (PACKAGE_DATA_DIR / "vocabulary.yaml").exists()
        assert (PACKAGE_DATA_DIR / "intent_patterns.yaml").exists()

    def test_override(self, monkeypatch, tmp_path) -> None:
        """GAMESPEAK_DATA_DIR points somewhere else."""
        monkeypatch.setenv("GAMESPEAK_DATA_DIR", str(tmp_path))

        assert get_data_dir() == Path(tmp_path)
