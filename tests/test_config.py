"""
Tests for configuration module.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from matchform.config import Settings, get_settings


@pytest.mark.usefixtures("clean_settings")
class TestSettings:
    """Test configuration loading and validation."""

    def test_default_settings(self):
        """Test default settings match the form window contract."""
        settings = Settings()

        assert settings.window_size == 5
        assert settings.min_history == 5
        assert settings.league_lookback == 30
        assert settings.log_level == "INFO"

    def test_default_paths(self):
        settings = Settings()

        assert settings.matches_path == Path("data") / "Match.csv"
        assert settings.dataset_path == Path("data") / "dataset.csv"
        assert settings.teams_path == Path("data") / "Team.csv"

    def test_data_dir_creation(self, tmp_path):
        """Test data directory is created."""
        data_dir = tmp_path / "test_data"
        settings = Settings(data_dir=data_dir)

        assert settings.data_dir == data_dir
        assert data_dir.exists()

    def test_log_file_parent_creation(self, tmp_path):
        """Test log file parent directory is created."""
        log_file = tmp_path / "logs" / "app.log"
        settings = Settings(log_file=log_file)

        assert settings.log_file == log_file
        assert log_file.parent.exists()

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_min_history_cannot_exceed_window(self):
        """A team can never accumulate more than window_size matches."""
        with pytest.raises(ValidationError):
            Settings(window_size=3, min_history=5)

    def test_smaller_min_history_allowed(self):
        settings = Settings(window_size=8, min_history=3)

        assert settings.min_history == 3

    def test_window_size_positive(self):
        with pytest.raises(ValidationError):
            Settings(window_size=0)

    @patch.dict(os.environ, {"MATCHFORM_LEAGUE_LOOKBACK": "12"})
    def test_env_loading(self):
        """Test settings load from environment."""
        get_settings.cache_clear()
        settings = get_settings()

        assert settings.league_lookback == 12

        get_settings.cache_clear()

    def test_settings_cached(self):
        assert get_settings() is get_settings()
