"""Tests for promptspine.core.settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from promptspine.core.settings import PromptSpineSettings, clear_settings_cache, get_settings


class TestPromptSpineSettings:
    """Test defaults and environment overrides."""

    def test_defaults(self):
        settings = PromptSpineSettings()
        assert settings.prompts_dir == Path("prompts")
        assert settings.snapshot_dir == Path("snapshots/prompts")
        assert settings.topics_path == Path("topics/sample-topics.json")
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PROMPTSPINE_SNAPSHOT_DIR", str(tmp_path / "snaps"))
        monkeypatch.setenv("PROMPTSPINE_LOG_FORMAT", "json")

        settings = PromptSpineSettings()
        assert settings.snapshot_dir == tmp_path / "snaps"
        assert settings.log_format == "json"

    def test_invalid_log_format_rejected(self, monkeypatch):
        monkeypatch.setenv("PROMPTSPINE_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            PromptSpineSettings()


class TestGetSettings:
    """Test the cached accessor."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self):
        first = get_settings()
        assert get_settings(_force_reload=True) is not first

    def test_clear_cache_picks_up_env(self, monkeypatch):
        get_settings()
        monkeypatch.setenv("PROMPTSPINE_PROMPTS_DIR", "custom-prompts")
        clear_settings_cache()
        assert get_settings().prompts_dir == Path("custom-prompts")
