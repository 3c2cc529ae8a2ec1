"""Tests for centralized configuration module."""

import pytest
from pydantic import ValidationError

from npcgen.config import (
    PROJECT_ROOT,
    SRC_DIR,
    GeneratorSettings,
    get_env,
)
from npcgen.exceptions import ConfigurationError


class TestProjectConfig:
    """Tests for project configuration."""

    def test_project_root_is_correct(self):
        """Project root should contain key files."""
        assert (PROJECT_ROOT / "pyproject.toml").exists()
        assert (PROJECT_ROOT / "src").is_dir()

    def test_src_dir_is_correct(self):
        assert SRC_DIR.is_dir()
        assert (SRC_DIR / "npcgen" / "api.py").exists()

    def test_get_env_returns_value(self, monkeypatch):
        monkeypatch.setenv("TEST_CONFIG_VAR", "test_value")

        assert get_env("TEST_CONFIG_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        monkeypatch.delenv("NONEXISTENT_VAR_12345", raising=False)

        assert get_env("NONEXISTENT_VAR_12345", default="fallback") == "fallback"

    def test_get_env_raises_without_default(self, monkeypatch):
        """Should raise KeyError when var not set and no default."""
        monkeypatch.delenv("NONEXISTENT_VAR_12345", raising=False)

        with pytest.raises(KeyError):
            get_env("NONEXISTENT_VAR_12345")


@pytest.mark.smoke
@pytest.mark.unit
class TestGeneratorSettings:
    """Tests for GeneratorSettings."""

    def test_defaults(self):
        settings = GeneratorSettings()

        assert settings.enable_ai is False
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.temperature == 0.8
        assert settings.max_output_tokens == 500
        assert settings.ability_variance == 2

    def test_rejects_out_of_range_temperature(self):
        with pytest.raises(ValidationError):
            GeneratorSettings(temperature=3.5)

    def test_is_frozen(self):
        settings = GeneratorSettings()

        with pytest.raises(ValidationError):
            settings.enable_ai = True

    def test_from_env_reads_variables(self, monkeypatch):
        monkeypatch.setenv("NPCGEN_ENABLE_AI", "true")
        monkeypatch.setenv("GeminiImageAPI", "test-key")
        monkeypatch.setenv("NPCGEN_GEMINI_MODEL", "gemini-2.5-flash")
        monkeypatch.setenv("NPCGEN_TEMPERATURE", "0.4")
        monkeypatch.setenv("NPCGEN_ABILITY_VARIANCE", "0")
        monkeypatch.setenv("NPCGEN_LOG_LEVEL", "DEBUG")

        settings = GeneratorSettings.from_env()

        assert settings.enable_ai is True
        assert settings.gemini_api_key == "test-key"
        assert settings.gemini_model == "gemini-2.5-flash"
        assert settings.temperature == 0.4
        assert settings.ability_variance == 0
        assert settings.log_level == "DEBUG"

    def test_from_env_disables_ai_by_default(self, monkeypatch):
        monkeypatch.delenv("NPCGEN_ENABLE_AI", raising=False)

        assert GeneratorSettings.from_env().enable_ai is False

    def test_from_env_wraps_bad_number(self, monkeypatch):
        monkeypatch.setenv("NPCGEN_TEMPERATURE", "warm")

        with pytest.raises(ConfigurationError, match="Invalid generator settings"):
            GeneratorSettings.from_env()

    def test_from_env_wraps_validation_error(self, monkeypatch):
        monkeypatch.setenv("NPCGEN_ABILITY_VARIANCE", "9")

        with pytest.raises(ConfigurationError):
            GeneratorSettings.from_env()
