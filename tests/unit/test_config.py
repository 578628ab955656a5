"""Unit tests for configuration management."""

import pytest

from src.utils.config import Config


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, monkeypatch):
        """Test that Config uses default values when env vars not set."""
        for name in (
            "INGREDIENT_AGENT_MODEL",
            "RECIPE_AGENT_MODEL",
            "INGREDIENT_AGENT_NAME",
            "RECIPE_AGENT_NAME",
            "STAGE_TIMEOUT_SECONDS",
            "TEMPERATURE",
            "MAX_OUTPUT_TOKENS",
            "ADD_HISTORY_TO_CONTEXT",
            "MAX_HISTORY",
            "DATABASE_URL",
            "DB_FILE",
            "ENABLE_TRACING",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.INGREDIENT_AGENT_MODEL == "gemini-2.0-flash"
        assert config.RECIPE_AGENT_MODEL == "gemini-2.5-flash"
        assert config.INGREDIENT_AGENT_NAME == "ingredientAgent"
        assert config.RECIPE_AGENT_NAME == "recipeAgent"
        assert config.STAGE_TIMEOUT_SECONDS == 60.0
        assert config.TEMPERATURE == 0.2
        assert config.MAX_OUTPUT_TOKENS == 4096
        assert config.ADD_HISTORY_TO_CONTEXT is False
        assert config.MAX_HISTORY == 3
        assert config.DATABASE_URL is None
        assert config.DB_FILE == "tmp/recipe_workflow.db"
        assert config.ENABLE_TRACING is False

    def test_config_loads_from_environment(self, monkeypatch):
        """Test that Config loads values from environment variables."""
        monkeypatch.setenv("GEMINI_API_KEY", "test_gemini_key")
        monkeypatch.setenv("INGREDIENT_AGENT_NAME", "analyst")
        monkeypatch.setenv("RECIPE_AGENT_NAME", "chef")
        monkeypatch.setenv("STAGE_TIMEOUT_SECONDS", "15")
        monkeypatch.setenv("ADD_HISTORY_TO_CONTEXT", "yes")
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/recipes")

        config = Config()

        assert config.GEMINI_API_KEY == "test_gemini_key"
        assert config.INGREDIENT_AGENT_NAME == "analyst"
        assert config.RECIPE_AGENT_NAME == "chef"
        assert config.STAGE_TIMEOUT_SECONDS == 15.0
        assert config.ADD_HISTORY_TO_CONTEXT is True
        assert config.DATABASE_URL == "postgresql://localhost/recipes"

    def test_config_converts_numeric_types(self, monkeypatch):
        """Test that Config properly converts numeric environment variables."""
        monkeypatch.setenv("STAGE_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("MAX_OUTPUT_TOKENS", "8192")
        monkeypatch.setenv("TEMPERATURE", "0.5")

        config = Config()

        assert isinstance(config.STAGE_TIMEOUT_SECONDS, float)
        assert isinstance(config.MAX_OUTPUT_TOKENS, int)
        assert isinstance(config.TEMPERATURE, float)


class TestConfigValidation:
    """Test Config validation logic."""

    def test_validate_raises_error_for_missing_gemini_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "")
        config = Config()
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            config.validate()

    def test_validate_without_api_key_requirement(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "")
        Config().validate(require_api_key=False)  # Should not raise

    def test_validate_succeeds_with_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gemini_key")
        Config().validate()  # Should not raise

    @pytest.mark.parametrize("timeout", ["0", "-5"])
    def test_validate_rejects_non_positive_timeout(self, monkeypatch, timeout):
        monkeypatch.setenv("STAGE_TIMEOUT_SECONDS", timeout)
        with pytest.raises(ValueError, match="STAGE_TIMEOUT_SECONDS"):
            Config().validate(require_api_key=False)

    def test_validate_rejects_empty_stage_binding(self, monkeypatch):
        monkeypatch.setenv("RECIPE_AGENT_NAME", "")
        with pytest.raises(ValueError, match="RECIPE_AGENT_NAME"):
            Config().validate(require_api_key=False)

    def test_validate_rejects_temperature_out_of_range(self, monkeypatch):
        monkeypatch.setenv("TEMPERATURE", "1.5")
        with pytest.raises(ValueError, match="TEMPERATURE"):
            Config().validate(require_api_key=False)

    def test_validate_rejects_small_output_budget(self, monkeypatch):
        monkeypatch.setenv("MAX_OUTPUT_TOKENS", "100")
        with pytest.raises(ValueError, match="MAX_OUTPUT_TOKENS"):
            Config().validate(require_api_key=False)

    def test_validate_rejects_negative_history(self, monkeypatch):
        monkeypatch.setenv("MAX_HISTORY", "-1")
        with pytest.raises(ValueError, match="MAX_HISTORY"):
            Config().validate(require_api_key=False)
