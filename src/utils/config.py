"""Configuration management for Recipe Workflow Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

        # Model per agent: the two stages are bound to separately configured agents
        # Ingredient Analyst: fast model, the plan is short and mostly structural
        self.INGREDIENT_AGENT_MODEL: str = os.getenv("INGREDIENT_AGENT_MODEL", "gemini-2.0-flash")
        # Recipe Crafter: produces the long step-by-step output
        self.RECIPE_AGENT_MODEL: str = os.getenv("RECIPE_AGENT_MODEL", "gemini-2.5-flash")

        # Stage bindings: logical agent name each workflow stage resolves in the registry
        self.INGREDIENT_AGENT_NAME: str = os.getenv("INGREDIENT_AGENT_NAME", "ingredientAgent")
        self.RECIPE_AGENT_NAME: str = os.getenv("RECIPE_AGENT_NAME", "recipeAgent")

        # Per-stage generation timeout in seconds. Default: 60
        self.STAGE_TIMEOUT_SECONDS: float = float(os.getenv("STAGE_TIMEOUT_SECONDS", "60"))

        # LLM Model Parameters
        # Temperature: Controls randomness (0.0 = deterministic, 1.0 = max randomness)
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.2"))
        # Max Output Tokens: a full recipe with 5+ steps in Chinese fits comfortably in 4096
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "4096"))

        # Agent memory
        # ADD_HISTORY_TO_CONTEXT: include previous runs of the same agent in its context
        # Off by default so each workflow run is independent
        self.ADD_HISTORY_TO_CONTEXT: bool = _env_bool("ADD_HISTORY_TO_CONTEXT", "false")
        # Maximum number of previous runs to include in context. Default: 3
        self.MAX_HISTORY: int = int(os.getenv("MAX_HISTORY", "3"))
        # Database URL: Optional PostgreSQL connection string for agent memory in production
        self.DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
        # DB_FILE: SQLite database file for agent memory (used when DATABASE_URL is unset)
        self.DB_FILE: str = os.getenv("DB_FILE", "tmp/recipe_workflow.db")

        # Tracing Configuration
        self.ENABLE_TRACING: bool = _env_bool("ENABLE_TRACING", "false")
        self.TRACING_DB_FILE: str = os.getenv("TRACING_DB_FILE", "tmp/recipe_workflow_traces.db")

    def validate(self, require_api_key: bool = True) -> None:
        """Validate configuration.

        Args:
            require_api_key: Check GEMINI_API_KEY as well. Offline callers that inject
                their own generation capabilities pass False.

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if require_api_key and not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not self.INGREDIENT_AGENT_NAME or not self.RECIPE_AGENT_NAME:
            raise ValueError("INGREDIENT_AGENT_NAME and RECIPE_AGENT_NAME must not be empty")
        if self.STAGE_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"STAGE_TIMEOUT_SECONDS must be greater than 0, got: {self.STAGE_TIMEOUT_SECONDS}"
            )
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.MAX_HISTORY < 0:
            raise ValueError(
                f"MAX_HISTORY must be 0 or greater, got: {self.MAX_HISTORY}"
            )


# Module-level config instance. The API key is checked when the Gemini-backed
# agents are built, so the workflow core imports without credentials.
config = Config()
config.validate(require_api_key=False)
