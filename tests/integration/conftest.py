"""Pytest configuration and fixtures for integration tests.

Ensures environment variables are loaded and validates the required API key
before running integration tests against live Gemini agents.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env and keep integration runs isolated.

    Agent memory history and tracing are disabled so runs do not accumulate
    state across executions.
    """
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    os.environ["ADD_HISTORY_TO_CONTEXT"] = "false"
    os.environ["ENABLE_TRACING"] = "false"


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if GEMINI_API_KEY is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API key: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
