"""Generation capabilities for the recipe workflow.

The workflow never talks to a model directly. It resolves a logical agent name
in an AgentRegistry and calls `generate(messages, session_id=...)` on whatever
capability is registered there. The session id is the workflow run id, so both
stages of one run share an Agno session (and a trace group when tracing is on).
In production the capabilities are Agno agents backed by Gemini; tests register
deterministic fakes.

Factory `initialize_agent_registry()` builds the two production agents:
- ingredientAgent: "Ingredient Analyst", turns the request into a cooking plan
- recipeAgent: "Recipe Crafter", turns the plan into a step-by-step recipe
"""

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, TypedDict, runtime_checkable

from agno.agent import Agent
from agno.db.postgres import PostgresDb
from agno.db.sqlite import SqliteDb
from agno.models.google import Gemini
from agno.models.message import Message

from src.prompts.prompts import INGREDIENT_AGENT_INSTRUCTIONS, RECIPE_AGENT_INSTRUCTIONS
from src.utils.config import config
from src.utils.logger import logger


class ChatTurn(TypedDict):
    role: str
    content: str


@dataclass(frozen=True)
class GenerationResult:
    text: str


@runtime_checkable
class GenerationCapability(Protocol):
    """Anything that can answer a list of chat messages with text."""

    async def generate(self, messages: List[ChatTurn], session_id: Optional[str] = None) -> GenerationResult:
        ...


class AgentRegistry:
    """Name-based registry of generation capabilities."""

    def __init__(self, capabilities: Optional[Dict[str, GenerationCapability]] = None) -> None:
        self._capabilities: Dict[str, GenerationCapability] = dict(capabilities or {})

    def register(self, name: str, capability: GenerationCapability) -> None:
        if not name:
            raise ValueError("Agent name must not be empty")
        if name in self._capabilities:
            logger.warning(f"Replacing agent already registered as '{name}'")
        self._capabilities[name] = capability

    def resolve(self, name: str) -> Optional[GenerationCapability]:
        """Return the capability registered under `name`, or None."""
        return self._capabilities.get(name)

    def names(self) -> List[str]:
        return sorted(self._capabilities)

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)


class AgnoCapability:
    """Adapts an Agno Agent to the GenerationCapability interface."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    async def generate(self, messages: List[ChatTurn], session_id: Optional[str] = None) -> GenerationResult:
        run_output = await self.agent.arun(
            input=[Message(role=turn["role"], content=turn["content"]) for turn in messages],
            session_id=session_id,
        )
        content = getattr(run_output, "content", None)
        if content is None:
            return GenerationResult(text="")
        return GenerationResult(text=content if isinstance(content, str) else str(content))


def _configure_database(use_db: bool):
    """Configure database for agent memory (SQLite or PostgreSQL).

    Args:
        use_db: If True, configure persistent database. If False, return None (stateless mode).

    Returns:
        Database instance (SqliteDb or PostgresDb) or None for stateless mode.
    """
    if not use_db:
        logger.info("Agent memory disabled (stateless mode)")
        return None

    if config.DATABASE_URL:
        logger.info(f"Using PostgreSQL: {config.DATABASE_URL.split('@')[1] if '@' in config.DATABASE_URL else '...'}")
        return PostgresDb(db_url=config.DATABASE_URL, id="recipe_workflow_db")

    db_dir = os.path.dirname(config.DB_FILE)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    logger.info(f"Using SQLite database: {config.DB_FILE}")
    return SqliteDb(db_file=config.DB_FILE, id="recipe_workflow_db")


def _create_agent(name: str, model_id: str, instructions: str, db) -> Agent:
    """Create one Gemini-backed Agno agent."""
    return Agent(
        name=name,
        model=Gemini(
            id=model_id,
            api_key=config.GEMINI_API_KEY,
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        ),
        instructions=instructions,
        db=db,
        add_history_to_context=config.ADD_HISTORY_TO_CONTEXT and db is not None,
        num_history_runs=config.MAX_HISTORY,
        markdown=False,
    )


def initialize_agent_registry(use_db: bool = True) -> AgentRegistry:
    """Build the registry holding the two Gemini-backed recipe agents.

    Args:
        use_db: If True, give the agents persistent memory storage.

    Returns:
        AgentRegistry with `ingredientAgent` and `recipeAgent` registered.

    Raises:
        ValueError: If GEMINI_API_KEY is not configured.
    """
    logger.info("=== Initializing recipe agents ===")
    config.validate()

    db = _configure_database(use_db)

    ingredient_agent = _create_agent(
        "Ingredient Analyst", config.INGREDIENT_AGENT_MODEL, INGREDIENT_AGENT_INSTRUCTIONS, db
    )
    logger.info(f"✓ Ingredient Analyst configured with {config.INGREDIENT_AGENT_MODEL}")

    recipe_agent = _create_agent("Recipe Crafter", config.RECIPE_AGENT_MODEL, RECIPE_AGENT_INSTRUCTIONS, db)
    logger.info(f"✓ Recipe Crafter configured with {config.RECIPE_AGENT_MODEL}")

    registry = AgentRegistry()
    registry.register("ingredientAgent", AgnoCapability(ingredient_agent))
    registry.register("recipeAgent", AgnoCapability(recipe_agent))

    logger.info(f"=== Agent registry ready: {', '.join(registry.names())} ===")
    return registry
