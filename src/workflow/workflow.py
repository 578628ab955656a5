"""Recipe workflow: ingredient analysis followed by recipe crafting.

    PENDING -> ANALYZING_INGREDIENTS -> CRAFTING_RECIPE -> DONE
    (any error -> FAILED)

Strictly sequential: the recipe stage starts only after the ingredient plan
has been validated and back-filled, and receives that plan verbatim. No
retries, no branching; workflow errors are logged once and re-raised unchanged.
"""

import asyncio
import time
import uuid
from enum import Enum
from typing import Any, Mapping, Optional, Union

from src.agents.agent import AgentRegistry
from src.models.models import IngredientPlan, RecipeOutput, RecipeRequest
from src.models.validation import validate_payload
from src.utils.config import config
from src.utils.errors import CapabilityNotFoundError, MissingInputError, RecipeWorkflowError
from src.utils.logger import logger
from src.workflow.steps import ANALYZE_INGREDIENTS, CRAFT_RECIPE, WorkflowStep, execute_step

WORKFLOW_ID = "recipe-workflow"


class WorkflowState(str, Enum):
    PENDING = "pending"
    ANALYZING_INGREDIENTS = "analyzing-ingredients"
    CRAFTING_RECIPE = "crafting-recipe"
    DONE = "done"
    FAILED = "failed"


class RecipeWorkflow:
    """Two-stage recipe workflow over an agent registry.

    Args:
        registry: Registry the stage bindings are resolved in.
        ingredient_agent: Agent name bound to the ingredient analysis stage.
        recipe_agent: Agent name bound to the recipe crafting stage.
        stage_timeout: Seconds each stage may wait for its agent. None disables the timeout.

    Each run tracks its own state. `state` mirrors the latest transition of the
    most recent run on this instance and is informational only.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        ingredient_agent: str = ANALYZE_INGREDIENTS.agent_name,
        recipe_agent: str = CRAFT_RECIPE.agent_name,
        stage_timeout: Optional[float] = 60.0,
    ) -> None:
        self.registry = registry
        self.ingredient_agent = ingredient_agent
        self.recipe_agent = recipe_agent
        self.stage_timeout = stage_timeout
        self.state = WorkflowState.PENDING

    @classmethod
    def from_config(cls, registry: AgentRegistry) -> "RecipeWorkflow":
        """Build a workflow using the stage bindings and timeout from configuration.

        Raises:
            CapabilityNotFoundError: If a configured stage binding is not registered.
        """
        for agent_name in (config.INGREDIENT_AGENT_NAME, config.RECIPE_AGENT_NAME):
            if agent_name not in registry:
                raise CapabilityNotFoundError(agent_name, registry.names())

        return cls(
            registry,
            ingredient_agent=config.INGREDIENT_AGENT_NAME,
            recipe_agent=config.RECIPE_AGENT_NAME,
            stage_timeout=config.STAGE_TIMEOUT_SECONDS,
        )

    async def run(self, request: Union[RecipeRequest, Mapping[str, Any], None]) -> RecipeOutput:
        """Turn a recipe request into a validated recipe.

        Args:
            request: RecipeRequest, or a mapping validated into one.

        Returns:
            RecipeOutput with servings back-filled.

        Raises:
            MissingInputError: If `request` is None; no agent is called.
            SchemaViolation: If a mapping request or a model answer fails validation.
            CapabilityNotFoundError, EmptyGenerationError, GenerationTimeout,
            MalformedModelOutput: Raised by the stages, unchanged.
        """
        run_id = str(uuid.uuid4())
        state = self.state = WorkflowState.PENDING

        try:
            if request is None:
                raise MissingInputError(ANALYZE_INGREDIENTS.id, "No recipe request provided")
            if not isinstance(request, RecipeRequest):
                request = validate_payload(RecipeRequest, request, stage=WORKFLOW_ID)

            logger.info(
                f"Workflow {run_id} started: {len(request.ingredients)} ingredient(s), "
                f"taste='{request.taste}', servings={request.servings}",
                extra={"run_id": run_id},
            )
            started = time.perf_counter()

            state = self.state = WorkflowState.ANALYZING_INGREDIENTS
            plan: IngredientPlan = await self._run_step(ANALYZE_INGREDIENTS, request, self.ingredient_agent, run_id)

            state = self.state = WorkflowState.CRAFTING_RECIPE
            recipe: RecipeOutput = await self._run_step(CRAFT_RECIPE, plan, self.recipe_agent, run_id)

            state = self.state = WorkflowState.DONE
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info(
                f"Workflow {run_id} finished in {elapsed_ms}ms: '{recipe.recipe_name}' "
                f"({len(recipe.steps)} steps, servings={recipe.servings})",
                extra={"run_id": run_id},
            )
            return recipe

        except RecipeWorkflowError as e:
            failed_in = state.value
            self.state = WorkflowState.FAILED
            logger.error(
                f"Workflow {run_id} failed during {failed_in}: {type(e).__name__}: {e}",
                extra={"run_id": run_id, "stage": failed_in},
            )
            raise
        except Exception:
            self.state = WorkflowState.FAILED
            raise

    def run_sync(self, request: Union[RecipeRequest, Mapping[str, Any], None]) -> RecipeOutput:
        """Blocking wrapper around run() for callers without an event loop."""
        return asyncio.run(self.run(request))

    async def _run_step(self, step: WorkflowStep, input_data: Any, agent_name: str, run_id: str) -> Any:
        logger.info(
            f"Step '{step.id}' started with agent '{agent_name}'",
            extra={"run_id": run_id, "stage": step.id},
        )
        started = time.perf_counter()
        output = await execute_step(
            step, input_data, self.registry, agent_name, timeout=self.stage_timeout, session_id=run_id
        )
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"✓ Step '{step.id}' completed in {elapsed_ms}ms",
            extra={"run_id": run_id, "stage": step.id},
        )
        return output
