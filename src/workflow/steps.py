"""Workflow steps: one generation call per step.

Each step builds its prompt, asks the agent bound to it for text, and pipes
that text through extraction, JSON parsing, schema validation and the
cross-stage defaulting pass:

    prompt -> agent.generate -> parse_json_from_text -> validate_payload -> backfill

Steps:
- analyze-ingredients: RecipeRequest -> IngredientPlan
- craft-recipe: IngredientPlan -> RecipeOutput
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Type, TypeVar

from src.agents.agent import AgentRegistry
from src.models.models import IngredientPlan, RecipeOutput, RecipeRequest
from src.models.validation import validate_payload
from src.prompts.prompts import build_ingredient_plan_prompt, build_recipe_prompt
from src.utils.errors import (
    CapabilityNotFoundError,
    EmptyGenerationError,
    GenerationTimeout,
    MissingInputError,
)
from src.utils.json_extraction import parse_json_from_text
from src.utils.logger import logger
from src.workflow.defaults import backfill_ingredient_plan, backfill_recipe_output

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


@dataclass(frozen=True)
class WorkflowStep(Generic[InputT, OutputT]):
    """Static description of one workflow step."""

    id: str
    description: str
    agent_name: str
    build_prompt: Callable[[InputT], str]
    output_model: Type[OutputT]
    backfill: Callable[[OutputT, InputT], OutputT]


ANALYZE_INGREDIENTS: WorkflowStep[RecipeRequest, IngredientPlan] = WorkflowStep(
    id="analyze-ingredients",
    description="整理食材、味型与限制，生成烹饪思路的原材料",
    agent_name="ingredientAgent",
    build_prompt=build_ingredient_plan_prompt,
    output_model=IngredientPlan,
    backfill=backfill_ingredient_plan,
)

CRAFT_RECIPE: WorkflowStep[IngredientPlan, RecipeOutput] = WorkflowStep(
    id="craft-recipe",
    description="将整理好的食材规划转化为详细菜谱",
    agent_name="recipeAgent",
    build_prompt=build_recipe_prompt,
    output_model=RecipeOutput,
    backfill=backfill_recipe_output,
)


async def generate_text(
    registry: AgentRegistry,
    agent_name: str,
    prompt: str,
    timeout: Optional[float],
    session_id: Optional[str] = None,
) -> str:
    """Send one user-role message to a named agent and return its trimmed text.

    A TimeoutError raised by the agent itself before the stage deadline (a socket
    timeout, say) propagates unchanged; only the expired deadline becomes
    GenerationTimeout.

    Raises:
        CapabilityNotFoundError: If `agent_name` is not registered.
        GenerationTimeout: If the agent does not answer within `timeout` seconds.
        EmptyGenerationError: If the answer is blank.
    """
    capability = registry.resolve(agent_name)
    if capability is None:
        raise CapabilityNotFoundError(agent_name, registry.names())

    messages = [{"role": "user", "content": prompt}]
    try:
        result = await asyncio.wait_for(capability.generate(messages, session_id=session_id), timeout=timeout)
    except asyncio.TimeoutError as e:
        # wait_for chains its own TimeoutError from the cancelled call
        if not isinstance(e.__cause__, asyncio.CancelledError):
            raise
        raise GenerationTimeout(agent_name, timeout) from e

    text = (result.text or "").strip() if result is not None else ""
    if not text:
        raise EmptyGenerationError(agent_name)
    return text


async def execute_step(
    step: WorkflowStep[InputT, OutputT],
    input_data: Optional[InputT],
    registry: AgentRegistry,
    agent_name: str,
    timeout: Optional[float] = None,
    session_id: Optional[str] = None,
) -> OutputT:
    """Run one step against the agent bound to it.

    Args:
        step: Step to run.
        input_data: Validated output of the previous step (or the request).
        registry: Registry used to resolve `agent_name`.
        agent_name: Logical agent name this step is bound to.
        timeout: Seconds to wait for the agent; None waits indefinitely.
        session_id: Agent session the call belongs to (the workflow run id).

    Returns:
        Validated, back-filled step output.

    Raises:
        MissingInputError: If `input_data` is None. Checked before any generation.
        CapabilityNotFoundError, GenerationTimeout, EmptyGenerationError:
            See generate_text.
        MalformedModelOutput: If the answer holds no parseable JSON.
        SchemaViolation: If the JSON does not match the step's output model.
    """
    if input_data is None:
        raise MissingInputError(step.id)

    prompt = step.build_prompt(input_data)
    logger.debug(f"Step '{step.id}': prompt built ({len(prompt)} chars), calling agent '{agent_name}'")

    text = await generate_text(registry, agent_name, prompt, timeout, session_id=session_id)
    logger.debug(f"Step '{step.id}': agent '{agent_name}' returned {len(text)} chars")

    payload: Any = parse_json_from_text(text)
    validated = validate_payload(step.output_model, payload, stage=step.id)
    return step.backfill(validated, input_data)
