"""Error taxonomy for the recipe workflow.

Every error is terminal for the workflow run that raised it. Each carries the
context needed to diagnose it: the agent name, the raw model text, or the
offending field paths.
"""

from typing import Any, Optional, Sequence


class RecipeWorkflowError(Exception):
    """Base class for all workflow errors."""


class MissingInputError(RecipeWorkflowError):
    """Raised when a stage is started without its required upstream input."""

    def __init__(self, step_id: str, message: Optional[str] = None) -> None:
        self.step_id = step_id
        super().__init__(message or f"Step '{step_id}' received no input")


class CapabilityNotFoundError(RecipeWorkflowError, LookupError):
    """Raised when a logical agent name cannot be resolved in the registry."""

    def __init__(self, agent_name: str, available: Sequence[str] = ()) -> None:
        self.agent_name = agent_name
        self.available = list(available)
        known = ", ".join(self.available) or "none"
        super().__init__(f"Agent '{agent_name}' could not be found (registered: {known})")


class EmptyGenerationError(RecipeWorkflowError):
    """Raised when an agent returns blank text."""

    def __init__(self, agent_name: str) -> None:
        self.agent_name = agent_name
        super().__init__(f"Agent '{agent_name}' returned an empty response")


class GenerationTimeout(RecipeWorkflowError, TimeoutError):
    """Raised when an agent does not answer within the stage timeout."""

    def __init__(self, agent_name: str, timeout: float) -> None:
        self.agent_name = agent_name
        self.timeout = timeout
        super().__init__(f"Agent '{agent_name}' did not respond within {timeout:g}s")


class MalformedModelOutput(RecipeWorkflowError, ValueError):
    """Raised when model text cannot be parsed as JSON.

    The message embeds the full raw text, not only the extracted candidate,
    since the candidate heuristic may have picked the wrong substring.
    """

    def __init__(self, reason: str, raw_text: str, candidate: str = "") -> None:
        self.reason = reason
        self.raw_text = raw_text
        self.candidate = candidate
        super().__init__(f"Could not parse JSON from model output: {reason}\nRaw output:\n{raw_text}")


class SchemaViolation(RecipeWorkflowError, ValueError):
    """Raised when parsed JSON does not satisfy a schema."""

    def __init__(
        self,
        model_name: str,
        errors: Sequence[dict[str, Any]],
        stage: Optional[str] = None,
    ) -> None:
        self.model_name = model_name
        self.errors = list(errors)
        self.stage = stage
        self.field_paths = [error["path"] for error in self.errors]
        details = "; ".join(f"{error['path']}: {error['message']}" for error in self.errors)
        where = f" in step '{stage}'" if stage else ""
        super().__init__(f"{model_name} failed validation{where}: {details}")
