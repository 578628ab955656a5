"""Data models and schemas for the recipe workflow.

Defines Pydantic models for the workflow input, the stage 1 ingredient plan and
the stage 2 recipe. Attributes are snake_case in Python; the camelCase aliases
are the JSON names used in prompts and returned by the models.

Scalars use strict types: the model's JSON is validated, never coerced. The one
exception is integers: JSON has a single number type, so a whole-valued float
such as 2.0 is accepted as 2. Strings, bools and 2.5 are still rejected.
Cross-stage back-filling (servings, requestedProfile, dietaryNotes) lives in
src/workflow/defaults.py, not here.
"""

from typing import Any, List, Optional, Tuple, Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic.alias_generators import to_camel


def _whole_float_to_int(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


JsonInt = Annotated[StrictInt, BeforeValidator(_whole_float_to_int)]


class WorkflowModel(BaseModel):
    """Base model: camelCase wire names, snake_case attributes, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        """Dump using wire (camelCase) names, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RecipeRequest(WorkflowModel):
    """Caller input: what is in the kitchen and what it should taste like.

    Immutable once created.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    ingredients: Annotated[
        Tuple[StrictStr, ...],
        Field(min_length=1, description="Available ingredients, at least one"),
    ]
    taste: Annotated[StrictStr, Field(min_length=1, description="Desired taste profile, e.g. 微辣")]
    servings: Annotated[JsonInt, Field(ge=1, le=12, description="Number of servings (1-12)")] = 2
    dietary_notes: Annotated[
        Optional[StrictStr],
        Field(description="Optional dietary restrictions or preferences"),
    ] = None

    @field_validator("ingredients")
    @classmethod
    def reject_blank_ingredients(cls, ingredients: Tuple[str, ...]) -> Tuple[str, ...]:
        """Strip each ingredient and reject blank entries."""
        cleaned = tuple(item.strip() for item in ingredients)
        if any(not item for item in cleaned):
            raise ValueError("ingredients must not contain blank entries")
        return cleaned


class IngredientDetail(WorkflowModel):
    """One normalized ingredient in the plan."""

    name: StrictStr
    category: Annotated[
        StrictStr,
        Field(description="protein | vegetable | carb | condiment | garnish | other"),
    ]
    prep: Annotated[StrictStr, Field(description="Concrete preparation, e.g. 切丝")]
    flavor_role: Annotated[StrictStr, Field(description="Role of the ingredient in the taste profile")]


class MissingItem(WorkflowModel):
    """An ingredient the dish needs but the caller did not list."""

    item: StrictStr
    reason: StrictStr
    substitution: Optional[StrictStr] = None


class TasteDirection(WorkflowModel):
    requested_profile: StrictStr = ""
    balance_notes: List[StrictStr] = Field(default_factory=list)
    aromatics: List[StrictStr] = Field(default_factory=list)


class IngredientPlan(WorkflowModel):
    """Stage 1 output: the structured cooking plan handed to the recipe stage.

    Every list defaults to empty and taste_direction to an empty profile.
    servings stays None when the model omits it; the defaulting pass fills it in.
    """

    normalized_ingredients: List[IngredientDetail] = Field(default_factory=list)
    missing_items: List[MissingItem] = Field(default_factory=list)
    taste_direction: TasteDirection = Field(default_factory=TasteDirection)
    servings: Optional[JsonInt] = None
    dietary_notes: Optional[StrictStr] = None


class RecipeIngredient(WorkflowModel):
    item: StrictStr
    quantity: Annotated[StrictStr, Field(description="Amount with explicit unit, or 适量 with a hint")]
    prep: Optional[StrictStr] = None
    purpose: Optional[StrictStr] = None


class RecipeStep(WorkflowModel):
    order: JsonInt
    instruction: StrictStr
    timing: Optional[StrictStr] = None
    taste_focus: Optional[StrictStr] = None


class RecipeOutput(WorkflowModel):
    """Stage 2 output: the final recipe.

    ingredient_list and steps are required; a recipe without steps is rejected.
    servings may be omitted by the model and is back-filled from the plan.
    """

    recipe_name: StrictStr
    servings: Optional[JsonInt] = None
    overview: StrictStr
    ingredient_list: List[RecipeIngredient]
    steps: List[RecipeStep]
    finishing_touches: List[StrictStr] = Field(default_factory=list)
    tasting_notes: List[StrictStr] = Field(default_factory=list)
