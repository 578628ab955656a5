"""Cross-stage defaulting.

Runs after schema validation and back-fills fields the model left out using
the input of the stage that produced them. Kept apart from the schemas so the
schemas only describe shape.
"""

from src.models.models import IngredientPlan, RecipeOutput, RecipeRequest

DEFAULT_SERVINGS = 2


def backfill_ingredient_plan(plan: IngredientPlan, request: RecipeRequest) -> IngredientPlan:
    """Fill requestedProfile, servings and dietaryNotes from the original request."""
    taste_direction = plan.taste_direction.model_copy(
        update={"requested_profile": plan.taste_direction.requested_profile or request.taste}
    )
    servings = plan.servings if plan.servings is not None else request.servings
    return plan.model_copy(
        update={
            "taste_direction": taste_direction,
            "servings": servings if servings is not None else DEFAULT_SERVINGS,
            "dietary_notes": plan.dietary_notes or request.dietary_notes,
        }
    )


def backfill_recipe_output(recipe: RecipeOutput, plan: IngredientPlan) -> RecipeOutput:
    """Fill servings from the plan when the recipe omits it or reports zero."""
    return recipe.model_copy(
        update={"servings": recipe.servings or plan.servings or DEFAULT_SERVINGS}
    )
