#!/usr/bin/env python3
"""Ad hoc runner for the recipe workflow.

Run the two-stage workflow (ingredient analysis -> recipe crafting) from the
command line against the Gemini-backed agents.

Usage:
    python query.py --taste 微辣 鸡胸肉 青椒
    python query.py --taste 酸甜 --servings 4 "番茄, 鸡蛋"
    python query.py --notes 少油 --taste 清淡 豆腐 小白菜
    python query.py --debug --taste 微辣 鸡胸肉 青椒   # Show full JSON recipe
    python query.py --stateless --taste 微辣 鸡胸肉     # No agent memory database

Features:
- Ingredients from positional arguments (space or comma separated)
- Recipe rendered as markdown in the terminal
- Debug mode to display the full RecipeOutput JSON
- Stateless mode to run without the agent memory database
"""

import sys

from rich.console import Console
from rich.markdown import Markdown

from src.agents.agent import initialize_agent_registry
from src.models.models import RecipeOutput
from src.utils.errors import RecipeWorkflowError
from src.utils.logger import logger
from src.utils.tracing import initialize_tracing
from src.workflow.workflow import RecipeWorkflow

console = Console()

USAGE = 'Usage: python query.py [--debug] [--stateless] [--servings N] [--notes TEXT] --taste TASTE <ingredient> [...]'


def split_ingredients(args: list[str]) -> list[str]:
    """Split positional arguments on ASCII and full-width commas."""
    ingredients = []
    for arg in args:
        for part in arg.replace("，", ",").split(","):
            if part.strip():
                ingredients.append(part.strip())
    return ingredients


def render_recipe(recipe: RecipeOutput) -> str:
    """Render a recipe as markdown."""
    lines = [f"# {recipe.recipe_name}", "", f"**份量:** {recipe.servings}", "", recipe.overview, "", "## 食材"]
    for ingredient in recipe.ingredient_list:
        line = f"- **{ingredient.item}** {ingredient.quantity}"
        if ingredient.prep:
            line += f"，{ingredient.prep}"
        if ingredient.purpose:
            line += f"（{ingredient.purpose}）"
        lines.append(line)

    lines += ["", "## 步骤"]
    for step in sorted(recipe.steps, key=lambda s: s.order):
        line = f"{step.order}. {step.instruction}"
        if step.timing:
            line += f" _[{step.timing}]_"
        lines.append(line)
        if step.taste_focus:
            lines.append(f"   - 味型要点：{step.taste_focus}")

    if recipe.finishing_touches:
        lines += ["", "## 收尾"] + [f"- {touch}" for touch in recipe.finishing_touches]
    if recipe.tasting_notes:
        lines += ["", "## 品鉴"] + [f"- {note}" for note in recipe.tasting_notes]
    return "\n".join(lines)


def run_query(request_data: dict, debug: bool = False, stateless: bool = False) -> None:
    """Execute the workflow once and print the recipe.

    Args:
        request_data: Raw recipe request (validated by the workflow).
        debug: If True, display full JSON response with all fields.
        stateless: If True, disable agent memory persistence.
    """
    try:
        logger.info(f"Initializing agents (stateless={stateless})...")
        initialize_tracing()
        registry = initialize_agent_registry(use_db=not stateless)
        workflow = RecipeWorkflow.from_config(registry)

        logger.info(f"Running workflow: {request_data}")
        logger.info("---")
        recipe = workflow.run_sync(request_data)
        logger.info("---")
        console.print()

        if debug:
            console.print("[bold cyan]Debug Mode: Full Recipe[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=recipe.model_dump(by_alias=True))
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        console.print(Markdown(render_recipe(recipe)))

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except RecipeWorkflowError as e:
        console.print(f"[red]✗ {type(e).__name__}: {e}[/red]")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    debug_mode = False
    stateless_mode = False
    request_data: dict = {}
    argv_start = 1

    value_flags = {"--taste": "taste", "--servings": "servings", "--notes": "dietaryNotes"}

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag == "--stateless":
            stateless_mode = True
            argv_start += 1
        elif flag in value_flags:
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            value = sys.argv[argv_start]
            if flag == "--servings":
                if not value.isdigit():
                    print(f"Error: --servings must be an integer, got: {value}")
                    sys.exit(1)
                request_data["servings"] = int(value)
            else:
                request_data[value_flags[flag]] = value
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    ingredients = split_ingredients(sys.argv[argv_start:])
    if not ingredients or "taste" not in request_data:
        print("Error: at least one ingredient and --taste are required")
        print(USAGE)
        print("")
        print("Examples:")
        print("  python query.py --taste 微辣 鸡胸肉 青椒")
        print("  python query.py --debug --servings 4 --taste 酸甜 \"番茄, 鸡蛋\"")
        sys.exit(1)

    request_data["ingredients"] = ingredients
    run_query(request_data, debug=debug_mode, stateless=stateless_mode)
