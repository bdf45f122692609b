#!/usr/bin/env python3
"""Ad hoc recipe generator for GourmetNet.

Generate a recipe directly without starting the API server.

Usage:
    python query.py chicken rice broccoli
    python query.py --style Keto "ground beef" cheese
    python query.py --debug salmon lemon  # Show full GenerationResult JSON
    python query.py --spoonacular tomato basil  # Search existing recipes instead

Features:
- Runs the same pipeline as POST /api/generate-recipe
- Renders the recipe detail view (times, macros, ingredients, steps)
- Shows the fallback notice when the recipe did not come from Gemini
- Clean exit after completion
"""

import asyncio
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gourmetnet.clients.spoonacular import SpoonacularClient
from gourmetnet.data.catalog import DEFAULT_DIETARY_STYLE, find_dietary_style
from gourmetnet.generator.generator import RecipeGenerator
from gourmetnet.models.models import GenerationResult, RecipeSummary
from gourmetnet.presentation.detail import build_detail_view
from gourmetnet.session.selection import IngredientSelection
from gourmetnet.utils.config import config
from gourmetnet.utils.errors import GourmetNetError, MissingIngredientsError
from gourmetnet.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--spoonacular] [--style NAME] <ingredient> ["<ingredient>" ...]'


def render_result(result: GenerationResult) -> None:
    """Print a generation result the way the detail screen lays it out."""
    view = build_detail_view(result.recipe)
    recipe = view.recipe

    if result.is_degraded:
        console.print(f"[yellow]⚠️  AI generation unavailable ({result.reason.value}), showing a template recipe[/yellow]")

    header = (
        f"[bold]{recipe.title}[/bold]\n"
        f"{recipe.cuisine} · {recipe.difficulty} · serves {recipe.servings}\n"
        f"Prep {recipe.prep_time} min · Cook {recipe.cook_time} min · Total {view.total_time} min"
    )
    console.print(Panel(header, border_style="green"))

    ingredients = Table(title="Ingredients", show_header=True, header_style="bold cyan")
    ingredients.add_column("Quantity", justify="right")
    ingredients.add_column("Unit")
    ingredients.add_column("Ingredient")
    ingredients.add_column("Preparation", style="dim")
    for item in recipe.ingredients:
        ingredients.add_row(str(item.quantity), item.unit, item.name, item.preparation)
    console.print(ingredients)

    console.print("[bold cyan]Instructions[/bold cyan]")
    for step_number, step in enumerate(recipe.instructions, start=1):
        console.print(f"  {step_number}. {step}")

    nutrition = recipe.nutrition
    console.print()
    console.print(
        f"[bold cyan]Nutrition per serving[/bold cyan]  {nutrition.calories} kcal · "
        f"protein {nutrition.protein}g ({view.macros.protein}%) · "
        f"carbs {nutrition.carbs}g ({view.macros.carbs}%) · "
        f"fat {nutrition.fat}g ({view.macros.fat}%) · "
        f"fiber {nutrition.fiber}g · sugar {nutrition.sugar}g"
    )


def render_summaries(recipes: list[RecipeSummary]) -> None:
    if not recipes:
        console.print("[yellow]No recipes found[/yellow]")
        return
    table = Table(title="Spoonacular recipes", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Uses")
    table.add_column("Missing", style="dim")
    for recipe in recipes:
        table.add_row(
            str(recipe.id),
            recipe.title,
            ", ".join(recipe.used_ingredients),
            ", ".join(recipe.missed_ingredients),
        )
    console.print(table)


async def _generate(selection: IngredientSelection) -> GenerationResult:
    return await selection.generate(RecipeGenerator.from_config(config))


def run_query(ingredients: list[str], dietary_style: str, debug: bool = False) -> None:
    """Generate one recipe and print it.

    Args:
        ingredients: Ingredient names.
        dietary_style: Dietary style name.
        debug: If True, display the full GenerationResult JSON as well.
    """
    selection = IngredientSelection(ingredients, dietary_style=dietary_style)
    try:
        logger.info(f"Generating {dietary_style} recipe for: {', '.join(selection.ingredients)}")
        result = asyncio.run(_generate(selection))
        console.print()

        if debug:
            console.print("[bold cyan]Debug Mode: Full Result[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(result.model_dump_json(by_alias=True))
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        render_result(result)

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except GourmetNetError as e:
        if selection.notice:
            console.print(f"[red]✗ {selection.notice.title}: {selection.notice.message}[/red]")
        else:
            console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)


def run_spoonacular(ingredients: list[str]) -> None:
    if not config.spoonacular_configured:
        console.print("[red]✗ Error: set USE_SPOONACULAR=true and SPOONACULAR_API_KEY to search Spoonacular[/red]")
        sys.exit(1)
    client = SpoonacularClient.from_config(config)
    try:
        recipes = asyncio.run(client.find_by_ingredients(ingredients, number=config.SPOONACULAR_MAX_RESULTS))
    except GourmetNetError as e:
        logger.error(f"Spoonacular search failed: {e}")
        sys.exit(1)
    render_summaries(recipes)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print("  python query.py chicken rice broccoli")
        print('  python query.py --style Keto "ground beef" cheese')
        print("  python query.py --debug salmon lemon")
        print("  python query.py --spoonacular tomato basil")
        sys.exit(1)

    debug_mode = False
    spoonacular_mode = False
    style = DEFAULT_DIETARY_STYLE
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] == "--debug":
            debug_mode = True
            argv_start += 1
        elif sys.argv[argv_start] == "--spoonacular":
            spoonacular_mode = True
            argv_start += 1
        elif sys.argv[argv_start] == "--style":
            argv_start += 1
            if argv_start >= len(sys.argv):
                print("Error: --style flag requires a dietary style name")
                sys.exit(1)
            catalog_entry = find_dietary_style(sys.argv[argv_start])
            style = catalog_entry.name if catalog_entry else sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            sys.exit(1)

    ingredient_args = sys.argv[argv_start:]
    if not ingredient_args:
        print(f"Error: {MissingIngredientsError.default_message}")
        print(USAGE)
        sys.exit(1)

    if spoonacular_mode:
        run_spoonacular(ingredient_args)
    else:
        run_query(ingredient_args, style, debug=debug_mode)
