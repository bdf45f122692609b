"""Derived values for the recipe detail screen and the navigation payload.

A recipe travels to the detail screen as a JSON string. ``restore_recipe``
always returns a fully-populated Recipe, whatever state the payload is in.
"""

import json
from typing import Optional

from gourmetnet.generator.common import DEFAULT_STOCK_IMAGE, make_ingredient_id, make_recipe_id
from gourmetnet.generator.parser import build_recipe
from gourmetnet.models.models import Ingredient, MacroBreakdown, NutritionInfo, Recipe, RecipeDetailView
from gourmetnet.utils.logger import logger
from gourmetnet.utils.safe import safe_execute_sync


DEFAULT_INGREDIENTS_PARAM = "chicken,rice"
DEFAULT_STYLE_PARAM = "Mediterranean"

SKELETON_INSTRUCTIONS = (
    "Prepare all ingredients according to the recipe requirements.",
    "Follow the cooking method appropriate for your chosen style.",
    "Season to taste and serve when ready.",
)


def total_time(recipe: Recipe) -> int:
    return recipe.prep_time + recipe.cook_time


def macro_percentages(nutrition: NutritionInfo) -> MacroBreakdown:
    """Share of protein, carbs and fat in their gram total, one decimal.

    All three are 0.0 when the total is 0.
    """
    macro_total = nutrition.protein + nutrition.carbs + nutrition.fat
    if macro_total <= 0:
        return MacroBreakdown(protein=0.0, carbs=0.0, fat=0.0)
    return MacroBreakdown(
        protein=round(nutrition.protein / macro_total * 100, 1),
        carbs=round(nutrition.carbs / macro_total * 100, 1),
        fat=round(nutrition.fat / macro_total * 100, 1),
    )


def build_detail_view(recipe: Recipe) -> RecipeDetailView:
    return RecipeDetailView(
        recipe=recipe,
        total_time=total_time(recipe),
        macros=macro_percentages(recipe.nutrition),
    )


def serialize_recipe(recipe: Recipe) -> str:
    """camelCase JSON payload for navigation to the detail screen."""
    return recipe.model_dump_json(by_alias=True)


def _split_param(ingredients_param: Optional[str]) -> list[str]:
    names = [name.strip() for name in (ingredients_param or "").split(",") if name.strip()]
    return names or DEFAULT_INGREDIENTS_PARAM.split(",")


def skeleton_recipe(ingredients_param: Optional[str] = None, style_param: Optional[str] = None) -> Recipe:
    """Placeholder recipe built from the route parameters alone."""
    names = _split_param(ingredients_param)
    style = (style_param or "").strip() or DEFAULT_STYLE_PARAM

    return Recipe(
        id=make_recipe_id(),
        title=f"{style} {names[0]} Recipe",
        ingredients=[
            Ingredient(id=make_ingredient_id(index), name=name, quantity=1, unit="cup")
            for index, name in enumerate(names)
        ],
        instructions=list(SKELETON_INSTRUCTIONS),
        prep_time=15,
        cook_time=30,
        servings=4,
        difficulty="Medium",
        cuisine=style,
        dietary_tags=[style.lower()],
        nutrition=NutritionInfo(calories=350, protein=25, carbs=30, fat=12, fiber=5, sugar=8),
        image=DEFAULT_STOCK_IMAGE,
    )


def simple_recipe() -> Recipe:
    """Last-resort recipe for a payload that cannot be read at all."""
    return Recipe(
        id="fallback-recipe",
        title="Simple Recipe",
        ingredients=[Ingredient(id=make_ingredient_id(0), name="Main ingredient", quantity=1, unit="cup")],
        instructions=["Prepare and cook as desired."],
        prep_time=15,
        cook_time=30,
        servings=4,
        difficulty="Easy",
        cuisine="General",
        dietary_tags=["general"],
        nutrition=NutritionInfo(calories=300, protein=20, carbs=25, fat=10, fiber=4, sugar=6),
        image=DEFAULT_STOCK_IMAGE,
    )


def restore_recipe(
    payload: Optional[str],
    ingredients_param: Optional[str] = None,
    style_param: Optional[str] = None,
) -> Recipe:
    """Rebuild the Recipe shown on the detail screen.

    Args:
        payload: JSON produced by ``serialize_recipe``, or None when the
            screen was opened from route parameters only.
        ingredients_param: Comma-separated ingredient names (default "chicken,rice").
        style_param: Dietary style name (default "Mediterranean").

    Returns:
        The decoded recipe with missing fields refilled, the skeleton recipe
        when there is no payload, or ``simple_recipe()`` when the payload is
        unreadable.
    """
    if not payload:
        return skeleton_recipe(ingredients_param, style_param)

    data = safe_execute_sync(
        lambda: json.loads(payload),
        "Decode recipe payload",
        log_level="warning",
        default_return=None,
    )
    if not isinstance(data, dict):
        logger.warning("Recipe payload is not a JSON object, showing simple recipe")
        return simple_recipe()

    style = _text_or(data.get("cuisine"), (style_param or "").strip() or DEFAULT_STYLE_PARAM)
    return safe_execute_sync(
        lambda: build_recipe(data, _split_param(ingredients_param), style, preserve_identity=True),
        "Restore recipe payload",
        log_level="warning",
        default_return=None,
    ) or simple_recipe()


def _text_or(value, default: str) -> str:
    return value.strip() if isinstance(value, str) and value.strip() else default
