"""Synthetic recipe used when AI generation is unavailable or unparsable.

The structure is fixed (one ingredient line per input, eight generic steps)
and the numeric fields are drawn uniformly from fixed ranges. The steps are
never tailored to the ingredients.
"""

import random
from typing import Optional, Sequence

from gourmetnet.generator.common import make_ingredient_id, make_recipe_id, stock_image_url
from gourmetnet.models.models import DIFFICULTIES, Ingredient, NutritionInfo, Recipe
from gourmetnet.utils.errors import MissingIngredientsError
from gourmetnet.utils.logger import logger


FALLBACK_UNITS = ("cup", "tbsp", "tsp", "oz", "lb", "piece")
FALLBACK_PREPARATIONS = ("diced", "chopped", "sliced", "minced", "")

FALLBACK_INSTRUCTIONS = (
    "Preheat your cooking surface or oven to the appropriate temperature.",
    "Prepare all ingredients by washing, chopping, and measuring as needed.",
    "Heat oil in a large pan or pot over medium heat.",
    "Add aromatics like onions and garlic, cook until fragrant.",
    "Add main ingredients and cook according to their requirements.",
    "Season with salt, pepper, and other spices to taste.",
    "Continue cooking until ingredients are properly cooked through.",
    "Adjust seasoning and serve hot.",
)

# Inclusive (low, high) bounds
QUANTITY_RANGE = (1, 3)
PREP_TIME_RANGE = (10, 29)
COOK_TIME_RANGE = (15, 54)
SERVINGS_RANGE = (2, 5)
NUTRITION_RANGES = {
    "calories": (200, 599),
    "protein": (10, 39),
    "carbs": (15, 64),
    "fat": (5, 24),
    "fiber": (2, 11),
    "sugar": (3, 17),
}


def generate_fallback_recipe(
    ingredients: Sequence[str],
    dietary_style: str,
    rng: Optional[random.Random] = None,
) -> Recipe:
    """Build a well-formed Recipe without calling any model.

    Args:
        ingredients: Ingredient names (at least one). The first one names the dish.
        dietary_style: Dietary style, used for the title, cuisine and tag.
        rng: Random source; pass a seeded ``random.Random`` for reproducible output.

    Returns:
        Recipe titled ``"<style> <first ingredient> Delight"``.

    Raises:
        MissingIngredientsError: If ``ingredients`` is empty.
    """
    if not ingredients:
        raise MissingIngredientsError()

    rng = rng or random.Random()
    logger.info(f"Generating fallback recipe for {len(ingredients)} ingredient(s), style={dietary_style!r}")

    recipe_ingredients = [
        Ingredient(
            id=make_ingredient_id(index),
            name=name,
            quantity=rng.randint(*QUANTITY_RANGE),
            unit=rng.choice(FALLBACK_UNITS),
            preparation=rng.choice(FALLBACK_PREPARATIONS),
        )
        for index, name in enumerate(ingredients)
    ]

    nutrition = NutritionInfo(**{field: rng.randint(*bounds) for field, bounds in NUTRITION_RANGES.items()})

    return Recipe(
        id=make_recipe_id(),
        title=f"{dietary_style} {ingredients[0]} Delight",
        ingredients=recipe_ingredients,
        instructions=list(FALLBACK_INSTRUCTIONS),
        prep_time=rng.randint(*PREP_TIME_RANGE),
        cook_time=rng.randint(*COOK_TIME_RANGE),
        servings=rng.randint(*SERVINGS_RANGE),
        difficulty=rng.choice(DIFFICULTIES),
        cuisine=dietary_style,
        dietary_tags=[dietary_style.lower()],
        nutrition=nutrition,
        image=stock_image_url(rng),
    )
