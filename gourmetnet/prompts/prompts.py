"""Prompt templates for recipe generation.

Provides a factory that turns the user's ingredient list and dietary style into
a single text prompt. The prompt asks for one JSON object with a fixed field
list; ``gourmetnet.generator.parser`` relies on that shape.
"""

from typing import Sequence

from gourmetnet.utils.errors import MissingIngredientsError


def _get_json_template(dietary_style: str) -> str:
    """JSON skeleton the model is asked to fill in.

    Args:
        dietary_style: Style name, echoed as the expected cuisine.

    Returns:
        str: Pretty-printed template with placeholder values.
    """
    return f"""{{
  "title": "Recipe name",
  "ingredients": [
    {{
      "name": "ingredient name",
      "quantity": number,
      "unit": "measurement unit",
      "preparation": "preparation method (optional)"
    }}
  ],
  "instructions": [
    "Step 1 instruction",
    "Step 2 instruction",
    "etc."
  ],
  "prepTime": number_in_minutes,
  "cookTime": number_in_minutes,
  "servings": number_of_servings,
  "difficulty": "Easy|Medium|Hard",
  "cuisine": "{dietary_style}",
  "nutrition": {{
    "calories": estimated_calories_per_serving,
    "protein": protein_grams,
    "carbs": carbs_grams,
    "fat": fat_grams,
    "fiber": fiber_grams,
    "sugar": sugar_grams
  }}
}}"""


def _get_output_rules() -> str:
    return """## Output Rules (CRITICAL)

- Return ONLY valid JSON: a single object matching the format above
- Do NOT include any text before or after the JSON object
- Do NOT wrap the JSON in markdown code fences
- All numbers must be plain numbers (no units, no ranges, no quotes)
- "difficulty" must be exactly one of: Easy, Medium, Hard"""


def build_recipe_prompt(ingredients: Sequence[str], dietary_style: str) -> str:
    """Build the recipe generation prompt.

    Args:
        ingredients: Ingredient names chosen by the user (at least one).
        dietary_style: Dietary style / cuisine preset name (e.g. "Mediterranean").

    Returns:
        str: Prompt embedding the literal ingredient list and style name,
        requesting a JSON-only answer.

    Raises:
        MissingIngredientsError: If ``ingredients`` is empty.
    """
    if not ingredients:
        raise MissingIngredientsError()

    ingredients_list = ", ".join(ingredients)

    return f"""You are a helpful recipe generator. Create a detailed {dietary_style} recipe using these ingredients: {ingredients_list}.

Ingredients: {ingredients_list}
Dietary Style: {dietary_style}

Please provide the response in the following JSON format:
{_get_json_template(dietary_style)}

Make sure the recipe is practical, delicious, and follows {dietary_style} cooking principles. Include all the provided ingredients in a meaningful way.

{_get_output_rules()}"""
