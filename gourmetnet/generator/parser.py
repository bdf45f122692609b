"""Parse Gemini recipe completions into validated Recipe objects.

The completion is expected to hold one JSON object, possibly wrapped in prose
or markdown code fences. Parsing fails closed: if no JSON object can be found,
or it lacks a usable ``ingredients`` list, ``RecipeParseError`` is raised and
the caller serves a fallback recipe. Optional scalar fields that are missing,
zero, negative or of the wrong type are replaced by fixed defaults.
"""

import json
import math
import random
import re
from typing import Annotated, Any, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from gourmetnet.generator.common import make_ingredient_id, make_recipe_id, stock_image_url
from gourmetnet.models.models import DIFFICULTIES, Ingredient, NutritionInfo, Recipe
from gourmetnet.utils.errors import RecipeParseError
from gourmetnet.utils.logger import logger
from gourmetnet.utils.safe import safe_execute_sync


CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
LEADING_NUMBER_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)")

Number = Union[int, float]

MAX_INGREDIENT_NAME_LENGTH = 200

DEFAULT_QUANTITY = 1
DEFAULT_UNIT = "piece"
DEFAULT_INSTRUCTIONS = ["Prepare ingredients", "Cook as desired", "Serve hot"]
DEFAULT_PREP_TIME = 15
DEFAULT_COOK_TIME = 30
DEFAULT_SERVINGS = 4
DEFAULT_DIFFICULTY = "Medium"
DEFAULT_NUTRITION = {
    "calories": 300,
    "protein": 15,
    "carbs": 30,
    "fat": 10,
    "fiber": 5,
    "sugar": 8,
}


# ============================================================================
# Lenient field coercion
# ============================================================================


def _positive_number(value: Any) -> Optional[Number]:
    """Read a positive finite number, or None if the value is absent, not numeric, zero, negative or non-finite.

    Numeric strings are read by their leading number ("20 minutes" -> 20).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = LEADING_NUMBER_RE.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _difficulty(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    for level in DIFFICULTIES:
        if level.lower() == key:
            return level
    return None


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return items or None


# ============================================================================
# Payload schema (what the model is asked to return)
# ============================================================================


class _NutritionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calories: Optional[Number] = None
    protein: Optional[Number] = None
    carbs: Optional[Number] = None
    fat: Optional[Number] = None
    fiber: Optional[Number] = None
    sugar: Optional[Number] = None

    @field_validator("*", mode="before")
    @classmethod
    def lenient_number(cls, value):
        return _positive_number(value)


class _IngredientPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Annotated[StrictStr, Field(min_length=1, max_length=MAX_INGREDIENT_NAME_LENGTH)]
    quantity: Optional[Number] = None
    unit: Optional[str] = None
    preparation: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def lenient_quantity(cls, value):
        return _positive_number(value)

    @field_validator("unit", "preparation", mode="before")
    @classmethod
    def lenient_text(cls, value):
        return _text(value)


class _RecipePayload(BaseModel):
    """Structural fields are strict (``ingredients``); everything else is optional and lenient."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ingredients: Annotated[List[_IngredientPayload], Field(min_length=1)]
    title: Optional[str] = None
    instructions: Optional[List[str]] = None
    prep_time: Optional[Number] = Field(None, alias="prepTime")
    cook_time: Optional[Number] = Field(None, alias="cookTime")
    servings: Optional[Number] = None
    difficulty: Optional[str] = None
    cuisine: Optional[str] = None
    nutrition: Optional[_NutritionPayload] = None

    # Only honoured when restoring a previously serialized Recipe
    id: Optional[str] = None
    image: Optional[str] = None
    dietary_tags: Optional[List[str]] = Field(None, alias="dietaryTags")

    @field_validator("title", "cuisine", "id", "image", mode="before")
    @classmethod
    def lenient_text(cls, value):
        return _text(value)

    @field_validator("instructions", "dietary_tags", mode="before")
    @classmethod
    def lenient_list(cls, value):
        return _string_list(value)

    @field_validator("prep_time", "cook_time", "servings", mode="before")
    @classmethod
    def lenient_number(cls, value):
        return _positive_number(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def lenient_difficulty(cls, value):
        return _difficulty(value)

    @field_validator("nutrition", mode="before")
    @classmethod
    def lenient_nutrition(cls, value):
        return value if isinstance(value, dict) else None


# ============================================================================
# Public API
# ============================================================================


def extract_json_object(response_text: str) -> dict:
    """Extract the JSON object from a completion.

    Tries, in order:
    1. ``json.loads`` on the text with code fences removed
    2. Greedy ``{.*}`` extraction (first "{" to last "}") then ``json.loads``

    Args:
        response_text: Raw completion text (may include prose or fences).

    Returns:
        The decoded JSON object.

    Raises:
        RecipeParseError: If no JSON object can be decoded.
    """
    if not response_text or not response_text.strip():
        raise RecipeParseError("Empty response")

    cleaned = CODE_FENCE_RE.sub("", response_text).strip()

    parsed = safe_execute_sync(
        lambda: json.loads(cleaned),
        "Direct JSON parse",
        log_level="debug",
        default_return=None,
    )

    if not isinstance(parsed, dict):
        match = JSON_OBJECT_RE.search(cleaned)
        if not match:
            raise RecipeParseError("No JSON object found in response")
        parsed = safe_execute_sync(
            lambda: json.loads(match.group()),
            "Regex JSON extraction",
            log_level="debug",
            default_return=None,
        )

    if not isinstance(parsed, dict):
        raise RecipeParseError("Response does not contain a valid JSON object")

    return parsed


def build_recipe(
    data: dict,
    ingredients: Sequence[str],
    dietary_style: str,
    rng: Optional[random.Random] = None,
    preserve_identity: bool = False,
) -> Recipe:
    """Map a decoded JSON object onto a fully-populated Recipe.

    Args:
        data: Decoded JSON object.
        ingredients: Ingredients the user asked for (used for the default title).
        dietary_style: Requested dietary style (default cuisine and tag).
        rng: Random source for the stock image URL.
        preserve_identity: Keep ``id``, ``image`` and ``dietaryTags`` found in
            ``data`` (used when re-reading a serialized Recipe).

    Raises:
        RecipeParseError: If ``data`` has no usable ingredients list.
    """
    try:
        payload = _RecipePayload.model_validate(data)
    except ValidationError as e:
        raise RecipeParseError(
            f"Response JSON does not match the recipe schema ({e.error_count()} error(s))"
        ) from e

    try:
        return _to_recipe(payload, ingredients, dietary_style, rng, preserve_identity)
    except ValidationError as e:
        raise RecipeParseError(f"Recipe values out of range ({e.error_count()} error(s))") from e
    except (ValueError, OverflowError) as e:
        raise RecipeParseError(f"Recipe values out of range: {e}") from e


def _to_recipe(
    payload: _RecipePayload,
    ingredients: Sequence[str],
    dietary_style: str,
    rng: Optional[random.Random],
    preserve_identity: bool,
) -> Recipe:
    recipe_ingredients = [
        Ingredient(
            id=make_ingredient_id(index),
            name=item.name,
            quantity=item.quantity or DEFAULT_QUANTITY,
            unit=item.unit or DEFAULT_UNIT,
            preparation=item.preparation or "",
        )
        for index, item in enumerate(payload.ingredients)
    ]

    nutrition_payload = payload.nutrition or _NutritionPayload()
    nutrition = NutritionInfo(
        **{
            field: getattr(nutrition_payload, field) or default
            for field, default in DEFAULT_NUTRITION.items()
        }
    )

    first_ingredient = ingredients[0] if ingredients else recipe_ingredients[0].name

    recipe_id = make_recipe_id()
    image = stock_image_url(rng)
    dietary_tags = [dietary_style.lower()]
    if preserve_identity:
        recipe_id = payload.id or recipe_id
        image = payload.image or image
        dietary_tags = payload.dietary_tags or dietary_tags

    return Recipe(
        id=recipe_id,
        title=payload.title or f"{dietary_style} {first_ingredient} Recipe",
        ingredients=recipe_ingredients,
        instructions=payload.instructions or list(DEFAULT_INSTRUCTIONS),
        prep_time=round(payload.prep_time or DEFAULT_PREP_TIME),
        cook_time=round(payload.cook_time or DEFAULT_COOK_TIME),
        servings=max(1, round(payload.servings or DEFAULT_SERVINGS)),
        difficulty=payload.difficulty or DEFAULT_DIFFICULTY,
        cuisine=payload.cuisine or dietary_style,
        dietary_tags=dietary_tags,
        nutrition=nutrition,
        image=image,
    )


def parse_recipe_response(
    response_text: str,
    ingredients: Sequence[str],
    dietary_style: str,
    rng: Optional[random.Random] = None,
) -> Recipe:
    """Parse a Gemini completion into a Recipe.

    Args:
        response_text: Raw completion text.
        ingredients: Ingredients from the original request.
        dietary_style: Dietary style from the original request.
        rng: Random source for the stock image URL.

    Returns:
        Fully-populated Recipe.

    Raises:
        RecipeParseError: If the text holds no usable recipe JSON. Never raises anything else.
    """
    data = extract_json_object(response_text)
    recipe = build_recipe(data, ingredients, dietary_style, rng=rng)
    logger.debug(f"Parsed recipe '{recipe.title}' with {len(recipe.ingredients)} ingredients")
    return recipe
