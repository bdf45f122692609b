"""Data models and schemas for the recipe generation service.

Defines Pydantic models for request/response validation and domain objects.
All models use Pydantic v2. Wire names are camelCase (``prepTime``,
``dietaryStyle``) to match the mobile client; attribute names stay snake_case
and both spellings are accepted on input.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator, model_validator
from pydantic.alias_generators import to_camel


Difficulty = Literal["Easy", "Medium", "Hard"]
DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")

# Finite only: every amount must survive JSON encoding
Amount = Union[int, FiniteFloat]


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class Ingredient(CamelModel):
    """One line of a recipe's ingredient list.

    Quantity and unit are free-form: no unit-system validation.
    """

    id: str
    name: Annotated[str, Field(min_length=1)]
    quantity: Annotated[Amount, Field(gt=0)]
    unit: str
    preparation: str = ""


class NutritionInfo(CamelModel):
    """Per-serving nutrition: kcal for calories, grams for the rest."""

    calories: Annotated[Amount, Field(ge=0)]
    protein: Annotated[Amount, Field(ge=0)]
    carbs: Annotated[Amount, Field(ge=0)]
    fat: Annotated[Amount, Field(ge=0)]
    fiber: Annotated[Amount, Field(ge=0)]
    sugar: Annotated[Amount, Field(ge=0)]


class Recipe(CamelModel):
    """A fully-populated recipe as shown on the detail screen.

    Every Recipe handed to a caller (parsed, fallback or restored from a
    navigation payload) validates against this model, so the renderer never
    sees a missing field.
    """

    id: str
    title: Annotated[str, Field(min_length=1)]
    ingredients: Annotated[List[Ingredient], Field(min_length=1)]
    instructions: Annotated[List[str], Field(min_length=1)]
    prep_time: Annotated[int, Field(ge=0, description="Preparation time in minutes")]
    cook_time: Annotated[int, Field(ge=0, description="Cooking time in minutes")]
    servings: Annotated[int, Field(ge=1)]
    difficulty: Difficulty
    cuisine: str
    dietary_tags: List[str]
    nutrition: NutritionInfo
    image: Optional[str] = None


class DietaryStyle(CamelModel):
    """Static catalog entry: a named cuisine/diet preset."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str


class RecipeRequest(CamelModel):
    """Request schema for recipe generation.

    Ingredient names are stripped, blanks dropped and duplicates removed
    (first occurrence wins).
    """

    ingredients: Annotated[List[str], Field(min_length=1, max_length=50)]
    dietary_style: Annotated[str, Field(min_length=1, max_length=100)]

    @field_validator("ingredients", mode="before")
    @classmethod
    def normalize_ingredients(cls, ingredients):
        if isinstance(ingredients, str):
            ingredients = ingredients.split(",")
        if not isinstance(ingredients, list):
            return ingredients
        cleaned = [item.strip() for item in ingredients if isinstance(item, str) and item.strip()]
        return list(dict.fromkeys(cleaned))


class DegradationReason(str, Enum):
    """Why a fallback recipe was served instead of an AI-generated one."""

    UNCONFIGURED = "unconfigured"
    PROVIDER_ERROR = "provider_error"
    UNPARSABLE_RESPONSE = "unparsable_response"


class GenerationResult(CamelModel):
    """Outcome of one generation request.

    ``parsed``: the recipe came from the LLM response.
    ``degraded``: the recipe came from the fallback generator; ``reason`` says why.
    """

    status: Literal["parsed", "degraded"]
    recipe: Recipe
    reason: Optional[DegradationReason] = None

    @model_validator(mode="after")
    def reason_matches_status(self) -> "GenerationResult":
        if self.status == "degraded" and self.reason is None:
            raise ValueError("Degraded results must carry a reason")
        if self.status == "parsed" and self.reason is not None:
            raise ValueError("Parsed results cannot carry a degradation reason")
        return self

    @classmethod
    def parsed(cls, recipe: Recipe) -> "GenerationResult":
        return cls(status="parsed", recipe=recipe)

    @classmethod
    def degraded(cls, recipe: Recipe, reason: DegradationReason) -> "GenerationResult":
        return cls(status="degraded", recipe=recipe, reason=reason)

    @property
    def is_degraded(self) -> bool:
        return self.status == "degraded"


class RecipeSummary(CamelModel):
    """One hit from the Spoonacular find-by-ingredients search."""

    id: int
    title: str
    image: Optional[str] = None
    used_ingredient_count: int = 0
    missed_ingredient_count: int = 0
    used_ingredients: List[str] = Field(default_factory=list)
    missed_ingredients: List[str] = Field(default_factory=list)


class Notice(BaseModel):
    """User-facing alert (title + message)."""

    title: str
    message: str


class MacroBreakdown(CamelModel):
    """Share (0-100, one decimal) of protein, carbs and fat in the macro total."""

    protein: float
    carbs: float
    fat: float


class RecipeDetailView(CamelModel):
    """Presentation values derived from a Recipe for the detail screen."""

    recipe: Recipe
    total_time: int
    macros: MacroBreakdown
