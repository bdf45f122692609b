"""HTTP API for the recipe generation service.

Endpoints:
- GET  /health                     service status and which providers are configured
- GET  /api/dietary-styles         dietary style catalog
- GET  /api/ingredients            common ingredient suggestions, ?q= prefix filter
- POST /api/generate-recipe        Recipe JSON for {ingredients, dietaryStyle}
- GET  /api/recipes/gemini         same pipeline, full GenerationResult
- GET  /api/recipes/spoonacular    existing recipes that use the ingredients

Errors are returned as ``{"error": "..."}`` with a 400, 500 or 503 status.
"""

from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from gourmetnet.clients.spoonacular import SpoonacularClient
from gourmetnet.data.catalog import DEFAULT_DIETARY_STYLE, DIETARY_STYLES, suggest_ingredients
from gourmetnet.generator.generator import RecipeGenerator
from gourmetnet.models.models import RecipeRequest
from gourmetnet.utils.config import Config
from gourmetnet.utils.errors import MissingIngredientsError, RecipeGenerationError, SpoonacularError
from gourmetnet.utils.logger import logger
from gourmetnet.utils.safe import safe_execute_async


MISSING_FIELDS_ERROR = "Ingredients and dietary style are required."
GENERATION_FAILED_ERROR = "Failed to generate recipe."
SPOONACULAR_DISABLED_ERROR = "Spoonacular search is not configured."
SPOONACULAR_FAILED_ERROR = "Failed to fetch recipes from Spoonacular."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _split_csv(value: Optional[str]) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def create_app(
    config: Config,
    generator: Optional[RecipeGenerator] = None,
    spoonacular: Optional[SpoonacularClient] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Service configuration.
        generator: Recipe pipeline. Built from ``config`` when None.
        spoonacular: Spoonacular client. Built from ``config`` when None and
            Spoonacular is enabled; otherwise the search endpoint answers 503.

    Returns:
        FastAPI: Configured application.
    """
    if generator is None:
        generator = RecipeGenerator.from_config(config)
    if spoonacular is None and config.spoonacular_configured:
        spoonacular = SpoonacularClient.from_config(config)

    app = FastAPI(title="GourmetNet Recipe API", version="0.1.0")
    app.state.config = config
    app.state.generator = generator
    app.state.spoonacular = spoonacular

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Recipe-Source", "X-Degradation-Reason"],
    )

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "gemini": app.state.generator.ai_enabled,
            "spoonacular": app.state.spoonacular is not None,
        }

    @app.get("/api/dietary-styles")
    async def dietary_styles():
        return [style.model_dump(by_alias=True) for style in DIETARY_STYLES]

    @app.get("/api/ingredients")
    async def ingredients(q: str = Query("")):
        return suggest_ingredients(q)

    @app.post("/api/generate-recipe")
    async def generate_recipe(request: Request):
        body = await safe_execute_async(
            request.json(),
            "Decode generate-recipe body",
            log_level="debug",
            default_return=None,
        )
        if not isinstance(body, dict):
            return _error(400, MISSING_FIELDS_ERROR)

        try:
            recipe_request = RecipeRequest.model_validate(body)
        except ValidationError as e:
            logger.debug(f"Rejected generate-recipe body: {e.error_count()} validation error(s)")
            return _error(400, MISSING_FIELDS_ERROR)

        try:
            result = await app.state.generator.generate(recipe_request.ingredients, recipe_request.dietary_style)
        except MissingIngredientsError:
            return _error(400, MISSING_FIELDS_ERROR)
        except RecipeGenerationError as e:
            logger.error(f"Error generating recipe: {e}")
            return _error(500, GENERATION_FAILED_ERROR)

        headers = {"X-Recipe-Source": "fallback" if result.is_degraded else "gemini"}
        if result.is_degraded:
            headers["X-Degradation-Reason"] = result.reason.value
        return JSONResponse(content=result.recipe.model_dump(mode="json", by_alias=True), headers=headers)

    @app.get("/api/recipes/gemini")
    async def gemini_recipe(
        ingredients: str = Query(""),
        dietary_style: str = Query(DEFAULT_DIETARY_STYLE, alias="dietaryStyle"),
    ):
        names = _split_csv(ingredients)
        if not names:
            return _error(400, MissingIngredientsError.default_message)

        try:
            result = await app.state.generator.generate(names, dietary_style.strip() or DEFAULT_DIETARY_STYLE)
        except MissingIngredientsError as e:
            return _error(400, str(e))
        except RecipeGenerationError as e:
            logger.error(f"Error generating recipe: {e}")
            return _error(500, GENERATION_FAILED_ERROR)

        return result.model_dump(mode="json", by_alias=True)

    @app.get("/api/recipes/spoonacular")
    async def spoonacular_recipes(
        ingredients: str = Query(""),
        number: int = Query(config.SPOONACULAR_MAX_RESULTS, ge=1, le=100),
    ):
        names = _split_csv(ingredients)
        if not names:
            return _error(400, "Please provide ingredients as a comma-separated list.")
        if app.state.spoonacular is None:
            return _error(503, SPOONACULAR_DISABLED_ERROR)

        try:
            recipes = await app.state.spoonacular.find_by_ingredients(names, number=number)
        except SpoonacularError as e:
            logger.error(f"Spoonacular search failed: {e}")
            return _error(500, SPOONACULAR_FAILED_ERROR)

        return {"recipes": [recipe.model_dump(mode="json", by_alias=True) for recipe in recipes]}

    return app
