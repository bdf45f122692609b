"""Unit tests for the HTTP API."""

import json
import random
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from gourmetnet.api.app import create_app
from gourmetnet.generator.generator import RecipeGenerator
from gourmetnet.models.models import RecipeSummary
from gourmetnet.utils.config import Config
from gourmetnet.utils.errors import RecipeGenerationError, SpoonacularError


COMPLETION = json.dumps(
    {
        "title": "Garlic Butter Salmon",
        "ingredients": [{"name": "salmon", "quantity": 2, "unit": "fillet"}],
        "instructions": ["Sear the salmon."],
        "prepTime": 5,
        "cookTime": 12,
        "servings": 2,
        "difficulty": "Easy",
        "nutrition": {"calories": 380, "protein": 34, "carbs": 1, "fat": 26, "fiber": 0, "sugar": 0},
    }
)


@pytest.fixture
def config(monkeypatch):
    for name in ("GEMINI_API_KEY", "USE_SPOONACULAR", "SPOONACULAR_API_KEY", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    return Config()


def fake_llm(completion=COMPLETION, error=None):
    client = MagicMock()
    client.is_configured = True
    client.generate = AsyncMock(return_value=completion, side_effect=error)
    return client


def make_test_client(config, llm=None, spoonacular=None, **generator_kwargs) -> TestClient:
    generator = RecipeGenerator(client=llm, rng=random.Random(5), **generator_kwargs)
    return TestClient(create_app(config, generator=generator, spoonacular=spoonacular))


class TestCatalogEndpoints:
    def test_health(self, config):
        response = make_test_client(config).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "gemini": False, "spoonacular": False}

    def test_dietary_styles(self, config):
        styles = make_test_client(config).get("/api/dietary-styles").json()

        assert len(styles) == 6
        assert styles[0] == {
            "id": "1",
            "name": "Mediterranean",
            "description": "Fresh, healthy ingredients with olive oil and herbs",
            "icon": "🫒",
        }

    def test_ingredients(self, config):
        ingredients = make_test_client(config).get("/api/ingredients").json()

        assert len(ingredients) == 30
        assert ingredients[0] == "Chicken breast"

    def test_ingredients_prefix_filter(self, config):
        ingredients = make_test_client(config).get("/api/ingredients", params={"q": "sa"}).json()
        assert ingredients == ["Salmon", "Salt"]


class TestGenerateRecipe:
    """Tests for POST /api/generate-recipe."""

    def test_gemini_recipe(self, config):
        llm = fake_llm()
        response = make_test_client(config, llm=llm).post(
            "/api/generate-recipe", json={"ingredients": ["salmon", "garlic"], "dietaryStyle": "Keto"}
        )

        assert response.status_code == 200
        assert response.headers["X-Recipe-Source"] == "gemini"
        assert "X-Degradation-Reason" not in response.headers
        body = response.json()
        assert body["title"] == "Garlic Butter Salmon"
        assert body["prepTime"] == 5
        assert body["cuisine"] == "Keto"

    def test_fallback_when_unconfigured(self, config):
        response = make_test_client(config).post(
            "/api/generate-recipe", json={"ingredients": ["tofu"], "dietaryStyle": "Vegetarian"}
        )

        assert response.status_code == 200
        assert response.headers["X-Recipe-Source"] == "fallback"
        assert response.headers["X-Degradation-Reason"] == "unconfigured"
        assert response.json()["title"] == "Vegetarian tofu Delight"

    @pytest.mark.parametrize(
        "body",
        [
            {"ingredients": [], "dietaryStyle": "Keto"},
            {"ingredients": ["  "], "dietaryStyle": "Keto"},
            {"ingredients": ["egg"]},
            {"dietaryStyle": "Keto"},
        ],
    )
    def test_missing_fields_are_rejected(self, config, body):
        llm = fake_llm()
        response = make_test_client(config, llm=llm).post("/api/generate-recipe", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Ingredients and dietary style are required."}
        llm.generate.assert_not_awaited()

    def test_non_json_body_is_rejected(self, config):
        response = make_test_client(config).post(
            "/api/generate-recipe", content="ingredients=egg", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 400

    def test_provider_error_degrades(self, config):
        llm = fake_llm(error=RecipeGenerationError("quota"))
        response = make_test_client(config, llm=llm).post(
            "/api/generate-recipe", json={"ingredients": ["egg"], "dietaryStyle": "Keto"}
        )

        assert response.status_code == 200
        assert response.headers["X-Degradation-Reason"] == "provider_error"

    def test_provider_error_is_500_when_fallback_disabled(self, config):
        llm = fake_llm(error=RecipeGenerationError("quota"))
        client = make_test_client(config, llm=llm, fallback_on_provider_error=False)

        response = client.post("/api/generate-recipe", json={"ingredients": ["egg"], "dietaryStyle": "Keto"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate recipe."}

    def test_long_ingredient_name_still_gets_a_recipe(self, config):
        response = make_test_client(config).post(
            "/api/generate-recipe", json={"ingredients": ["a" * 250], "dietaryStyle": "b" * 100}
        )

        assert response.status_code == 200
        assert response.json()["title"] == f"{'b' * 100} {'a' * 250} Delight"
        assert response.json()["ingredients"][0]["name"] == "a" * 250

    def test_non_finite_nutrition_is_defaulted(self, config):
        llm = fake_llm('{"ingredients": [{"name": "salmon"}], "nutrition": {"calories": 1e400, "fat": NaN}}')
        response = make_test_client(config, llm=llm).post(
            "/api/generate-recipe", json={"ingredients": ["salmon"], "dietaryStyle": "Keto"}
        )

        assert response.status_code == 200
        assert response.headers["X-Recipe-Source"] == "gemini"
        assert response.json()["nutrition"]["calories"] == 300
        assert response.json()["nutrition"]["fat"] == 10


class TestGeminiQueryEndpoint:
    """Tests for GET /api/recipes/gemini."""

    def test_returns_generation_result(self, config):
        response = make_test_client(config, llm=fake_llm("no json at all")).get(
            "/api/recipes/gemini", params={"ingredients": "salmon,garlic", "dietaryStyle": "Keto"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["reason"] == "unparsable_response"
        assert body["recipe"]["title"] == "Keto salmon Delight"

    def test_default_style(self, config):
        body = make_test_client(config).get("/api/recipes/gemini", params={"ingredients": "rice"}).json()
        assert body["recipe"]["cuisine"] == "Mediterranean"

    def test_missing_ingredients(self, config):
        response = make_test_client(config).get("/api/recipes/gemini", params={"ingredients": " , "})

        assert response.status_code == 400
        assert "error" in response.json()


class TestSpoonacularEndpoint:
    """Tests for GET /api/recipes/spoonacular."""

    def test_not_configured(self, config):
        response = make_test_client(config).get("/api/recipes/spoonacular", params={"ingredients": "egg"})
        assert response.status_code == 503

    def test_missing_ingredients(self, config):
        response = make_test_client(config, spoonacular=MagicMock()).get("/api/recipes/spoonacular")
        assert response.status_code == 400

    def test_returns_recipes(self, config):
        spoonacular = MagicMock()
        spoonacular.find_by_ingredients = AsyncMock(
            return_value=[RecipeSummary(id=1, title="Omelette", used_ingredients=["egg"])]
        )

        response = make_test_client(config, spoonacular=spoonacular).get(
            "/api/recipes/spoonacular", params={"ingredients": "egg,cheese", "number": 2}
        )

        assert response.status_code == 200
        assert response.json()["recipes"][0]["title"] == "Omelette"
        assert response.json()["recipes"][0]["usedIngredients"] == ["egg"]
        spoonacular.find_by_ingredients.assert_awaited_once_with(["egg", "cheese"], number=2)

    def test_upstream_failure(self, config):
        spoonacular = MagicMock()
        spoonacular.find_by_ingredients = AsyncMock(side_effect=SpoonacularError("down"))

        response = make_test_client(config, spoonacular=spoonacular).get(
            "/api/recipes/spoonacular", params={"ingredients": "egg"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch recipes from Spoonacular."}
