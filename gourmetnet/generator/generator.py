"""Recipe generation pipeline: prompt -> Gemini -> parser, with fallback.

Every request yields a ``GenerationResult``. When the model cannot be used
(no key, provider failure, unparsable completion) the recipe comes from the
fallback generator and the result is marked degraded with the reason.
"""

import random
from typing import Iterable, Optional

from gourmetnet.clients.gemini import GeminiClient, TextGenerator
from gourmetnet.generator.fallback import generate_fallback_recipe
from gourmetnet.generator.parser import parse_recipe_response
from gourmetnet.models.models import DegradationReason, GenerationResult
from gourmetnet.prompts.prompts import build_recipe_prompt
from gourmetnet.utils.config import Config
from gourmetnet.utils.errors import MissingIngredientsError, RecipeGenerationError, RecipeParseError
from gourmetnet.utils.logger import logger


def normalize_ingredients(ingredients: Iterable[str]) -> list[str]:
    """Strip names, drop blanks and duplicates (first occurrence wins)."""
    cleaned = [name.strip() for name in ingredients if isinstance(name, str) and name.strip()]
    return list(dict.fromkeys(cleaned))


class RecipeGenerator:
    """Generate one recipe per request from an ingredient list and a dietary style."""

    def __init__(
        self,
        client: Optional[TextGenerator] = None,
        fallback_on_provider_error: bool = True,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            client: Text generator (normally a ``GeminiClient``). None means
                every request is served by the fallback generator.
            fallback_on_provider_error: Serve a fallback recipe when the
                client fails. When False the ``RecipeGenerationError`` propagates.
            rng: Random source for fallback values and stock images.
        """
        self.client = client
        self.fallback_on_provider_error = fallback_on_provider_error
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, config: Config) -> "RecipeGenerator":
        client = GeminiClient.from_config(config) if config.gemini_configured else None
        return cls(client=client, fallback_on_provider_error=config.FALLBACK_ON_PROVIDER_ERROR)

    @property
    def ai_enabled(self) -> bool:
        return self.client is not None and self.client.is_configured

    def _degraded(self, ingredients: list[str], dietary_style: str, reason: DegradationReason) -> GenerationResult:
        recipe = generate_fallback_recipe(ingredients, dietary_style, rng=self.rng)
        logger.warning(
            f"Serving fallback recipe '{recipe.title}'",
            extra={"degradation_reason": reason.value, "recipe_id": recipe.id},
        )
        return GenerationResult.degraded(recipe, reason)

    async def generate(self, ingredients: Iterable[str], dietary_style: str) -> GenerationResult:
        """Generate a recipe.

        Args:
            ingredients: Ingredient names. Blank and duplicate names are ignored.
            dietary_style: Dietary style name, passed through verbatim.

        Returns:
            GenerationResult, parsed or degraded.

        Raises:
            MissingIngredientsError: If no ingredient remains after normalization.
                The client is not called.
            RecipeGenerationError: If the provider failed and
                ``fallback_on_provider_error`` is False.
        """
        names = normalize_ingredients(ingredients)
        if not names:
            raise MissingIngredientsError()

        if not self.ai_enabled:
            return self._degraded(names, dietary_style, DegradationReason.UNCONFIGURED)

        prompt = build_recipe_prompt(names, dietary_style)
        logger.info(f"Generating {dietary_style} recipe for: {', '.join(names)}")

        try:
            response_text = await self.client.generate(prompt)
        except RecipeGenerationError as e:
            if not self.fallback_on_provider_error:
                raise
            logger.error(f"Recipe generation failed: {e}")
            return self._degraded(names, dietary_style, DegradationReason.PROVIDER_ERROR)

        try:
            recipe = parse_recipe_response(response_text, names, dietary_style, rng=self.rng)
        except RecipeParseError as e:
            logger.warning(f"Could not parse Gemini response: {e}")
            return self._degraded(names, dietary_style, DegradationReason.UNPARSABLE_RESPONSE)

        logger.info(f"Generated recipe '{recipe.title}'", extra={"recipe_id": recipe.id})
        return GenerationResult.parsed(recipe)
