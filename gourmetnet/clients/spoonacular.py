"""Spoonacular recipe search client with retry logic.

Looks up existing recipes that use a set of ingredients
(``GET /recipes/findByIngredients``). Connection errors, 429 and 5xx
responses are retried with the configured delays (async).
"""

import asyncio
from typing import Any, Optional, Sequence

import aiohttp

from gourmetnet.models.models import RecipeSummary
from gourmetnet.utils.config import Config
from gourmetnet.utils.errors import SpoonacularError
from gourmetnet.utils.logger import logger


FIND_BY_INGREDIENTS_PATH = "/recipes/findByIngredients"
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class _RetryableResponse(Exception):
    """Spoonacular answered with a status worth retrying."""

    def __init__(self, status: int) -> None:
        super().__init__(f"Spoonacular returned HTTP {status}")
        self.status = status


def _to_summary(item: dict) -> RecipeSummary:
    return RecipeSummary(
        id=item["id"],
        title=item.get("title") or "Untitled recipe",
        image=item.get("image"),
        used_ingredient_count=item.get("usedIngredientCount", 0),
        missed_ingredient_count=item.get("missedIngredientCount", 0),
        used_ingredients=[i["name"] for i in item.get("usedIngredients", []) if i.get("name")],
        missed_ingredients=[i["name"] for i in item.get("missedIngredients", []) if i.get("name")],
    )


class SpoonacularClient:
    """Search Spoonacular for recipes by ingredient.

    Manages retries with per-attempt delays to handle transient failures
    (rate limiting, upstream 5xx, dropped connections) gracefully.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.spoonacular.com",
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        retry_delays: Optional[list[int]] = None,
    ) -> None:
        """Initialize SpoonacularClient with configuration.

        Args:
            api_key: Spoonacular API key for authentication.
            base_url: API root, without trailing slash.
            timeout_seconds: Total timeout for one HTTP request.
            max_retries: Maximum number of attempts per request (default: 3).
            retry_delays: List of delays in seconds for each retry. If None, defaults to [1, 2, 4].

        Raises:
            ValueError: If api_key is None or empty string.
        """
        if not api_key:
            raise ValueError("SPOONACULAR_API_KEY is required")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.retry_delays = retry_delays or [1, 2, 4]

    @classmethod
    def from_config(cls, config: Config) -> "SpoonacularClient":
        return cls(api_key=config.SPOONACULAR_API_KEY, base_url=config.SPOONACULAR_BASE_URL)

    async def _fetch(self, path: str, params: dict[str, Any]) -> Any:
        """One HTTP GET. Returns the decoded JSON body."""
        query = {**params, "apiKey": self.api_key}
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(f"{self.base_url}{path}", params=query) as response:
                if response.status in RETRYABLE_STATUSES:
                    raise _RetryableResponse(response.status)
                if response.status >= 400:
                    raise SpoonacularError(f"Spoonacular returned HTTP {response.status}")
                try:
                    return await response.json()
                except ValueError as e:
                    raise SpoonacularError("Spoonacular returned invalid JSON") from e

    async def _request_json(self, path: str, params: dict[str, Any]) -> Any:
        """GET ``path`` with retries.

        Raises:
            SpoonacularError: On a non-retryable status or after all attempts failed.
        """
        last_exception: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                logger.debug(f"Spoonacular request attempt {attempt + 1}/{self.max_retries}: {path}")
                return await self._fetch(path, params)
            except SpoonacularError:
                raise
            except (_RetryableResponse, aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                logger.debug(f"Spoonacular attempt {attempt + 1} failed: {e!r}")

                if attempt < self.max_retries - 1:
                    delay = self.retry_delays[attempt] if attempt < len(self.retry_delays) else self.retry_delays[-1]
                    logger.warning(
                        f"Spoonacular request failed, retrying in {delay}s... (attempt {attempt + 1}/{self.max_retries})"
                    )
                    await asyncio.sleep(delay)

        error_msg = f"Spoonacular request failed after {self.max_retries} attempts"
        logger.error(f"{error_msg}: {last_exception!r}")
        raise SpoonacularError(error_msg) from last_exception

    async def find_by_ingredients(
        self,
        ingredients: Sequence[str],
        number: int = 5,
        ranking: int = 1,
    ) -> list[RecipeSummary]:
        """Find recipes that use the given ingredients.

        Args:
            ingredients: Ingredient names (at least one).
            number: Maximum number of recipes to return.
            ranking: 1 maximizes used ingredients, 2 minimizes missing ones.

        Returns:
            Matching recipes in Spoonacular's order.

        Raises:
            ValueError: If ``ingredients`` is empty.
            SpoonacularError: If the search failed.
        """
        names = [name.strip() for name in ingredients if name.strip()]
        if not names:
            raise ValueError("At least one ingredient is required")

        data = await self._request_json(
            FIND_BY_INGREDIENTS_PATH,
            {"ingredients": ",".join(names), "number": number, "ranking": ranking},
        )
        if not isinstance(data, list):
            raise SpoonacularError("Unexpected Spoonacular response shape")

        try:
            recipes = [_to_summary(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise SpoonacularError(f"Malformed Spoonacular recipe: {e!r}") from e

        logger.info(f"Spoonacular returned {len(recipes)} recipe(s) for: {', '.join(names)}")
        return recipes
