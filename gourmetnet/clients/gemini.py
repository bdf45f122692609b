"""Gemini text-generation client.

The client is constructed explicitly with its API key and model and injected
into the recipe generator; nothing here is created at import time. Any object
exposing ``is_configured`` and ``async generate(prompt) -> str`` can be used in
its place (see ``TextGenerator``), which is how tests substitute fakes.
"""

import asyncio
from typing import Optional, Protocol

from google import genai
from google.genai import types

from gourmetnet.utils.config import Config
from gourmetnet.utils.errors import RecipeGenerationError
from gourmetnet.utils.logger import logger


TRANSIENT_KEYWORDS = ("timeout", "connection", "429", "500", "502", "503", "unavailable", "retryable")


class TextGenerator(Protocol):
    """Anything that turns a prompt into a text completion."""

    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: str) -> str: ...


class _EmptyResponseError(RecipeGenerationError):
    """The SDK returned no text (blocked or malformed response)."""


def _is_transient(error: Exception) -> bool:
    """True for errors worth retrying: timeouts, connection drops, 429 and 5xx, empty responses."""
    if isinstance(error, (asyncio.TimeoutError, TimeoutError, ConnectionError, _EmptyResponseError)):
        return True
    error_str = str(error).lower()
    return any(keyword in error_str for keyword in TRANSIENT_KEYWORDS)


class GeminiClient:
    """Send a single text prompt to Gemini and return the completion text.

    Every failure (missing key, network, quota/auth, timeout, empty or
    malformed response) surfaces as ``RecipeGenerationError`` with the
    original exception chained.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
        timeout_seconds: Optional[float] = 30.0,
        max_retries: int = 1,
        retry_delay_seconds: float = 1.0,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Gemini API key. Empty string leaves the client unconfigured.
            model: Gemini model id.
            temperature: Sampling temperature.
            max_output_tokens: Completion length limit.
            timeout_seconds: Upper bound for one call, None for no limit.
            max_retries: Total attempts per prompt (1 = no retry).
            retry_delay_seconds: Initial backoff delay, doubled after each retry.

        Raises:
            ValueError: If max_retries is below 1.
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got: {max_retries}")

        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self._client: Optional[genai.Client] = genai.Client(api_key=api_key) if api_key else None

    @classmethod
    def from_config(cls, config: Config) -> "GeminiClient":
        return cls(
            api_key=config.GEMINI_API_KEY,
            model=config.GEMINI_MODEL,
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
            timeout_seconds=config.LLM_TIMEOUT_SECONDS,
            max_retries=config.MAX_RETRIES,
            retry_delay_seconds=config.DELAY_BETWEEN_RETRIES,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def _generate_once(self, prompt: str) -> str:
        # The SDK call is blocking; run it on a worker thread
        call = asyncio.to_thread(
            self._client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        if self.timeout_seconds is not None:
            response = await asyncio.wait_for(call, timeout=self.timeout_seconds)
        else:
            response = await call

        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text.strip():
            raise _EmptyResponseError("Gemini returned an empty response")
        return text

    async def generate(self, prompt: str) -> str:
        """Return the completion text for ``prompt``.

        Transient errors are retried with exponential backoff up to
        ``max_retries`` attempts; anything else fails immediately.

        Raises:
            RecipeGenerationError: If the client is unconfigured or every attempt failed.
        """
        if not self.is_configured:
            raise RecipeGenerationError("Gemini client is not configured (GEMINI_API_KEY is empty)")

        delay = self.retry_delay_seconds
        attempt = 0
        while True:
            attempt += 1
            try:
                logger.debug(f"Gemini call attempt {attempt}/{self.max_retries} (model={self.model})")
                text = await self._generate_once(prompt)
                logger.debug(f"Gemini response received: {text[:200]}...")
                return text
            except Exception as e:
                if attempt < self.max_retries and _is_transient(e):
                    logger.warning(
                        f"Transient Gemini error, retrying in {delay}s (attempt {attempt}/{self.max_retries}): {e!r}"
                    )
                    await asyncio.sleep(delay)
                    delay *= 2
                    continue

                logger.error(f"Gemini generation failed after {attempt} attempt(s): {e!r}")
                if isinstance(e, RecipeGenerationError):
                    raise
                raise RecipeGenerationError(f"Gemini generation failed: {e!r}") from e
