"""Configuration management for GourmetNet Recipe Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: optional. Without it every request is served by the fallback generator
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Default: gemini-2.5-flash (fast, cost-effective for single-shot recipe JSON)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Temperature: recipes benefit from some creativity, 0.7 keeps the JSON shape stable
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: 2048 is enough for one full recipe with nutrition
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))
        # Upper bound (seconds) on a single Gemini call
        self.LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
        # MAX_RETRIES: total attempts per Gemini call. 1 = single attempt, no retry
        self.MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "1"))
        # DELAY_BETWEEN_RETRIES: initial backoff delay in seconds (doubled on each retry)
        self.DELAY_BETWEEN_RETRIES: float = float(os.getenv("DELAY_BETWEEN_RETRIES", "1"))
        # FALLBACK_ON_PROVIDER_ERROR: serve a fallback recipe when Gemini fails.
        # When false the API answers 500 instead
        self.FALLBACK_ON_PROVIDER_ERROR: bool = _as_bool(os.getenv("FALLBACK_ON_PROVIDER_ERROR", "true"))

        # Spoonacular Configuration: enable/disable the recipe-by-ingredient search proxy
        self.USE_SPOONACULAR: bool = _as_bool(os.getenv("USE_SPOONACULAR", "false"))
        # Spoonacular API Key: required if USE_SPOONACULAR is true
        self.SPOONACULAR_API_KEY: str = os.getenv("SPOONACULAR_API_KEY", "")
        self.SPOONACULAR_BASE_URL: str = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")
        # Number of search hits requested from Spoonacular. Default: 5
        self.SPOONACULAR_MAX_RESULTS: int = int(os.getenv("SPOONACULAR_MAX_RESULTS", "5"))

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "3001"))
        # Comma-separated list of allowed origins, "*" for any
        self.CORS_ORIGINS: list[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

    @property
    def gemini_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY)

    @property
    def spoonacular_configured(self) -> bool:
        return self.USE_SPOONACULAR and bool(self.SPOONACULAR_API_KEY)

    def validate(self) -> None:
        """Validate configuration values.

        GEMINI_API_KEY is deliberately not required: the service degrades to
        fallback recipes when it is missing.

        Raises:
            ValueError: If a value is out of range or a required key is missing.
        """
        if self.USE_SPOONACULAR and not self.SPOONACULAR_API_KEY:
            raise ValueError("SPOONACULAR_API_KEY environment variable is required when USE_SPOONACULAR=true")
        if not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}")
        if self.MAX_OUTPUT_TOKENS < 256:
            raise ValueError(f"MAX_OUTPUT_TOKENS must be at least 256, got: {self.MAX_OUTPUT_TOKENS}")
        if self.LLM_TIMEOUT_SECONDS <= 0:
            raise ValueError(f"LLM_TIMEOUT_SECONDS must be positive, got: {self.LLM_TIMEOUT_SECONDS}")
        if self.MAX_RETRIES < 1:
            raise ValueError(f"MAX_RETRIES must be at least 1, got: {self.MAX_RETRIES}")
        if self.DELAY_BETWEEN_RETRIES < 0:
            raise ValueError(f"DELAY_BETWEEN_RETRIES must not be negative, got: {self.DELAY_BETWEEN_RETRIES}")
        if not (1 <= self.SPOONACULAR_MAX_RESULTS <= 100):
            raise ValueError(
                f"SPOONACULAR_MAX_RESULTS must be between 1 and 100, got: {self.SPOONACULAR_MAX_RESULTS}"
            )
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
