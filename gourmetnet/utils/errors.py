"""Error taxonomy for the recipe generation pipeline."""


class GourmetNetError(Exception):
    """Base class for all service errors."""


class MissingIngredientsError(GourmetNetError, ValueError):
    """Raised when generation is requested without any ingredient."""

    title = "Missing Ingredients"
    default_message = "Please add at least one ingredient to generate a recipe."

    def __init__(self, message: str = default_message) -> None:
        super().__init__(message)


class GenerationInProgressError(GourmetNetError):
    """Raised when a selection already has a generation in flight."""


class RecipeGenerationError(GourmetNetError):
    """The LLM provider could not produce a completion (network, quota, auth, timeout, empty response)."""


class RecipeParseError(GourmetNetError, ValueError):
    """The completion did not contain a usable recipe JSON object."""


class SpoonacularError(GourmetNetError):
    """The Spoonacular search failed after all retry attempts."""
