"""Per-user ingredient and dietary-style selection for the home screen."""

from typing import Iterable, Optional

from gourmetnet.data.catalog import DEFAULT_DIETARY_STYLE
from gourmetnet.generator.generator import RecipeGenerator
from gourmetnet.models.models import GenerationResult, Notice
from gourmetnet.utils.errors import GenerationInProgressError, MissingIngredientsError, RecipeGenerationError
from gourmetnet.utils.logger import logger


GENERATION_FAILED_NOTICE = Notice(
    title="Recipe Generation Failed",
    message="There was an error generating your recipe. Please try again or check your internet connection.",
)


class IngredientSelection:
    """Ordered, duplicate-free ingredient list plus the chosen dietary style.

    At most one generation runs at a time; ``is_generating`` is true while it does.
    """

    def __init__(self, ingredients: Optional[Iterable[str]] = None, dietary_style: str = DEFAULT_DIETARY_STYLE):
        self.ingredients: list[str] = []
        self.dietary_style = dietary_style
        self.is_generating = False
        self.notice: Optional[Notice] = None
        self.merge(ingredients or [])

    def add(self, name: str) -> bool:
        """Append ``name``; returns False for blanks and names already selected."""
        name = name.strip()
        if not name or name in self.ingredients:
            return False
        self.ingredients.append(name)
        return True

    def remove(self, name: str) -> bool:
        if name not in self.ingredients:
            return False
        self.ingredients.remove(name)
        return True

    def merge(self, names: Iterable[str]) -> list[str]:
        """Add every new name in order; returns the ones actually added."""
        return [name.strip() for name in names if self.add(name)]

    def clear(self) -> None:
        self.ingredients.clear()

    def select_style(self, name: str) -> None:
        self.dietary_style = name

    async def generate(self, generator: RecipeGenerator) -> GenerationResult:
        """Generate a recipe for the current selection.

        Raises:
            MissingIngredientsError: If nothing is selected. The generator is not called.
            GenerationInProgressError: If a generation is already running.
            RecipeGenerationError: If the generator lets a provider failure through;
                ``notice`` is set to the generation-failed alert first.
        """
        self.notice = None
        if not self.ingredients:
            error = MissingIngredientsError()
            self.notice = Notice(title=error.title, message=str(error))
            raise error
        if self.is_generating:
            raise GenerationInProgressError("A recipe is already being generated")

        self.is_generating = True
        try:
            return await generator.generate(list(self.ingredients), self.dietary_style)
        except RecipeGenerationError as e:
            logger.error(f"Recipe generation failed for selection: {e}")
            self.notice = GENERATION_FAILED_NOTICE
            raise
        finally:
            self.is_generating = False
