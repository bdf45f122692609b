"""Static reference data: dietary-style presets and common ingredient suggestions."""

from typing import Optional

from gourmetnet.models.models import DietaryStyle


DEFAULT_DIETARY_STYLE = "Mediterranean"

DIETARY_STYLES: tuple[DietaryStyle, ...] = (
    DietaryStyle(
        id="1",
        name="Mediterranean",
        description="Fresh, healthy ingredients with olive oil and herbs",
        icon="🫒",
    ),
    DietaryStyle(
        id="2",
        name="Asian Fusion",
        description="Bold flavors with soy, ginger, and spices",
        icon="🥢",
    ),
    DietaryStyle(
        id="3",
        name="Italian",
        description="Classic Italian with pasta, tomatoes, and cheese",
        icon="🍝",
    ),
    DietaryStyle(
        id="4",
        name="Mexican",
        description="Spicy and vibrant with peppers and lime",
        icon="🌶️",
    ),
    DietaryStyle(
        id="5",
        name="Vegetarian",
        description="Plant-based ingredients only",
        icon="🥬",
    ),
    DietaryStyle(
        id="6",
        name="Keto",
        description="Low-carb, high-fat recipes",
        icon="🥑",
    ),
)

COMMON_INGREDIENTS: tuple[str, ...] = (
    "Chicken breast", "Salmon", "Ground beef", "Eggs", "Tofu",
    "Rice", "Pasta", "Quinoa", "Bread", "Potatoes",
    "Tomatoes", "Onions", "Garlic", "Bell peppers", "Spinach",
    "Broccoli", "Carrots", "Mushrooms", "Avocado", "Lemon",
    "Olive oil", "Butter", "Cheese", "Milk", "Yogurt",
    "Salt", "Black pepper", "Basil", "Oregano", "Paprika",
)


def find_dietary_style(name: str) -> Optional[DietaryStyle]:
    """Look up a catalog entry by name (case-insensitive) or id."""
    key = name.strip().lower()
    for style in DIETARY_STYLES:
        if style.name.lower() == key or style.id == key:
            return style
    return None


def suggest_ingredients(prefix: str = "", limit: Optional[int] = None) -> list[str]:
    """Common ingredients whose name starts with ``prefix`` (case-insensitive), catalog order."""
    key = prefix.strip().lower()
    matches = [name for name in COMMON_INGREDIENTS if name.lower().startswith(key)]
    return matches[:limit] if limit is not None else matches
