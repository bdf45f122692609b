"""Unit tests for the static dietary style and ingredient catalog."""

from gourmetnet.data.catalog import (
    COMMON_INGREDIENTS,
    DEFAULT_DIETARY_STYLE,
    DIETARY_STYLES,
    find_dietary_style,
    suggest_ingredients,
)


class TestDietaryStyles:
    def test_six_styles_in_order(self):
        assert [style.name for style in DIETARY_STYLES] == [
            "Mediterranean",
            "Asian Fusion",
            "Italian",
            "Mexican",
            "Vegetarian",
            "Keto",
        ]
        assert [style.id for style in DIETARY_STYLES] == ["1", "2", "3", "4", "5", "6"]

    def test_default_style_is_in_catalog(self):
        assert find_dietary_style(DEFAULT_DIETARY_STYLE) is not None

    def test_find_by_name_is_case_insensitive(self):
        assert find_dietary_style("  asian fusion ").id == "2"

    def test_find_by_id(self):
        assert find_dietary_style("6").name == "Keto"

    def test_unknown_style(self):
        assert find_dietary_style("Paleo") is None


class TestCommonIngredients:
    def test_thirty_unique_ingredients(self):
        assert len(COMMON_INGREDIENTS) == 30
        assert len(set(COMMON_INGREDIENTS)) == 30

    def test_suggest_by_prefix(self):
        assert suggest_ingredients("b") == ["Bread", "Bell peppers", "Broccoli", "Butter", "Black pepper", "Basil"]

    def test_suggest_with_limit(self):
        assert suggest_ingredients("s", limit=2) == ["Salmon", "Spinach"]

    def test_empty_prefix_returns_all(self):
        assert suggest_ingredients() == list(COMMON_INGREDIENTS)
