"""Tests for shopping-list aggregation."""

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.ingestion.shopping_list import aggregate_ingredient_lines, build_shopping_list


class TestAggregateIngredientLines:
    """Tests for aggregate_ingredient_lines."""

    def test_groups_by_canonical_name(self):
        """Test differently worded lines of one ingredient are summed."""
        items = aggregate_ingredient_lines([
            "2 large onions, diced",
            "1 cup rice",
            "1 onion, chopped",
            "1/2 cup rice",
        ])
        assert [item.name for item in items] == ["onion", "rice"]

        onion, rice = items
        assert onion.total_amount == 3
        assert onion.display_quantity == "3 piece"
        assert len(onion.parsed_quantities) == 2
        assert rice.total_amount == 1.5
        assert rice.display_quantity == "1.50 cup"

    def test_blank_lines_skipped(self):
        items = aggregate_ingredient_lines(["", "   ", "3 eggs"])
        assert len(items) == 1
        assert items[0].name == "egg"

    def test_mixed_dimensions_flagged(self):
        items = aggregate_ingredient_lines(["1 cup onion, diced", "2 onions"])
        assert len(items) == 1
        assert items[0].approximate

    def test_zero_denominator_line_is_kept(self):
        items = aggregate_ingredient_lines(["1/0 cup sugar", "1 cup rice"])
        assert len(items) == 2
        assert items[0].total_amount == 1
        assert items[0].display_quantity == "1 piece"


class TestBuildShoppingList:
    def test_across_recipes(self):
        recipes = [
            Recipe(id="a", title="A", cuisine="", cook_time=10, calories=0, protein=0, carbs=0, fat=0,
                   ingredients=["1 cup milk", "2 eggs"]),
            Recipe(id="b", title="B", cuisine="", cook_time=10, calories=0, protein=0, carbs=0, fat=0,
                   ingredients=["8 tbsp milk", "1 egg"]),
        ]
        items = {item.name: item for item in build_shopping_list(recipes)}
        assert items["milk"].display_quantity == "1.50 cup"
        assert items["egg"].total_amount == 3
