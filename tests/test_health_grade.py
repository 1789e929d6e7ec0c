"""Tests for the health grade calculator."""
import pytest

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.scoring.health_grade import assign_grade, calculate_health_grade


def make_recipe(**overrides):
    fields = dict(
        id="r1", title="Test", cuisine="Italian", cook_time=20,
        calories=450, protein=25, carbs=50, fat=15, fiber=8,
    )
    fields.update(overrides)
    return Recipe(**fields)


@pytest.fixture
def quinoa_salad():
    return make_recipe(
        title="Quinoa Salad",
        description="Bright quinoa bowl with lemon",
        ingredients=["quinoa", "fresh vegetables", "olive oil"],
    )


class TestAssignGrade:
    """Tests for grade thresholds."""

    @pytest.mark.parametrize("score,grade", [
        (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"),
        (70, "C"), (69, "D"), (60, "D"), (59, "F"), (0, "F"),
    ])
    def test_boundaries(self, score, grade):
        assert assign_grade(score) == grade


class TestCalculateHealthGrade:
    """Tests for calculate_health_grade."""

    def test_balanced_whole_food_meal_is_a(self, quinoa_salad):
        """Test the 450 kcal, 25 g protein Italian quinoa salad earns an A."""
        result = calculate_health_grade(quinoa_salad)
        assert result.grade == "A"
        assert result.score == 91
        assert result.breakdown.macronutrient_balance == 25
        assert result.breakdown.calorie_density == 18
        assert result.breakdown.nutrient_density == 18
        assert result.breakdown.ingredient_quality == 20
        assert result.breakdown.sugar_and_sodium == 10

    def test_detail_sub_scores(self, quinoa_salad):
        details = calculate_health_grade(quinoa_salad).details
        assert details.protein_adequacy == 10
        assert details.macro_balance == 10
        assert details.fat_quality == 5
        assert details.calorie_range == 15
        assert details.calorie_nutrient_ratio == 3
        assert details.fiber_content == 10
        assert details.protein_efficiency == 3
        assert details.nutrient_richness == 5

    def test_breakdown_sums_to_score(self, quinoa_salad):
        result = calculate_health_grade(quinoa_salad)
        assert result.breakdown.total() == result.score

    def test_processed_heavy_meal_fails(self):
        """Test a fried, sugary, salty meal gets an F."""
        recipe = make_recipe(
            title="Fried Platter",
            calories=1000, protein=5, carbs=100, fat=60, fiber=0,
            ingredients=["deep fried battered chicken", "corn syrup", "white bread", "salt", "bacon"],
        )
        result = calculate_health_grade(recipe)
        assert result.grade == "F"
        assert result.score == 31
        assert result.breakdown.total() == result.score

    def test_zero_calories_does_not_divide_by_zero(self):
        """Test degenerate macros still produce a bounded grade."""
        result = calculate_health_grade(make_recipe(calories=0, protein=500, carbs=0, fat=0, fiber=0))
        assert 0 <= result.score <= 100
        assert result.details.macro_balance == 5
        assert result.details.protein_efficiency == 0

    def test_known_sugar_overrides_keyword_estimate(self):
        """Test an explicit sugar value is used instead of text inference."""
        sweet = calculate_health_grade(make_recipe(sugar=35.0))
        assert sweet.details.sugar_content == 0

        honeyed = calculate_health_grade(make_recipe(sugar=5.0, ingredients=["honey"]))
        assert honeyed.details.sugar_content == 5

    def test_sugar_estimated_from_keywords(self):
        result = calculate_health_grade(make_recipe(ingredients=["honey", "brown sugar", "maple syrup"]))
        # honey, sugar, maple syrup and brown sugar all hit
        assert result.details.sugar_content == 1

    def test_fiber_targets_scale_for_small_portions(self):
        """Test a 150 kcal snack needs proportionally less fiber."""
        snack = calculate_health_grade(make_recipe(calories=150, fiber=3))
        assert snack.details.fiber_content == 10

        low = calculate_health_grade(make_recipe(calories=150, fiber=0.5))
        assert low.details.fiber_content == 0

    def test_deterministic(self, quinoa_salad):
        assert calculate_health_grade(quinoa_salad) == calculate_health_grade(quinoa_salad)
