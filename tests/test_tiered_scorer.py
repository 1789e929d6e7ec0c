"""Unit tests for the two-tier recipe scorer."""
import pytest

from recipe_ranking.data_layer.models import (
    BehavioralSignal,
    MacroGoals,
    Recipe,
    TemporalContext,
    UserScoringPreferences,
)
from recipe_ranking.scoring.results import Scored, Vetoed, clamp_score
from recipe_ranking.scoring.tiered_scorer import (
    QuickScoreBreakdown,
    calculate_full_score,
    calculate_quick_score,
    cook_time_adjustment,
    find_banned_ingredient,
    macro_alignment_score,
)


def make_recipe(**overrides):
    fields = dict(
        id="r1", title="Weeknight Dinner", cuisine="Italian", cook_time=35,
        calories=600, protein=30, carbs=60, fat=20,
        ingredients=["200 g pasta", "1 cup tomato sauce"],
        instructions=["Boil pasta", "Warm sauce"],
    )
    fields.update(overrides)
    return Recipe(**fields)


def make_prefs(**overrides):
    fields = dict(user_id="u1", cook_time_preference=30)
    fields.update(overrides)
    return UserScoringPreferences(**fields)


MORNING = TemporalContext(time_of_day="morning", is_weekend=False, meal_period="breakfast")
EVENING = TemporalContext(time_of_day="evening", is_weekend=True, meal_period="dinner")


class TestScoreOutcomes:
    """Tests for tagged outcomes and clamping."""

    def test_clamp_score(self):
        assert clamp_score(-5) == 0
        assert clamp_score(150) == 100
        assert clamp_score(49.6) == 50

    def test_vetoed_reads_as_zero(self):
        assert Vetoed("banned ingredient: peanut").value == 0
        assert Vetoed("x").is_vetoed
        assert not Scored(70).is_vetoed


class TestHelpers:
    """Tests for the Quick Score building blocks."""

    def test_banned_ingredient_substring_case_insensitive(self):
        recipe = make_recipe(ingredients=["2 tbsp Peanut Butter"])
        assert find_banned_ingredient(recipe, ["shrimp", "peanut"]) == "peanut"
        assert find_banned_ingredient(recipe, []) is None
        assert find_banned_ingredient(make_recipe(ingredients=[]), ["peanut"]) is None

    @pytest.mark.parametrize("cook_time,expected", [
        (30, (100, 20)), (40, (100, 20)), (45, (70, 10)),
        (55, (40, 0)), (61, (10, -10)), (5, (40, 0)),
    ])
    def test_cook_time_adjustment(self, cook_time, expected):
        assert cook_time_adjustment(cook_time, 30) == expected

    def test_macro_alignment_on_target(self):
        """Test a recipe at a third of daily goals aligns perfectly."""
        goals = MacroGoals(calories=1800, protein=120, carbs=200, fat=60)
        assert macro_alignment_score(make_recipe(calories=600, protein=40), goals) == 100

    def test_macro_alignment_zero_goal(self):
        goals = MacroGoals(calories=0, protein=0, carbs=0, fat=0)
        assert macro_alignment_score(make_recipe(), goals) == 100

    def test_macro_alignment_floor(self):
        goals = MacroGoals(calories=300, protein=30, carbs=0, fat=0)
        assert macro_alignment_score(make_recipe(calories=900, protein=100), goals) == 0


class TestQuickScore:
    """Tests for calculate_quick_score."""

    def test_liked_cuisine_near_cook_time(self):
        """Test a liked cuisine within ten minutes of preference caps at 100."""
        quick = calculate_quick_score(make_recipe(), make_prefs(liked_cuisines=["Italian"]))
        assert quick.score == 100
        assert quick.outcome == Scored(100)
        assert quick.breakdown.cuisine_match == 100
        assert quick.breakdown.cook_time_match == 100
        assert quick.breakdown.macro_alignment is None
        assert not quick.is_vetoed

    def test_unliked_cuisine(self):
        quick = calculate_quick_score(make_recipe(cuisine="Mexican"), make_prefs(liked_cuisines=["Italian"]))
        assert quick.score == 40
        assert quick.breakdown.cuisine_match == 20

    def test_cuisine_compare_ignores_case(self):
        quick = calculate_quick_score(make_recipe(cuisine="italian"), make_prefs(liked_cuisines=["Italian"]))
        assert quick.breakdown.cuisine_match == 100

    def test_no_liked_cuisines_is_neutral(self):
        quick = calculate_quick_score(make_recipe(), make_prefs())
        assert quick.breakdown.cuisine_match == 50
        assert quick.score == 70

    def test_banned_ingredient_vetoes(self):
        """Test a banned ingredient zeroes the score whatever else matches."""
        recipe = make_recipe(ingredients=["2 tbsp peanut butter", "noodles"])
        quick = calculate_quick_score(recipe, make_prefs(liked_cuisines=["Italian"], banned_ingredients=["Peanut"]))
        assert quick.score == 0
        assert quick.is_vetoed
        assert quick.outcome == Vetoed("banned ingredient: Peanut")
        assert quick.breakdown.has_banned_ingredients

    def test_cook_time_monotonic(self):
        """Test the score never rises as cook time drifts from preference."""
        prefs = make_prefs()
        scores = [
            calculate_quick_score(make_recipe(cook_time=t), prefs).score
            for t in (30, 45, 55, 90)
        ]
        assert scores == sorted(scores, reverse=True)
        assert scores == [70, 60, 50, 40]

    def test_macro_goals_bonus(self):
        goals = MacroGoals(calories=1800, protein=120, carbs=200, fat=60)
        quick = calculate_quick_score(make_recipe(calories=600, protein=40), make_prefs(macro_goals=goals))
        assert quick.breakdown.macro_alignment == 100
        assert quick.score == 85

    def test_deterministic(self):
        recipe, prefs = make_recipe(), make_prefs(liked_cuisines=["Thai"])
        assert calculate_quick_score(recipe, prefs) == calculate_quick_score(recipe, prefs)


class TestFullScore:
    """Tests for calculate_full_score."""

    def test_neutral_without_context(self):
        """Test a Full Score with no context equals the Quick Score."""
        full = calculate_full_score(make_recipe(), make_prefs())
        assert full.score == full.quick.score == 70
        assert full.behavioral_score == 50
        assert full.temporal_score == 50
        assert full.health_goal_score == 50
        assert full.breakdown is full.quick.breakdown

    def test_banned_veto_zeroes_every_sub_score(self):
        """Test a banned ingredient zeroes the Full Score and its Quick breakdown."""
        goals = MacroGoals(calories=1800, protein=90, carbs=200, fat=60)
        recipe = make_recipe(ingredients=["peanuts"], cook_time=30)
        full = calculate_full_score(
            recipe,
            make_prefs(
                banned_ingredients=["peanut"],
                liked_cuisines=["Italian"],
                macro_goals=goals,
                fitness_goal="maintain",
            ),
            BehavioralSignal(liked_recipe_ids=["r1"]),
            MORNING,
        )
        assert full.is_vetoed
        assert full.score == 0
        assert (full.behavioral_score, full.temporal_score, full.health_goal_score) == (0, 0, 0)
        assert full.quick.score == 0
        assert full.quick.is_vetoed
        assert full.breakdown == QuickScoreBreakdown(
            cuisine_match=0,
            has_banned_ingredients=True,
            cook_time_match=0,
            macro_alignment=0,
        )

    def test_dietary_violation_vetoes(self):
        """Test dietary restrictions are checked over the hydrated text."""
        recipe = make_recipe(instructions=["Simmer pasta in chicken broth"], cook_time=30)
        full = calculate_full_score(
            recipe,
            make_prefs(dietary_restrictions=["vegetarian"], liked_cuisines=["Italian"]),
            BehavioralSignal(liked_recipe_ids=["r1"]),
        )
        assert full.is_vetoed
        assert full.outcome == Vetoed("dietary restriction: vegetarian: contains chicken")
        assert full.score == 0
        assert full.quick.score == 0
        assert full.quick.outcome == full.outcome
        assert full.breakdown == QuickScoreBreakdown(
            cuisine_match=0,
            has_banned_ingredients=False,
            cook_time_match=0,
            macro_alignment=0,
        )
        assert (full.behavioral_score, full.temporal_score, full.health_goal_score) == (0, 0, 0)

    def test_liked_before(self):
        full = calculate_full_score(make_recipe(), make_prefs(), BehavioralSignal(liked_recipe_ids=["r1"]))
        assert full.behavioral_score == 100
        assert full.score == 80

    def test_disliked_before(self):
        full = calculate_full_score(make_recipe(), make_prefs(), BehavioralSignal(disliked_recipe_ids=["r1"]))
        assert full.behavioral_score == 0
        assert full.score == 50

    def test_recent_cuisine_fatigue(self):
        behavior = BehavioralSignal(recent_cuisines=["italian"])
        full = calculate_full_score(make_recipe(), make_prefs(), behavior)
        assert full.behavioral_score == 30
        assert full.score == 65

    def test_breakfast_in_the_morning(self):
        full = calculate_full_score(make_recipe(meal_type="breakfast"), make_prefs(), temporal=MORNING)
        assert full.temporal_score == 90
        assert full.score == 75

    def test_light_meal_in_the_evening(self):
        full = calculate_full_score(make_recipe(calories=350), make_prefs(), temporal=EVENING)
        assert full.temporal_score == 70

    @pytest.mark.parametrize("goal,calories,protein,expected_sub,expected_score", [
        ("lose_weight", 450, 45, 100, 80),
        ("lose_weight", 450, 20, 70, 75),
        ("gain_muscle", 800, 45, 100, 80),
        ("gain_muscle", 800, 20, 50, 70),
        ("maintain", 600, 30, 60, 72),
    ])
    def test_health_goal(self, goal, calories, protein, expected_sub, expected_score):
        recipe = make_recipe(calories=calories, protein=protein)
        full = calculate_full_score(recipe, make_prefs(fitness_goal=goal))
        assert full.health_goal_score == expected_sub
        assert full.score == expected_score

    def test_clamped_to_100(self):
        recipe = make_recipe(calories=450, protein=45, meal_type="breakfast")
        full = calculate_full_score(
            recipe,
            make_prefs(liked_cuisines=["Italian"], fitness_goal="gain_muscle"),
            BehavioralSignal(liked_recipe_ids=["r1"]),
            MORNING,
        )
        assert full.score == 100
        assert full.outcome == Scored(100)

    def test_deterministic(self):
        args = (make_recipe(), make_prefs(fitness_goal="maintain"), BehavioralSignal(), EVENING)
        assert calculate_full_score(*args) == calculate_full_score(*args)
