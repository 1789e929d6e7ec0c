"""Tests for batch-cooking recommendations."""
from unittest.mock import Mock

import pytest

from recipe_ranking.data_layer.models import Recipe, UserScoringPreferences
from recipe_ranking.data_layer.query import CuisineIn, HasAnyFlag
from recipe_ranking.data_layer.recipe_db import RecipeDB
from recipe_ranking.providers.preference_provider import PreferenceProvider
from recipe_ranking.recommendation.batch_cooking import (
    BatchCookingRecommender,
    calculate_batch_cooking_score,
    calculate_match_score,
    recommend_batch_cooking,
    recommendation_reason,
)


def make_recipe(recipe_id="b1", cuisine="Italian", cook_time=35, servings=6, **overrides):
    fields = dict(
        id=recipe_id,
        title=f"Batch {recipe_id}",
        cuisine=cuisine,
        cook_time=cook_time,
        servings=servings,
        calories=500,
        protein=30,
        carbs=50,
        fat=15,
        ingredients=["2 cups lentils", "1 onion"],
        batch_friendly=True,
        freezable=True,
    )
    fields.update(overrides)
    return Recipe(**fields)


def make_prefs(**overrides):
    fields = dict(user_id="u1", liked_cuisines=["Italian"], cook_time_preference=30)
    fields.update(overrides)
    return UserScoringPreferences(**fields)


class TestBatchCookingScore:
    """Tests for calculate_batch_cooking_score."""

    def test_all_flags_clamped(self):
        recipe = make_recipe(weekly_prep_friendly=True, meal_prep_suitable=True, meal_prep_score=80)
        assert calculate_batch_cooking_score(recipe) == 100

    def test_flags_and_servings(self):
        """Test batch-friendly + freezable with four servings."""
        assert calculate_batch_cooking_score(make_recipe(servings=4)) == 60

    def test_meal_prep_score_capped_at_ten(self):
        recipe = make_recipe(batch_friendly=False, freezable=False, servings=1, meal_prep_score=250)
        assert calculate_batch_cooking_score(recipe) == 10


class TestMatchScore:
    """Tests for calculate_match_score."""

    def test_liked_cuisine_near_cook_time(self):
        assert calculate_match_score(make_recipe(), make_prefs()) == 100

    def test_banned_ingredient_is_a_penalty(self):
        """Test a banned ingredient subtracts instead of vetoing."""
        prefs = make_prefs(banned_ingredients=["onion"])
        assert calculate_match_score(make_recipe(), prefs) == 70

    def test_dietary_violation_is_a_penalty(self):
        recipe = make_recipe(ingredients=["1 lb ground beef", "tomato"])
        assert calculate_match_score(recipe, make_prefs(dietary_restrictions=["vegetarian"])) == 80

    def test_unliked_cuisine_and_slow_cook(self):
        recipe = make_recipe(cuisine="French", cook_time=120)
        assert calculate_match_score(recipe, make_prefs()) == 20


class TestRecommendationReason:
    def test_at_most_three_reasons(self):
        recipe = make_recipe(weekly_prep_friendly=True)
        assert recommendation_reason(recipe, make_prefs()) == (
            "matches your Italian preference, perfect for batch cooking, freezable for long-term storage"
        )

    def test_default_reason(self):
        recipe = make_recipe(batch_friendly=False, freezable=False, meal_prep_suitable=True,
                             servings=1, cook_time=90)
        assert recommendation_reason(recipe, make_prefs(liked_cuisines=[])) == "suitable for batch cooking"


class TestRecommendBatchCooking:
    """Tests for recommend_batch_cooking."""

    def test_filters_and_ranks(self):
        """Test flagless, unliked and weak candidates are dropped."""
        best = make_recipe("best", weekly_prep_friendly=True, meal_prep_suitable=True)
        good = make_recipe("good", servings=2)
        no_flags = make_recipe("none", batch_friendly=False, freezable=False)
        unliked = make_recipe("french", cuisine="French")
        weak = make_recipe("weak", batch_friendly=False, freezable=False, meal_prep_suitable=True, servings=1)

        results = recommend_batch_cooking([good, no_flags, best, unliked, weak], make_prefs())

        assert [rec.recipe_id for rec in results] == ["best", "good"]
        assert results[0].combined_score > results[1].combined_score
        assert results[0].freezable is True
        assert results[0].estimated_prep_time == 35

    def test_no_liked_cuisines_accepts_any(self):
        results = recommend_batch_cooking([make_recipe(cuisine="French")], make_prefs(liked_cuisines=[]))
        assert len(results) == 1

    def test_banned_ingredient_can_still_be_recommended(self):
        """Test the banned-ingredient penalty does not remove a strong match."""
        results = recommend_batch_cooking([make_recipe()], make_prefs(banned_ingredients=["onion"]))
        assert [rec.recipe_id for rec in results] == ["b1"]
        assert results[0].match_score == 70

    def test_limit(self):
        recipes = [make_recipe(f"b{i}") for i in range(5)]
        assert len(recommend_batch_cooking(recipes, make_prefs(), limit=2)) == 2

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            recommend_batch_cooking([], make_prefs(), limit=0)


class TestBatchCookingRecommender:
    """Tests for the store-backed recommender."""

    def test_predicate(self):
        recommender = BatchCookingRecommender(Mock(), Mock(spec=PreferenceProvider))
        predicate = recommender.build_predicate(make_prefs())
        assert isinstance(predicate.clauses[0], HasAnyFlag)
        assert predicate.clauses[1] == CuisineIn(frozenset({"Italian"}))

    def test_recommend_from_store(self):
        provider = Mock(spec=PreferenceProvider)
        provider.get_scoring_preferences.return_value = make_prefs()
        store = RecipeDB.from_recipes([
            make_recipe("b1"),
            make_recipe("b2", cuisine="Thai"),
            make_recipe("b3", batch_friendly=False, freezable=False),
        ])
        results = BatchCookingRecommender(store, provider).recommend("u1", limit=5)
        assert [rec.recipe_id for rec in results] == ["b1"]

    def test_missing_preferences_returns_empty(self):
        provider = Mock(spec=PreferenceProvider)
        provider.get_scoring_preferences.return_value = None
        store = Mock()
        assert BatchCookingRecommender(store, provider).recommend("u1") == []
        store.find.assert_not_called()
