"""Tests for the recipe similarity engine."""
from dataclasses import replace

import pytest

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.similarity.recipe_similarity import (
    SimilarityWeights,
    cook_time_similarity,
    extract_keywords,
    find_similar_recipes,
    find_similar_to_search_query,
    ingredient_overlap,
    normalize_ingredient_name,
    nutritional_similarity,
)


def make_recipe(recipe_id, title, cuisine="Mexican", cook_time=20, ingredients=None, **overrides):
    fields = dict(
        id=recipe_id,
        title=title,
        description="",
        cuisine=cuisine,
        cook_time=cook_time,
        calories=500,
        protein=30,
        carbs=50,
        fat=18,
        servings=2,
        ingredients=ingredients or ["1 lb chicken", "8 tortillas", "1 cup salsa"],
    )
    fields.update(overrides)
    return Recipe(**fields)


TACOS = make_recipe("tacos", "Chicken Tacos", description="Spicy street tacos")
BURRITO = make_recipe("burrito", "Chicken Burrito", cook_time=25,
                      ingredients=["1 lb chicken", "2 tortillas", "1 cup rice"])
CARBONARA = make_recipe("carbonara", "Spaghetti Carbonara", cuisine="Italian", cook_time=30,
                        ingredients=["200 g spaghetti", "2 eggs", "50 g pecorino"],
                        calories=800, protein=25, carbs=90, fat=35)


class TestFactors:
    """Tests for the individual similarity factors."""

    def test_normalize_ingredient_name(self):
        assert normalize_ingredient_name("2 cups rice (rinsed), cooked") == "rice"
        assert normalize_ingredient_name("3 cloves garlic") == "garlic"
        assert normalize_ingredient_name("garlic") == "garlic"

    def test_ingredient_overlap(self):
        """Test Jaccard overlap ignores quantities."""
        assert ingredient_overlap(["1 cup rice", "salt"], ["2 cups rice", "salt"]) == 1.0
        assert ingredient_overlap(["rice", "salt"], ["rice", "pepper"]) == pytest.approx(1 / 3)
        assert ingredient_overlap([], ["rice"]) == 0.0

    def test_nutrition_is_per_serving(self):
        """Test a double batch with twice the servings is nutritionally identical."""
        double = replace(TACOS, id="double", servings=4, calories=1000, protein=60, carbs=100, fat=36)
        assert nutritional_similarity(TACOS, double) == pytest.approx(1.0)

    def test_cook_time_similarity(self):
        assert cook_time_similarity(30, 30) == 1.0
        assert cook_time_similarity(0, 0) == 1.0
        assert cook_time_similarity(10, 20) == 0.5

    def test_extract_keywords(self):
        assert extract_keywords("Spicy Chicken with Rice!") == {"spicy", "chicken", "rice"}
        assert extract_keywords(None) == set()


class TestSimilarityWeights:
    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            SimilarityWeights(cuisine=-0.1)


class TestFindSimilarRecipes:
    """Tests for find_similar_recipes."""

    def test_target_never_returned(self):
        results = find_similar_recipes(TACOS, [TACOS, BURRITO, CARBONARA])
        assert "tacos" not in [r.recipe_id for r in results]

    def test_identical_copy_scores_one(self):
        copy = replace(TACOS, id="copy")
        results = find_similar_recipes(TACOS, [copy])
        assert results[0].score == pytest.approx(1.0)
        assert results[0].factors.cuisine == 1.0

    def test_closer_recipe_ranks_first(self):
        results = find_similar_recipes(TACOS, [CARBONARA, BURRITO], min_score=0.0)
        assert [r.recipe_id for r in results] == ["burrito", "carbonara"]
        assert results[0].score > results[1].score

    def test_min_score_and_limit(self):
        results = find_similar_recipes(TACOS, [CARBONARA, BURRITO], min_score=0.5)
        assert [r.recipe_id for r in results] == ["burrito"]

        results = find_similar_recipes(TACOS, [CARBONARA, BURRITO], limit=1, min_score=0.0)
        assert len(results) == 1

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            find_similar_recipes(TACOS, [BURRITO], limit=0)

    def test_custom_weights(self):
        """Test a cuisine-only weighting."""
        weights = SimilarityWeights(cuisine=1.0, ingredients=0, nutrition=0, cook_time=0, semantic=0)
        results = find_similar_recipes(TACOS, [CARBONARA, BURRITO], min_score=0.0, weights=weights)
        scores = {r.recipe_id: r.score for r in results}
        assert scores == {"burrito": 1.0, "carbonara": 0.0}


class TestFindSimilarToSearchQuery:
    """Tests for search broadening."""

    def test_related_dish_and_cuisine(self):
        """Test a taco search suggests a burrito and skips the exact match."""
        results = find_similar_to_search_query("taco", [TACOS, BURRITO, CARBONARA], exact_matches=[TACOS])
        ids = [r.recipe_id for r in results]
        assert ids == ["burrito"]
        assert results[0].score >= 0.9
        assert results[0].factors.cuisine == 1.0

    def test_same_cuisine_boost(self):
        enchiladas = make_recipe("ench", "Enchiladas Verdes")
        quesadilla = make_recipe("ques", "Quesadilla")
        results = find_similar_to_search_query(
            "green sauce", [enchiladas], exact_matches=[quesadilla], min_score=0.0
        )
        assert results[0].score == pytest.approx(0.5)

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            find_similar_to_search_query("taco", [], [], limit=0)
