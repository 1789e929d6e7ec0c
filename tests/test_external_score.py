"""Tests for the external score and hybrid blending."""
import datetime

import pytest

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.scoring.external_score import (
    ExternalScoreBreakdown,
    calculate_external_score,
    calculate_hybrid_score,
    data_freshness,
    needs_reenrichment,
    popularity_tier,
    quality_tier,
)

AS_OF = datetime.date(2024, 5, 6)


def make_recipe(**overrides):
    fields = dict(
        id="r1", title="Pad Thai", cuisine="Thai", cook_time=30,
        calories=600, protein=25, carbs=70, fat=20,
    )
    fields.update(overrides)
    return Recipe(**fields)


def days_ago(days):
    return AS_OF - datetime.timedelta(days=days)


class TestCalculateExternalScore:
    """Tests for calculate_external_score."""

    def test_not_enriched_is_neutral(self):
        """Test ratings are ignored when the recipe has no external source."""
        result = calculate_external_score(make_recipe(quality_score=95), AS_OF)
        assert result.total == 50
        assert result.has_external_data is False
        assert result.breakdown == ExternalScoreBreakdown()

    def test_weighted_ratings_with_fresh_data(self):
        recipe = make_recipe(
            external_source="spoonacular",
            quality_score=90,
            popularity_score=80,
            health_score=60,
            last_enriched=days_ago(5),
        )
        result = calculate_external_score(recipe, AS_OF)
        assert result.has_external_data is True
        assert result.breakdown.recency_bonus == 5
        # 90 * 0.4 + 80 * 0.3 + 60 * 0.25 + 5
        assert result.total == 80

    def test_missing_ratings_default_to_fifty(self):
        result = calculate_external_score(make_recipe(external_source="spoonacular"), AS_OF)
        assert result.breakdown.quality_score == 50
        assert result.breakdown.recency_bonus == 0
        assert result.total == 48

    @pytest.mark.parametrize("days,bonus", [
        (0, 5), (7, 5), (8, 3), (30, 3), (31, 1), (90, 1), (91, 0),
    ])
    def test_recency_bonus(self, days, bonus):
        recipe = make_recipe(external_source="spoonacular", last_enriched=days_ago(days))
        assert calculate_external_score(recipe, AS_OF).breakdown.recency_bonus == bonus

    def test_total_is_clamped(self):
        recipe = make_recipe(
            external_source="spoonacular",
            quality_score=200,
            popularity_score=200,
            health_score=200,
            last_enriched=AS_OF,
        )
        assert calculate_external_score(recipe, AS_OF).total == 100


class TestCalculateHybridScore:
    """Tests for calculate_hybrid_score."""

    def test_blends_sixty_forty(self):
        assert calculate_hybrid_score(70, 80, True) == 74

    def test_internal_only_without_external_data(self):
        assert calculate_hybrid_score(70, 80, False) == 70

    def test_bounds(self):
        assert calculate_hybrid_score(100, 100, True) == 100
        assert calculate_hybrid_score(0, 0, True) == 0


class TestTiers:
    @pytest.mark.parametrize("score,tier", [
        (None, "unknown"), (85, "premium"), (84.9, "high"), (70, "high"),
        (50, "medium"), (49, "low"),
    ])
    def test_quality_tier(self, score, tier):
        assert quality_tier(score) == tier

    @pytest.mark.parametrize("likes,tier", [
        (None, "unknown"), (1000, "viral"), (999, "popular"), (500, "popular"),
        (200, "trending"), (50, "moderate"), (49, "niche"), (0, "niche"),
    ])
    def test_popularity_tier(self, likes, tier):
        assert popularity_tier(likes) == tier


class TestFreshness:
    """Tests for enrichment freshness helpers."""

    @pytest.mark.parametrize("days,label", [
        (7, "fresh"), (30, "good"), (90, "stale"), (91, "very_stale"),
    ])
    def test_data_freshness(self, days, label):
        assert data_freshness(days_ago(days), AS_OF) == label

    def test_never_enriched(self):
        assert data_freshness(None, AS_OF) == "never"
        assert needs_reenrichment(None, AS_OF)

    def test_needs_reenrichment(self):
        assert not needs_reenrichment(days_ago(89), AS_OF)
        assert needs_reenrichment(days_ago(90), AS_OF)
        assert needs_reenrichment(days_ago(30), AS_OF, max_age_days=30)
