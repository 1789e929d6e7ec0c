"""Batch-cooking recommendations from preference match and meal-prep flags."""

from dataclasses import dataclass
from typing import List, Sequence

from recipe_ranking.data_layer.models import Recipe, UserScoringPreferences
from recipe_ranking.data_layer.query import AllOf, CuisineIn, HasAnyFlag, Predicate
from recipe_ranking.logging_utils import get_logger
from recipe_ranking.providers.preference_provider import PreferenceProvider
from recipe_ranking.providers.recipe_store import RecipeStore
from recipe_ranking.scoring.dietary_compliance import check_dietary_compliance
from recipe_ranking.scoring.results import clamp_score
from recipe_ranking.scoring.tiered_scorer import find_banned_ingredient

logger = get_logger(__name__)

SUITABILITY_FLAGS = ("batch_friendly", "freezable", "weekly_prep_friendly", "meal_prep_suitable")

MIN_MATCH_SCORE = 30
MIN_BATCH_SCORE = 40
MATCH_WEIGHT = 0.6
BATCH_WEIGHT = 0.4
MAX_REASONS = 3
DEFAULT_REASON = "suitable for batch cooking"


@dataclass
class BatchCookingRecommendation:
    recipe_id: str
    title: str
    reason: str
    match_score: int  # 0-100 preference match
    batch_cooking_score: int  # 0-100 batch suitability
    estimated_prep_time: int  # minutes
    servings: int
    freezable: bool
    weekly_prep_friendly: bool

    @property
    def combined_score(self) -> float:
        return self.match_score * MATCH_WEIGHT + self.batch_cooking_score * BATCH_WEIGHT


def _has_any_flag(recipe: Recipe) -> bool:
    return any(getattr(recipe, flag) for flag in SUITABILITY_FLAGS)


def _cuisine_liked(recipe: Recipe, prefs: UserScoringPreferences) -> bool:
    liked = {cuisine.lower() for cuisine in prefs.liked_cuisines}
    return (recipe.cuisine or "").lower() in liked


def calculate_match_score(recipe: Recipe, prefs: UserScoringPreferences) -> int:
    """Preference match: cuisine, cook time, dietary and banned-ingredient penalties.

    Unlike the Quick and Full Scores, violations here are penalties, not
    vetoes: a dietary violation costs 30 points and a banned ingredient 40.
    A well-matched recipe that contains a banned ingredient can therefore
    still clear MIN_MATCH_SCORE and be recommended for batch cooking.
    """
    score = 50

    if prefs.liked_cuisines:
        score += 40 if _cuisine_liked(recipe, prefs) else -20

    diff = abs(recipe.cook_time - prefs.cook_time_preference)
    if diff <= 10:
        score += 20
    elif diff <= 20:
        score += 10
    elif diff <= 30:
        score += 5
    else:
        score -= 10

    if prefs.dietary_restrictions:
        if not check_dietary_compliance(recipe, prefs.dietary_restrictions).is_compliant:
            score -= 30

    if find_banned_ingredient(recipe, prefs.banned_ingredients) is not None:
        score -= 40

    return clamp_score(score)


def calculate_batch_cooking_score(recipe: Recipe) -> int:
    """Batch suitability from the meal-prep flags, meal-prep score and servings."""
    score = 0.0
    if recipe.batch_friendly:
        score += 30
    if recipe.freezable:
        score += 25
    if recipe.weekly_prep_friendly:
        score += 20
    if recipe.meal_prep_suitable:
        score += 15
    if recipe.meal_prep_score:
        score += min(10.0, recipe.meal_prep_score / 10)

    servings = recipe.servings or 1
    if servings >= 6:
        score += 10
    elif servings >= 4:
        score += 5

    return clamp_score(score)


def recommendation_reason(recipe: Recipe, prefs: UserScoringPreferences) -> str:
    reasons = []
    if prefs.liked_cuisines and _cuisine_liked(recipe, prefs):
        reasons.append(f"matches your {recipe.cuisine} preference")
    if recipe.batch_friendly:
        reasons.append("perfect for batch cooking")
    if recipe.freezable:
        reasons.append("freezable for long-term storage")
    if recipe.weekly_prep_friendly:
        reasons.append("great for weekly meal prep")
    if abs(recipe.cook_time - prefs.cook_time_preference) <= 10:
        reasons.append("matches your preferred cook time")
    servings = recipe.servings or 1
    if servings >= 6:
        reasons.append(f"makes {servings} servings")

    if not reasons:
        return DEFAULT_REASON
    return ", ".join(reasons[:MAX_REASONS])


def recommend_batch_cooking(recipes: Sequence[Recipe],
                            prefs: UserScoringPreferences,
                            limit: int = 10) -> List[BatchCookingRecommendation]:
    """Rank batch-cooking candidates by 0.6 * match + 0.4 * batch score.

    Candidates need at least one suitability flag and, when the user has
    liked cuisines, one of those cuisines. Candidates with a match score
    below 30 or a batch score below 40 are dropped.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    recommendations = []
    for recipe in recipes:
        if not _has_any_flag(recipe):
            continue
        if prefs.liked_cuisines and not _cuisine_liked(recipe, prefs):
            continue

        match_score = calculate_match_score(recipe, prefs)
        batch_score = calculate_batch_cooking_score(recipe)
        if match_score < MIN_MATCH_SCORE or batch_score < MIN_BATCH_SCORE:
            continue

        recommendations.append(BatchCookingRecommendation(
            recipe_id=recipe.id,
            title=recipe.title,
            reason=recommendation_reason(recipe, prefs),
            match_score=match_score,
            batch_cooking_score=batch_score,
            estimated_prep_time=recipe.cook_time,
            servings=recipe.servings or 1,
            freezable=recipe.freezable,
            weekly_prep_friendly=recipe.weekly_prep_friendly,
        ))

    recommendations.sort(key=lambda rec: rec.combined_score, reverse=True)
    return recommendations[:limit]


class BatchCookingRecommender:
    """Store-backed batch-cooking recommendations for a user."""

    def __init__(self, recipe_store: RecipeStore, preference_provider: PreferenceProvider):
        self.recipe_store = recipe_store
        self.preference_provider = preference_provider

    def build_predicate(self, prefs: UserScoringPreferences) -> AllOf:
        clauses: List[Predicate] = [HasAnyFlag(SUITABILITY_FLAGS)]
        if prefs.liked_cuisines:
            clauses.append(CuisineIn(frozenset(prefs.liked_cuisines)))
        return AllOf(tuple(clauses))

    def recommend(self, user_id: str, limit: int = 10) -> List[BatchCookingRecommendation]:
        """Return up to ``limit`` recommendations; empty without preferences."""
        prefs = self.preference_provider.get_scoring_preferences(user_id)
        if prefs is None:
            logger.warning(
                "No scoring preferences for user %s",
                user_id,
                extra={"invoking_func": "recommend", "next_step": "Return []"},
            )
            return []

        # Over-fetch so the score thresholds still leave enough rows
        candidates = self.recipe_store.find(self.build_predicate(prefs), limit=limit * 2)
        recommendations = recommend_batch_cooking(candidates, prefs, limit=limit)
        logger.info(
            "user=%s candidates=%d recommended=%d",
            user_id, len(candidates), len(recommendations),
        )
        return recommendations
