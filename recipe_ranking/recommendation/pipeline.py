"""Recommendation pipeline: tiered scoring over an over-fetched candidate set.

Stages per request, strictly in order:

1. Build a coarse store predicate from the user's preferences and filters.
2. Count matches (for pagination) and fetch a light, recency-ordered
   batch of up to ``overfetch_factor * limit`` rows.
3. Quick Score every row, drop rows below ``min_quick_score`` and
   stable-sort by score.
4. Keep the first ``limit`` rows and hydrate their instructions.
5. Optionally Full Score the survivors with behavior and time of day,
   blending in the external score for enriched recipes.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from recipe_ranking.data_layer.models import (
    BehavioralSignal,
    Recipe,
    UserScoringPreferences,
)
from recipe_ranking.data_layer.query import (
    AllOf,
    CookTimeAtMost,
    CreatorIs,
    CuisineIn,
    MealTypeIs,
    Predicate,
    Projection,
    TextContains,
)
from recipe_ranking.logging_utils import get_logger
from recipe_ranking.providers.preference_provider import PreferenceProvider
from recipe_ranking.providers.recipe_store import RecipeStore
from recipe_ranking.recommendation.temporal import temporal_context_at
from recipe_ranking.scoring.external_score import (
    ExternalScore,
    calculate_external_score,
    calculate_hybrid_score,
    quality_tier,
)
from recipe_ranking.scoring.tiered_scorer import (
    FullScore,
    QuickScore,
    calculate_full_score,
    calculate_quick_score,
)
from recipe_ranking.settings import PipelineSettings

logger = get_logger(__name__)

RECENCY_ORDER = "-created_at"


@dataclass
class RecommendationFilters:
    """Caller-supplied narrowing on top of the preference predicate."""
    meal_type: Optional[str] = None
    max_cook_time: Optional[int] = None  # minutes
    search: Optional[str] = None  # Matched against title or description


@dataclass
class RankedRecipe:
    """A recipe with the score that placed it and why."""
    recipe: Recipe
    score: int
    quick: QuickScore
    full: Optional[FullScore] = None
    external: Optional[ExternalScore] = None  # Set by the Full Score stage
    reasons: List[str] = field(default_factory=list)


@dataclass
class RecommendationPage:
    recipes: List[RankedRecipe]
    total: int  # Matches for the predicate, before scoring
    page: int
    limit: int
    total_pages: int


def explain_score(recipe: Recipe,
                  quick: QuickScore,
                  full: Optional[FullScore] = None,
                  external: Optional[ExternalScore] = None) -> List[str]:
    """Short human-readable reasons derived from the score breakdowns."""
    reasons = []
    breakdown = quick.breakdown
    if breakdown.cuisine_match == 100:
        reasons.append(f"You like {recipe.cuisine} food")
    if breakdown.cook_time_match == 100:
        reasons.append(f"Ready in {recipe.cook_time} minutes, close to your usual cook time")
    elif breakdown.cook_time_match == 70:
        reasons.append("Cook time is near your preference")
    if breakdown.macro_alignment is not None and breakdown.macro_alignment >= 80:
        reasons.append("Fits your macro goals")

    if full is not None and not full.is_vetoed:
        if full.behavioral_score == 100:
            reasons.append("You liked this before")
        if full.temporal_score > 50:
            reasons.append("Suits this time of day")
        if full.health_goal_score >= 70:
            reasons.append("Supports your fitness goal")
    if external is not None and external.has_external_data:
        if quality_tier(recipe.quality_score) in ("premium", "high"):
            reasons.append("Highly rated")
    return reasons


class RecommendationPipeline:
    """Ranks a page of shared recipes for a user."""

    def __init__(self,
                 recipe_store: RecipeStore,
                 preference_provider: PreferenceProvider,
                 settings: Optional[PipelineSettings] = None):
        """Initialize the pipeline.

        Args:
            recipe_store: Read interface to the recipe corpus
            preference_provider: Source of preferences and behavior
            settings: Tuning knobs (defaults when None)
        """
        self.recipe_store = recipe_store
        self.preference_provider = preference_provider
        self.settings = settings or PipelineSettings()

    def build_predicate(self,
                        prefs: UserScoringPreferences,
                        filters: Optional[RecommendationFilters] = None) -> AllOf:
        """Coarse store predicate for a user.

        Always excludes user-authored recipes. A user with enough liked
        cuisines only sees those cuisines. Cook time is capped at the
        preference times the configured slack, or the caller's
        ``max_cook_time`` when that is tighter.
        """
        clauses: List[Predicate] = [CreatorIs(False)]

        if len(prefs.liked_cuisines) >= self.settings.cuisine_filter_threshold:
            clauses.append(CuisineIn(frozenset(prefs.liked_cuisines)))

        cook_time_cap = None
        if prefs.cook_time_preference:
            cook_time_cap = int(round(prefs.cook_time_preference * self.settings.cook_time_slack))

        if filters is not None:
            if filters.meal_type:
                clauses.append(MealTypeIs(filters.meal_type))
            if filters.max_cook_time is not None:
                if cook_time_cap is None:
                    cook_time_cap = filters.max_cook_time
                else:
                    cook_time_cap = min(cook_time_cap, filters.max_cook_time)
            if filters.search:
                clauses.append(TextContains(filters.search))

        if cook_time_cap is not None:
            clauses.append(CookTimeAtMost(cook_time_cap))

        return AllOf(tuple(clauses))

    def recommend(self,
                  user_id: str,
                  page: int = 0,
                  limit: Optional[int] = None,
                  filters: Optional[RecommendationFilters] = None,
                  moment: Optional[datetime] = None,
                  use_full_score: bool = False) -> Optional[RecommendationPage]:
        """Rank a page of recipes for a stored user.

        Returns:
            RecommendationPage, or None when the user has no preferences
            (the caller should send them to preference setup).

        Raises:
            ValueError: If page is negative or limit is not positive
        """
        prefs = self.preference_provider.get_scoring_preferences(user_id)
        if prefs is None:
            logger.warning(
                "No scoring preferences for user %s",
                user_id,
                extra={
                    "invoking_func": "recommend",
                    "next_step": "Return None",
                    "resolution": "User must complete preference setup",
                },
            )
            return None

        behavior = None
        if use_full_score:
            behavior = self.preference_provider.get_behavioral_signal(user_id)

        return self.recommend_for_preferences(
            prefs,
            page=page,
            limit=limit,
            filters=filters,
            moment=moment,
            use_full_score=use_full_score,
            behavior=behavior,
        )

    def recommend_for_preferences(self,
                                  prefs: UserScoringPreferences,
                                  page: int = 0,
                                  limit: Optional[int] = None,
                                  filters: Optional[RecommendationFilters] = None,
                                  moment: Optional[datetime] = None,
                                  use_full_score: bool = False,
                                  behavior: Optional[BehavioralSignal] = None) -> RecommendationPage:
        """Run the pipeline stages for an already-assembled preference object."""
        if limit is None:
            limit = self.settings.default_limit
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        if page < 0:
            raise ValueError(f"page must be non-negative, got {page}")

        predicate = self.build_predicate(prefs, filters)
        total = self.recipe_store.count(predicate)

        fetch_limit = min(limit * self.settings.overfetch_factor, self.settings.max_fetch)
        candidates = self.recipe_store.find(
            predicate,
            projection=Projection.LIGHT,
            order_by=RECENCY_ORDER,
            limit=fetch_limit,
            offset=page * limit,
        )

        scored = [(recipe, calculate_quick_score(recipe, prefs)) for recipe in candidates]
        kept = [
            (recipe, quick) for recipe, quick in scored
            if quick.score >= self.settings.min_quick_score
        ]
        # sorted() is stable, so ties keep recency order
        kept = sorted(kept, key=lambda pair: pair[1].score, reverse=True)[:limit]

        logger.info(
            "user=%s total=%d fetched=%d kept=%d",
            prefs.user_id, total, len(candidates), len(kept),
            extra={"invoking_func": "recommend_for_preferences", "next_step": "Hydrate"},
        )

        hydrated = {
            recipe.id: recipe
            for recipe in self.recipe_store.find_many([recipe.id for recipe, _ in kept])
        }

        ranked: List[RankedRecipe] = []
        for light, quick in kept:
            recipe = hydrated.get(light.id)
            if recipe is None:
                logger.debug("Recipe %s disappeared before hydration", light.id)
                continue
            ranked.append(RankedRecipe(
                recipe=recipe,
                score=quick.score,
                quick=quick,
                reasons=explain_score(recipe, quick),
            ))

        if use_full_score:
            ranked = self._apply_full_score(ranked, prefs, behavior, moment)

        return RecommendationPage(
            recipes=ranked,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    def _apply_full_score(self,
                          ranked: List[RankedRecipe],
                          prefs: UserScoringPreferences,
                          behavior: Optional[BehavioralSignal],
                          moment: Optional[datetime]) -> List[RankedRecipe]:
        """Full Score the shortlist, drop vetoes, blend in external scores and re-rank.

        The moment, or the current time when None, is also the reference
        date for the external score's recency bonus.
        """
        temporal = temporal_context_at(moment) if moment is not None else None
        as_of = (moment or datetime.now()).date()

        rescored: List[RankedRecipe] = []
        for item in ranked:
            full = calculate_full_score(item.recipe, prefs, behavior, temporal)
            if full.is_vetoed:
                logger.debug("Recipe %s vetoed: %s", item.recipe.id, full.outcome.reason)
                continue
            external = calculate_external_score(item.recipe, as_of)
            item.full = full
            item.external = external
            item.score = calculate_hybrid_score(full.score, external.total, external.has_external_data)
            item.reasons = explain_score(item.recipe, item.quick, full, external)
            rescored.append(item)

        return sorted(rescored, key=lambda item: item.score, reverse=True)
