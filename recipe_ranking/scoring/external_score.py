"""External (enrichment) score and its blend with the internal score.

Recipes enriched from an outside source carry that source's quality,
popularity and health ratings. Those ratings are folded into one 0-100
external score:

    quality      40%
    popularity   30%
    health       25%
    recency      up to 5 points for recently refreshed data

Recipes without enrichment get a neutral 50 and are ranked on the
internal score alone.
"""

import datetime
from dataclasses import dataclass
from typing import Optional

from recipe_ranking.data_layer.models import ExternalScorable
from recipe_ranking.scoring.results import clamp_score

NEUTRAL_RATING = 50.0

QUALITY_WEIGHT = 0.4
POPULARITY_WEIGHT = 0.3
HEALTH_WEIGHT = 0.25

INTERNAL_WEIGHT = 0.6
EXTERNAL_WEIGHT = 0.4

# (max days since enrichment, bonus points)
RECENCY_BONUSES = ((7, 5), (30, 3), (90, 1))

# (max days since enrichment, label)
FRESHNESS_LABELS = ((7, "fresh"), (30, "good"), (90, "stale"))

QUALITY_TIERS = ((85, "premium"), (70, "high"), (50, "medium"))
POPULARITY_TIERS = ((1000, "viral"), (500, "popular"), (200, "trending"), (50, "moderate"))

REENRICH_AFTER_DAYS = 90


@dataclass
class ExternalScoreBreakdown:
    quality_score: float = NEUTRAL_RATING
    popularity_score: float = NEUTRAL_RATING
    health_score: float = NEUTRAL_RATING
    recency_bonus: int = 0


@dataclass
class ExternalScore:
    total: int  # 0-100
    breakdown: ExternalScoreBreakdown
    has_external_data: bool


def days_since_enriched(last_enriched: Optional[datetime.date], as_of: datetime.date) -> Optional[int]:
    if last_enriched is None:
        return None
    return (as_of - last_enriched).days


def _recency_bonus(days: Optional[int]) -> int:
    if days is None:
        return 0
    for max_days, bonus in RECENCY_BONUSES:
        if days <= max_days:
            return bonus
    return 0


def _rating(value: Optional[float]) -> float:
    return NEUTRAL_RATING if value is None else float(value)


def calculate_external_score(recipe: ExternalScorable, as_of: datetime.date) -> ExternalScore:
    """Score a recipe from its enrichment ratings.

    Args:
        recipe: Recipe carrying the enrichment fields
        as_of: Reference date for the recency bonus

    Returns:
        ExternalScore; a neutral 50 with has_external_data False when the
        recipe was never enriched
    """
    if not recipe.external_source:
        return ExternalScore(
            total=int(NEUTRAL_RATING),
            breakdown=ExternalScoreBreakdown(),
            has_external_data=False,
        )

    breakdown = ExternalScoreBreakdown(
        quality_score=_rating(recipe.quality_score),
        popularity_score=_rating(recipe.popularity_score),
        health_score=_rating(recipe.health_score),
        recency_bonus=_recency_bonus(days_since_enriched(recipe.last_enriched, as_of)),
    )
    total = (
        breakdown.quality_score * QUALITY_WEIGHT
        + breakdown.popularity_score * POPULARITY_WEIGHT
        + breakdown.health_score * HEALTH_WEIGHT
        + breakdown.recency_bonus
    )
    return ExternalScore(total=clamp_score(total), breakdown=breakdown, has_external_data=True)


def calculate_hybrid_score(internal_score: int, external_score: int, has_external_data: bool) -> int:
    """Blend 60% internal with 40% external; internal only without enrichment."""
    if not has_external_data:
        return internal_score
    return clamp_score(internal_score * INTERNAL_WEIGHT + external_score * EXTERNAL_WEIGHT)


def quality_tier(quality_score: Optional[float]) -> str:
    if quality_score is None:
        return "unknown"
    for threshold, tier in QUALITY_TIERS:
        if quality_score >= threshold:
            return tier
    return "low"


def popularity_tier(aggregate_likes: Optional[int]) -> str:
    if aggregate_likes is None:
        return "unknown"
    for threshold, tier in POPULARITY_TIERS:
        if aggregate_likes >= threshold:
            return tier
    return "niche"


def data_freshness(last_enriched: Optional[datetime.date], as_of: datetime.date) -> str:
    days = days_since_enriched(last_enriched, as_of)
    if days is None:
        return "never"
    for max_days, label in FRESHNESS_LABELS:
        if days <= max_days:
            return label
    return "very_stale"


def needs_reenrichment(last_enriched: Optional[datetime.date],
                       as_of: datetime.date,
                       max_age_days: int = REENRICH_AFTER_DAYS) -> bool:
    """True when the enrichment data is missing or at least max_age_days old."""
    days = days_since_enriched(last_enriched, as_of)
    return days is None or days >= max_age_days
