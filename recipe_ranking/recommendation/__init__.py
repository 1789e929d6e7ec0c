"""Recommendation layer: the tiered pipeline and batch-cooking recommender."""

from recipe_ranking.recommendation.temporal import temporal_context_at

from recipe_ranking.recommendation.pipeline import (
    RecommendationPipeline,
    RecommendationFilters,
    RecommendationPage,
    RankedRecipe,
    explain_score,
)

from recipe_ranking.recommendation.batch_cooking import (
    BatchCookingRecommender,
    BatchCookingRecommendation,
    recommend_batch_cooking,
    calculate_match_score,
    calculate_batch_cooking_score,
)

__all__ = [
    "temporal_context_at",
    # Tiered pipeline
    "RecommendationPipeline",
    "RecommendationFilters",
    "RecommendationPage",
    "RankedRecipe",
    "explain_score",
    # Batch cooking
    "BatchCookingRecommender",
    "BatchCookingRecommendation",
    "recommend_batch_cooking",
    "calculate_match_score",
    "calculate_batch_cooking_score",
]
