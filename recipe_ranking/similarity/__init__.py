"""Recipe similarity engine."""

from .recipe_similarity import (
    SimilarityWeights,
    SimilarityScore,
    SimilarityFactors,
    find_similar_recipes,
    find_similar_to_search_query,
)

__all__ = [
    "SimilarityWeights",
    "SimilarityScore",
    "SimilarityFactors",
    "find_similar_recipes",
    "find_similar_to_search_query",
]
