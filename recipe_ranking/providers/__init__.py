"""Provider abstraction layer for recipe and preference lookup.

This package decouples the scoring pipeline from concrete data
sources (local JSON/YAML vs. a relational store).
"""

from recipe_ranking.providers.recipe_store import RecipeStore
from recipe_ranking.providers.preference_provider import PreferenceProvider
from recipe_ranking.providers.local_provider import LocalPreferenceProvider

__all__ = [
    "RecipeStore",
    "PreferenceProvider",
    "LocalPreferenceProvider",
]
