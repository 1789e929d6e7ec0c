"""Spice-level detection from recipe text and match against user preference."""

from dataclasses import dataclass, field
from typing import List, Optional

from recipe_ranking.data_layer.models import SpiceInput
from recipe_ranking.signals.extractors import combined_text, find_keywords
from recipe_ranking.signals.keywords import (
    HEAT_WORDS,
    SPICE_KEYWORDS,
    SPICE_LEVELS,
    SPICE_POINTS,
    SPICY_CUISINES,
)

HEAT_WORD_BONUS = 2
SPICY_CUISINE_BONUS = 2

# Ordinal used to compare detected level and preference
SPICE_ORDINAL = {"mild": 1, "medium": 2, "spicy": 3, "very_spicy": 4}

# |detected - preferred| -> match score
SPICE_MATCH_BY_DISTANCE = {0: 95, 1: 75, 2: 45, 3: 20}


@dataclass
class SpiceLevelDetection:
    level: str  # "mild", "medium", "spicy", "very_spicy"
    confidence: float  # [0, 1]
    score: int  # Raw point total
    indicators: List[str] = field(default_factory=list)


def _level_for_points(points: int) -> str:
    if points <= 3:
        return "mild"
    if points <= 6:
        return "medium"
    if points <= 10:
        return "spicy"
    return "very_spicy"


def detect_spice_level(recipe: SpiceInput) -> SpiceLevelDetection:
    """Infer a spice level from keyword hits, heat words and cuisine.

    Each matched keyword adds its tier's points (mild 1, medium 3,
    spicy 5, very spicy 8). Generic heat words and a typically spicy
    cuisine add 2 each.
    """
    text = combined_text(recipe)
    indicators: List[str] = []
    points = 0

    for level in SPICE_LEVELS:
        for keyword in find_keywords(text, SPICE_KEYWORDS[level]):
            points += SPICE_POINTS[level]
            if keyword not in indicators:
                indicators.append(keyword)

    if any(word in text for word in HEAT_WORDS):
        points += HEAT_WORD_BONUS

    cuisine = (recipe.cuisine or "").lower()
    if any(spicy in cuisine for spicy in SPICY_CUISINES):
        points += SPICY_CUISINE_BONUS

    return SpiceLevelDetection(
        level=_level_for_points(points),
        confidence=min(1.0, points / 10),
        score=points,
        indicators=indicators,
    )


def calculate_spice_level_match(recipe: SpiceInput, user_spice_level: Optional[str]) -> int:
    """Match score in [20, 95]; 50 when the user has no spice preference."""
    if not user_spice_level:
        return 50

    detected = detect_spice_level(recipe)
    user_value = SPICE_ORDINAL.get(user_spice_level.lower().replace(" ", "_"), 2)
    recipe_value = SPICE_ORDINAL[detected.level]
    return SPICE_MATCH_BY_DISTANCE[abs(user_value - recipe_value)]
