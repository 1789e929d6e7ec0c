"""Recipe complexity assessment and cooking-skill matching."""

from dataclasses import dataclass
from typing import Dict, Optional

from recipe_ranking.data_layer.models import ComplexityInput
from recipe_ranking.signals.extractors import count_keywords
from recipe_ranking.signals.keywords import COMPLEX_TECHNIQUES, INTERMEDIATE_TECHNIQUES

DEFAULT_COOK_TIME = 30
MAX_FACTOR_POINTS = 25

DIFFICULTY_ORDINAL: Dict[str, int] = {"easy": 1, "medium": 2, "hard": 3}
SKILL_ORDINAL: Dict[str, int] = {"beginner": 1, "intermediate": 2, "advanced": 3}


@dataclass
class ComplexityFactors:
    cook_time: int
    ingredient_count: int
    instruction_count: int
    technique_complexity: int


@dataclass
class ComplexityAssessment:
    overall_difficulty: str  # "easy", "medium", "hard"
    complexity_score: int  # 0-100
    factors: ComplexityFactors


def _cook_time_points(cook_time: int) -> int:
    if cook_time <= 15:
        return 5
    if cook_time <= 30:
        return 10
    if cook_time <= 60:
        return 20
    return 25


def _ingredient_points(count: int) -> int:
    if count <= 5:
        return 5
    if count <= 10:
        return 15
    if count <= 15:
        return 20
    return 25


def _instruction_points(count: int) -> int:
    if count <= 3:
        return 5
    if count <= 6:
        return 15
    if count <= 10:
        return 20
    return 25


def _technique_points(instruction_text: str) -> int:
    """Complex techniques dominate; intermediate ones scale by count."""
    complex_count = count_keywords(instruction_text, COMPLEX_TECHNIQUES)
    intermediate_count = count_keywords(instruction_text, INTERMEDIATE_TECHNIQUES)

    if complex_count > 0:
        points = 20 + complex_count * 2
    elif intermediate_count > 2:
        points = 10 + intermediate_count * 2
    elif intermediate_count > 0:
        points = 5 + intermediate_count
    else:
        points = 0
    return min(MAX_FACTOR_POINTS, points)


def _difficulty_for_score(score: int) -> str:
    if score <= 30:
        return "easy"
    if score <= 60:
        return "medium"
    return "hard"


def assess_recipe_complexity(recipe: ComplexityInput) -> ComplexityAssessment:
    """Sum four 0-25 factors and bucket into easy / medium / hard.

    An author-declared difficulty wins when it is stricter than the
    computed bucket; it never downgrades the computed one.
    """
    cook_time = recipe.cook_time or DEFAULT_COOK_TIME
    instruction_text = " ".join(step.lower() for step in recipe.instructions)

    factors = ComplexityFactors(
        cook_time=_cook_time_points(cook_time),
        ingredient_count=_ingredient_points(len(recipe.ingredients)),
        instruction_count=_instruction_points(len(recipe.instructions)),
        technique_complexity=_technique_points(instruction_text),
    )
    score = (
        factors.cook_time
        + factors.ingredient_count
        + factors.instruction_count
        + factors.technique_complexity
    )

    difficulty = _difficulty_for_score(score)
    declared = (recipe.difficulty or "").lower()
    if declared in DIFFICULTY_ORDINAL and DIFFICULTY_ORDINAL[declared] > DIFFICULTY_ORDINAL[difficulty]:
        difficulty = declared

    return ComplexityAssessment(
        overall_difficulty=difficulty,
        complexity_score=score,
        factors=factors,
    )


def calculate_skill_level_match(recipe: ComplexityInput, user_skill_level: Optional[str]) -> int:
    """Match score for the user's cooking skill; 50 when skill is unknown.

    Recipes at or below the user's level score 70-90, harder ones 30-60.
    """
    if not user_skill_level:
        return 50

    difficulty = assess_recipe_complexity(recipe).overall_difficulty
    user_value = SKILL_ORDINAL.get(user_skill_level.lower(), 2)
    recipe_value = DIFFICULTY_ORDINAL[difficulty]
    difference = user_value - recipe_value

    if difference >= 0:
        if difference == 0:
            return 90
        if difference == 1:
            return 80
        return 70
    if difference == -1:
        return 60
    return 30
