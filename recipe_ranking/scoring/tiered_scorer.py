"""Two-tier recipe scoring.

Tier 1 (Quick Score) reads only preference data and light recipe
fields, so it can run over hundreds of candidates per request. Tier 2
(Full Score) adds behavioral history, time-of-day context and fitness
goal alignment, and is meant for a short list of Tier 1 survivors.

A banned ingredient is a veto: the Quick Score is 0 and every Full
Score sub-field is 0, regardless of any other match. A violated dietary
restriction vetoes the Full Score the same way.
"""

from dataclasses import dataclass
from typing import Optional

from recipe_ranking.data_layer.models import (
    BehavioralSignal,
    FullScorable,
    MacroGoals,
    QuickScorable,
    TemporalContext,
    UserScoringPreferences,
)
from recipe_ranking.scoring.dietary_compliance import check_dietary_compliance
from recipe_ranking.scoring.results import ScoreOutcome, Scored, Vetoed, clamp_score

BASELINE_SCORE = 50
NEUTRAL_SUBSCORE = 50
MEALS_PER_DAY = 3

LIGHT_MEAL_CALORIES = 400
HEAVY_MEAL_CALORIES = 700
HIGH_PROTEIN_GRAMS = 40
LOW_CALORIE_LIMIT = 500


@dataclass
class QuickScoreBreakdown:
    cuisine_match: int = NEUTRAL_SUBSCORE
    has_banned_ingredients: bool = False
    cook_time_match: int = NEUTRAL_SUBSCORE
    macro_alignment: Optional[int] = None  # Only set when macro goals exist


@dataclass
class QuickScore:
    recipe_id: str
    score: int  # 0-100
    breakdown: QuickScoreBreakdown
    outcome: ScoreOutcome

    @property
    def is_vetoed(self) -> bool:
        return self.outcome.is_vetoed


@dataclass
class FullScore:
    recipe_id: str
    score: int  # Final 0-100 score
    quick: QuickScore
    behavioral_score: int
    temporal_score: int
    health_goal_score: int
    outcome: ScoreOutcome

    @property
    def is_vetoed(self) -> bool:
        return self.outcome.is_vetoed

    @property
    def breakdown(self) -> QuickScoreBreakdown:
        return self.quick.breakdown


def find_banned_ingredient(recipe: QuickScorable, banned_ingredients) -> Optional[str]:
    """First banned term contained in the recipe's ingredient text, if any."""
    if not banned_ingredients or not recipe.ingredients:
        return None
    ingredient_text = " ".join(text.lower() for text in recipe.ingredients)
    for banned in banned_ingredients:
        if banned and banned.lower() in ingredient_text:
            return banned
    return None


def cook_time_adjustment(cook_time: int, preference: int):
    """(breakdown value, score delta) for the gap between cook time and preference."""
    diff = abs(cook_time - preference)
    if diff <= 10:
        return 100, 20
    if diff <= 20:
        return 70, 10
    if diff <= 30:
        return 40, 0
    return 10, -10


def _relative_difference(actual: float, target: float) -> float:
    # A zero goal gives no meaningful ratio; treat it as on target
    if target == 0:
        return 0.0
    return abs(actual - target) / target


def macro_alignment_score(recipe: QuickScorable, goals: MacroGoals) -> float:
    """Closeness of one meal (a third of daily goals) in calories and protein."""
    calorie_diff = _relative_difference(recipe.calories, goals.calories / MEALS_PER_DAY)
    protein_diff = _relative_difference(recipe.protein, goals.protein / MEALS_PER_DAY)
    return max(0.0, 100 - (calorie_diff + protein_diff) * 50)


def calculate_quick_score(recipe: QuickScorable, prefs: UserScoringPreferences) -> QuickScore:
    """Tier 1 score from cuisine, banned ingredients, cook time and macros.

    Args:
        recipe: Light recipe row (instructions are not needed)
        prefs: The user's scoring preferences

    Returns:
        QuickScore whose outcome is Vetoed when a banned ingredient matched
    """
    score = BASELINE_SCORE
    breakdown = QuickScoreBreakdown()

    if prefs.liked_cuisines:
        liked = {cuisine.lower() for cuisine in prefs.liked_cuisines}
        if (recipe.cuisine or "").lower() in liked:
            breakdown.cuisine_match = 100
            score += 40
        else:
            breakdown.cuisine_match = 20
            score -= 30

    banned = find_banned_ingredient(recipe, prefs.banned_ingredients)
    if banned is not None:
        breakdown.has_banned_ingredients = True
        return QuickScore(
            recipe_id=recipe.id,
            score=0,
            breakdown=breakdown,
            outcome=Vetoed(f"banned ingredient: {banned}"),
        )

    breakdown.cook_time_match, delta = cook_time_adjustment(
        recipe.cook_time, prefs.cook_time_preference
    )
    score += delta

    if prefs.macro_goals is not None:
        macro_score = macro_alignment_score(recipe, prefs.macro_goals)
        breakdown.macro_alignment = int(round(macro_score))
        if macro_score >= 80:
            score += 15
        elif macro_score >= 60:
            score += 10
        elif macro_score >= 40:
            score += 5

    final = clamp_score(score)
    return QuickScore(
        recipe_id=recipe.id,
        score=final,
        breakdown=breakdown,
        outcome=Scored(final),
    )


def _vetoed_full_score(quick: QuickScore, outcome: ScoreOutcome) -> FullScore:
    zeroed = QuickScore(
        recipe_id=quick.recipe_id,
        score=0,
        breakdown=QuickScoreBreakdown(
            cuisine_match=0,
            has_banned_ingredients=quick.breakdown.has_banned_ingredients,
            cook_time_match=0,
            macro_alignment=0,
        ),
        outcome=outcome,
    )
    return FullScore(
        recipe_id=quick.recipe_id,
        score=0,
        quick=zeroed,
        behavioral_score=0,
        temporal_score=0,
        health_goal_score=0,
        outcome=outcome,
    )


def _behavioral_adjustment(recipe: FullScorable, behavior: Optional[BehavioralSignal]):
    if behavior is None:
        return NEUTRAL_SUBSCORE, 0
    if recipe.id in behavior.liked_recipe_ids:
        return 100, 10
    if recipe.id in behavior.disliked_recipe_ids:
        return 0, -20
    recent = {cuisine.lower() for cuisine in behavior.recent_cuisines}
    if (recipe.cuisine or "").lower() in recent:
        return 30, -5
    return NEUTRAL_SUBSCORE, 0


def _temporal_adjustment(recipe: FullScorable, temporal: Optional[TemporalContext]):
    if temporal is None:
        return NEUTRAL_SUBSCORE, 0
    if temporal.time_of_day == "morning":
        if (recipe.meal_type or "").lower() == "breakfast":
            return 90, 5
    elif temporal.time_of_day == "afternoon":
        if recipe.calories > HEAVY_MEAL_CALORIES:
            return 80, 3
    elif temporal.time_of_day == "evening":
        if recipe.calories < LIGHT_MEAL_CALORIES:
            return 70, 3
    return NEUTRAL_SUBSCORE, 0


def _health_goal_adjustment(recipe: FullScorable, fitness_goal: Optional[str]):
    if not fitness_goal:
        return NEUTRAL_SUBSCORE, 0
    high_protein = recipe.protein >= HIGH_PROTEIN_GRAMS
    low_calorie = recipe.calories <= LOW_CALORIE_LIMIT

    if fitness_goal == "lose_weight":
        if low_calorie and high_protein:
            return 100, 10
        if low_calorie:
            return 70, 5
    elif fitness_goal == "gain_muscle":
        if high_protein:
            return 100, 10
    elif fitness_goal == "maintain":
        return 60, 2
    return NEUTRAL_SUBSCORE, 0


def calculate_full_score(
    recipe: FullScorable,
    prefs: UserScoringPreferences,
    behavior: Optional[BehavioralSignal] = None,
    temporal: Optional[TemporalContext] = None,
) -> FullScore:
    """Tier 2 score: the Quick Score plus behavioral, temporal and goal nudges.

    The recipe should carry its instructions, since dietary restrictions
    are checked over the full text here and a violation is a veto.
    """
    quick = calculate_quick_score(recipe, prefs)
    if quick.is_vetoed:
        return _vetoed_full_score(quick, quick.outcome)

    if prefs.dietary_restrictions:
        compliance = check_dietary_compliance(recipe, prefs.dietary_restrictions)
        if not compliance.is_compliant:
            return _vetoed_full_score(
                quick, Vetoed(f"dietary restriction: {compliance.violations[0]}")
            )

    behavioral_score, behavioral_delta = _behavioral_adjustment(recipe, behavior)
    temporal_score, temporal_delta = _temporal_adjustment(recipe, temporal)
    health_goal_score, health_delta = _health_goal_adjustment(recipe, prefs.fitness_goal)

    final = clamp_score(quick.score + behavioral_delta + temporal_delta + health_delta)
    return FullScore(
        recipe_id=recipe.id,
        score=final,
        quick=quick,
        behavioral_score=behavioral_score,
        temporal_score=temporal_score,
        health_goal_score=health_goal_score,
        outcome=Scored(final),
    )
