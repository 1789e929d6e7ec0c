"""Health grade (A-F) from objective nutritional criteria.

Five categories add up to a 0-100 score:

    macronutrient balance   25  (protein adequacy, macro balance, fat quality)
    calorie density         20  (calorie range, calorie/nutrient ratio)
    nutrient density        25  (fiber, protein efficiency, nutrient richness)
    ingredient quality      20  (whole foods, processed penalty)
    sugar & sodium          10  (sugar content, sodium content)

Every sub-score is an integer, so the category breakdown always sums to
the total.
"""

from dataclasses import dataclass
from typing import Optional

from recipe_ranking.data_layer.models import NutritionBearing
from recipe_ranking.scoring.results import clamp_score
from recipe_ranking.signals.extractors import combined_text, count_keywords
from recipe_ranking.signals.keywords import (
    HEALTHY_INDICATORS,
    HIGHLY_PROCESSED_INDICATORS,
    MODERATELY_PROCESSED_KEYWORDS,
    PROCESSED_KEYWORDS,
    SODIUM_INDICATORS,
    SUGAR_INDICATORS,
    UNHEALTHY_INDICATORS,
    WHOLE_FOOD_KEYWORDS,
)

# Fiber targets (grams) for a full meal; scaled down below MEAL_CALORIES
MEAL_CALORIES = 300
FIBER_TARGET = 5.0
FIBER_MINIMUM = 3.0
FIBER_LOW = 1.0

GRADE_THRESHOLDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


@dataclass
class HealthGradeBreakdown:
    macronutrient_balance: int  # 0-25
    calorie_density: int  # 0-20
    nutrient_density: int  # 0-25
    ingredient_quality: int  # 0-20
    sugar_and_sodium: int  # 0-10

    def total(self) -> int:
        return (
            self.macronutrient_balance
            + self.calorie_density
            + self.nutrient_density
            + self.ingredient_quality
            + self.sugar_and_sodium
        )


@dataclass
class HealthGradeDetails:
    protein_adequacy: int
    macro_balance: int
    fat_quality: int
    calorie_range: int
    calorie_nutrient_ratio: int
    fiber_content: int
    protein_efficiency: int
    nutrient_richness: int
    whole_foods_presence: int
    processed_ingredients_penalty: int
    sugar_content: int
    sodium_content: int


@dataclass
class HealthGradeResult:
    grade: str  # "A" through "F"
    score: int  # 0-100
    breakdown: HealthGradeBreakdown
    details: HealthGradeDetails


def assign_grade(score: int) -> str:
    """Map a 0-100 score to a letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


# --- Macronutrient balance ---

def _protein_adequacy(protein: float) -> int:
    if protein >= 20:
        return 10
    if protein >= 15:
        return 7
    if protein >= 10:
        return 4
    return 0


def _macro_balance(calories: float, protein: float, carbs: float, fat: float) -> int:
    if calories <= 0:
        return 5
    shares = (protein * 4 / calories, carbs * 4 / calories, fat * 9 / calories)
    if any(share > 0.70 for share in shares):
        return 2
    if any(share > 0.60 for share in shares):
        return 6
    return 10


def _fat_quality(calories: float, protein: float, carbs: float, fat: float) -> int:
    if calories <= 0:
        return 3
    if fat > 40:
        return 1
    protein_share = protein * 4 / calories
    carb_share = carbs * 4 / calories
    if fat <= 25 and (protein_share > 0.20 or carb_share > 0.40):
        return 5
    return 3


# --- Calorie density ---

def _calorie_range(calories: float) -> int:
    if 300 <= calories <= 600:
        return 15
    if 600 < calories <= 750:
        return 12
    if 150 <= calories < 300:
        return 12
    if calories < 150:
        return 10
    if 750 < calories <= 900:
        return 8
    return 3


def _calorie_nutrient_ratio(calories: float, protein: float, fiber: float) -> int:
    if calories <= 0:
        return 1
    protein_ratio = protein / calories
    fiber_ratio = fiber / calories
    if protein_ratio >= 0.20 or fiber_ratio >= 0.03:
        return 5
    if protein_ratio >= 0.10 or fiber_ratio >= 0.015:
        return 3
    return 1


# --- Nutrient density ---

def _fiber_content(calories: float, fiber: float) -> int:
    # Below a full meal the targets shrink in proportion to calories
    if fiber < FIBER_LOW:
        return 0
    scale = 1.0 if calories >= MEAL_CALORIES else max(calories, 0) / MEAL_CALORIES
    if fiber >= FIBER_TARGET * scale:
        return 10
    if fiber >= FIBER_MINIMUM * scale:
        return 7
    if fiber >= FIBER_LOW * scale:
        return 4
    return 0


def _protein_efficiency(calories: float, protein: float) -> int:
    if calories <= 0:
        return 0
    ratio = protein / calories
    if ratio >= 0.20:
        return 10
    if ratio >= 0.15:
        return 8
    if ratio >= 0.10:
        return 6
    if ratio >= 0.05:
        return 3
    return 0


def _nutrient_richness(text: str) -> int:
    healthy = count_keywords(text, HEALTHY_INDICATORS)
    unhealthy = count_keywords(text, UNHEALTHY_INDICATORS)
    if healthy >= 5 and unhealthy == 0:
        return 5
    if healthy >= 3 and unhealthy <= 1:
        return 3
    return 1


# --- Ingredient quality ---

def _whole_foods_presence(text: str) -> int:
    whole = count_keywords(text, WHOLE_FOOD_KEYWORDS)
    processed = count_keywords(text, PROCESSED_KEYWORDS)
    if whole >= 3 and processed == 0:
        return 10
    if whole >= 2 and processed == 0:
        return 8
    if whole >= 1 and processed <= 1:
        return 6
    if whole >= 1:
        return 4
    return 3


def _processed_penalty(text: str) -> int:
    highly = count_keywords(text, HIGHLY_PROCESSED_INDICATORS)
    moderate = count_keywords(text, MODERATELY_PROCESSED_KEYWORDS)
    if highly == 0 and moderate == 0:
        return 10
    if highly == 0 and moderate <= 2:
        return 8
    if highly <= 1 and moderate <= 2:
        return 6
    if highly <= 2:
        return 4
    return 2


# --- Sugar & sodium ---

def _estimate_sugar_grams(text: str) -> float:
    hits = count_keywords(text, SUGAR_INDICATORS)
    if hits >= 3:
        return 30
    if hits == 2:
        return 20
    if hits == 1:
        return 10
    return 0


def _sugar_content(sugar: Optional[float], text: str) -> int:
    grams = sugar if sugar is not None else _estimate_sugar_grams(text)
    if grams < 10:
        return 5
    if grams <= 20:
        return 3
    if grams <= 30:
        return 1
    return 0


def _estimate_sodium_mg(text: str) -> int:
    hits = count_keywords(text, SODIUM_INDICATORS)
    if hits >= 4:
        return 1500
    if hits == 3:
        return 1200
    if hits == 2:
        return 900
    if hits == 1:
        return 700
    return 400


def _sodium_content(text: str) -> int:
    sodium = _estimate_sodium_mg(text)
    if sodium < 600:
        return 5
    if sodium <= 1000:
        return 3
    if sodium <= 1500:
        return 1
    return 0


def calculate_health_grade(recipe: NutritionBearing) -> HealthGradeResult:
    """Grade a recipe from its macros and ingredient text.

    Args:
        recipe: Anything exposing macros, fiber, optional sugar and text

    Returns:
        HealthGradeResult with the letter grade, the 0-100 score, the
        five-category breakdown and all twelve detail sub-scores.
    """
    calories = recipe.calories or 0
    protein = recipe.protein or 0
    carbs = recipe.carbs or 0
    fat = recipe.fat or 0
    fiber = recipe.fiber or 0
    text = combined_text(recipe)

    details = HealthGradeDetails(
        protein_adequacy=_protein_adequacy(protein),
        macro_balance=_macro_balance(calories, protein, carbs, fat),
        fat_quality=_fat_quality(calories, protein, carbs, fat),
        calorie_range=_calorie_range(calories),
        calorie_nutrient_ratio=_calorie_nutrient_ratio(calories, protein, fiber),
        fiber_content=_fiber_content(calories, fiber),
        protein_efficiency=_protein_efficiency(calories, protein),
        nutrient_richness=_nutrient_richness(text),
        whole_foods_presence=_whole_foods_presence(text),
        processed_ingredients_penalty=_processed_penalty(text),
        sugar_content=_sugar_content(recipe.sugar, text),
        sodium_content=_sodium_content(text),
    )

    breakdown = HealthGradeBreakdown(
        macronutrient_balance=details.protein_adequacy + details.macro_balance + details.fat_quality,
        calorie_density=details.calorie_range + details.calorie_nutrient_ratio,
        nutrient_density=details.fiber_content + details.protein_efficiency + details.nutrient_richness,
        ingredient_quality=details.whole_foods_presence + details.processed_ingredients_penalty,
        sugar_and_sodium=details.sugar_content + details.sodium_content,
    )

    score = clamp_score(breakdown.total())
    return HealthGradeResult(
        grade=assign_grade(score),
        score=score,
        breakdown=breakdown,
        details=details,
    )
