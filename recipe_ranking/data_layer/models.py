"""Data models for the recipe ranking core."""
import datetime
from dataclasses import dataclass, field, replace
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class Recipe:
    """Read-only view of a recipe row as served by the recipe store."""

    id: str  # Unique identifier
    title: str
    cuisine: str  # Free-text category (e.g., "Italian")
    cook_time: int  # Total time in minutes
    calories: float
    protein: float  # grams
    carbs: float  # grams
    fat: float  # grams
    description: str = ""
    servings: int = 1
    fiber: float = 0.0  # grams
    sugar: Optional[float] = None  # grams, None when unknown
    ingredients: List[str] = field(default_factory=list)  # Ordered ingredient text
    instructions: List[str] = field(default_factory=list)  # Empty until hydrated
    meal_type: Optional[str] = None  # "breakfast", "lunch", "dinner", "snack"
    difficulty: Optional[str] = None  # Author label: "easy", "medium", "hard"
    is_user_created: bool = False
    created_at: str = ""  # ISO timestamp, used for recency ordering
    # External enrichment output, never fetched here
    external_source: Optional[str] = None  # e.g. "spoonacular"; None when not enriched
    quality_score: Optional[float] = None  # 0-100
    popularity_score: Optional[float] = None  # 0-100
    health_score: Optional[float] = None  # 0-100, the source's own rating
    aggregate_likes: Optional[int] = None
    last_enriched: Optional[datetime.date] = None
    # Suitability flags written by the offline meal-prep analysis job
    meal_prep_suitable: bool = False
    freezable: bool = False
    batch_friendly: bool = False
    weekly_prep_friendly: bool = False
    meal_prep_score: Optional[float] = None

    def without_instructions(self) -> "Recipe":
        """Return a copy with the heavy instruction text withheld."""
        return replace(self, instructions=[])


@dataclass(frozen=True)
class MacroGoals:
    """Daily macro goals."""

    calories: float
    protein: float  # grams
    carbs: float  # grams
    fat: float  # grams


@dataclass
class UserScoringPreferences:
    """Preferences assembled per request from several preference records."""

    user_id: str
    liked_cuisines: List[str] = field(default_factory=list)
    banned_ingredients: List[str] = field(default_factory=list)  # Any match vetoes
    dietary_restrictions: List[str] = field(default_factory=list)
    cook_time_preference: int = 30  # minutes
    spice_level: Optional[str] = None  # "mild", "medium", "spicy", "very_spicy"
    macro_goals: Optional[MacroGoals] = None
    fitness_goal: Optional[str] = None  # "lose_weight", "gain_muscle", "maintain"
    cooking_skill: Optional[str] = None  # "beginner", "intermediate", "advanced"


@dataclass
class BehavioralSignal:
    """Recent behavior used to nudge scores, never to veto."""

    liked_recipe_ids: List[str] = field(default_factory=list)
    disliked_recipe_ids: List[str] = field(default_factory=list)
    recent_cuisines: List[str] = field(default_factory=list)  # Eaten in the last 7 days


@dataclass(frozen=True)
class TemporalContext:
    """Time-of-day context derived from a caller-supplied moment."""

    time_of_day: str  # "morning", "afternoon", "evening", "night"
    is_weekend: bool
    meal_period: str  # "breakfast", "lunch", "dinner", "snack"


# --- Narrow recipe shapes, one per scorer ---


class TextBearing(Protocol):
    title: str
    description: str
    ingredients: List[str]
    instructions: List[str]


class SpiceInput(TextBearing, Protocol):
    cuisine: str


class ComplexityInput(Protocol):
    cook_time: int
    ingredients: List[str]
    instructions: List[str]
    difficulty: Optional[str]


class NutritionBearing(TextBearing, Protocol):
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: Optional[float]


class QuickScorable(Protocol):
    id: str
    cuisine: str
    cook_time: int
    calories: float
    protein: float
    ingredients: List[str]


class FullScorable(QuickScorable, TextBearing, Protocol):
    carbs: float
    meal_type: Optional[str]


class SimilarityInput(Protocol):
    id: str
    title: str
    description: str
    cuisine: str
    cook_time: int
    calories: float
    protein: float
    carbs: float
    fat: float
    servings: int
    ingredients: List[str]


class ExternalScorable(Protocol):
    external_source: Optional[str]
    quality_score: Optional[float]
    popularity_score: Optional[float]
    health_score: Optional[float]
    last_enriched: Optional[datetime.date]
