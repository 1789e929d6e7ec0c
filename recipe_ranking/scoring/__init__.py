"""Scoring module: tiered recipe scores, health grade, external score and match models."""

from .results import Scored, Vetoed, ScoreOutcome, clamp_score
from .health_grade import HealthGradeResult, calculate_health_grade, assign_grade
from .spice_level import SpiceLevelDetection, detect_spice_level, calculate_spice_level_match
from .complexity import ComplexityAssessment, assess_recipe_complexity, calculate_skill_level_match
from .dietary_compliance import DietaryCompliance, check_dietary_compliance
from .external_score import (
    ExternalScore,
    ExternalScoreBreakdown,
    calculate_external_score,
    calculate_hybrid_score,
    quality_tier,
    popularity_tier,
    data_freshness,
    needs_reenrichment,
)
from .tiered_scorer import (
    QuickScore,
    QuickScoreBreakdown,
    FullScore,
    calculate_quick_score,
    calculate_full_score,
)

__all__ = [
    "Scored",
    "Vetoed",
    "ScoreOutcome",
    "clamp_score",
    "HealthGradeResult",
    "calculate_health_grade",
    "assign_grade",
    "SpiceLevelDetection",
    "detect_spice_level",
    "calculate_spice_level_match",
    "ComplexityAssessment",
    "assess_recipe_complexity",
    "calculate_skill_level_match",
    "DietaryCompliance",
    "check_dietary_compliance",
    "ExternalScore",
    "ExternalScoreBreakdown",
    "calculate_external_score",
    "calculate_hybrid_score",
    "quality_tier",
    "popularity_tier",
    "data_freshness",
    "needs_reenrichment",
    "QuickScore",
    "QuickScoreBreakdown",
    "FullScore",
    "calculate_quick_score",
    "calculate_full_score",
]
