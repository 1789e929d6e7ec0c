"""Dietary restriction compliance checking."""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from recipe_ranking.data_layer.models import TextBearing
from recipe_ranking.signals.extractors import combined_text, contains_whole_word
from recipe_ranking.signals.keywords import DIETARY_VIOLATIONS

PENALTY_PER_VIOLATION = 50


@dataclass
class DietaryCompliance:
    is_compliant: bool
    compliance_score: int  # 0-100
    violations: List[str] = field(default_factory=list)


def normalize_restriction(restriction: str) -> str:
    """'Gluten Free' -> 'gluten-free'."""
    return re.sub(r"\s+", "-", restriction.strip().lower())


def forbidden_terms(restriction: str) -> Optional[Tuple[str, ...]]:
    """Violator list for a restriction name, or None if the diet is unknown."""
    key = normalize_restriction(restriction)
    if key in DIETARY_VIOLATIONS:
        return DIETARY_VIOLATIONS[key]
    return DIETARY_VIOLATIONS.get(restriction.lower())


def check_dietary_compliance(
    recipe: TextBearing, dietary_restrictions: Sequence[str]
) -> DietaryCompliance:
    """Check a recipe's full text against each requested restriction.

    Terms are matched on word boundaries. At most one violation is
    recorded per restriction; unknown restriction names are ignored.
    """
    if not dietary_restrictions:
        return DietaryCompliance(is_compliant=True, compliance_score=100)

    text = combined_text(recipe)
    violations: List[str] = []
    for restriction in dietary_restrictions:
        terms = forbidden_terms(restriction)
        if not terms:
            continue
        for term in terms:
            if contains_whole_word(text, term):
                violations.append(f"{restriction}: contains {term}")
                break

    score = max(0, 100 - len(violations) * PENALTY_PER_VIOLATION) if violations else 100
    return DietaryCompliance(
        is_compliant=not violations,
        compliance_score=score,
        violations=violations,
    )
