"""Recipe similarity for "more like this" and search broadening.

Similarity between two recipes is a weighted blend of five factors,
each in [0, 1]:

    cuisine      exact cuisine equality
    ingredients  Jaccard overlap of normalized ingredient base names
    nutrition    per-serving macro closeness
    cook_time    1 - |diff| / max(both, 1)
    semantic     Jaccard overlap of title + description keywords
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from recipe_ranking.data_layer.models import SimilarityInput

STOP_WORDS = frozenset({"with", "and", "the", "for", "from", "this", "that"})

# Quantity + unit prefixes stripped before comparing ingredient names
_QUANTITY_UNIT = re.compile(
    r"\d+[/\d]*\s*(cups?|tbsp|tsp|oz|lb|g|kg|ml|l|pieces?|cloves?|slices?)\b",
    re.IGNORECASE,
)
_PARENTHETICAL = re.compile(r"\([^)]*\)")
_NON_WORD = re.compile(r"[^\w\s]")

# Macro weights for nutritional similarity (calories matter most)
NUTRITION_WEIGHTS = {"calories": 0.4, "protein": 0.25, "carbs": 0.2, "fat": 0.15}

# Search term -> dish types worth suggesting alongside it
RELATED_DISH_TYPES: Dict[str, tuple] = {
    "taco": ("burrito", "quesadilla", "bowl", "wrap", "enchilada", "tostada", "nachos"),
    "burrito": ("taco", "quesadilla", "bowl", "wrap", "enchilada"),
    "quesadilla": ("taco", "burrito", "wrap", "enchilada"),
    "pizza": ("calzone", "stromboli", "flatbread", "focaccia"),
    "pasta": ("noodle", "spaghetti", "lasagna", "ravioli", "gnocchi"),
    "soup": ("stew", "chili", "chowder", "bisque"),
    "salad": ("bowl", "wrap", "sandwich"),
    "sandwich": ("wrap", "burger", "panini", "sub"),
}

# Search broadening contributions
SAME_CUISINE_BOOST = 0.5
SAME_CUISINE_FLOOR = 0.3
QUERY_KEYWORD_WEIGHT = 0.3
RELATED_DISH_BOOST = 0.4
MATCH_KEYWORD_WEIGHT = 0.2


@dataclass
class SimilarityWeights:
    """Weight of each factor in the blended similarity score."""
    cuisine: float = 0.25
    ingredients: float = 0.30
    nutrition: float = 0.20
    cook_time: float = 0.10
    semantic: float = 0.15

    def __post_init__(self):
        """Validate weights are non-negative."""
        weights = [self.cuisine, self.ingredients, self.nutrition,
                   self.cook_time, self.semantic]
        if any(w < 0 for w in weights):
            raise ValueError("All similarity weights must be non-negative")


@dataclass
class SimilarityFactors:
    cuisine: float = 0.0
    ingredients: float = 0.0
    nutrition: float = 0.0
    cook_time: float = 0.0
    semantic: float = 0.0


@dataclass
class SimilarityScore:
    recipe_id: str
    score: float
    factors: SimilarityFactors = field(default_factory=SimilarityFactors)


def normalize_ingredient_name(text: str) -> str:
    """'2 cups rice (rinsed), cooked' -> 'rice'."""
    name = _QUANTITY_UNIT.sub("", text.lower())
    name = _PARENTHETICAL.sub("", name).strip()
    name = name.split(",")[0].split("(")[0]
    return name.strip()


def _jaccard(a: Set[str], b: Set[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def ingredient_overlap(ingredients_a: Sequence[str], ingredients_b: Sequence[str]) -> float:
    if not ingredients_a or not ingredients_b:
        return 0.0
    names_a = {normalize_ingredient_name(text) for text in ingredients_a}
    names_b = {normalize_ingredient_name(text) for text in ingredients_b}
    return _jaccard(names_a, names_b)


def _closeness(a: float, b: float) -> float:
    return 1 - abs(a - b) / max(a, b, 1)


def nutritional_similarity(a: SimilarityInput, b: SimilarityInput) -> float:
    """Weighted per-serving macro closeness."""
    servings_a = a.servings or 1
    servings_b = b.servings or 1
    total = 0.0
    for macro, weight in NUTRITION_WEIGHTS.items():
        value_a = (getattr(a, macro) or 0) / servings_a
        value_b = (getattr(b, macro) or 0) / servings_b
        total += _closeness(value_a, value_b) * weight
    return total


def cook_time_similarity(cook_time_a: int, cook_time_b: int) -> float:
    max_time = max(cook_time_a, cook_time_b, 1)
    return max(0.0, 1 - abs(cook_time_a - cook_time_b) / max_time)


def extract_keywords(text: str) -> Set[str]:
    """Words longer than three characters, punctuation removed, stop words dropped."""
    words = _NON_WORD.sub(" ", (text or "").lower()).split()
    return {word for word in words if len(word) > 3 and word not in STOP_WORDS}


def semantic_similarity(a: SimilarityInput, b: SimilarityInput) -> float:
    keywords_a = extract_keywords(a.title) | extract_keywords(a.description)
    keywords_b = extract_keywords(b.title) | extract_keywords(b.description)
    return _jaccard(keywords_a, keywords_b)


def compare_recipes(target: SimilarityInput,
                    candidate: SimilarityInput,
                    weights: SimilarityWeights) -> SimilarityScore:
    factors = SimilarityFactors(
        cuisine=1.0 if candidate.cuisine == target.cuisine else 0.0,
        ingredients=ingredient_overlap(target.ingredients, candidate.ingredients),
        nutrition=nutritional_similarity(target, candidate),
        cook_time=cook_time_similarity(target.cook_time, candidate.cook_time),
        semantic=semantic_similarity(target, candidate),
    )
    score = (
        factors.cuisine * weights.cuisine
        + factors.ingredients * weights.ingredients
        + factors.nutrition * weights.nutrition
        + factors.cook_time * weights.cook_time
        + factors.semantic * weights.semantic
    )
    return SimilarityScore(recipe_id=candidate.id, score=score, factors=factors)


def find_similar_recipes(target: SimilarityInput,
                         candidates: Sequence[SimilarityInput],
                         limit: int = 10,
                         min_score: float = 0.1,
                         weights: Optional[SimilarityWeights] = None) -> List[SimilarityScore]:
    """Rank candidates by similarity to ``target``.

    The target itself is never returned. Candidates scoring below
    ``min_score`` are dropped; the best ``limit`` are returned, highest
    first.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    weights = weights or SimilarityWeights()

    similarities = []
    for candidate in candidates:
        if candidate.id == target.id:
            continue
        result = compare_recipes(target, candidate, weights)
        if result.score >= min_score:
            similarities.append(result)

    similarities.sort(key=lambda s: s.score, reverse=True)
    return similarities[:limit]


def _related_dish_types(query: str) -> List[str]:
    lowered = query.lower()
    related: List[str] = []
    for dish, alternatives in RELATED_DISH_TYPES.items():
        if dish in lowered:
            related.extend(alternatives)
    return related


def find_similar_to_search_query(query: str,
                                 candidates: Sequence[SimilarityInput],
                                 exact_matches: Sequence[SimilarityInput],
                                 limit: int = 10,
                                 min_score: float = 0.2) -> List[SimilarityScore]:
    """Broaden a search: rank recipes related to the query and its exact matches.

    Contributions are summed, not normalized: same cuisine as any exact
    match (+0.5, floor 0.3), fraction of query keywords present (x0.3),
    a related dish type (+0.4) and overlap with the exact matches' own
    keywords (x0.2). Exact matches are excluded from the result.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    query_keywords = {
        word for word in _NON_WORD.sub(" ", query.lower()).split() if len(word) > 2
    }
    match_cuisines = {recipe.cuisine for recipe in exact_matches}
    match_keywords: Set[str] = set()
    for recipe in exact_matches:
        words = recipe.title.lower().split() + (recipe.description or "").lower().split()
        match_keywords.update(word for word in words if len(word) > 3)
    exact_ids = {recipe.id for recipe in exact_matches}
    related_types = _related_dish_types(query)

    similarities = []
    for candidate in candidates:
        if candidate.id in exact_ids:
            continue

        factors = SimilarityFactors()
        score = 0.0
        same_cuisine = candidate.cuisine in match_cuisines
        if same_cuisine:
            factors.cuisine = 1.0
            score += SAME_CUISINE_BOOST

        candidate_text = f"{candidate.title} {candidate.description or ''}".lower()

        matching = [kw for kw in query_keywords if kw in candidate_text]
        if matching:
            factors.semantic = len(matching) / len(query_keywords)
            score += factors.semantic * QUERY_KEYWORD_WEIGHT

        if any(dish in candidate_text for dish in related_types):
            factors.semantic = max(factors.semantic, RELATED_DISH_BOOST)
            score += RELATED_DISH_BOOST

        candidate_keywords = {word for word in candidate_text.split() if len(word) > 3}
        overlap = match_keywords & candidate_keywords
        if overlap:
            overlap_score = len(overlap) / max(len(match_keywords), 1)
            factors.semantic = max(factors.semantic, overlap_score)
            score += overlap_score * MATCH_KEYWORD_WEIGHT

        if same_cuisine and score < SAME_CUISINE_FLOOR:
            score = SAME_CUISINE_FLOOR

        if score >= min_score:
            similarities.append(SimilarityScore(recipe_id=candidate.id, score=score, factors=factors))

    similarities.sort(key=lambda s: s.score, reverse=True)
    return similarities[:limit]
