"""Ingredient name normalization for shopping-list grouping.

Two recipes rarely spell the same ingredient the same way ("2 large
onions, diced" vs "1 onion, chopped"). Before quantities can be summed,
the name left after the quantity parser has to be reduced to a
canonical form:

- lower-cased, with parenthetical notes removed
- commas turned into spaces and whitespace collapsed
- controlled descriptors (size, preparation, cut, quality) removed
- the last word folded to its singular form ("onions" -> "onion")

Descriptors are removed as whole words only, longest first, so
"extra large" goes before "large" and "raw" never matches inside
"strawberry".
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Set


SIZE_DESCRIPTORS = {
    "small", "medium", "large", "extra large", "jumbo",
    "mini", "tiny", "xl", "xs",
}

PREPARATION_DESCRIPTORS = {
    "raw", "cooked", "uncooked",
    "fresh", "frozen", "canned", "dried",
    "roasted", "grilled", "baked", "fried", "steamed", "boiled",
    "peeled", "softened", "melted", "room temperature",
    "to taste", "for garnish", "optional",
}

CUT_DESCRIPTORS = {
    "boneless", "skinless", "bone-in", "skin-on",
    "diced", "sliced", "chopped", "minced", "shredded", "cubed", "grated",
    "finely", "roughly", "thinly",
    "halved", "quartered",
}

QUALITY_DESCRIPTORS = {
    "organic", "conventional",
    "grass-fed", "pasture-raised", "free-range", "cage-free",
    "wild-caught", "farm-raised",
}

CONTROLLED_DESCRIPTORS: Set[str] = (
    SIZE_DESCRIPTORS |
    PREPARATION_DESCRIPTORS |
    CUT_DESCRIPTORS |
    QUALITY_DESCRIPTORS
)

# Plural endings folded onto their singular form: (suffix, replacement)
PLURAL_RULES = (
    ("ies", "y"),  # berries
    ("oes", "o"),  # tomatoes, potatoes
    ("s", ""),
)

# Words where a trailing "s" is not a plural
PLURAL_EXCEPTIONS = {"hummus", "couscous", "asparagus", "molasses", "swiss", "citrus", "grass"}


@dataclass
class NormalizationResult:
    """Result of ingredient name normalization.

    Attributes:
        original_name: The original input name (unmodified)
        canonical_name: Grouping key for the shopping list
        removed_descriptors: Descriptors that were removed
    """
    original_name: str
    canonical_name: str
    removed_descriptors: List[str] = field(default_factory=list)


def singularize(word: str) -> str:
    if len(word) <= 3 or word in PLURAL_EXCEPTIONS or word.endswith("ss"):
        return word
    for suffix, replacement in PLURAL_RULES:
        if word.endswith(suffix):
            return word[: -len(suffix)] + replacement
    return word


class IngredientNormalizer:
    """Reduces ingredient names to a canonical grouping key.

    Usage:
        normalizer = IngredientNormalizer()
        result = normalizer.normalize("Large Onions, finely chopped")
        print(result.canonical_name)  # "onion"
        print(result.removed_descriptors)  # ["chopped", "finely", "large"]
    """

    def __init__(self, additional_descriptors: Optional[Set[str]] = None, fold_plurals: bool = True):
        """Initialize normalizer.

        Args:
            additional_descriptors: Extra descriptors to remove (optional)
            fold_plurals: Fold the last word of the name to its singular
        """
        self.descriptors = set(CONTROLLED_DESCRIPTORS)
        if additional_descriptors:
            self.descriptors.update(d.lower() for d in additional_descriptors)
        self.fold_plurals = fold_plurals

        # Longest first so multi-word descriptors win
        self._patterns = [
            (descriptor, re.compile(r"\b" + re.escape(descriptor) + r"\b"))
            for descriptor in sorted(self.descriptors, key=lambda x: (-len(x), x))
        ]

    def normalize(self, ingredient_name: str) -> NormalizationResult:
        """Normalize an ingredient name.

        Args:
            ingredient_name: Name left after the quantity and unit were parsed

        Returns:
            NormalizationResult with canonical name and removed descriptors
        """
        original = ingredient_name
        removed = []

        if not ingredient_name or not ingredient_name.strip():
            return NormalizationResult(
                original_name=original,
                canonical_name="",
                removed_descriptors=[]
            )

        name = ingredient_name.lower()
        name = re.sub(r"\([^)]*\)", " ", name)
        name = name.replace(",", " ")
        name = re.sub(r"\s+", " ", name).strip()

        for descriptor, pattern in self._patterns:
            if pattern.search(name):
                name = pattern.sub("", name)
                removed.append(descriptor)

        name = re.sub(r"\s+", " ", name).strip()

        if self.fold_plurals and name:
            words = name.split(" ")
            words[-1] = singularize(words[-1])
            name = " ".join(words)

        return NormalizationResult(
            original_name=original,
            canonical_name=name,
            removed_descriptors=removed
        )

    def get_canonical_name(self, ingredient_name: str) -> str:
        """Get just the canonical name (convenience method)."""
        return self.normalize(ingredient_name).canonical_name
