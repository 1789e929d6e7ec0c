"""Ingredient quantity parsing, unit conversion and aggregation.

Turns ingredient lines such as "2 1/2 cups flour" or "3 eggs" into a
numeric amount and a normalized unit, converts between units, and sums
several quantities of the same ingredient for a shopping list.

Parsing tries an ordered list of (pattern, extractor) pairs; the first
match wins. New phrasings are added by appending to ``QUANTITY_PATTERNS``.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

# Unit spelling -> normalized unit
UNIT_SYNONYMS: Dict[str, str] = {
    # Volume
    "cup": "cup", "cups": "cup", "c": "cup",
    "tablespoon": "tbsp", "tablespoons": "tbsp", "tbsp": "tbsp", "tbsps": "tbsp", "tbs": "tbsp",
    "teaspoon": "tsp", "teaspoons": "tsp", "tsp": "tsp", "tsps": "tsp",
    "fluid ounce": "fl oz", "fluid ounces": "fl oz", "fl oz": "fl oz", "floz": "fl oz",
    "pint": "pint", "pints": "pint", "pt": "pint",
    "quart": "quart", "quarts": "quart", "qt": "quart",
    "gallon": "gallon", "gallons": "gallon", "gal": "gallon",
    "milliliter": "ml", "milliliters": "ml", "ml": "ml",
    "liter": "l", "liters": "l", "l": "l",
    # Weight
    "pound": "lb", "pounds": "lb", "lb": "lb", "lbs": "lb",
    "ounce": "oz", "ounces": "oz", "oz": "oz",
    "gram": "g", "grams": "g", "g": "g",
    "kilogram": "kg", "kilograms": "kg", "kg": "kg",
    # Count
    "piece": "piece", "pieces": "piece", "item": "piece", "items": "piece",
    "each": "piece", "whole": "piece", "head": "piece", "heads": "piece",
    "bunch": "bunch", "bunches": "bunch",
    "clove": "clove", "cloves": "clove",
}

# Normalized volume unit -> cups
VOLUME_TO_CUPS: Dict[str, float] = {
    "tsp": 1 / 48,
    "tbsp": 1 / 16,
    "fl oz": 1 / 8,
    "cup": 1.0,
    "pint": 2.0,
    "quart": 4.0,
    "gallon": 16.0,
    "ml": 1 / 236.588,
    "l": 4.22675,
}

# Normalized weight unit -> pounds
WEIGHT_TO_POUNDS: Dict[str, float] = {
    "oz": 1 / 16,
    "lb": 1.0,
    "g": 1 / 453.592,
    "kg": 2.20462,
}

# Approximate cups per pound, for volume <-> weight conversion
INGREDIENT_DENSITY: Dict[str, float] = {
    "flour": 3.5,
    "all-purpose flour": 3.5,
    "sugar": 2.25,
    "brown sugar": 2.5,
    "rice": 2.5,
    "quinoa": 2.5,
    "pasta": 4.0,  # Uncooked
    "milk": 2.0,
    "water": 2.0,
    "oil": 2.1,
    "olive oil": 2.1,
    "onion": 2.5,  # Diced
    "bell pepper": 2.5,  # Diced
    "tomato": 3.0,  # Diced
    "mushroom": 4.0,  # Sliced
}

COMMON_FRACTIONS: Tuple[Tuple[float, str], ...] = (
    (0.125, "1/8"),
    (0.25, "1/4"),
    (0.333, "1/3"),
    (0.5, "1/2"),
    (0.667, "2/3"),
    (0.75, "3/4"),
)
FRACTION_TOLERANCE = 0.01

DEFAULT_UNIT = "piece"


@dataclass
class ParsedQuantity:
    amount: float
    unit: str  # Normalized unit
    original_text: str
    name: str = ""  # Text left after amount and unit


@dataclass
class IngredientQuantity:
    """Aggregated quantity of one ingredient across several lines."""
    name: str
    parsed_quantities: List[ParsedQuantity] = field(default_factory=list)
    total_amount: float = 0.0
    total_unit: str = DEFAULT_UNIT
    display_quantity: str = "0"
    approximate: bool = False  # True when some amounts could not be converted


def _unit_alternation() -> str:
    # Longest spellings first so "fl oz" wins over "oz" and "cups" over "c"
    spellings = sorted(UNIT_SYNONYMS, key=len, reverse=True)
    return "(" + "|".join(re.escape(s) for s in spellings) + ")"


_UNIT = _unit_alternation()


def _mixed_fraction(m: re.Match) -> Optional[Tuple[float, str, str]]:
    denominator = int(m.group(3))
    if denominator == 0:
        return None
    return int(m.group(1)) + int(m.group(2)) / denominator, m.group(4), m.group(5)


def _simple_fraction(m: re.Match) -> Optional[Tuple[float, str, str]]:
    denominator = int(m.group(2))
    if denominator == 0:
        return None
    return int(m.group(1)) / denominator, m.group(3), m.group(4)


def _number_with_unit(m: re.Match) -> Tuple[float, str, str]:
    return float(m.group(1)), m.group(2), m.group(3)


def _bare_count(m: re.Match) -> Tuple[float, str, str]:
    return float(m.group(1)), DEFAULT_UNIT, m.group(2)


# An extractor returns None to pass the line on to the next pattern
Extractor = Callable[[re.Match], Optional[Tuple[float, str, str]]]

# Ordered (pattern, extractor) pairs; the first match wins
QUANTITY_PATTERNS: List[Tuple[re.Pattern, Extractor]] = [
    # "2 1/2 cups flour"
    (re.compile(rf"^(\d+)\s+(\d+)/(\d+)\s+{_UNIT}\s+(.+)$", re.IGNORECASE), _mixed_fraction),
    # "1/2 cup flour"
    (re.compile(rf"^(\d+)/(\d+)\s+{_UNIT}\s+(.+)$", re.IGNORECASE), _simple_fraction),
    # "2.5 cups flour"
    (re.compile(rf"^(\d+\.\d+)\s+{_UNIT}\s+(.+)$", re.IGNORECASE), _number_with_unit),
    # "2 cups flour"
    (re.compile(rf"^(\d+)\s+{_UNIT}\s+(.+)$", re.IGNORECASE), _number_with_unit),
    # "3 eggs"
    (re.compile(r"^(\d+)\s+(.+)$", re.IGNORECASE), _bare_count),
]


def normalize_unit(unit: str) -> str:
    """Map a unit spelling to its normalized form; unknown units pass through lower-cased."""
    normalized = unit.lower().strip()
    return UNIT_SYNONYMS.get(normalized, normalized)


def parse_ingredient_quantity(text: str) -> ParsedQuantity:
    """Parse the leading amount and unit of an ingredient line.

    Lines with no recognizable amount count as ``1 piece``.
    """
    trimmed = text.strip()
    for pattern, extract in QUANTITY_PATTERNS:
        match = pattern.match(trimmed)
        if not match:
            continue
        extracted = extract(match)
        if extracted is not None:
            amount, unit, name = extracted
            return ParsedQuantity(
                amount=amount,
                unit=normalize_unit(unit),
                original_text=trimmed,
                name=name.strip(),
            )
    return ParsedQuantity(amount=1.0, unit=DEFAULT_UNIT, original_text=trimmed, name=trimmed)


def _cups_per_pound(ingredient: str) -> Optional[float]:
    """Density for an ingredient: exact name first, then a partial match."""
    name = ingredient.lower().strip()
    if not name:
        return None
    if name in INGREDIENT_DENSITY:
        return INGREDIENT_DENSITY[name]
    for key, density in INGREDIENT_DENSITY.items():
        if key in name or name in key:
            return density
    return None


def convert_unit(amount: float, from_unit: str, to_unit: str,
                 ingredient: Optional[str] = None) -> Optional[float]:
    """Convert ``amount`` between units, or None when no conversion path exists.

    Volume converts via cups and weight via pounds. Volume <-> weight
    needs the ingredient name to look up a density.
    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return amount

    if source in VOLUME_TO_CUPS and target in VOLUME_TO_CUPS:
        return amount * VOLUME_TO_CUPS[source] / VOLUME_TO_CUPS[target]

    if source in WEIGHT_TO_POUNDS and target in WEIGHT_TO_POUNDS:
        return amount * WEIGHT_TO_POUNDS[source] / WEIGHT_TO_POUNDS[target]

    if ingredient:
        density = _cups_per_pound(ingredient)
        if density is not None:
            if source in VOLUME_TO_CUPS and target in WEIGHT_TO_POUNDS:
                pounds = amount * VOLUME_TO_CUPS[source] / density
                return pounds / WEIGHT_TO_POUNDS[target]
            if source in WEIGHT_TO_POUNDS and target in VOLUME_TO_CUPS:
                cups = amount * WEIGHT_TO_POUNDS[source] * density
                return cups / VOLUME_TO_CUPS[target]

    return None


def format_amount(amount: float) -> str:
    """'2', '1/3' or '2.50'."""
    if amount == int(amount):
        return str(int(amount))
    if amount < 1:
        for value, fraction in COMMON_FRACTIONS:
            if abs(amount - value) < FRACTION_TOLERANCE:
                return fraction
    return f"{amount:.2f}"


def _most_common_unit(quantities: Sequence[ParsedQuantity]) -> str:
    counts: Dict[str, int] = {}
    for quantity in quantities:
        counts[quantity.unit] = counts.get(quantity.unit, 0) + 1
    # max() keeps the first unit seen among ties
    return max(counts, key=lambda unit: counts[unit])


def aggregate_quantities(name: str, quantities: Sequence[ParsedQuantity]) -> IngredientQuantity:
    """Sum quantities of one ingredient in its most frequent unit.

    Amounts that cannot be converted are added as-is and the result is
    flagged ``approximate``.
    """
    if not quantities:
        return IngredientQuantity(name=name)

    unit = _most_common_unit(quantities)
    total = 0.0
    approximate = False
    for quantity in quantities:
        converted = convert_unit(quantity.amount, quantity.unit, unit, name)
        if converted is None:
            converted = quantity.amount
            approximate = True
        total += converted

    return IngredientQuantity(
        name=name,
        parsed_quantities=list(quantities),
        total_amount=total,
        total_unit=unit,
        display_quantity=f"{format_amount(total)} {unit}",
        approximate=approximate,
    )
