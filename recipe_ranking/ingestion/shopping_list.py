"""Shopping-list aggregation across ingredient lines."""

from typing import Dict, Iterable, List, Optional

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.ingestion.ingredient_normalizer import IngredientNormalizer
from recipe_ranking.ingestion.quantity_parser import (
    IngredientQuantity,
    ParsedQuantity,
    aggregate_quantities,
    parse_ingredient_quantity,
)
from recipe_ranking.logging_utils import get_logger

logger = get_logger(__name__)


def aggregate_ingredient_lines(lines: Iterable[str],
                               normalizer: Optional[IngredientNormalizer] = None) -> List[IngredientQuantity]:
    """Parse, group by canonical name and sum every ingredient line.

    Args:
        lines: Raw ingredient lines ("2 cups rice", "1/2 lb onions, diced")
        normalizer: Name normalizer (a default one when None)

    Returns:
        One IngredientQuantity per canonical name, in order of first appearance
    """
    normalizer = normalizer or IngredientNormalizer()
    groups: Dict[str, List[ParsedQuantity]] = {}

    for line in lines:
        if not line or not line.strip():
            continue
        parsed = parse_ingredient_quantity(line)
        key = normalizer.get_canonical_name(parsed.name) or parsed.name.lower()
        groups.setdefault(key, []).append(parsed)

    aggregated = [aggregate_quantities(name, quantities) for name, quantities in groups.items()]
    approximate = sum(1 for item in aggregated if item.approximate)
    if approximate:
        logger.debug("%d of %d shopping-list items are approximate", approximate, len(aggregated))
    return aggregated


def build_shopping_list(recipes: Iterable[Recipe],
                        normalizer: Optional[IngredientNormalizer] = None) -> List[IngredientQuantity]:
    """Aggregate the ingredient lines of several recipes."""
    lines: List[str] = []
    for recipe in recipes:
        lines.extend(recipe.ingredients)
    return aggregate_ingredient_lines(lines, normalizer)
