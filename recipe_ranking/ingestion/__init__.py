"""Ingestion layer for parsing ingredient text into structured quantities."""

from recipe_ranking.ingestion.quantity_parser import (
    ParsedQuantity,
    IngredientQuantity,
    parse_ingredient_quantity,
    normalize_unit,
    convert_unit,
    aggregate_quantities,
    format_amount,
    QUANTITY_PATTERNS,
)

from recipe_ranking.ingestion.ingredient_normalizer import (
    IngredientNormalizer,
    NormalizationResult,
    CONTROLLED_DESCRIPTORS,
)

from recipe_ranking.ingestion.shopping_list import (
    aggregate_ingredient_lines,
    build_shopping_list,
)

__all__ = [
    # Quantity parsing and conversion
    "ParsedQuantity",
    "IngredientQuantity",
    "parse_ingredient_quantity",
    "normalize_unit",
    "convert_unit",
    "aggregate_quantities",
    "format_amount",
    "QUANTITY_PATTERNS",
    # Ingredient name normalization
    "IngredientNormalizer",
    "NormalizationResult",
    "CONTROLLED_DESCRIPTORS",
    # Shopping list
    "aggregate_ingredient_lines",
    "build_shopping_list",
]
