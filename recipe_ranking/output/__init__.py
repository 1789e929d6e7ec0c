"""Output formatting for ranking results."""

from recipe_ranking.output.formatters import (
    format_page_markdown,
    format_page_json,
    format_health_grade_markdown,
    format_health_grade_json,
    format_similar_markdown,
    format_similar_json,
    format_shopping_list_markdown,
    format_shopping_list_json,
    format_batch_markdown,
    to_json_string,
)

__all__ = [
    "format_page_markdown",
    "format_page_json",
    "format_health_grade_markdown",
    "format_health_grade_json",
    "format_similar_markdown",
    "format_similar_json",
    "format_shopping_list_markdown",
    "format_shopping_list_json",
    "format_batch_markdown",
    "to_json_string",
]
