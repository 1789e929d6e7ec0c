"""Keyword tables and text-signal extractors shared by the scorers."""

from recipe_ranking.signals.extractors import (
    combined_text,
    contains_whole_word,
    count_keywords,
    find_keywords,
    find_whole_words,
)

__all__ = [
    "combined_text",
    "contains_whole_word",
    "count_keywords",
    "find_keywords",
    "find_whole_words",
]
