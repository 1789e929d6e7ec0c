"""Text-signal extractors.

Pure functions that scan a recipe's combined, lower-cased text for
members of a keyword family. Most families use plain substring
containment; dietary checks need whole-word matching so that "butter"
is not found inside "butterfly".
"""

import re
from functools import lru_cache
from typing import Iterable, List

from recipe_ranking.data_layer.models import TextBearing


def combined_text(recipe: TextBearing) -> str:
    """Lower-cased ingredients, instructions, title and description joined by spaces."""
    parts = [text.lower() for text in recipe.ingredients]
    parts.extend(text.lower() for text in recipe.instructions)
    parts.append((recipe.title or "").lower())
    parts.append((recipe.description or "").lower())
    return " ".join(parts)


def find_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """Keywords contained in *text* as substrings, in table order, without repeats."""
    found: List[str] = []
    for keyword in keywords:
        if keyword in text and keyword not in found:
            found.append(keyword)
    return found


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    return len(find_keywords(text, keywords))


@lru_cache(maxsize=512)
def _whole_word_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword.lower()) + r"\b")


def contains_whole_word(text: str, keyword: str) -> bool:
    """True if *keyword* occurs in *text* bounded by non-word characters."""
    return _whole_word_pattern(keyword).search(text.lower()) is not None


def find_whole_words(text: str, keywords: Iterable[str]) -> List[str]:
    """Keywords present in *text* as whole words, in table order, without repeats."""
    lowered = text.lower()
    found: List[str] = []
    for keyword in keywords:
        if keyword not in found and _whole_word_pattern(keyword).search(lowered):
            found.append(keyword)
    return found
