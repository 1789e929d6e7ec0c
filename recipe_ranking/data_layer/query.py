"""Predicate and projection model for the recipe store read interface.

Predicates are small immutable clauses combined with ``AllOf``/``AnyOf``.
A store may translate them into its own query language; the in-memory
``RecipeDB`` simply evaluates ``matches`` against each row.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple, Type, TypeVar

from recipe_ranking.data_layer.models import Recipe


class Projection(Enum):
    """Field subsets a store can return."""

    # Everything Quick Score needs; instruction text withheld
    LIGHT = "light"
    # Full row including instructions
    FULL = "full"


class Predicate:
    """Base class for predicate clauses."""

    def matches(self, recipe: Recipe) -> bool:
        raise NotImplementedError


P = TypeVar("P", bound=Predicate)


@dataclass(frozen=True)
class AllOf(Predicate):
    """Logical AND over clauses. An empty AllOf matches everything."""

    clauses: Tuple[Predicate, ...] = ()

    def matches(self, recipe: Recipe) -> bool:
        return all(clause.matches(recipe) for clause in self.clauses)

    def and_(self, clause: Predicate) -> "AllOf":
        return AllOf(self.clauses + (clause,))

    def clauses_of_type(self, clause_type: Type[P]) -> List[P]:
        """Return the top-level clauses of the given type."""
        return [c for c in self.clauses if isinstance(c, clause_type)]


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Logical OR over clauses. An empty AnyOf matches nothing."""

    clauses: Tuple[Predicate, ...] = ()

    def matches(self, recipe: Recipe) -> bool:
        return any(clause.matches(recipe) for clause in self.clauses)


@dataclass(frozen=True)
class CreatorIs(Predicate):
    """Match on the user-created flag."""

    user_created: bool

    def matches(self, recipe: Recipe) -> bool:
        return recipe.is_user_created == self.user_created


@dataclass(frozen=True)
class CuisineIn(Predicate):
    """Cuisine membership, ignoring case."""

    cuisines: FrozenSet[str]

    def matches(self, recipe: Recipe) -> bool:
        wanted = {cuisine.lower() for cuisine in self.cuisines}
        return (recipe.cuisine or "").lower() in wanted


@dataclass(frozen=True)
class CookTimeAtMost(Predicate):
    minutes: int

    def matches(self, recipe: Recipe) -> bool:
        return recipe.cook_time <= self.minutes


@dataclass(frozen=True)
class MealTypeIs(Predicate):
    meal_type: str

    def matches(self, recipe: Recipe) -> bool:
        return (recipe.meal_type or "").lower() == self.meal_type.lower()


@dataclass(frozen=True)
class TextContains(Predicate):
    """Case-insensitive substring search over title and description."""

    text: str

    def matches(self, recipe: Recipe) -> bool:
        needle = self.text.lower()
        return needle in recipe.title.lower() or needle in (recipe.description or "").lower()


@dataclass(frozen=True)
class HasAnyFlag(Predicate):
    """True when at least one of the named boolean suitability flags is set."""

    flags: Tuple[str, ...]

    def matches(self, recipe: Recipe) -> bool:
        return any(bool(getattr(recipe, flag, False)) for flag in self.flags)


def cook_time_limit(predicate: AllOf) -> Optional[int]:
    """Tightest cook-time cap among the top-level clauses, if any."""
    limits = [c.minutes for c in predicate.clauses_of_type(CookTimeAtMost)]
    return min(limits) if limits else None
