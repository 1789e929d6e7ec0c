"""Abstract read interface for the recipe store.

The ranking core never writes recipes. Everything it needs from the
persistence layer is a predicate count, a projected/paged fetch and a
bulk fetch by id. Concrete implementations may sit on a relational
database or, as ``RecipeDB`` does, on a local JSON document.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.data_layer.query import Predicate, Projection


class RecipeStore(ABC):
    """Read-only access to the shared recipe corpus.

    Implementations must raise (never return an empty result) when the
    underlying storage fails, so that "no rows" and "storage down" stay
    distinguishable for the caller.
    """

    @abstractmethod
    def count(self, predicate: Predicate) -> int:
        """Number of recipes matching *predicate*."""
        ...

    @abstractmethod
    def find(
        self,
        predicate: Predicate,
        projection: Projection = Projection.FULL,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Recipe]:
        """Fetch matching recipes.

        Args:
            predicate: Filter to apply.
            projection: ``Projection.LIGHT`` withholds instruction text.
            order_by: Field name, prefixed with ``-`` for descending order
                (e.g. ``"-created_at"``). ``None`` keeps storage order.
            limit: Maximum rows to return (``None`` for no cap).
            offset: Rows to skip after ordering.
        """
        ...

    @abstractmethod
    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Full recipe row for *recipe_id*, or ``None``."""
        ...

    @abstractmethod
    def find_many(self, recipe_ids: Sequence[str]) -> List[Recipe]:
        """Full recipe rows for *recipe_ids* in the requested order.

        Unknown ids are skipped.
        """
        ...
