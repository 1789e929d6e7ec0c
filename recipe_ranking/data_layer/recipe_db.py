"""Recipe database for loading recipes from JSON."""
import datetime
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from recipe_ranking.data_layer.exceptions import RecipeStoreError
from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.data_layer.query import Predicate, Projection
from recipe_ranking.providers.recipe_store import RecipeStore


class RecipeDB(RecipeStore):
    """In-memory recipe store loaded from a JSON document.

    The document has a top-level ``recipes`` list. Ingredient and
    instruction entries may be plain strings or objects with a ``text``
    key.
    """

    def __init__(self, json_path: str):
        """Initialize recipe database from JSON file.

        Args:
            json_path: Path to JSON file containing recipes
        """
        self.json_path = Path(json_path)
        self._recipes: List[Recipe] = []
        self._load_recipes()

    @classmethod
    def from_recipes(cls, recipes: Sequence[Recipe]) -> "RecipeDB":
        """Build a store directly from Recipe objects (no file involved)."""
        db = cls.__new__(cls)
        db.json_path = None
        db._recipes = list(recipes)
        return db

    def _load_recipes(self):
        """Load recipes from JSON file."""
        with open(self.json_path, "r") as f:
            data = json.load(f)

        for recipe_data in data.get("recipes", []):
            self._recipes.append(self._parse_recipe(recipe_data))

    def _parse_recipe(self, recipe_data: Dict[str, Any]) -> Recipe:
        """Parse a single recipe from dictionary data.

        Args:
            recipe_data: Dictionary containing recipe data

        Returns:
            Recipe object

        Raises:
            RecipeStoreError: If a required field is missing or a date is malformed
        """
        try:
            sugar = recipe_data.get("sugar")
            return Recipe(
                id=str(recipe_data["id"]),
                title=recipe_data["title"],
                description=recipe_data.get("description") or "",
                cuisine=recipe_data.get("cuisine") or "",
                cook_time=int(recipe_data.get("cook_time", 30)),
                servings=int(recipe_data.get("servings") or 1),
                calories=float(recipe_data.get("calories", 0)),
                protein=float(recipe_data.get("protein", 0)),
                carbs=float(recipe_data.get("carbs", 0)),
                fat=float(recipe_data.get("fat", 0)),
                fiber=float(recipe_data.get("fiber") or 0),
                sugar=float(sugar) if sugar is not None else None,
                ingredients=[self._entry_text(i) for i in recipe_data.get("ingredients", [])],
                instructions=[self._entry_text(i) for i in recipe_data.get("instructions", [])],
                meal_type=recipe_data.get("meal_type"),
                difficulty=recipe_data.get("difficulty"),
                is_user_created=bool(recipe_data.get("is_user_created", False)),
                created_at=str(recipe_data.get("created_at", "")),
                external_source=recipe_data.get("external_source"),
                quality_score=recipe_data.get("quality_score"),
                popularity_score=recipe_data.get("popularity_score"),
                health_score=recipe_data.get("health_score"),
                aggregate_likes=recipe_data.get("aggregate_likes"),
                last_enriched=self._parse_date(recipe_data.get("last_enriched")),
                meal_prep_suitable=bool(recipe_data.get("meal_prep_suitable", False)),
                freezable=bool(recipe_data.get("freezable", False)),
                batch_friendly=bool(recipe_data.get("batch_friendly", False)),
                weekly_prep_friendly=bool(recipe_data.get("weekly_prep_friendly", False)),
                meal_prep_score=recipe_data.get("meal_prep_score"),
            )
        except KeyError as exc:
            raise RecipeStoreError(
                f"Recipe entry in {self.json_path} is missing required field {exc}"
            ) from exc

    def _parse_date(self, value: Any) -> Optional[datetime.date]:
        """Parse an ISO date (a timestamp keeps only its date part)."""
        if not value:
            return None
        try:
            return datetime.date.fromisoformat(str(value)[:10])
        except ValueError as exc:
            raise RecipeStoreError(f"Invalid date {value!r} in {self.json_path}") from exc

    @staticmethod
    def _entry_text(entry: Any) -> str:
        if isinstance(entry, dict):
            return str(entry.get("text") or entry.get("name") or "")
        return str(entry)

    def get_all_recipes(self) -> List[Recipe]:
        """Get all recipes in the database.

        Returns:
            List of all Recipe objects
        """
        return self._recipes.copy()

    # ------------------------------------------------------------------
    # RecipeStore interface
    # ------------------------------------------------------------------

    def count(self, predicate: Predicate) -> int:
        return sum(1 for recipe in self._recipes if predicate.matches(recipe))

    def find(
        self,
        predicate: Predicate,
        projection: Projection = Projection.FULL,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Recipe]:
        rows = [recipe for recipe in self._recipes if predicate.matches(recipe)]

        if order_by:
            descending = order_by.startswith("-")
            field_name = order_by.lstrip("-")
            if field_name not in Recipe.__dataclass_fields__:
                raise RecipeStoreError(f"Cannot order recipes by unknown field '{field_name}'")
            rows.sort(key=lambda r: getattr(r, field_name), reverse=descending)

        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]

        if projection is Projection.LIGHT:
            rows = [recipe.without_instructions() for recipe in rows]
        return rows

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Get a recipe by its ID.

        Args:
            recipe_id: Unique recipe identifier

        Returns:
            Recipe object if found, None otherwise
        """
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def find_many(self, recipe_ids: Sequence[str]) -> List[Recipe]:
        by_id = {recipe.id: recipe for recipe in self._recipes}
        return [by_id[rid] for rid in recipe_ids if rid in by_id]
