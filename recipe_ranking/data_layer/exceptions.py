"""Custom exceptions for the recipe ranking core."""


class RecipeStoreError(Exception):
    """Raised when the recipe store cannot serve a read."""


class RecipeNotFoundError(RecipeStoreError):
    """Raised when a recipe id is not present in the recipe store."""

    def __init__(self, recipe_id: str):
        """Initialize exception with recipe id.

        Args:
            recipe_id: Id of the recipe that was not found
        """
        self.recipe_id = recipe_id
        super().__init__(f"Recipe '{recipe_id}' not found in recipe store")


class PreferenceDataError(Exception):
    """Raised when stored preference data is malformed."""

    def __init__(self, user_id: str, reason: str):
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Invalid preference data for user '{user_id}': {reason}")
