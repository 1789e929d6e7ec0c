"""User profile loader for loading scoring preferences and history from YAML.

Expected document shape::

    users:
      user_123:
        preferences:
          liked_cuisines: [Italian, Mexican]
          banned_ingredients: [peanut]
          dietary_restrictions: [vegetarian]
          cook_time_preference: 30
          spice_level: medium
          cooking_skill: intermediate
        macro_goals:
          calories: 2100
          protein: 150
          carbs: 200
          fat: 70
        physical_profile:
          fitness_goal: lose_weight
        history:
          liked_recipes: [r1, r2]        # most recent first
          disliked_recipes: [r9]
          recent_meals:                  # most recent first
            - {date: 2024-05-01, cuisine: Thai}

Every section except ``preferences`` is optional.
"""
import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from recipe_ranking.data_layer.exceptions import PreferenceDataError
from recipe_ranking.data_layer.models import (
    BehavioralSignal,
    MacroGoals,
    UserScoringPreferences,
)

DEFAULT_COOK_TIME_PREFERENCE = 30
RECENT_MEAL_WINDOW_DAYS = 7


class UserProfileLoader:
    """Loader for per-user preference records from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize user profile loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing the users mapping
        """
        self.yaml_path = Path(yaml_path)
        self._users: Optional[Dict[str, Any]] = None

    def _load_users(self) -> Dict[str, Any]:
        """Read the YAML document once and keep the users mapping.

        Raises:
            FileNotFoundError: If YAML file doesn't exist
        """
        if self._users is None:
            with open(self.yaml_path, "r") as f:
                data = yaml.safe_load(f) or {}
            users = data.get("users") or {}
            self._users = {str(k): v for k, v in users.items()}
        return self._users

    def user_ids(self) -> List[str]:
        return sorted(self._load_users())

    def load_preferences(self, user_id: str) -> Optional[UserScoringPreferences]:
        """Assemble scoring preferences for a user.

        Returns:
            UserScoringPreferences, or None if the user has no preferences section

        Raises:
            PreferenceDataError: If a field has the wrong type
        """
        record = self._load_users().get(user_id)
        if not record or not record.get("preferences"):
            return None

        prefs = record["preferences"]
        try:
            macro_goals = self._parse_macro_goals(record.get("macro_goals"))
            physical = record.get("physical_profile") or {}
            cook_time = prefs.get("cook_time_preference") or DEFAULT_COOK_TIME_PREFERENCE

            return UserScoringPreferences(
                user_id=user_id,
                liked_cuisines=[str(c) for c in prefs.get("liked_cuisines") or []],
                banned_ingredients=[str(i) for i in prefs.get("banned_ingredients") or []],
                dietary_restrictions=[str(d) for d in prefs.get("dietary_restrictions") or []],
                cook_time_preference=int(cook_time),
                spice_level=prefs.get("spice_level"),
                macro_goals=macro_goals,
                fitness_goal=physical.get("fitness_goal"),
                cooking_skill=prefs.get("cooking_skill"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise PreferenceDataError(user_id, str(exc)) from exc

    def load_history(
        self,
        user_id: str,
        as_of: datetime.date,
        max_liked: int,
        max_disliked: int,
        max_meals: int,
    ) -> BehavioralSignal:
        """Assemble the behavioral signal for a user.

        Args:
            user_id: User identifier
            as_of: Reference date for the recent-meal window
            max_liked: Cap on liked recipe ids
            max_disliked: Cap on disliked recipe ids
            max_meals: Cap on recent meals considered

        Returns:
            BehavioralSignal (empty when the user has no history)
        """
        record = self._load_users().get(user_id) or {}
        history = record.get("history") or {}

        window_start = as_of - datetime.timedelta(days=RECENT_MEAL_WINDOW_DAYS)
        recent_cuisines = []
        for meal in (history.get("recent_meals") or [])[:max_meals]:
            meal_date = meal.get("date")
            if isinstance(meal_date, str):
                meal_date = datetime.date.fromisoformat(meal_date)
            elif isinstance(meal_date, datetime.datetime):
                meal_date = meal_date.date()
            if meal_date is None or meal_date < window_start:
                continue
            if meal.get("cuisine"):
                recent_cuisines.append(str(meal["cuisine"]))

        return BehavioralSignal(
            liked_recipe_ids=[str(r) for r in (history.get("liked_recipes") or [])[:max_liked]],
            disliked_recipe_ids=[str(r) for r in (history.get("disliked_recipes") or [])[:max_disliked]],
            recent_cuisines=recent_cuisines,
        )

    @staticmethod
    def _parse_macro_goals(data: Optional[Dict[str, Any]]) -> Optional[MacroGoals]:
        if not data:
            return None
        return MacroGoals(
            calories=float(data["calories"]),
            protein=float(data["protein"]),
            carbs=float(data.get("carbs", 0)),
            fat=float(data.get("fat", 0)),
        )
