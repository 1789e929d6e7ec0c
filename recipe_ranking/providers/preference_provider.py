"""Abstract base class for user preference and behavior providers.

All consumers of per-user data (the recommendation pipeline, the batch
cooking recommender) depend ONLY on this interface. Concrete
implementations may assemble the records from a relational store or,
as ``LocalPreferenceProvider`` does, from a YAML document.
"""

from abc import ABC, abstractmethod
from typing import Optional

from recipe_ranking.data_layer.models import BehavioralSignal, UserScoringPreferences

# Bounds on the behavioral history handed to the scorers
MAX_LIKED_RECIPES = 50
MAX_DISLIKED_RECIPES = 50
MAX_RECENT_MEALS = 20


class PreferenceProvider(ABC):
    """Read-only lookup of a user's scoring preferences and recent behavior."""

    @abstractmethod
    def get_scoring_preferences(self, user_id: str) -> Optional[UserScoringPreferences]:
        """Return assembled preferences for *user_id*.

        Returns:
            ``UserScoringPreferences`` or ``None`` when the user has never
            set preferences. Callers must treat ``None`` as "show the
            preference setup flow", not as an empty preference set.
        """
        ...

    @abstractmethod
    def get_behavioral_signal(self, user_id: str) -> BehavioralSignal:
        """Return the most recent liked/disliked recipe ids and cuisines.

        Lists are bounded by ``MAX_LIKED_RECIPES``, ``MAX_DISLIKED_RECIPES``
        and ``MAX_RECENT_MEALS``. A user with no history gets an empty
        signal.
        """
        ...
