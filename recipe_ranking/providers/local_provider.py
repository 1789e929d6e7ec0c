"""Local (YAML-backed) preference provider.

Wraps :class:`UserProfileLoader` so the pipeline can program against
:class:`PreferenceProvider` without knowing the data source.
"""

import datetime
from typing import Optional

from recipe_ranking.data_layer.models import BehavioralSignal, UserScoringPreferences
from recipe_ranking.data_layer.user_profile import UserProfileLoader
from recipe_ranking.providers.preference_provider import (
    MAX_DISLIKED_RECIPES,
    MAX_LIKED_RECIPES,
    MAX_RECENT_MEALS,
    PreferenceProvider,
)


class LocalPreferenceProvider(PreferenceProvider):
    """Provider backed by a local YAML users document.

    ``as_of`` pins the reference date for the recent-meal window; when
    omitted the current date is used at lookup time.
    """

    def __init__(self, loader: UserProfileLoader, as_of: Optional[datetime.date] = None) -> None:
        self._loader = loader
        self._as_of = as_of

    def get_scoring_preferences(self, user_id: str) -> Optional[UserScoringPreferences]:
        """Delegate to ``UserProfileLoader.load_preferences``."""
        return self._loader.load_preferences(user_id)

    def get_behavioral_signal(self, user_id: str) -> BehavioralSignal:
        as_of = self._as_of or datetime.date.today()
        return self._loader.load_history(
            user_id,
            as_of=as_of,
            max_liked=MAX_LIKED_RECIPES,
            max_disliked=MAX_DISLIKED_RECIPES,
            max_meals=MAX_RECENT_MEALS,
        )
