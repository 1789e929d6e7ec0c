"""Pipeline tuning settings, optionally loaded from YAML."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

import yaml

from recipe_ranking.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class PipelineSettings:
    """Knobs for the recommendation pipeline."""
    overfetch_factor: int = 3  # Rows fetched per requested result
    max_fetch: int = 300  # Hard cap on rows scored per request
    min_quick_score: int = 30  # Quick Scores below this are dropped
    cuisine_filter_threshold: int = 3  # Liked cuisines needed to filter by cuisine
    cook_time_slack: float = 1.5  # Cook-time cap = preference * slack
    default_limit: int = 20

    def __post_init__(self):
        if self.overfetch_factor < 1:
            raise ValueError(f"overfetch_factor must be >= 1, got {self.overfetch_factor}")
        if self.max_fetch < 1:
            raise ValueError(f"max_fetch must be >= 1, got {self.max_fetch}")
        if not 0 <= self.min_quick_score <= 100:
            raise ValueError(f"min_quick_score must be in [0, 100], got {self.min_quick_score}")
        if self.cuisine_filter_threshold < 1:
            raise ValueError(
                f"cuisine_filter_threshold must be >= 1, got {self.cuisine_filter_threshold}"
            )
        if self.cook_time_slack < 1.0:
            raise ValueError(f"cook_time_slack must be >= 1.0, got {self.cook_time_slack}")
        if self.default_limit < 1:
            raise ValueError(f"default_limit must be >= 1, got {self.default_limit}")


def load_pipeline_settings(path: Union[str, Path]) -> PipelineSettings:
    """Read the optional ``pipeline:`` section of a YAML file.

    Missing keys keep their defaults; unknown keys raise ValueError.

    Raises:
        FileNotFoundError: If the settings file does not exist
        ValueError: If the section is malformed or a value is invalid
    """
    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with open(settings_path, "r") as f:
        data = yaml.safe_load(f) or {}

    section = data.get("pipeline") or {}
    if not isinstance(section, dict):
        raise ValueError("'pipeline' section must be a mapping")

    known = {f.name for f in fields(PipelineSettings)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown pipeline settings: {', '.join(unknown)}")

    settings = PipelineSettings(**section)
    logger.debug("Loaded pipeline settings from %s: %s", settings_path, settings)
    return settings
