"""Tagged score outcomes shared by the tiered scorers.

A recipe either receives a score (``Scored``) or is structurally
ineligible for the user (``Vetoed``). Both expose ``value`` so callers
that only care about ranking can treat a veto as a zero.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Scored:
    value: int

    @property
    def is_vetoed(self) -> bool:
        return False


@dataclass(frozen=True)
class Vetoed:
    reason: str

    @property
    def value(self) -> int:
        return 0

    @property
    def is_vetoed(self) -> bool:
        return True


ScoreOutcome = Union[Scored, Vetoed]


def clamp_score(x: float) -> int:
    """Round and clamp to the integer range [0, 100]."""
    return int(max(0, min(100, round(x))))
