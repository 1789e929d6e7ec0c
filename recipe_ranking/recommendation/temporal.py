"""Derive a TemporalContext from a caller-supplied moment."""

from datetime import datetime

from recipe_ranking.data_layer.models import TemporalContext

# (start hour inclusive, end hour exclusive, time of day, meal period)
DAY_PARTS = (
    (5, 11, "morning", "breakfast"),
    (11, 15, "afternoon", "lunch"),
    (15, 20, "evening", "dinner"),
)


def temporal_context_at(moment: datetime) -> TemporalContext:
    """Time-of-day bucket, meal period and weekend flag for ``moment``.

    Scorers never read the clock; callers pass ``datetime.now()`` (or a
    fixed moment in tests) explicitly. Hours outside the day parts are
    night / snack.
    """
    time_of_day, meal_period = "night", "snack"
    for start, end, part, period in DAY_PARTS:
        if start <= moment.hour < end:
            time_of_day, meal_period = part, period
            break

    return TemporalContext(
        time_of_day=time_of_day,
        is_weekend=moment.weekday() >= 5,
        meal_period=meal_period,
    )
