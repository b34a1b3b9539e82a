"""Mood selector: streak -> one of four visual states."""

from typing import Any, Optional, Sequence

from .models import Direction, MoodState, Streak
from .streak import resolve_reference_index, streak

DEFAULT_STRONG_THRESHOLD = 2


def select_mood(value: Streak, threshold: int = DEFAULT_STRONG_THRESHOLD) -> MoodState:
    """
    Map a streak to a mood state.

    Magnitude 0 counts as a mild up-move.

    Examples:
        >>> select_mood(Streak(Direction.DOWN, 3))
        <MoodState.STRONG_DOWN: 'strong_down'>
    """
    strong = value.magnitude >= threshold
    if value.direction is Direction.UP or value.magnitude == 0:
        return MoodState.STRONG_UP if strong else MoodState.MILD_UP
    return MoodState.STRONG_DOWN if strong else MoodState.MILD_DOWN


def mood_for_index(
    records: Sequence[Any],
    series_key: str,
    hovered_index: Optional[int] = None,
    threshold: int = DEFAULT_STRONG_THRESHOLD,
) -> Optional[MoodState]:
    """
    Mood at the hovered index, or at the latest record when nothing is hovered.

    Returns None with fewer than two records (no trend to show).
    """
    if len(records) < 2:
        return None
    index = resolve_reference_index(len(records), hovered_index)
    return select_mood(streak(records, index, series_key), threshold)
