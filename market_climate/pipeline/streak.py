"""
Streak analyzer: length and direction of the current monotonic run.

A step from ``prev`` to ``cur`` is UP when ``cur >= prev`` (ties count as up),
DOWN otherwise. The streak at an index is the number of consecutive steps,
walking backward from that index, whose direction matches the last step.

Null policy: positions where the series has no finite value are skipped. The
run is computed over the series' numeric observations at or before the
index, so a gap neither breaks nor extends a run. With fewer than two
observations there is no step and the streak is ``Streak(UP, 0)``.
"""
import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from .models import Direction, Streak

logger = logging.getLogger(__name__)

FLAT_STREAK = Streak(direction=Direction.UP, magnitude=0)


def _is_number(value: Any) -> bool:
    if value is None or isinstance(value, (bool, np.bool_)):
        return False
    if not isinstance(value, (int, float, np.number)):
        return False
    return bool(np.isfinite(value))


def _step_direction(previous: float, current: float) -> Direction:
    return Direction.UP if current >= previous else Direction.DOWN


def streak(records: Sequence[Any], index: int, series_key: str) -> Streak:
    """
    Compute the streak of ``series_key`` ending at ``index``.

    Args:
        records: Ordered wide records (WideRecord or plain dict rows)
        index: Reference position, ``0 <= index < len(records)``
        series_key: Series used as the trend signal

    Returns:
        Streak with magnitude >= 1, or ``Streak(UP, 0)`` at index 0 or when
        fewer than two numeric observations exist up to ``index``

    Raises:
        IndexError: If ``index`` is outside ``records``

    Examples:
        >>> rows = [{"A": 10}, {"A": 12}, {"A": 11}, {"A": 9}, {"A": 8}, {"A": 7}]
        >>> streak(rows, 5, "A")
        Streak(direction=<Direction.DOWN: 'down'>, magnitude=4)
    """
    if not 0 <= index < len(records):
        raise IndexError(
            f"Streak index {index} out of range for {len(records)} record(s)"
        )

    if index == 0:
        return FLAT_STREAK

    points: List[float] = []
    for record in records[: index + 1]:
        value = record.get(series_key)
        if _is_number(value):
            points.append(float(value))

    if len(points) < 2:
        logger.debug(
            f"Series '{series_key}' has {len(points)} numeric point(s) up to index {index}"
        )
        return FLAT_STREAK

    last = len(points) - 1
    direction = _step_direction(points[last - 1], points[last])
    magnitude = 1
    for i in range(last - 1, 0, -1):
        if _step_direction(points[i - 1], points[i]) is not direction:
            break
        magnitude += 1

    return Streak(direction=direction, magnitude=magnitude)


def resolve_reference_index(
    record_count: int,
    hovered_index: Optional[int] = None,
) -> Optional[int]:
    """
    Pick the index the mood signal should follow.

    The hovered index wins when it is valid; otherwise the latest record.

    Returns:
        Index into the records, or None when there are no records
    """
    if record_count <= 0:
        return None
    if hovered_index is not None and 0 <= hovered_index < record_count:
        return hovered_index
    return record_count - 1
