"""Series registry: distinct series identifiers in a fixed, reproducible order."""

from typing import Iterable, Tuple

from .config import SeriesOrder, VALID_SERIES_ORDERS
from .models import RawRow


def series_list(
    rows: Iterable[RawRow],
    order: SeriesOrder = "first_seen",
    exclude: Iterable[str] = (),
) -> Tuple[str, ...]:
    """Return the distinct series in ``rows``.

    The order decides legend/line order and therefore color assignment, so
    callers must keep it fixed between ingestions.

    Args:
        rows: Parsed rows
        order: "first_seen" (first occurrence) or "sorted" (lexicographic)
        exclude: Additional identifiers to leave out

    Returns:
        Tuple of series identifiers without duplicates
    """
    if order not in VALID_SERIES_ORDERS:
        raise ValueError(f"Invalid series order '{order}', must be one of {VALID_SERIES_ORDERS}")

    excluded = set(exclude)
    names = [name for name in dict.fromkeys(row.series for row in rows) if name not in excluded]

    if order == "sorted":
        names.sort()
    return tuple(names)
