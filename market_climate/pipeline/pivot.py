"""
Long-to-wide pivot: RawRows -> chronologically ordered WideRecords.

The date comparator is explicit configuration:

- ``calendar``: keys are parsed with ``pandas.to_datetime`` (``date_format``
  if configured, otherwise per-element ``format="mixed"``) and ordered by
  timestamp. Keys that do not parse sort after all parseable keys, in
  first-seen order. The sort is stable.
- ``lexical``: plain string order. Only correct for ISO ``YYYY-MM-DD`` and
  ``YYYY-MM`` keys.

Daily mode keeps the last-seen value per (date, series), nulls included.
Monthly mode folds rows in chronological order into ``YYYY-MM`` buckets so
the last observation of the month wins; a null never replaces a number.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .config import PipelineConfig
from .logging_utils import log_data_preparation, log_pipeline_step
from .models import RawRow, WideRecord

logger = logging.getLogger(__name__)


def parse_date_keys(
    keys: Sequence[str],
    date_format: Optional[str] = None,
) -> List[Optional[pd.Timestamp]]:
    """
    Parse date keys to timestamps (None where a key does not parse).

    Args:
        keys: Date strings
        date_format: Optional strptime format; per-element inference otherwise

    Returns:
        One timestamp (UTC) or None per key, in input order
    """
    if not keys:
        return []
    parsed = pd.to_datetime(
        pd.Series(list(keys), dtype=object),
        errors="coerce",
        format=date_format or "mixed",
        utc=True,
    )
    return [None if pd.isna(ts) else ts for ts in parsed]


def _chronological_key(stamp: Optional[pd.Timestamp], position: int):
    if stamp is None:
        return (1, 0, position)
    return (0, stamp.value, position)


def sort_date_keys(keys: Sequence[str], config: PipelineConfig) -> List[str]:
    """Order date keys with the configured comparator."""
    if config.date_order == "lexical":
        return sorted(keys)

    stamps = parse_date_keys(keys, config.date_format)
    unparsed = sum(1 for s in stamps if s is None)
    if unparsed:
        logger.warning(
            f"⚠️  {unparsed} date key(s) could not be parsed, ordering them last"
        )
    order = sorted(range(len(keys)), key=lambda i: _chronological_key(stamps[i], i))
    return [keys[i] for i in order]


def _pivot_daily(rows: List[RawRow], config: PipelineConfig) -> List[WideRecord]:
    grouped: Dict[str, Dict[str, Optional[float]]] = {}
    for row in rows:
        grouped.setdefault(row.date, {})[row.series] = row.value

    with log_data_preparation(f"Sorting {len(grouped)} date keys ({config.date_order})"):
        ordered = sort_date_keys(list(grouped), config)

    return [WideRecord(date=key, values=grouped[key]) for key in ordered]


def _pivot_monthly(rows: List[RawRow], config: PipelineConfig) -> List[WideRecord]:
    distinct = list(dict.fromkeys(row.date for row in rows))
    stamps = dict(zip(distinct, parse_date_keys(distinct, config.date_format)))

    with log_data_preparation(f"Ordering {len(rows)} rows for monthly buckets"):
        order = sorted(
            range(len(rows)),
            key=lambda i: _chronological_key(stamps[rows[i].date], i),
        )

    # Buckets are created in chronological order, so insertion order is final
    grouped: Dict[str, Dict[str, Optional[float]]] = {}
    for i in order:
        row = rows[i]
        stamp = stamps[row.date]
        key = stamp.strftime("%Y-%m") if stamp is not None else row.date
        values = grouped.setdefault(key, {})
        if row.value is None and values.get(row.series) is not None:
            continue
        values[row.series] = row.value

    return [WideRecord(date=key, values=values) for key, values in grouped.items()]


@log_pipeline_step
def pivot_rows(rows: Iterable[RawRow], config: PipelineConfig) -> List[WideRecord]:
    """
    Group RawRows by date into WideRecords ordered by date.

    Args:
        rows: Parsed rows in input order
        config: Pipeline configuration (comparator, granularity)

    Returns:
        WideRecords, one per distinct date key (or month in monthly mode).
        A date whose values are all null is still kept.

    Examples:
        >>> rows = [RawRow("2024-01-02", "A", 900.0), RawRow("2024-01-01", "A", 1000.0)]
        >>> [r.date for r in pivot_rows(rows, PipelineConfig())]
        ['2024-01-01', '2024-01-02']
    """
    rows = list(rows)
    if not rows:
        return []

    if config.granularity == "monthly":
        return _pivot_monthly(rows, config)
    return _pivot_daily(rows, config)


def records_to_frame(
    records: Sequence[WideRecord],
    series: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Convert WideRecords to a DataFrame (index ``date``, one column per series).

    Args:
        records: Ordered wide records
        series: Optional column order; defaults to first appearance

    Returns:
        Float DataFrame with NaN for gaps
    """
    if series is None:
        series = list(dict.fromkeys(key for record in records for key in record.values))

    frame = pd.DataFrame(
        [[record.get(name) for name in series] for record in records],
        index=pd.Index([record.date for record in records], name="date"),
        columns=list(series),
        dtype=float,
    )
    return frame
