"""
Row parser: raw tabular input -> typed RawRow sequence.

Handles:

- Already-parsed records (mappings) with numeric or string values
- Delimited text with a header row (read with pandas, all cells as text)
- Thousands separators in string values ("1,000" -> 1000.0)
- Blank / non-numeric / non-finite cells (mapped to ``None``)
- Single-series tables (date + value columns, no series column)

Rows without a date or series identifier carry no identity and are dropped
without error. Excluded series are dropped here so that neither the wide
records nor the series list ever see them.
"""
import io
import logging
from datetime import date, datetime, time
from typing import Any, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from .config import PipelineConfig
from .logging_utils import log_pipeline_step
from .models import RawRow
from ..services.errors import MissingColumnError

logger = logging.getLogger(__name__)


def coerce_value(raw: Any, thousands_separator: str = ",") -> Optional[float]:
    """
    Coerce a cell to float, returning None instead of raising.

    Args:
        raw: Cell content (number, numeric string, blank, anything else)
        thousands_separator: Grouping character stripped from strings

    Returns:
        Finite float, or None for empty / non-numeric / non-finite input

    Examples:
        >>> coerce_value("1,000")
        1000.0
        >>> coerce_value("n/a") is None
        True
    """
    if raw is None or isinstance(raw, (bool, np.bool_)):
        return None

    if isinstance(raw, (int, float, np.number)):
        number = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if thousands_separator:
            text = text.replace(thousands_separator, "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    return number if np.isfinite(number) else None


def _clean_key(raw: Any) -> Optional[str]:
    """Normalize a date/series cell to a non-empty string, or None."""
    if raw is None:
        return None
    if isinstance(raw, float) and np.isnan(raw):
        return None
    if isinstance(raw, datetime):
        if raw.time() == time(0):
            return raw.date().isoformat()
        return raw.isoformat()
    if isinstance(raw, date):
        return raw.isoformat()
    text = str(raw).strip()
    return text or None


@log_pipeline_step
def parse_rows(
    records: Iterable[Mapping[str, Any]],
    config: PipelineConfig,
    single_series: Optional[str] = None,
) -> List[RawRow]:
    """
    Turn parsed records into RawRows.

    Args:
        records: Mappings keyed by column header (input is not mutated)
        config: Pipeline configuration (column names, exclusions, separator)
        single_series: If set, every row belongs to this series and the
            series column is not read

    Returns:
        RawRows in input order, malformed and excluded rows removed
    """
    excluded = set(config.excluded_series)
    rows: List[RawRow] = []

    for record in records:
        row_date = _clean_key(record.get(config.date_column))
        if single_series is not None:
            series = single_series
        else:
            series = _clean_key(record.get(config.series_column))

        if row_date is None or series is None:
            continue
        if series in excluded:
            continue

        value = coerce_value(record.get(config.value_column), config.thousands_separator)
        rows.append(RawRow(date=row_date, series=series, value=value))

    return rows


@log_pipeline_step
def parse_table(text: str, config: PipelineConfig) -> List[RawRow]:
    """
    Parse delimited text with a header row into RawRows.

    A table with the date and value columns but no series column is treated
    as a single series named after the value column.

    Args:
        text: Delimited text including the header row
        config: Pipeline configuration

    Returns:
        RawRows in input order (empty list for empty input)

    Raises:
        MissingColumnError: If the date or value column is absent
    """
    text = (text or "").lstrip("\ufeff")
    if not text.strip():
        logger.warning("⚠️  Empty input table, nothing to parse")
        return []

    # Rows with surplus fields are malformed and skipped like identity-less rows
    read_kwargs = dict(
        sep=config.delimiter,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        on_bad_lines="skip",
    )
    try:
        frame = pd.read_csv(io.StringIO(text), **read_kwargs)
    except pd.errors.ParserError as e:
        # The C tokenizer aborts on an unterminated quote; the python engine skips the line
        logger.warning(f"⚠️  Tokenizer error, retrying with python engine: {e}")
        frame = pd.read_csv(io.StringIO(text), engine="python", **read_kwargs)
    frame.columns = [str(c).strip() for c in frame.columns]
    columns = list(frame.columns)

    for column, role in ((config.date_column, "date"), (config.value_column, "value")):
        if column not in columns:
            raise MissingColumnError(column=column, role=role, available=columns)

    single_series = None
    if config.series_column not in columns:
        single_series = config.value_column
        logger.info(
            f"📋 No '{config.series_column}' column, reading single series '{single_series}'"
        )

    return parse_rows(frame.to_dict(orient="records"), config, single_series=single_series)
