"""
Snapshot Service
================

Composition of the pipeline: one complete input -> one immutable
``MarketSnapshot`` (wide records, series list, color map).

A snapshot is built atomically from a full input and replaces any previous
one wholesale. The same input always yields an equal snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from ..data_loading.loaders.source_loader import DEFAULT_TIMEOUT_SECONDS, fetch_table_text
from ..pipeline.config import PipelineConfig
from ..pipeline.logging_utils import log_pipeline_step
from ..pipeline.models import LegendEntry, MoodState, Streak, TooltipLine, WideRecord
from ..pipeline.mood import mood_for_index
from ..pipeline.palette import assign_colors
from ..pipeline.pivot import pivot_rows, records_to_frame
from ..pipeline.row_parser import parse_rows, parse_table
from ..pipeline.series_registry import series_list
from ..pipeline.streak import resolve_reference_index, streak
from ..pipeline.tooltip import format_legend, tooltip_at

logger = logging.getLogger(__name__)

TableSource = Union[str, Iterable[Mapping[str, Any]]]


@dataclass(frozen=True)
class MarketSnapshot:
    """Everything the chart needs from one ingestion."""

    records: Tuple[WideRecord, ...]
    series: Tuple[str, ...]
    colors: Mapping[str, str]
    config: PipelineConfig = field(default_factory=PipelineConfig)

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "series", tuple(self.series))
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    @property
    def is_empty(self) -> bool:
        return not self.records

    def reference_index(self, hovered_index: Optional[int] = None) -> Optional[int]:
        return resolve_reference_index(len(self.records), hovered_index)

    def streak_at(self, hovered_index: Optional[int] = None) -> Optional[Streak]:
        """Streak of the reference series at the hovered (or latest) index."""
        index = self.reference_index(hovered_index)
        if index is None:
            return None
        return streak(self.records, index, self.config.reference_series)

    def mood_at(self, hovered_index: Optional[int] = None) -> Optional[MoodState]:
        """Mood at the hovered (or latest) index; None with fewer than two records."""
        return mood_for_index(
            self.records,
            self.config.reference_series,
            hovered_index,
            self.config.strong_streak_threshold,
        )

    def tooltip_at(self, index: int) -> List[TooltipLine]:
        return tooltip_at(self.records, index, self.colors, self.config.value_prefix)

    def legend(self) -> List[LegendEntry]:
        return format_legend(self.series, self.colors)

    def to_frame(self) -> pd.DataFrame:
        """Wide DataFrame in series-list column order."""
        return records_to_frame(self.records, self.series)

    def chart_rows(self) -> List[Dict[str, Any]]:
        """Records in chart-row shape ``{"date": ..., <series>: <value>}``."""
        return [record.to_dict() for record in self.records]


@log_pipeline_step
def build_snapshot(
    source: TableSource,
    config: Optional[PipelineConfig] = None,
) -> MarketSnapshot:
    """
    Run parse -> pivot -> registry -> palette on one complete input.

    Args:
        source: Delimited table text, or already-parsed records (mappings)
        config: Pipeline configuration (defaults to PipelineConfig())

    Returns:
        MarketSnapshot (empty collections for empty input)

    Raises:
        MissingColumnError: If a text table lacks the date or value column
    """
    config = config or PipelineConfig()

    if isinstance(source, str):
        rows = parse_table(source, config)
    else:
        rows = parse_rows(source, config)

    records = pivot_rows(rows, config)
    names = series_list(rows, config.series_order, config.excluded_series)
    colors = assign_colors(names)

    snapshot = MarketSnapshot(records=records, series=names, colors=colors, config=config)

    if snapshot.is_empty:
        logger.warning("⚠️  Snapshot is empty (no rows with a date and series)")
    else:
        logger.info(
            f"📊 Snapshot built: {len(records)} records, {len(names)} series "
            f"({records[0].date} → {records[-1].date})"
        )
        if config.reference_series not in names:
            logger.warning(
                f"⚠️  Reference series '{config.reference_series}' not in data, "
                "mood will stay mild up"
            )
    return snapshot


def ingest_source(
    location: str,
    config: Optional[PipelineConfig] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> MarketSnapshot:
    """
    Fetch the table at ``location`` and build a snapshot from it.

    Raises:
        DataFetchError: If the fetch fails (no retry)
        MissingColumnError: If the table lacks required columns
    """
    text = fetch_table_text(location, timeout=timeout)
    return build_snapshot(text, config)
