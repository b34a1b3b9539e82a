"""
Market climate data pipeline.

Pure, stateless transformations from a long-format price table to the
structures a chart needs. Nothing in this package imports a rendering
library; the composition root owns any state (hover index, last snapshot).
"""
from .config import PipelineConfig, load_pipeline_config
from .labels import normalize_label
from .models import (
    Direction,
    LegendEntry,
    MoodState,
    RawRow,
    Streak,
    TooltipLine,
    WideRecord,
)
from .mood import mood_for_index, select_mood
from .palette import PALETTE, assign_colors, color_for
from .pivot import pivot_rows, records_to_frame
from .row_parser import coerce_value, parse_rows, parse_table
from .series_registry import series_list
from .streak import resolve_reference_index, streak
from .tooltip import format_legend, format_tooltip, format_value, tooltip_at

__all__ = [
    # Config
    "PipelineConfig",
    "load_pipeline_config",
    # Models
    "Direction",
    "LegendEntry",
    "MoodState",
    "RawRow",
    "Streak",
    "TooltipLine",
    "WideRecord",
    # Steps
    "parse_rows",
    "parse_table",
    "coerce_value",
    "pivot_rows",
    "records_to_frame",
    "series_list",
    "streak",
    "resolve_reference_index",
    "select_mood",
    "mood_for_index",
    "PALETTE",
    "color_for",
    "assign_colors",
    "normalize_label",
    "format_value",
    "format_tooltip",
    "tooltip_at",
    "format_legend",
]
