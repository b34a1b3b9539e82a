"""
Type-safe configuration for the market climate pipeline.

The configuration is a frozen dataclass so that a snapshot built from it is
reproducible: series order, date comparator and exclusions are fixed up front.
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Union

import yaml

from ..services.errors import ConfigError

# Type aliases for better readability
SeriesOrder = Literal["first_seen", "sorted"]
DateOrder = Literal["calendar", "lexical"]
Granularity = Literal["daily", "monthly"]

VALID_SERIES_ORDERS: Tuple[SeriesOrder, ...] = ("first_seen", "sorted")
VALID_DATE_ORDERS: Tuple[DateOrder, ...] = ("calendar", "lexical")
VALID_GRANULARITIES: Tuple[Granularity, ...] = ("daily", "monthly")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Configuration for parsing and pivoting a long-format price table.

    Attributes:
        date_column: Header of the date column
        series_column: Header of the series-identifier column
        value_column: Header of the value column
        delimiter: Field delimiter of the text table
        thousands_separator: Stripped from string values before coercion
        excluded_series: Series identifiers dropped at parse time
        series_order: "first_seen" or "sorted" (drives legend and color order)
        date_order: "calendar" (date-aware) or "lexical" (ISO dates only)
        date_format: Optional strptime format used by the calendar comparator
        granularity: "daily" or "monthly" (YYYY-MM buckets, last value wins)
        reference_series: Series whose streak drives the mood state
        strong_streak_threshold: Magnitude at which a streak counts as strong
        value_prefix: Prepended to tooltip values (currency sign, "" for none)
    """

    # Columns
    date_column: str = "Date"
    series_column: str = "Asset"
    value_column: str = "Price"

    # Text cleanup
    delimiter: str = ","
    thousands_separator: str = ","

    # Series selection
    excluded_series: Tuple[str, ...] = ()
    series_order: SeriesOrder = "first_seen"

    # Date handling
    date_order: DateOrder = "calendar"
    date_format: Optional[str] = None
    granularity: Granularity = "daily"

    # Mood signal
    reference_series: str = "S&P_500_Price"
    strong_streak_threshold: int = 2

    # Tooltip
    value_prefix: str = "$"

    def __post_init__(self):
        """Validate configuration values."""
        # Lists from YAML are accepted but stored as tuples; a bare string is one series
        excluded = self.excluded_series
        if isinstance(excluded, str):
            excluded = (excluded,)
        object.__setattr__(self, "excluded_series", tuple(excluded))

        for name in ("date_column", "series_column", "value_column"):
            if not getattr(self, name):
                raise ConfigError(f"{name} must be a non-empty string")

        if len(self.delimiter) != 1:
            raise ConfigError(
                f"delimiter must be a single character, got {self.delimiter!r}"
            )

        if self.series_order not in VALID_SERIES_ORDERS:
            raise ConfigError(
                f"Invalid series_order '{self.series_order}', "
                f"must be one of {VALID_SERIES_ORDERS}"
            )

        if self.date_order not in VALID_DATE_ORDERS:
            raise ConfigError(
                f"Invalid date_order '{self.date_order}', "
                f"must be one of {VALID_DATE_ORDERS}"
            )

        if self.granularity not in VALID_GRANULARITIES:
            raise ConfigError(
                f"Invalid granularity '{self.granularity}', "
                f"must be one of {VALID_GRANULARITIES}"
            )

        if self.granularity == "monthly" and self.date_order == "lexical":
            # Monthly buckets are derived from parsed dates
            raise ConfigError("monthly granularity requires date_order='calendar'")

        if self.strong_streak_threshold < 1:
            raise ConfigError(
                f"strong_streak_threshold must be >= 1, got {self.strong_streak_threshold}"
            )


def load_pipeline_config(path: Union[str, Path]) -> PipelineConfig:
    """
    Load a PipelineConfig from a YAML mapping.

    Args:
        path: Path to a YAML file whose top-level keys are PipelineConfig fields

    Returns:
        PipelineConfig instance

    Raises:
        FileNotFoundError: If the YAML file does not exist
        ConfigError: If the file is not a mapping or has unknown keys
        yaml.YAMLError: If parsing fails

    Examples:
        >>> config = load_pipeline_config("configs/pipeline.yaml")
        >>> config.series_order
        'sorted'
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Pipeline config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)

    if content is None:
        return PipelineConfig()

    if not isinstance(content, dict):
        raise ConfigError(f"Pipeline config must be a YAML mapping: {file_path}")

    return config_from_dict(content)


def config_from_dict(content: Dict[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from a plain dict, rejecting unknown keys."""
    known = {f.name for f in fields(PipelineConfig)}
    unknown = sorted(set(content) - known)
    if unknown:
        raise ConfigError(f"Unknown pipeline config keys: {unknown}")
    return PipelineConfig(**content)
