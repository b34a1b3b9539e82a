"""
Value objects for the market climate pipeline.

Everything here is an immutable, frozen dataclass. The pipeline recomputes
these from the raw table on every ingestion; nothing is merged incrementally.

Missing data is modelled as ``None`` (not ``NaN``). Renderers must treat
``None`` as "no point", never as zero.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class Direction(str, Enum):
    """Direction of a monotonic run."""
    UP = "up"
    DOWN = "down"


class MoodState(str, Enum):
    """Visual state derived from a streak. Asset binding lives in the UI."""
    MILD_UP = "mild_up"
    STRONG_UP = "strong_up"
    MILD_DOWN = "mild_down"
    STRONG_DOWN = "strong_down"


@dataclass(frozen=True)
class RawRow:
    """
    One typed input record.

    Attributes:
        date: Date key as it appeared in the source (e.g. "2024-01-01")
        series: Series identifier (e.g. "S&P_500_Price")
        value: Parsed number, or None for empty/non-numeric cells
    """
    date: str
    series: str
    value: Optional[float]


@dataclass(frozen=True)
class WideRecord:
    """
    One row of the wide-format time series.

    Attributes:
        date: Date key (daily date or ``YYYY-MM`` in monthly mode)
        values: Read-only mapping of series -> value (None for gaps)
    """
    date: str
    values: Mapping[str, Optional[float]] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mapping so records can be shared across callers
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, series: str) -> Optional[float]:
        """Value for ``series``, None when absent or null."""
        return self.values.get(series)

    def to_dict(self) -> Dict[str, Any]:
        """Chart-row shape: ``{"date": ..., <series>: <value>, ...}``."""
        row: Dict[str, Any] = {"date": self.date}
        row.update(self.values)
        return row


@dataclass(frozen=True)
class Streak:
    """
    Current monotonic run at a reference index.

    Attributes:
        direction: UP or DOWN (UP when magnitude is 0)
        magnitude: Number of consecutive same-direction steps (>= 0)
    """
    direction: Direction
    magnitude: int

    def __post_init__(self):
        if self.magnitude < 0:
            raise ValueError(f"Streak magnitude must be >= 0, got {self.magnitude}")

    @property
    def signed(self) -> int:
        """Positive for up-runs, negative for down-runs."""
        return self.magnitude if self.direction is Direction.UP else -self.magnitude


@dataclass(frozen=True)
class TooltipLine:
    """A single formatted tooltip row."""
    series: str
    label: str
    value: float
    text: str
    color: Optional[str] = None


@dataclass(frozen=True)
class LegendEntry:
    """A single legend item."""
    series: str
    label: str
    color: str
