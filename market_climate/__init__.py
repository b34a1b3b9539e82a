"""
Market Climate
==============

Turns a long-format table of asset prices into chart-ready structures:
wide time series, series list, per-series colors, a streak-driven mood
state and formatted tooltip/legend labels.

Rendering is left to the caller; see ``market_climate.pipeline`` for the
pure transformations and ``market_climate.services.snapshot_service`` for
the composed ingestion.
"""
from .pipeline import MoodState, PipelineConfig
from .services.snapshot_service import MarketSnapshot, build_snapshot, ingest_source

__version__ = "1.0.0"
__all__ = [
    "MarketSnapshot",
    "MoodState",
    "PipelineConfig",
    "build_snapshot",
    "ingest_source",
]
