from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

import yaml

from .logging_config import setup_logging
from .pipeline.config import PipelineConfig, load_pipeline_config
from .pipeline.logging_utils import set_debug_mode
from .services.errors import ConfigError, DataFetchError, MissingColumnError
from .services.snapshot_service import MarketSnapshot, ingest_source
from .settings import get_settings

logger = logging.getLogger(__name__)


def _resolve_config(args: argparse.Namespace) -> PipelineConfig:
    settings = get_settings()
    if args.config:
        config = load_pipeline_config(args.config)
    else:
        config = settings.pipeline_config()

    overrides = {}
    if args.sorted:
        overrides["series_order"] = "sorted"
    if args.monthly:
        overrides["granularity"] = "monthly"
    if args.exclude:
        overrides["excluded_series"] = tuple(config.excluded_series) + tuple(args.exclude)
    if args.reference:
        overrides["reference_series"] = args.reference
    return dataclasses.replace(config, **overrides) if overrides else config


def render_summary(snapshot: MarketSnapshot, at: Optional[int] = None) -> List[str]:
    """Human-readable summary lines for one snapshot.

    Shows the series with their colors, the mood at the reference index and
    the tooltip for that index.
    """
    if snapshot.is_empty:
        return ["No data."]

    records = snapshot.records
    lines = [
        f"Records: {len(records)} ({records[0].date} → {records[-1].date})",
        f"Series ({len(snapshot.series)}):",
    ]
    for entry in snapshot.legend():
        lines.append(f"  {entry.color:<22} {entry.label}  [{entry.series}]")

    index = snapshot.reference_index(at)
    mood = snapshot.mood_at(at)
    current = snapshot.streak_at(at)
    if mood is None:
        lines.append(f"Mood @ {records[index].date}: n/a (needs at least two records)")
    else:
        lines.append(
            f"Mood @ {records[index].date}: {mood.value} "
            f"({current.direction.value} x{current.magnitude}, "
            f"reference {snapshot.config.reference_series})"
        )

    tooltip = snapshot.tooltip_at(index)
    lines.append(f"Values @ {records[index].date}:")
    if not tooltip:
        lines.append("  (nothing to show)")
    for line in tooltip:
        lines.append(f"  {line.text}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Summarize a long-format price table: series, colors, mood and values"
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="URL or path of the price table (default: MARKET_CLIMATE_DATA_SOURCE)",
    )
    parser.add_argument("--config", help="Pipeline config YAML")
    parser.add_argument("--at", type=int, default=None, help="Record index (default: latest)")
    parser.add_argument("--sorted", action="store_true", help="Sort series lexicographically")
    parser.add_argument("--monthly", action="store_true", help="Aggregate to YYYY-MM buckets")
    parser.add_argument("--exclude", action="append", default=[], help="Series to drop")
    parser.add_argument("--reference", help="Series driving the mood signal")
    parser.add_argument("--debug", action="store_true", help="Verbose pipeline logging")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        logs_dir=settings.logs_dir,
        level=logging.DEBUG if args.debug else settings.log_level,
    )
    if args.debug or settings.debug:
        set_debug_mode(True)

    source = args.source or settings.data_source

    try:
        config = _resolve_config(args)
        snapshot = ingest_source(source, config, timeout=settings.fetch_timeout)
    except (
        DataFetchError,
        MissingColumnError,
        ConfigError,
        FileNotFoundError,
        yaml.YAMLError,
    ) as e:
        logger.error(f"❌ {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.at is not None and not 0 <= args.at < len(snapshot.records):
        print(
            f"Error: --at {args.at} out of range for {len(snapshot.records)} record(s)",
            file=sys.stderr,
        )
        return 1

    for line in render_summary(snapshot, args.at):
        print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover - thin CLI wrapper
    sys.exit(main())
