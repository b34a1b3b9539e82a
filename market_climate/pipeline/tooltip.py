"""
Tooltip and legend formatting.

The tooltip takes the (series, value) pairs of one time index, drops entries
without a label or without a finite value, orders the rest by value
(descending, stable for ties) and renders ``"<label>: $<value>"`` lines with
thousands grouping. An empty result means there is nothing to show.
"""
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .labels import normalize_label
from .models import LegendEntry, TooltipLine, WideRecord

MAX_FRACTION_DIGITS = 3
DEFAULT_VALUE_PREFIX = "$"


def format_value(value: float) -> str:
    """
    Render a number with thousands grouping and at most 3 decimals.

    Examples:
        >>> format_value(1000)
        '1,000'
        >>> format_value(1234.5678)
        '1,234.568'
    """
    text = f"{value:,.{MAX_FRACTION_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _is_finite(value: Any) -> bool:
    if value is None or isinstance(value, (bool, np.bool_)):
        return False
    if not isinstance(value, (int, float, np.number)):
        return False
    return bool(np.isfinite(value))


def _unpack(entry: Any) -> Tuple[Any, Any, Optional[str]]:
    if isinstance(entry, Mapping):
        name = entry.get("label", entry.get("name"))
        return name, entry.get("value"), entry.get("color")
    name, value = entry
    return name, value, None


def format_tooltip(
    entries: Iterable[Any],
    colors: Optional[Mapping[str, str]] = None,
    value_prefix: str = DEFAULT_VALUE_PREFIX,
) -> List[TooltipLine]:
    """
    Build sorted tooltip lines for one time index.

    Args:
        entries: ``(series, value)`` pairs or mappings with ``label`` (or
            ``name``), ``value`` and optionally ``color``
        colors: Optional series -> color map (overrides entry colors)
        value_prefix: Prepended to the formatted value (currency sign)

    Returns:
        TooltipLines ordered by value descending; empty list when nothing
        valid remains
    """
    valid = []
    for entry in entries:
        name, value, color = _unpack(entry)
        if not name or not _is_finite(value):
            continue
        series = str(name)
        if colors is not None and series in colors:
            color = colors[series]
        valid.append((series, float(value), color))

    # sorted() is stable, ties keep input order
    valid = sorted(valid, key=lambda item: item[1], reverse=True)

    lines = []
    for series, value, color in valid:
        label = normalize_label(series)
        lines.append(
            TooltipLine(
                series=series,
                label=label,
                value=value,
                text=f"{label}: {value_prefix}{format_value(value)}",
                color=color,
            )
        )
    return lines


def tooltip_at(
    records: Sequence[WideRecord],
    index: int,
    colors: Optional[Mapping[str, str]] = None,
    value_prefix: str = DEFAULT_VALUE_PREFIX,
) -> List[TooltipLine]:
    """Tooltip lines for the record at ``index`` (IndexError when out of range)."""
    if not 0 <= index < len(records):
        raise IndexError(f"Tooltip index {index} out of range for {len(records)} record(s)")
    return format_tooltip(records[index].values.items(), colors, value_prefix)


def format_legend(series: Iterable[str], colors: Mapping[str, str]) -> List[LegendEntry]:
    """Legend entries in series order with normalized labels."""
    return [
        LegendEntry(series=name, label=normalize_label(name), color=colors[name])
        for name in series
    ]
