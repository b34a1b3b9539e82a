"""
Palette definitions for stable per-series line colors.

Colors depend only on a series' ordinal in the series list, never on its
name. The first ``len(PALETTE)`` ordinals use the curated high-contrast set;
later ordinals rotate hue by the golden angle at fixed saturation/lightness.
"""
from typing import Dict, Iterable, Tuple

# Curated high-contrast palette (ordinal order matters)
PALETTE: Tuple[str, ...] = (
    "#e6194b", "#3cb44b", "#ffe119", "#4363d8", "#f58231",
    "#911eb4", "#46f0f0", "#f032e6", "#bcf60c", "#fabebe",
    "#008080", "#e6beff", "#9a6324", "#fffac8", "#800000",
    "#aaffc3", "#808000", "#ffd8b1", "#000075", "#808080",
)

GOLDEN_ANGLE = 137.5
FALLBACK_SATURATION = 70
FALLBACK_LIGHTNESS = 55


def color_for(ordinal: int) -> str:
    """
    Get the color for a series ordinal.

    Args:
        ordinal: 0-based position in the series list

    Returns:
        Hex color from the palette, or an ``hsl(...)`` string beyond it

    Raises:
        ValueError: If ordinal is negative

    Examples:
        >>> color_for(0)
        '#e6194b'
        >>> color_for(21)
        'hsl(7.5, 70%, 55%)'
    """
    if ordinal < 0:
        raise ValueError(f"Color ordinal must be >= 0, got {ordinal}")

    if ordinal < len(PALETTE):
        return PALETTE[ordinal]

    hue = (ordinal * GOLDEN_ANGLE) % 360
    return f"hsl({hue:g}, {FALLBACK_SATURATION}%, {FALLBACK_LIGHTNESS}%)"


def assign_colors(series: Iterable[str]) -> Dict[str, str]:
    """Map each series to the color of its ordinal."""
    return {name: color_for(i) for i, name in enumerate(series)}
