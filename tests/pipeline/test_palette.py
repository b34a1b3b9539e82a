"""
Unit tests for series color assignment.
"""
import pytest

from market_climate.pipeline.palette import PALETTE, assign_colors, color_for


class TestColorFor:

    def test_palette_range(self):
        assert color_for(0) == "#e6194b"
        assert color_for(19) == "#808080"
        assert len(PALETTE) == 20

    def test_injective_over_palette(self):
        colors = [color_for(i) for i in range(len(PALETTE))]

        assert len(set(colors)) == len(PALETTE)

    def test_deterministic(self):
        assert [color_for(i) for i in range(40)] == [color_for(i) for i in range(40)]

    def test_fallback_hue_rotation(self):
        assert color_for(20) == "hsl(230, 70%, 55%)"
        assert color_for(21) == "hsl(7.5, 70%, 55%)"

    def test_fallback_never_reuses_palette_entries(self):
        fallback = {color_for(i) for i in range(len(PALETTE), 60)}

        assert not fallback & set(PALETTE)

    def test_negative_ordinal_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            color_for(-1)


def test_assign_colors_uses_ordinals():
    colors = assign_colors(["Gold_Price", "Oil_Price"])

    assert colors == {"Gold_Price": PALETTE[0], "Oil_Price": PALETTE[1]}


def test_assign_colors_depends_on_order_not_name():
    first = assign_colors(["A", "B"])
    second = assign_colors(["B", "A"])

    assert first["A"] == second["B"]
