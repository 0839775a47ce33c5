"""Tests for matplotlib rendering (Agg backend)."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from matplotlib.patches import Rectangle

from bliffoscope.grid import blank_field
from bliffoscope.locator import inspect_match
from bliffoscope.models import MatchRegion
from bliffoscope import viz


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


class TestViz:
    def test_show_matches_draws_one_rectangle_per_region(self, embedded_field):
        locations = {
            "torpedo": [MatchRegion(7, 5, 9, 11), MatchRegion(8, 5, 9, 11)],
            "starship": [MatchRegion(0, 0, 14, 11)],
        }
        fig = viz.show_matches(embedded_field, locations, show=False)
        rects = [p for p in fig.axes[0].patches if isinstance(p, Rectangle)]
        assert len(rects) == 3

    def test_show_matches_partial_load(self, embedded_field):
        fig = viz.show_matches(embedded_field, {}, load_percentage=30, show=False)
        assert fig.axes

    def test_show_comparison(self, embedded_field, torpedo):
        insp = inspect_match(embedded_field, torpedo, MatchRegion(7, 5, 9, 11), "torpedo")
        fig = viz.show_comparison(insp, show=False)
        assert len(fig.axes) == 2
        assert "100% match" in fig._suptitle.get_text()

    def test_score_heatmap(self, embedded_field, torpedo):
        fig = viz.show_score_heatmap(torpedo, embedded_field, "torpedo", 0.74, show=False)
        assert fig.axes

    def test_score_heatmap_pattern_too_large(self, torpedo):
        with pytest.raises(ValueError):
            viz.show_score_heatmap(torpedo, blank_field(5, 5), show=False)
