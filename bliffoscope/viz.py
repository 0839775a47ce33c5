# region Imports
from typing import Mapping, Optional, Sequence
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch, Rectangle

from bliffoscope.config import DEFAULT_COLOR, MARK_LINE_WIDTH, WEAPON_COLORS
from bliffoscope.models import Grid, MatchInspection, MatchRegion
from bliffoscope.scoring import max_match_score, score_map
# endregion


# region Helpers
def _draw_cells(ax, grid: Grid, load_percentage: float = 100.0):
    """Scatter the on cells; only the top ``load_percentage`` of rows is drawn."""
    visible_rows = int(np.floor(grid.rows * max(0.0, min(100.0, load_percentage)) / 100.0))
    rr, cc = np.nonzero(grid.cells[:visible_rows])
    ax.scatter(cc, rr, s=6, c="green", marker="o")
    ax.set_xlim(-1, grid.cols)
    ax.set_ylim(grid.rows, -1)
    ax.set_aspect("equal")
    ax.set_axis_off()
# endregion


# region Match Overlay
def show_matches(
    field: Grid,
    locations: Mapping[str, Sequence[MatchRegion]],
    title: str = "Bliffoscope scan",
    load_percentage: float = 100.0,
    show: bool = True,
):
    """
    Render the field with one rectangle per located window, coloured per weapon type.
    Returns the matplotlib figure.
    """
    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_facecolor("black")
    fig.patch.set_facecolor("black")
    _draw_cells(ax, field, load_percentage)

    legend_elements = []
    for name, regions in locations.items():
        color = WEAPON_COLORS.get(name, DEFAULT_COLOR)
        for m in regions:
            ax.add_patch(Rectangle((m.x - 0.5, m.y - 0.5), m.w, m.h,
                                   fill=False, edgecolor=color, linewidth=MARK_LINE_WIDTH / 2))
        legend_elements.append(Patch(facecolor="none", edgecolor=color, label=f"{name} ({len(regions)})"))

    if legend_elements:
        ax.legend(handles=legend_elements, loc="lower right", fontsize=8, framealpha=0.85)
    ax.set_title(title, color="white")
    plt.tight_layout()
    if show:
        plt.show()
    return fig
# endregion


# region Located vs Ideal
def show_comparison(inspection: MatchInspection, show: bool = True):
    fig, (ax_l, ax_i) = plt.subplots(1, 2, figsize=(8, 4))
    _draw_cells(ax_l, inspection.located)
    _draw_cells(ax_i, inspection.ideal)
    ax_l.set_title("Located target")
    ax_i.set_title("Ideal target")
    fig.suptitle(f"{inspection.weapon_type}: {inspection.match_fraction:.0%} match")
    plt.tight_layout()
    if show:
        plt.show()
    return fig
# endregion


# region Score Heatmap
def show_score_heatmap(
    pattern: Grid,
    field: Grid,
    name: str = "",
    threshold_fraction: Optional[float] = None,
    show: bool = True,
):
    """Per-origin match fraction for one pattern, with the acceptance contour if given."""
    scores = score_map(pattern, field)
    if scores.size == 0:
        raise ValueError(f"pattern {pattern.shape} does not fit field {field.shape}")
    frac = scores / float(max_match_score(pattern))

    fig, ax = plt.subplots(figsize=(8, 7))
    heat = ax.imshow(frac, origin="upper", cmap="viridis", vmin=0.0, vmax=1.0)
    cbar = fig.colorbar(heat, ax=ax, fraction=0.046, pad=0.04)
    cbar.set_label("match fraction")
    if threshold_fraction is not None and min(frac.shape) >= 2 and frac.max() > threshold_fraction:
        ax.contour(frac, levels=[threshold_fraction], colors="red", linewidths=1.0)
    ax.set_title(f"{name or 'pattern'} score map")
    ax.set_xlabel("origin column")
    ax.set_ylabel("origin row")
    plt.tight_layout()
    if show:
        plt.show()
    return fig
# endregion
