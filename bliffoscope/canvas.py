# region Imports
from __future__ import annotations
from typing import Dict, List, Mapping, Sequence, Tuple

from bliffoscope.config import MARK_PADDING
from bliffoscope.models import CanvasProperties, CanvasRect, Grid, MatchRegion
# endregion


# region Canvas Properties
def canvas_properties(canvas_width: float, canvas_height: float, rows: int, cols: int) -> CanvasProperties:
    """
    Spacing for drawing a rows x cols grid on a canvas. Cells are laid out with
    one separator of margin on each side, cell (r, c) centred at
    ((c + 1) * x_separator, (r + 1) * y_separator).
    """
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(f"canvas must have positive size, got {canvas_width}x{canvas_height}")
    if rows < 1 or cols < 1:
        raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
    y_sep = canvas_height / (rows + 1)
    x_sep = canvas_width / (cols + 1)
    return CanvasProperties(
        width=float(canvas_width),
        height=float(canvas_height),
        x_separator=x_sep,
        y_separator=y_sep,
        radius=min(x_sep, y_sep) / 4,
    )


def cell_center(props: CanvasProperties, r: int, c: int) -> Tuple[float, float]:
    return (c + 1) * props.x_separator, (r + 1) * props.y_separator
# endregion


# region Region Mapping
def map_regions_to_canvas(
    canvas_width: float,
    canvas_height: float,
    field: Grid,
    regions: Sequence[MatchRegion],
) -> List[CanvasRect]:
    """Field-space match windows to pixel rectangles spanning their first and last cell centres."""
    props = canvas_properties(canvas_width, canvas_height, field.rows, field.cols)
    return [
        CanvasRect(
            x=(m.x + 1) * props.x_separator,
            y=(m.y + 1) * props.y_separator,
            w=(m.w - 1) * props.x_separator,
            h=(m.h - 1) * props.y_separator,
        )
        for m in regions
    ]


def map_locations_to_canvas(
    canvas_width: float,
    canvas_height: float,
    field: Grid,
    locations: Mapping[str, Sequence[MatchRegion]],
) -> Dict[str, List[CanvasRect]]:
    return {
        name: map_regions_to_canvas(canvas_width, canvas_height, field, regions)
        for name, regions in locations.items()
    }
# endregion


# region Highlight Bounds and Hit Testing
def marked_bounds(rect: CanvasRect, padding: float = MARK_PADDING) -> Tuple[float, float, float, float]:
    """(x_start, y_start, x_end, y_end) of the highlight drawn around ``rect``."""
    return (
        rect.x - padding,
        rect.y - padding,
        rect.x + rect.w + padding,
        rect.y + rect.h + padding,
    )


def hit_test(
    px: float,
    py: float,
    canvas_locations: Mapping[str, Sequence[CanvasRect]],
    padding: float = MARK_PADDING,
) -> List[Tuple[str, int]]:
    """(weapon_type, index) of every highlight strictly containing the point."""
    hits = []
    for name, rects in canvas_locations.items():
        for i, rect in enumerate(rects):
            x0, y0, x1, y1 = marked_bounds(rect, padding)
            if x0 < px < x1 and y0 < py < y1:
                hits.append((name, i))
    return hits
# endregion
