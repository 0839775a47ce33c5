# region Imports
from typing import Iterable, Sequence
import numpy as np

from bliffoscope.errors import IndexOutOfRange, InvalidInputType, MalformedGrid
from bliffoscope.models import Grid, MatchRegion
# endregion

OFF_GLYPH = " "
ON_GLYPH = "+"


# region Text Parsing
def parse_grid(text: str) -> Grid:
    """
    Convert a newline-delimited block of glyphs into a Grid.
    A space is an off cell, any other character is on. Every line becomes a row,
    so a trailing newline produces an empty last row and is rejected.
    """
    if not isinstance(text, str):
        raise InvalidInputType(f"parse_grid expects str, got {type(text).__name__}")

    lines = text.split("\n")
    width = len(lines[0])
    if width == 0:
        raise MalformedGrid("first row is empty")
    for i, line in enumerate(lines):
        if len(line) != width:
            raise MalformedGrid(f"row {i} has {len(line)} cells, expected {width}")

    return grid_from_rows([[ch != OFF_GLYPH for ch in line] for line in lines])


def grid_from_rows(rows: Sequence[Sequence]) -> Grid:
    # Grid rejects ragged or empty rows
    return Grid(rows)


def render_grid(grid: Grid, on: str = ON_GLYPH, off: str = OFF_GLYPH) -> str:
    if len(on) != 1 or on == OFF_GLYPH:
        raise ValueError("on glyph must be a single non-space character")
    return "\n".join("".join(on if v else off for v in row) for row in grid.cells)
# endregion


# region Sub-grid Extraction
def check_window(field: Grid, x: int, y: int, width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise IndexOutOfRange(f"window must be at least 1x1, got {width}x{height}")
    if x < 0 or y < 0 or x + width > field.cols or y + height > field.rows:
        raise IndexOutOfRange(
            f"window x={x} y={y} w={width} h={height} outside field "
            f"{field.cols}x{field.rows}"
        )


def extract_region(field: Grid, x: int, y: int, width: int, height: int) -> Grid:
    """Return the ``height`` x ``width`` sub-grid whose top-left cell is field[y][x]."""
    check_window(field, x, y, width, height)
    return Grid(field.cells[y:y + height, x:x + width])


def region_for(field: Grid, region: MatchRegion) -> Grid:
    return extract_region(field, region.x, region.y, region.w, region.h)
# endregion


# region Synthetic Fields
def blank_field(rows: int, cols: int) -> Grid:
    return Grid(np.zeros((rows, cols), dtype=bool))


def embed(field: Grid, pattern: Grid, x: int, y: int) -> Grid:
    """Copy of ``field`` with ``pattern`` stamped verbatim at column x, row y."""
    check_window(field, x, y, pattern.cols, pattern.rows)
    cells = field.cells.copy()
    cells[y:y + pattern.rows, x:x + pattern.cols] = pattern.cells
    return Grid(cells)


def with_noise(grid: Grid, flips: Iterable) -> Grid:
    """Copy of ``grid`` with the (row, col) cells in ``flips`` inverted."""
    cells = grid.cells.copy()
    for r, c in flips:
        if not (0 <= r < grid.rows and 0 <= c < grid.cols):
            raise IndexOutOfRange(f"cell ({r}, {c}) outside grid {grid.rows}x{grid.cols}")
        cells[r, c] = not cells[r, c]
    return Grid(cells)
# endregion
