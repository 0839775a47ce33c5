# region Imports
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from bliffoscope.errors import IndexOutOfRange
from bliffoscope.models import Grid
# endregion


# region Score Functions
def max_match_score(pattern: Grid) -> int:
    """Best possible score: every cell of the pattern agrees with the field."""
    return pattern.rows * pattern.cols


def fits_at(pattern: Grid, field: Grid, origin_row: int, origin_col: int) -> bool:
    return (
        origin_row >= 0
        and origin_col >= 0
        and origin_row + pattern.rows <= field.rows
        and origin_col + pattern.cols <= field.cols
    )


def match_score(pattern: Grid, field: Grid, origin_row: int, origin_col: int) -> int:
    """
    Number of pattern cells equal to the field cell under them when the
    pattern's top-left corner sits at (origin_row, origin_col). Both-on and
    both-off count as a match.
    """
    if not fits_at(pattern, field, origin_row, origin_col):
        raise IndexOutOfRange(
            f"pattern {pattern.rows}x{pattern.cols} does not fit field "
            f"{field.rows}x{field.cols} at row={origin_row} col={origin_col}"
        )
    window = field.cells[origin_row:origin_row + pattern.rows, origin_col:origin_col + pattern.cols]
    return int(np.count_nonzero(window == pattern.cells))
# endregion


# region Full Correlation
def score_map(pattern: Grid, field: Grid) -> np.ndarray:
    """
    Scores for every valid origin, shape (field.rows - p.rows + 1, field.cols - p.cols + 1).
    Entry [r, c] equals match_score(pattern, field, r, c). Empty (0, 0) when the
    pattern is larger than the field.
    """
    if pattern.rows > field.rows or pattern.cols > field.cols:
        return np.zeros((0, 0), dtype=np.int64)
    windows = sliding_window_view(field.cells, pattern.shape)
    return np.count_nonzero(windows == pattern.cells, axis=(2, 3)).astype(np.int64)
# endregion
