# region Imports and Typing
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Mapping, Optional, Tuple
import math

from bliffoscope.config import THRESHOLD_FRACTION
from bliffoscope.grid import region_for
from bliffoscope.models import Grid, MatchInspection, MatchRegion
from bliffoscope.scoring import match_score, max_match_score
# endregion


# region Threshold
def check_threshold_fraction(threshold_fraction: float) -> float:
    try:
        f = float(threshold_fraction)
    except (TypeError, ValueError) as e:
        raise ValueError(f"threshold fraction must be a number, got {threshold_fraction!r}") from e
    if not math.isfinite(f) or not 0.0 <= f <= 1.0:
        raise ValueError(f"threshold fraction must be within [0, 1], got {threshold_fraction!r}")
    return f


def score_threshold(pattern: Grid, threshold_fraction: float) -> float:
    return threshold_fraction * max_match_score(pattern)
# endregion


# region Row Partitioning
def origin_rows(pattern: Grid, field: Grid) -> int:
    """Number of valid origin rows; 0 when the pattern cannot fit."""
    if pattern.rows > field.rows or pattern.cols > field.cols:
        return 0
    return field.rows - pattern.rows + 1


def split_rows(n_rows: int, parts: int) -> List[Tuple[int, int]]:
    """Contiguous [start, stop) row bands covering range(n_rows), in order."""
    parts = max(1, min(parts, n_rows))
    base, extra = divmod(n_rows, parts)
    bands = []
    start = 0
    for i in range(parts):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands
# endregion


# region Sliding-window Scan
def _scan_rows(pattern: Grid, field: Grid, threshold: float, row_start: int, row_stop: int) -> List[MatchRegion]:
    found = []
    last_col = field.cols - pattern.cols
    for row in range(row_start, row_stop):
        for col in range(last_col + 1):
            if match_score(pattern, field, row, col) > threshold:
                found.append(MatchRegion(x=col, y=row, w=pattern.cols, h=pattern.rows))
    return found


def locate_pattern(
    pattern: Grid,
    field: Grid,
    threshold_fraction: float = THRESHOLD_FRACTION,
    *,
    workers: Optional[int] = None,
) -> List[MatchRegion]:
    """
    Slide ``pattern`` over every origin of ``field`` in row-major order and keep
    the windows whose score is strictly above threshold_fraction * max score.
    Overlapping hits are all kept.

    With ``workers`` > 1 the origin rows are split into contiguous bands scanned
    on a thread pool; bands are concatenated in order so the result is the same
    as the serial scan.
    """
    threshold_fraction = check_threshold_fraction(threshold_fraction)
    n_rows = origin_rows(pattern, field)
    if n_rows == 0:
        return []

    threshold = score_threshold(pattern, threshold_fraction)
    if not workers or workers <= 1:
        return _scan_rows(pattern, field, threshold, 0, n_rows)

    bands = split_rows(n_rows, workers)
    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures = [pool.submit(_scan_rows, pattern, field, threshold, a, b) for a, b in bands]
        found: List[MatchRegion] = []
        for fut in futures:
            found.extend(fut.result())
    return found


def locate_weapons(
    patterns: Mapping[str, Grid],
    field: Grid,
    threshold_fraction: float = THRESHOLD_FRACTION,
    *,
    workers: Optional[int] = None,
) -> Dict[str, List[MatchRegion]]:
    """Run locate_pattern for each named pattern; keys keep the order of ``patterns``."""
    threshold_fraction = check_threshold_fraction(threshold_fraction)
    return {
        name: locate_pattern(pattern, field, threshold_fraction, workers=workers)
        for name, pattern in patterns.items()
    }
# endregion


# region Match Inspection
def inspect_match(field: Grid, pattern: Grid, region: MatchRegion, weapon_type: str = "") -> MatchInspection:
    """Pair a located window with the ideal pattern for side-by-side comparison."""
    if (region.h, region.w) != pattern.shape:
        raise ValueError(
            f"region {region.w}x{region.h} does not match pattern {pattern.cols}x{pattern.rows}"
        )
    located = region_for(field, region)
    return MatchInspection(
        weapon_type=weapon_type,
        region=region,
        located=located,
        ideal=pattern,
        score=match_score(pattern, field, region.y, region.x),
        max_score=max_match_score(pattern),
    )
# endregion
