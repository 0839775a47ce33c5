# models.py
from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple
import numpy as np

from bliffoscope.errors import MalformedGrid


# region Grid
@dataclass(frozen=True, eq=False)
class Grid:
    """Immutable rectangular on/off grid. ``cells[r, c]`` is True for an on cell."""
    cells: np.ndarray

    def __post_init__(self):
        try:
            arr = np.array(self.cells, dtype=bool, copy=True)
        except ValueError as e:
            raise MalformedGrid(f"grid rows are not rectangular: {e}") from e
        if arr.ndim != 2:
            raise MalformedGrid(f"grid must be 2-D, got {arr.ndim} dimension(s)")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise MalformedGrid(f"grid must be at least 1x1, got {arr.shape[0]}x{arr.shape[1]}")
        arr.setflags(write=False)
        object.__setattr__(self, "cells", arr)

    @property
    def rows(self) -> int:
        return int(self.cells.shape[0])

    @property
    def cols(self) -> int:
        return int(self.cells.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def on_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def to_lists(self) -> List[List[int]]:
        return self.cells.astype(np.uint8).tolist()

    def __getitem__(self, rc):
        r, c = rc
        return bool(self.cells[r, c])

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.cells, other.cells))

    def __hash__(self):
        return hash((self.shape, self.cells.tobytes()))

    def __repr__(self):
        return f"Grid(rows={self.rows}, cols={self.cols}, on={self.on_count()})"
# endregion


# region Match Results
@dataclass(frozen=True)
class MatchRegion:
    x: int   # column of the top-left cell
    y: int   # row of the top-left cell
    w: int
    h: int

    def as_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


WeaponLocations = Dict[str, List[MatchRegion]]


def locations_to_dict(locations: Mapping[str, List[MatchRegion]]) -> Dict[str, List[Dict[str, int]]]:
    return {name: [m.as_dict() for m in regions] for name, regions in locations.items()}


@dataclass(frozen=True)
class MatchInspection:
    weapon_type: str
    region: MatchRegion
    located: Grid
    ideal: Grid
    score: int
    max_score: int

    @property
    def match_fraction(self) -> float:
        return self.score / self.max_score

    def as_dict(self) -> dict:
        return {
            "weapon_type": self.weapon_type,
            "region": self.region.as_dict(),
            "located": self.located.to_lists(),
            "ideal": self.ideal.to_lists(),
            "score": self.score,
            "max_score": self.max_score,
            "match_fraction": self.match_fraction,
        }
# endregion


# region Canvas Geometry
@dataclass(frozen=True)
class CanvasProperties:
    width: float
    height: float
    x_separator: float
    y_separator: float
    radius: float


@dataclass(frozen=True)
class CanvasRect:
    x: float
    y: float
    w: float
    h: float

    def as_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}
# endregion
