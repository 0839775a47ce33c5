# bliffoscope: locate noisy weapon silhouettes in a binary scan
from bliffoscope.errors import BliffoscopeError, InvalidInputType, MalformedGrid, IndexOutOfRange
from bliffoscope.models import Grid, MatchRegion
from bliffoscope.grid import parse_grid, render_grid, extract_region
from bliffoscope.scoring import match_score, max_match_score
from bliffoscope.locator import locate_weapons

__all__ = [
    "BliffoscopeError",
    "InvalidInputType",
    "MalformedGrid",
    "IndexOutOfRange",
    "Grid",
    "MatchRegion",
    "parse_grid",
    "render_grid",
    "extract_region",
    "match_score",
    "max_match_score",
    "locate_weapons",
]
