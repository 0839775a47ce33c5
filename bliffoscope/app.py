# app.py: Flask API over the bliffoscope scan core
# deps: pip install flask numpy pillow

from __future__ import annotations
from typing import Dict, List, Mapping, Optional
import functools, io, logging
import numpy as np
from flask import Flask, request, jsonify, make_response
from PIL import Image

from bliffoscope.config import (
    DEFAULT_PNG_SCALE, LOCATION_CACHE_SIZE, MAX_PNG_SCALE, THRESHOLD_FRACTION, init_logging,
)
from bliffoscope.models import Grid, MatchRegion, locations_to_dict
from bliffoscope.errors import BliffoscopeError
from bliffoscope.grid import parse_grid
from bliffoscope.locator import check_threshold_fraction, inspect_match, locate_weapons
from bliffoscope.canvas import hit_test, map_locations_to_canvas
from bliffoscope.dataset import load_field, load_weapons

_LOG = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


# region Query Helpers
def _arg(name: str, cast, default=None):
    raw = request.args.get(name)
    if raw in (None, "", "null"):
        if default is None:
            raise ApiError(f"{name} required")
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ApiError(f"{name} must be {cast.__name__}, got {raw!r}") from None


def _grid_json(grid: Grid) -> dict:
    return {"rows": grid.rows, "cols": grid.cols, "cells": grid.to_lists()}


def grid_png(grid: Grid, scale: int = DEFAULT_PNG_SCALE, load_percentage: float = 100.0) -> bytes:
    """Green-on-black PNG of ``grid``; rows below the load percentage stay dark."""
    visible_rows = int(np.floor(grid.rows * max(0.0, min(100.0, load_percentage)) / 100.0))
    img = np.zeros((grid.rows, grid.cols, 3), dtype=np.uint8)
    img[:visible_rows][grid.cells[:visible_rows]] = (0, 200, 0)
    img = np.repeat(np.repeat(img, scale, axis=0), scale, axis=1)
    buf = io.BytesIO()
    Image.fromarray(img, "RGB").save(buf, "PNG")
    return buf.getvalue()
# endregion


# region Location Cache
class ScanState:
    """Field, weapon patterns and an LRU of the locations computed for them, keyed by threshold."""

    def __init__(self, field: Grid, weapons: Mapping[str, Grid], cache_size: int = LOCATION_CACHE_SIZE):
        self.field = field
        self.weapons = dict(weapons)
        self.locations = functools.lru_cache(maxsize=cache_size)(self._scan)

    def _scan(self, threshold: float) -> Dict[str, List[MatchRegion]]:
        result = locate_weapons(self.weapons, self.field, threshold)
        _LOG.info(
            "Located %s at threshold %.3f",
            ", ".join(f"{len(v)} {k}" for k, v in result.items()),
            threshold,
        )
        return result
# endregion


def create_app(field: Optional[Grid] = None, weapons: Optional[Mapping[str, Grid]] = None) -> Flask:
    app = Flask(__name__)
    state = ScanState(
        field if field is not None else load_field(),
        weapons if weapons is not None else load_weapons(),
    )
    app.config["SCAN_STATE"] = state

    def threshold_arg() -> float:
        return check_threshold_fraction(_arg("threshold", float, THRESHOLD_FRACTION))

    # ======= errors =======
    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):
        return jsonify({"error": str(e)}), e.status

    @app.errorhandler(BliffoscopeError)
    def _core_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ValueError)
    def _value_error(e):
        return jsonify({"error": str(e)}), 400

    # ======= CORS =======
    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"]  = "*"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return resp

    # ======= data endpoints =======
    @app.route("/", methods=["GET"])
    def root():
        return {
            "ok": True,
            "field": [state.field.rows, state.field.cols],
            "weapons": list(state.weapons),
            "threshold": THRESHOLD_FRACTION,
            "locate": "/locate (GET, or POST JSON)",
        }

    @app.route("/field", methods=["GET"])
    def field_cells():
        return jsonify(_grid_json(state.field))

    @app.route("/field.png", methods=["GET"])
    def field_png():
        scale = _arg("scale", int, DEFAULT_PNG_SCALE)
        load = _arg("load", float, 100.0)
        if not 1 <= scale <= MAX_PNG_SCALE:
            raise ApiError(f"scale must be within [1, {MAX_PNG_SCALE}]")
        resp = make_response(grid_png(state.field, scale, load))
        resp.headers["Content-Type"] = "image/png"
        return resp

    @app.route("/weapons", methods=["GET"])
    def weapons():
        return jsonify({name: _grid_json(g) for name, g in state.weapons.items()})

    # ======= scan endpoints =======
    @app.route("/locate", methods=["GET"])
    def locate():
        threshold = threshold_arg()
        workers = _arg("workers", int, 1)
        if workers < 1:
            raise ApiError(f"workers must be at least 1, got {workers}")
        if workers == 1:
            locations = state.locations(threshold)
        else:
            locations = locate_weapons(state.weapons, state.field, threshold, workers=workers)
        return jsonify({"threshold": threshold, "locations": locations_to_dict(locations)})

    @app.route("/locate", methods=["POST"])
    def locate_custom():
        """
        JSON body:
        {
          "field": "<newline-delimited glyph rows>",
          "patterns": {"name": "<rows>", ...},
          "threshold": 0.74
        }
        """
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            raise ApiError("JSON object body required")
        if "field" not in data:
            raise ApiError("field required")
        patterns = data.get("patterns")
        if not isinstance(patterns, dict) or not patterns:
            raise ApiError("patterns must be a non-empty object")
        threshold = check_threshold_fraction(data.get("threshold", THRESHOLD_FRACTION))

        field = parse_grid(data["field"])
        grids = {str(name): parse_grid(text) for name, text in patterns.items()}
        locations = locate_weapons(grids, field, threshold)
        return jsonify({
            "threshold": threshold,
            "field": [field.rows, field.cols],
            "locations": locations_to_dict(locations),
        })

    @app.route("/inspect/<weapon_type>/<int:index>", methods=["GET"])
    def inspect(weapon_type: str, index: int):
        if weapon_type not in state.weapons:
            raise ApiError(f"unknown weapon type {weapon_type!r}", 404)
        locations = state.locations(threshold_arg())
        regions = locations[weapon_type]
        if index >= len(regions):
            raise ApiError(f"{weapon_type} has {len(regions)} matches, no index {index}", 404)
        insp = inspect_match(state.field, state.weapons[weapon_type], regions[index], weapon_type)
        return jsonify(insp.as_dict())

    # ======= canvas endpoints =======
    @app.route("/canvas", methods=["GET"])
    def canvas():
        width = _arg("width", float)
        height = _arg("height", float)
        locations = state.locations(threshold_arg())
        mapped = map_locations_to_canvas(width, height, state.field, locations)
        return jsonify({name: [r.as_dict() for r in rects] for name, rects in mapped.items()})

    @app.route("/hit", methods=["GET"])
    def hit():
        x, y = _arg("x", float), _arg("y", float)
        width, height = _arg("width", float), _arg("height", float)
        locations = state.locations(threshold_arg())
        mapped = map_locations_to_canvas(width, height, state.field, locations)
        hits = hit_test(x, y, mapped)
        return jsonify({"hits": [
            {"weapon_type": name, "index": i, "region": locations[name][i].as_dict()}
            for name, i in hits
        ]})

    return app


app = create_app()

if __name__ == "__main__":
    init_logging()
    app.run(host="0.0.0.0", port=8081, threaded=True)
