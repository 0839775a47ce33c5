# region Header
"""
Command-line scan of a bliffoscope field for weapon silhouettes.

  python run_scan.py                       # bundled sample data
  python run_scan.py --field scan.txt --pattern torpedo=torpedo.txt --json
"""
# endregion

# region Imports
import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Tuple

from bliffoscope.config import THRESHOLD_FRACTION, init_logging
from bliffoscope.dataset import load_field, load_weapons, read_grid_file
from bliffoscope.errors import BliffoscopeError
from bliffoscope.locator import locate_weapons
from bliffoscope.models import Grid, locations_to_dict
# endregion

_LOG = logging.getLogger(__name__)


# region Argument Parsing
def parse_pattern_arg(value: str):
    name, sep, path = value.partition("=")
    if not sep or not name or not path:
        raise argparse.ArgumentTypeError(f"expected NAME=PATH, got {value!r}")
    return name, path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("bliffoscope-scan", description="Locate weapons in bliffoscope data")
    parser.add_argument("--field", type=str, default=None, help="field text file (default: bundled sample)")
    parser.add_argument("--pattern", type=parse_pattern_arg, action="append", default=None,
                        metavar="NAME=PATH", help="weapon pattern file, repeatable (default: bundled weapons)")
    parser.add_argument("--threshold", type=float, default=THRESHOLD_FRACTION)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--json", action="store_true", help="print locations as JSON")
    parser.add_argument("--plot", action="store_true", help="show the matplotlib overlay")
    parser.add_argument("--heatmap", type=str, default=None, metavar="NAME", help="show the score map of one pattern")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser
# endregion


# region Main
def load_inputs(args) -> Tuple[Grid, Dict[str, Grid]]:
    field = read_grid_file(args.field) if args.field else load_field()
    if args.pattern:
        weapons = {name: read_grid_file(path) for name, path in args.pattern}
    else:
        weapons = load_weapons()
    return field, weapons


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        field, weapons = load_inputs(args)
        locations = locate_weapons(weapons, field, args.threshold, workers=args.workers)
    except (OSError, BliffoscopeError, ValueError) as e:
        _LOG.error("Scan failed: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"threshold": args.threshold, "locations": locations_to_dict(locations)}, indent=2))
    else:
        print(f"Field {field.rows}x{field.cols}, threshold {args.threshold:.2f}")
        for name, regions in locations.items():
            print(f"  {name}: {len(regions)} match(es)")
            for m in regions:
                print(f"    x={m.x:<4d} y={m.y:<4d} w={m.w} h={m.h}")

    if args.plot or args.heatmap:
        from bliffoscope import viz
        if args.heatmap and args.heatmap not in weapons:
            print(f"error: unknown pattern {args.heatmap!r}", file=sys.stderr)
            return 1
        try:
            if args.plot:
                viz.show_matches(field, locations)
            if args.heatmap:
                viz.show_score_heatmap(weapons[args.heatmap], field, args.heatmap, args.threshold)
        except ValueError as e:
            _LOG.error("Plot failed: %s", e)
            print(f"error: {e}", file=sys.stderr)
            return 1
    return 0
# endregion
