# region Header
"""
run_scan.py: Bliffoscope weapon scan

Requires:
  pip install -e .
Optional (for --plot / --heatmap):
  a matplotlib GUI backend
"""
# endregion

import sys

from bliffoscope.cli import main

if __name__ == "__main__":
    sys.exit(main())
