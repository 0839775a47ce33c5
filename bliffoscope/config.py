# config.py
import logging
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / "data"

# Share of the maximum match score a window must exceed to count as a weapon
THRESHOLD_FRACTION = 0.74

# Canvas highlight settings
MARK_PADDING = 10
MARK_LINE_WIDTH = 5
WEAPON_COLORS = {"torpedo": "red", "starship": "yellow"}
DEFAULT_COLOR = "cyan"

# PNG preview: pixels per field cell
DEFAULT_PNG_SCALE = 6
MAX_PNG_SCALE = 40

# Distinct thresholds whose API scan results are kept
LOCATION_CACHE_SIZE = 16

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def init_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging initialized. Data dir %s", DATA_DIR)
