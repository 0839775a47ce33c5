# dataset.py
import logging
from pathlib import Path
from typing import Dict, Mapping, Union

from bliffoscope.config import DATA_DIR
from bliffoscope.grid import parse_grid
from bliffoscope.models import Grid

_LOG = logging.getLogger(__name__)

FIELD_FILE = "field.txt"
WEAPON_FILES = {
    "torpedo": "torpedo.txt",
    "starship": "starship.txt",
}


def read_grid_text(path: Union[str, Path]) -> str:
    text = Path(path).read_text(encoding="utf-8")
    # Editors terminate the last line; that newline is not an extra row
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]
    return text.replace("\r\n", "\n")


def read_grid_file(path: Union[str, Path]) -> Grid:
    grid = parse_grid(read_grid_text(path))
    _LOG.debug("Loaded %s grid from %s", grid.shape, path)
    return grid


def load_field(data_dir: Union[str, Path] = DATA_DIR) -> Grid:
    return read_grid_file(Path(data_dir) / FIELD_FILE)


def load_weapons(
    data_dir: Union[str, Path] = DATA_DIR,
    files: Mapping[str, str] = WEAPON_FILES,
) -> Dict[str, Grid]:
    return {name: read_grid_file(Path(data_dir) / fname) for name, fname in files.items()}
