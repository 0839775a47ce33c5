"""Pytest configuration and fixtures."""

from __future__ import annotations

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from bliffoscope.dataset import load_field, load_weapons
from bliffoscope.grid import blank_field, embed, parse_grid

TORPEDO_TEXT = "\n".join([
    "    +    ",
    "    +    ",
    "   +++   ",
    " +++++++ ",
    " ++   ++ ",
    "++  +  ++",
    "++ +++ ++",
    "++  +  ++",
    " ++   ++ ",
    " +++++++ ",
    "   +++   ",
])


@pytest.fixture
def torpedo():
    return parse_grid(TORPEDO_TEXT)


@pytest.fixture
def center_field():
    """3x3 field, all off except the centre cell."""
    return parse_grid("   \n + \n   ")


@pytest.fixture
def embedded_field(torpedo):
    """30x40 blank field with the torpedo stamped at x=7, y=5."""
    return embed(blank_field(30, 40), torpedo, 7, 5)


@pytest.fixture(scope="session")
def sample_field():
    return load_field()


@pytest.fixture(scope="session")
def sample_weapons():
    return load_weapons()
