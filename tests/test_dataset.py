"""Tests for the bundled sample data and grid file loading."""

from __future__ import annotations

import pytest

from bliffoscope.dataset import load_field, load_weapons, read_grid_file
from bliffoscope.errors import MalformedGrid


class TestBundledData:
    def test_field_shape(self, sample_field):
        assert sample_field.shape == (100, 100)
        assert 0 < sample_field.on_count() < 100 * 100

    def test_weapons(self, sample_weapons):
        assert list(sample_weapons) == ["torpedo", "starship"]
        assert sample_weapons["torpedo"].shape == (11, 9)
        assert sample_weapons["starship"].shape == (11, 14)
        assert sample_weapons["torpedo"].on_count() == 47
        assert sample_weapons["starship"].on_count() == 54

    def test_load_from_directory(self, tmp_path):
        (tmp_path / "field.txt").write_text("+  +\n ++ \n", encoding="utf-8")
        (tmp_path / "dot.txt").write_text("+\n", encoding="utf-8")
        assert load_field(tmp_path).to_lists() == [[1, 0, 0, 1], [0, 1, 1, 0]]
        weapons = load_weapons(tmp_path, {"dot": "dot.txt"})
        assert weapons["dot"].shape == (1, 1)


class TestReadGridFile:
    def test_strips_one_trailing_newline(self, tmp_path):
        p = tmp_path / "g.txt"
        p.write_text("+ \n +\n", encoding="utf-8")
        assert read_grid_file(p).shape == (2, 2)

    def test_crlf_line_endings(self, tmp_path):
        p = tmp_path / "g.txt"
        p.write_bytes(b"+ \r\n +\r\n")
        assert read_grid_file(p).to_lists() == [[1, 0], [0, 1]]

    def test_blank_trailing_line_is_malformed(self, tmp_path):
        p = tmp_path / "g.txt"
        p.write_text("+ \n +\n\n", encoding="utf-8")
        with pytest.raises(MalformedGrid):
            read_grid_file(p)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_grid_file(tmp_path / "nope.txt")
