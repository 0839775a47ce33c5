"""Tests for the command-line scan."""

from __future__ import annotations

import json

import pytest

from bliffoscope.cli import main, parse_pattern_arg


class TestCli:
    def test_json_output_for_bundled_data(self, capsys):
        assert main(["--json"]) == 0
        body = json.loads(capsys.readouterr().out)
        assert body["threshold"] == pytest.approx(0.74)
        assert list(body["locations"]) == ["torpedo", "starship"]

    def test_custom_files(self, tmp_path, capsys):
        field = tmp_path / "field.txt"
        dot = tmp_path / "dot.txt"
        field.write_text("   \n + \n   \n", encoding="utf-8")
        dot.write_text("+\n", encoding="utf-8")
        rc = main(["--field", str(field), "--pattern", f"dot={dot}", "--threshold", "0.5", "--json"])
        assert rc == 0
        body = json.loads(capsys.readouterr().out)
        assert body["locations"] == {"dot": [{"x": 1, "y": 1, "w": 1, "h": 1}]}

    def test_text_output(self, tmp_path, capsys):
        field = tmp_path / "field.txt"
        field.write_text("+ \n +\n", encoding="utf-8")
        dot = tmp_path / "dot.txt"
        dot.write_text("+", encoding="utf-8")
        assert main(["--field", str(field), "--pattern", f"dot={dot}", "--threshold", "0.5"]) == 0
        out = capsys.readouterr().out
        assert "dot: 2 match(es)" in out

    def test_missing_file_fails(self, tmp_path, capsys):
        assert main(["--field", str(tmp_path / "missing.txt")]) == 1
        assert "error" in capsys.readouterr().err

    def test_bad_threshold_fails(self, capsys):
        assert main(["--threshold", "1.5"]) == 1

    def test_bad_pattern_argument(self):
        with pytest.raises(SystemExit):
            main(["--pattern", "no-equals-sign"])
        with pytest.raises(Exception):
            parse_pattern_arg("=path")

    def test_heatmap_pattern_larger_than_field_fails(self, tmp_path, capsys):
        field = tmp_path / "field.txt"
        field.write_text("+ \n +", encoding="utf-8")
        bar = tmp_path / "bar.txt"
        bar.write_text("+++", encoding="utf-8")
        rc = main(["--field", str(field), "--pattern", f"bar={bar}", "--heatmap", "bar"])
        assert rc == 1
        assert "does not fit" in capsys.readouterr().err

    def test_heatmap_unknown_pattern_fails(self, tmp_path, capsys):
        field = tmp_path / "field.txt"
        field.write_text("+ \n +", encoding="utf-8")
        dot = tmp_path / "dot.txt"
        dot.write_text("+", encoding="utf-8")
        assert main(["--field", str(field), "--pattern", f"dot={dot}", "--heatmap", "ship"]) == 1
        assert "unknown pattern" in capsys.readouterr().err
