"""
tests/test_main.py
"""
import json
import main


def _write_config(tmp_path, **overrides):
    data = {"row_count": 3, "column_count": 3, "names": "Ava Ben Chloe", "seed": 5}
    data.update(overrides)
    path = tmp_path / "seats.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_prints_arrangement(tmp_path, capsys):
    assert main.main([_write_config(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Column 1" in out
    assert "Seed: 5 (integer)" in out

def test_seed_flag_overrides_config(tmp_path, capsys):
    assert main.main([_write_config(tmp_path), "--seed", "fall"]) == 0
    assert "Seed: fall (string)" in capsys.readouterr().out

def test_roster_csv_replaces_names(tmp_path, capsys):
    roster = tmp_path / "roster.csv"
    roster.write_text("Name\nZed\nYan\n", encoding="utf-8")
    assert main.main([_write_config(tmp_path), "--roster", str(roster)]) == 0
    out = capsys.readouterr().out
    assert "Zed" in out and "Ava" not in out.split("GENERATING")[-1]

def test_export(tmp_path):
    target = tmp_path / "seats.xlsx"
    assert main.main([_write_config(tmp_path), "--export", str(target)]) == 0
    assert target.exists()

def test_missing_config(tmp_path):
    assert main.main([str(tmp_path / "missing.json")]) == 1

def test_invalid_config(tmp_path, capsys):
    assert main.main([_write_config(tmp_path, row_count=1, column_count=2)]) == 1
    assert "Too many students" in capsys.readouterr().out

def test_unsatisfiable(tmp_path, capsys):
    path = _write_config(tmp_path, row_count=1, column_count=2, names="a b",
                         separate_list=["a b"], max_attempts=10)
    assert main.main([path]) == 1
    assert "Failed" in capsys.readouterr().out
