"""Tests for the command-line entry point."""

import json

import pytest

from main import main, read_inputs


@pytest.fixture
def history_file(tmp_path, sample_text):
    path = tmp_path / "watch-history.txt"
    path.write_text(sample_text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)


def test_report(history_file, capsys):
    assert main([str(history_file)]) == 0
    out = capsys.readouterr().out
    assert "4 videos analyzed" in out
    assert "Prof. John Gallaugher" in out
    assert "Watched more than once" in out


def test_exports(history_file, tmp_path):
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"
    assert main([str(history_file), "--csv", str(csv_path), "--json", str(json_path)]) == 0
    assert csv_path.read_text(encoding="utf-8").count("\n") == 4
    assert len(json.loads(json_path.read_text(encoding="utf-8"))) == 4


def test_unrecognized_input(tmp_path, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("just some notes", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "No valid watch history entries found" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert "not found" in capsys.readouterr().out


def test_read_inputs_joins_files(tmp_path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("first", encoding="utf-8")
    b.write_text("second", encoding="utf-8")
    assert read_inputs([str(a), str(b)]) == "first\nsecond"
