import os
import tempfile

import pytest

from cellframe.commands.show import main

MOCK_CSV_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".csv")


def setup_module():
    MOCK_CSV_FILE.write("n,s\n1,a\n2,b\n2,b\n3,c\n")
    MOCK_CSV_FILE.close()


def teardown_module():
    os.unlink(MOCK_CSV_FILE.name)


def test_show_all(capsys):
    assert main([MOCK_CSV_FILE.name]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "  | n | s",
        "- | - | -",
        "0 | 1 | a",
        "1 | 2 | b",
        "2 | 2 | b",
        "3 | 3 | c",
    ]


@pytest.mark.parametrize(
    "view, expected_rows",
    [("unique", 2), ("duplicated", 1), ("duplicates", 2), ("dedup", 3)],
)
def test_show_views(capsys, view, expected_rows):
    assert main(["--infer", "--view", view, MOCK_CSV_FILE.name]) == 0
    out = capsys.readouterr().out
    assert len(out.splitlines()) == 2 + expected_rows


def test_show_declared_types(capsys):
    assert main(["-t", "n=Float", MOCK_CSV_FILE.name]) == 0
    out = capsys.readouterr().out
    assert "0 | 1.0 | a" in out


def test_show_max_rows(capsys):
    assert main(["--max-rows", "1", MOCK_CSV_FILE.name]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[-1] == "... and 3 more rows"


def test_show_reports_errors(capsys):
    assert main(["-t", "s=Int", MOCK_CSV_FILE.name]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Cannot convert 'a' to Int in column 's'")


def test_show_missing_file(capsys, tmp_path):
    assert main([str(tmp_path / "missing.csv")]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")


def test_show_malformed_csv(capsys, tmp_path):
    ragged = tmp_path / "ragged.csv"
    ragged.write_text("a,b\n1\n")
    assert main([str(ragged)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
