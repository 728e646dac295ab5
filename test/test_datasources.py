import os
import tempfile

import pytest

from cellframe import DataType, Frame
from cellframe.datasources import read_csv, read_csv_records
from cellframe.errors import ColumnNameError

MOCK_CSV_CONTENT = """name,age,,note
Alice,31,x,"hello, world"
Bob,NA,y,
Carol,45,z,plain
"""

MOCK_CSV_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".csv")


def setup_module():
    MOCK_CSV_FILE.write(MOCK_CSV_CONTENT)
    MOCK_CSV_FILE.close()


def teardown_module():
    os.unlink(MOCK_CSV_FILE.name)


def test_read_csv_records():
    records = read_csv_records(MOCK_CSV_FILE.name)
    assert records == [
        ["name", "age", "", "note"],
        ["Alice", "31", "x", "hello, world"],
        ["Bob", "NA", "y", ""],
        ["Carol", "45", "z", "plain"],
    ]


def test_read_csv():
    frame = read_csv(MOCK_CSV_FILE.name)
    assert frame.dim() == (3, 4)
    assert frame.column_names == ["name", "age", "V0", "note"]
    assert frame.dtypes == [DataType.STRING] * 4
    assert frame.column("age").to_pylist() == ["31", None, "45"]
    assert frame.column("note").to_pylist() == ["hello, world", None, "plain"]
    assert frame == Frame.from_records(read_csv_records(MOCK_CSV_FILE.name))


def test_read_csv_then_parse():
    frame = read_csv(MOCK_CSV_FILE.name).parse_columns({"age": "Int"})
    assert frame.column("age").to_pylist() == [31, None, 45]


def test_read_csv_duplicated_header(tmp_path):
    filename = tmp_path / "dup.csv"
    filename.write_text("a,b,a\n1,2,3\n")
    with pytest.raises(ColumnNameError):
        read_csv(str(filename))


def test_read_csv_records_keeps_numeric_text(tmp_path):
    filename = tmp_path / "numbers.csv"
    filename.write_text("code,price\n007,1.50\n2020,NA\n")
    assert read_csv_records(str(filename), block_size=16) == [
        ["code", "price"],
        ["007", "1.50"],
        ["2020", "NA"],
    ]


def test_read_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_csv(str(tmp_path / "missing.csv"))
