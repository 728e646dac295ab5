import pytest

from cellframe import Frame
from cellframe.dedup import (
    RowGroup,
    all_duplicate_occurrences,
    deduplicated,
    duplicated_rows,
    row_groups,
    row_signature,
    row_signatures,
    unique_rows,
)
from cellframe.errors import RangeError


@pytest.fixture
def frame():
    return Frame.new(("n", [1, 2, 2, 3]), ("s", ["a", "b", "b", "c"]))


def rows_of(frame):
    return sorted(zip(*frame.to_pydict().values()))


def test_row_signature(frame):
    assert row_signature(frame, 0) == (("Int", "1"), ("String", "a"))
    assert frame.row_signature(3) == (("Int", "3"), ("String", "c"))
    assert list(row_signatures(frame))[1] == row_signature(frame, 2)
    with pytest.raises(RangeError):
        frame.row_signature(4)


@pytest.mark.parametrize("rowidx", [-1, 4, 100])
def test_row_signature_out_of_range(frame, rowidx):
    with pytest.raises(RangeError, match=f"Row {rowidx} out of range"):
        row_signature(frame, rowidx)


def test_signature_distinguishes_missing_from_na_text():
    frame = Frame.new(("s", [None, "NA"]))
    assert frame.row_signature(0) != frame.row_signature(1)
    assert frame.deduplicated().num_rows == 2


def test_signature_includes_column_type():
    left = Frame.new(("v", [1]))
    right = Frame.new(("v", ["1"]))
    assert left.row_signature(0) != right.row_signature(0)


def test_row_groups(frame):
    groups = row_groups(frame)
    assert list(groups.values()) == [
        RowGroup(unique=True, occurrences=[0]),
        RowGroup(unique=False, occurrences=[1, 2]),
        RowGroup(unique=True, occurrences=[3]),
    ]


def test_unique_rows(frame):
    result = unique_rows(frame)
    assert result.column_names == ["n", "s"]
    assert rows_of(result) == [(1, "a"), (3, "c")]


def test_duplicated_rows(frame):
    assert rows_of(duplicated_rows(frame)) == [(2, "b")]


def test_all_duplicate_occurrences(frame):
    assert rows_of(all_duplicate_occurrences(frame)) == [(2, "b"), (2, "b")]


def test_deduplicated(frame):
    result = deduplicated(frame)
    assert result.num_rows == 3
    assert rows_of(result) == [(1, "a"), (2, "b"), (3, "c")]


def test_frame_methods(frame):
    assert frame.unique_rows() == unique_rows(frame)
    assert frame.duplicated_rows() == duplicated_rows(frame)
    assert frame.all_duplicate_occurrences() == all_duplicate_occurrences(frame)
    assert frame.deduplicated() == deduplicated(frame)


def test_views_without_matches_are_empty():
    frame = Frame.new(("n", [1, 2, 3]))
    assert duplicated_rows(frame).dim() == (0, 1)
    assert all_duplicate_occurrences(frame).schema == frame.schema
    assert deduplicated(frame) == frame

    repeated = Frame.new(("n", [5, 5]))
    assert unique_rows(repeated).num_rows == 0


def test_empty_frame():
    frame = Frame.from_records([["a", "b"]])
    for view in (unique_rows, duplicated_rows, all_duplicate_occurrences, deduplicated):
        assert view(frame).dim() == (0, 2)


def test_missing_values_are_grouped():
    frame = Frame.new(("n", [None, 1, None]), ("s", ["x", "x", "x"]))
    assert rows_of(duplicated_rows(frame)) == [(None, "x")]
    assert deduplicated(frame).num_rows == 2


def test_view_counts_partition_rows():
    frame = Frame.new(
        ("n", [1, 2, 1, 3, 2, 1, 4]),
        ("s", ["a", "b", "a", "c", "b", "a", "d"]),
    )
    unique = unique_rows(frame).num_rows
    duplicated = duplicated_rows(frame).num_rows
    occurrences = all_duplicate_occurrences(frame).num_rows
    dedup = deduplicated(frame)

    assert unique == 2
    assert duplicated == 2
    assert occurrences == 5
    assert unique + duplicated + (occurrences - duplicated) == frame.num_rows
    assert dedup.num_rows + (occurrences - duplicated) == frame.num_rows

    signatures = list(row_signatures(dedup))
    assert len(set(signatures)) == len(signatures)
    assert set(signatures) <= set(row_signatures(frame))
