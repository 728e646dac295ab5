"""Identify repeated rows in a Frame.

Two rows are considered equal when all their cells render
to the same text and the columns have the same type.
This is captured by the row signature, a key computed
for each row that combines, for every column, the column type
and the rendered value of the cell::

    n: Int     s: String      signature
    1          a              (("Int", "1"), ("String", "a"))
    2          b              (("Int", "2"), ("String", "b"))
    2          b              (("Int", "2"), ("String", "b"))
    3          c              (("Int", "3"), ("String", "c"))

Missing cells contribute ``None`` in place of the rendered value,
so that they are never confused with a string that reads ``NA``.

Rows are then grouped by signature, scanning them in order,
each group tracks if the row was seen once and the positions
of all its occurrences::

    (("Int", "1"), ("String", "a")) -> unique, [0]
    (("Int", "2"), ("String", "b")) -> not unique, [1, 2]
    (("Int", "3"), ("String", "c")) -> unique, [3]

From the groups four different views can be extracted:

* :func:`unique_rows`, the rows that appear only once: ``0, 3``
* :func:`duplicated_rows`, the first occurrence of repeated rows: ``1``
* :func:`all_duplicate_occurrences`, all occurrences of repeated rows: ``1, 2``
* :func:`deduplicated`, one occurrence of every row: ``0, 1, 3``

No particular order of the resulting rows is guaranteed by contract,
currently they come out in the order their group was first seen.
"""

import dataclasses
import logging
from typing import TYPE_CHECKING, Iterator, TypeVar

from .cells import Cell, DataType
from .errors import RangeError
from .subsetting import Indices, subset_rows

if TYPE_CHECKING:
    from .frame import Frame

__all__ = (
    "RowGroup",
    "row_signature",
    "row_signatures",
    "row_groups",
    "unique_rows",
    "duplicated_rows",
    "all_duplicate_occurrences",
    "deduplicated",
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="Frame")

Signature = tuple[tuple[str, str | None], ...]


@dataclasses.dataclass
class RowGroup:
    """All the occurrences of rows sharing the same signature."""

    unique: bool
    occurrences: list[int]


def _signature_part(dtype: DataType, cell: Cell) -> tuple[str, str | None]:
    return (dtype.label, None if cell.is_missing else cell.render())


def row_signature(frame: "Frame", rowidx: int) -> Signature:
    """The signature of a single row of the frame."""
    if not 0 <= rowidx < frame.num_rows:
        raise RangeError(f"Row {rowidx} out of range")
    return tuple(
        _signature_part(column.dtype, column[rowidx]) for column in frame.columns
    )


def row_signatures(frame: "Frame") -> Iterator[Signature]:
    """The signatures of all rows of the frame, in order."""
    parts = [
        [_signature_part(column.dtype, cell) for cell in column]
        for column in frame.columns
    ]
    return zip(*parts)


def row_groups(frame: "Frame") -> dict[Signature, RowGroup]:
    """Group the rows of the frame by their signature."""
    groups: dict[Signature, RowGroup] = {}
    for rowidx, signature in enumerate(row_signatures(frame)):
        group = groups.get(signature)
        if group is None:
            groups[signature] = RowGroup(unique=True, occurrences=[rowidx])
        else:
            group.unique = False
            group.occurrences.append(rowidx)
    logger.debug("Found %d distinct rows out of %d", len(groups), frame.num_rows)
    return groups


def unique_rows(frame: F) -> F:
    """Rows whose content appears only once in the frame."""
    groups = row_groups(frame).values()
    return _take(frame, [g.occurrences[0] for g in groups if g.unique])


def duplicated_rows(frame: F) -> F:
    """The first occurrence of each row that appears more than once."""
    groups = row_groups(frame).values()
    return _take(frame, [g.occurrences[0] for g in groups if not g.unique])


def all_duplicate_occurrences(frame: F) -> F:
    """All the occurrences of each row that appears more than once."""
    groups = row_groups(frame).values()
    return _take(frame, [idx for g in groups if not g.unique for idx in g.occurrences])


def deduplicated(frame: F) -> F:
    """The first occurrence of every distinct row."""
    groups = row_groups(frame).values()
    return _take(frame, [g.occurrences[0] for g in groups])


def _take(frame: F, indices: list[int]) -> F:
    # Selecting rows requires at least one index,
    # an empty view is a frame with the same columns and no rows.
    if not indices:
        return frame.empty_like(frame)
    return subset_rows(frame, Indices(indices))
