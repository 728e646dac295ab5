"""Select rows and columns of a Frame and combine frames together.

Selections are described by a subset spec, which can be one of:

* :class:`Range`, a contiguous ``[start, stop)`` range of positions.
* :class:`Indices`, an explicit list of positions.
* :class:`Names`, an explicit list of column names.

Plain Python values are accepted too and converted to the matching spec:
a ``range`` or ``slice`` without step becomes a :class:`Range`,
a list of integers becomes :class:`Indices` and a list
of strings becomes :class:`Names`.

>>> from cellframe import Frame
>>> frame = Frame.new(("a", [1, 2, 3]), ("b", [4, 5, 6]), ("c", [7, 8, 9]))
>>> frame.subset_columns(["c", "a"]).column_names
['c', 'a']
>>> frame.subset_rows(Range(1, 3)).to_pydict()
{'a': [2, 3], 'b': [5, 6], 'c': [8, 9]}

Selecting columns is strict, the same column can't be selected twice.
Selecting rows instead allows to pick the same row multiple times,
which is what allows to build frames that repeat rows.

Frames can also be combined by appending the rows of one
frame to another (:func:`rbind`) or by placing the columns
of two frames side by side (:func:`cbind`).
"""

import dataclasses
import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Sequence, TypeVar

from .errors import ColumnNameError, ColumnTypeError, RangeError, ShapeError

if TYPE_CHECKING:
    from .frame import Frame

__all__ = (
    "Range",
    "Indices",
    "Names",
    "subset_spec",
    "subset_columns",
    "subset_rows",
    "rbind",
    "cbind",
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="Frame")


@dataclasses.dataclass(frozen=True)
class Range:
    """The ``[start, stop)`` positions."""

    start: int
    stop: int


@dataclasses.dataclass(frozen=True)
class Indices:
    """An explicit list of positions."""

    values: Sequence[int]


@dataclasses.dataclass(frozen=True)
class Names:
    """An explicit list of column names."""

    values: Sequence[str]


SubsetSpec = Range | Indices | Names


def subset_spec(selection: Any) -> SubsetSpec:
    """Convert a selection to the subset spec it represents.

    >>> subset_spec(range(0, 2))
    Range(start=0, stop=2)
    >>> subset_spec(["a", "b"])
    Names(values=['a', 'b'])
    """
    match selection:
        case Range() | Indices() | Names():
            return selection
        case range(step=1):
            return Range(selection.start, selection.stop)
        case slice(step=None | 1) if isinstance(selection.stop, int):
            return Range(selection.start or 0, selection.stop)
        case list() | tuple() if selection and all(
            isinstance(v, str) for v in selection
        ):
            return Names(list(selection))
        case list() | tuple() if all(
            isinstance(v, int) and not isinstance(v, bool) for v in selection
        ):
            return Indices(list(selection))
    raise RangeError(f"Unknown subsetting option: {selection!r}")


def subset_columns(frame: F, selection: Any) -> F:
    """Return a new frame with only the selected columns.

    Ranges keep the original order of the columns,
    indices and names return the columns in the order
    they were requested. Fails when the selection is empty,
    out of range or selects the same column twice.
    """
    columns = frame.columns
    match subset_spec(selection):
        case Range(start, stop):
            _check_range(start, stop, len(columns))
            selected = columns[start:stop]
        case Indices(values):
            _check_indices(values, len(columns))
            repeated = _repeated(values)
            if repeated:
                raise RangeError(f"Duplicated column numbers: {repeated}")
            selected = [columns[i] for i in values]
        case Names(values):
            if not values:
                raise RangeError("Empty subset")
            repeated = _repeated(values)
            if repeated:
                raise ColumnNameError(f"Duplicated column names: {repeated}")
            selected = [frame.column(name) for name in values]
    return frame.__class__(selected)


def subset_rows(frame: F, selection: Any) -> F:
    """Return a new frame with only the selected rows.

    The resulting frame has the same columns of the original one.
    Rows can only be selected by :class:`Range` or :class:`Indices`,
    and indices can repeat the same row multiple times.
    """
    match subset_spec(selection):
        case Range(start, stop):
            _check_range(start, stop, frame.num_rows)
            columns = [column.slice(start, stop) for column in frame.columns]
        case Indices(values):
            _check_indices(values, frame.num_rows)
            columns = [column.take(values) for column in frame.columns]
        case Names():
            raise RangeError("Rows can't be selected by name")
    return frame.__class__(columns)


def rbind(left: F, right: "Frame") -> F:
    """Append the rows of ``right`` after the rows of ``left``.

    The two frames must have the same columns with the same types,
    the order of the columns in ``right`` doesn't matter
    as the result always follows the columns order of ``left``.
    """
    if left.num_columns != right.num_columns:
        raise ShapeError(
            f"Different number of columns: {left.num_columns} and {right.num_columns}"
        )
    for name, dtype in right.schema:
        if name not in left:
            raise ColumnNameError(f"Mismatching column names: {name!r}")
        if left.column(name).dtype is not dtype:
            raise ColumnTypeError(
                f"Mismatching column types for {name!r}: "
                f"{left.column(name).dtype.label} and {dtype.label}"
            )

    columns = [column.concat(right.column(column.name)) for column in left.columns]
    logger.debug("Appended %d rows to %d rows", right.num_rows, left.num_rows)
    return left.__class__(columns)


def cbind(left: F, right: "Frame") -> F:
    """Place the columns of ``right`` after the columns of ``left``.

    The two frames must have the same number of rows
    and can't have any column name in common.
    """
    if left.num_rows != right.num_rows:
        raise ShapeError(
            f"Different number of rows: {left.num_rows} and {right.num_rows}"
        )
    conflicts = [name for name in right.column_names if name in left]
    if conflicts:
        raise ColumnNameError(f"Conflicting column names: {conflicts}")

    logger.debug("Appended columns %s", right.column_names)
    return left.__class__([*left.columns, *right.columns])


def _check_range(start: int, stop: int, length: int) -> None:
    if start > stop:
        raise RangeError(f"Bad subset: start {start} greater than stop {stop}")
    if start == stop:
        raise RangeError("Empty subset")
    if start < 0 or stop > length:
        raise RangeError(f"Subset [{start}, {stop}) out of range [0, {length}]")


def _check_indices(indices: Sequence[int], length: int) -> None:
    if not indices:
        raise RangeError("Empty subset")
    for idx in indices:
        if not 0 <= idx < length:
            raise RangeError(f"Subset index {idx} out of range [0, {length})")


def _repeated(values: Sequence[Any]) -> list[Any]:
    """Values that appear more than once, in order of first appearance."""
    return [value for value, count in Counter(values).items() if count > 1]
