"""The Frame object itself."""

import logging
from collections import Counter
from typing import Any, Iterable, Iterator, Mapping, Self, Sequence

import pyarrow as pa

from . import dedup, subsetting
from .cells import DEFAULT_OPTIONS, Cell, DataType, ParseOptions
from .column import Column
from .errors import ColumnNameError, ColumnTypeError, RangeError, ShapeError
from .utils import tabulate

logger = logging.getLogger(__name__)


class Frame:
    """Data structure that handles data in rows and columns.

    A Frame is an ordered collection of uniquely named
    :class:`cellframe.column.Column` objects that all have
    the same number of rows.

    Frames are immutable, every transformation returns a new Frame.
    The only exception is :meth:`load_records` which replaces
    the whole content of the frame at once.

    >>> frame = Frame.new(("n", [1, 2, 2, 3]), ("s", ["a", "b", "b", "c"]))
    >>> frame.dim()
    (4, 2)
    >>> frame.dtypes
    [<DataType.INT: 2>, <DataType.STRING: 4>]
    >>> frame.deduplicated().num_rows
    3
    """

    def __init__(self, columns: Iterable[Column]) -> None:
        """
        :param columns: The columns of the frame, in order.
                        There must be at least one column, all
                        columns must have the same length
                        and their names must be unique.
        """
        self._set_columns(self._validate(tuple(columns)))

    @staticmethod
    def _validate(columns: tuple[Column, ...]) -> tuple[Column, ...]:
        if not columns:
            raise ShapeError("Can't create an empty Frame")
        for column in columns:
            if not isinstance(column, Column):
                raise ColumnTypeError(f"Expected a Column, got {column!r}")

        duplicates = [
            name
            for name, count in Counter(c.name for c in columns).items()
            if count > 1
        ]
        if duplicates:
            raise ColumnNameError(f"Duplicated column names: {duplicates}")

        num_rows = len(columns[0])
        for column in columns[1:]:
            if len(column) != num_rows:
                raise ShapeError(
                    f"Columns don't have the same length: {columns[0].name!r} "
                    f"has {num_rows} rows, {column.name!r} has {len(column)}"
                )
        return columns

    def _set_columns(self, columns: tuple[Column, ...]) -> None:
        self._columns = columns
        self._index = {column.name: idx for idx, column in enumerate(columns)}
        self._num_rows = len(columns[0])

    @classmethod
    def new(cls, *groups: tuple[str, Iterable[Any]]) -> Self:
        """Create a Frame from ``(name, values)`` pairs.

        Values can be Python values or :class:`cellframe.cells.Cell`,
        the type of each column is unified from its values.
        """
        return cls([Column.from_values(name, values) for name, values in groups])

    @classmethod
    def from_pydict(cls, data: Mapping[str, Iterable[Any]]) -> Self:
        """Create a Frame from a ``{name: values}`` dictionary."""
        return cls.new(*data.items())

    @classmethod
    def from_records(
        cls, records: Sequence[Sequence[str]], options: ParseOptions = DEFAULT_OPTIONS
    ) -> Self:
        """Create a Frame from rows of text, the first row being the header.

        All columns are loaded as ``String`` columns, use
        :meth:`parse_columns` or :meth:`infer_types` to
        give them a more specific type.

        Blank names in the header get a unique ``V0``, ``V1``, ...
        placeholder, while repeated names are an error.

        >>> frame = Frame.from_records([["id", ""], ["1", "a"], ["2", "NA"]])
        >>> frame.column_names
        ['id', 'V0']
        >>> frame.column("V0").to_pylist()
        ['a', None]
        """
        if not records:
            raise ShapeError("Can't load records without a header")
        colnames = _fill_colnames(records[0])

        rows = records[1:]
        for rowidx, row in enumerate(rows, start=1):
            if len(row) != len(colnames):
                raise ShapeError(
                    f"Record {rowidx} has {len(row)} fields, expected {len(colnames)}"
                )

        columns = [
            Column.from_strings(
                name, [row[colidx] for row in rows], DataType.STRING, options
            )
            for colidx, name in enumerate(colnames)
        ]
        logger.debug("Loaded %d records into columns %s", len(rows), colnames)
        return cls(columns)

    @classmethod
    def from_arrow(cls, table: pa.Table | pa.RecordBatch) -> Self:
        """Create a Frame from the columns of an Arrow table or record batch."""
        return cls(
            [
                Column.from_arrow(name, table.column(idx))
                for idx, name in enumerate(table.column_names)
            ]
        )

    @classmethod
    def empty_like(cls, frame: "Frame") -> Self:
        """A Frame with the same columns and types of ``frame`` but no rows."""
        return cls([Column(column.name, (), column.dtype) for column in frame.columns])

    def load_records(
        self,
        records: Sequence[Sequence[str]],
        types: Sequence[DataType | str] | Mapping[str, DataType | str] | None = None,
        options: ParseOptions = DEFAULT_OPTIONS,
    ) -> None:
        """Replace the content of the frame with the given records.

        Records are loaded like :meth:`from_records` and then,
        if ``types`` are provided, parsed like :meth:`parse_columns`.

        The frame is only modified when loading succeeds,
        in case of errors the frame keeps its previous content.
        """
        loaded = self.from_records(records, options)
        if types is not None:
            loaded = loaded.parse_columns(types, options)
        self._set_columns(loaded._columns)

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    @property
    def shape(self) -> tuple[int, int]:
        return (self._num_rows, len(self._columns))

    def dim(self) -> tuple[int, int]:
        """The ``(rows, columns)`` dimensions of the frame."""
        return self.shape

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    @property
    def dtypes(self) -> list[DataType]:
        return [column.dtype for column in self._columns]

    @property
    def schema(self) -> list[tuple[str, DataType]]:
        return [(column.name, column.dtype) for column in self._columns]

    def column_index(self, name: str) -> int:
        """Position of the column with the given name.

        Raises :class:`ColumnNameError` if there is no such column.
        """
        try:
            return self._index[name]
        except KeyError:
            raise ColumnNameError(f"Can't find column {name!r}") from None

    def column(self, key: str | int) -> Column:
        """Get a column by name or by position."""
        if isinstance(key, str):
            return self._columns[self.column_index(key)]
        if not 0 <= key < len(self._columns):
            raise RangeError(f"Column {key} out of range")
        return self._columns[key]

    def row(self, rowidx: int) -> tuple[Cell, ...]:
        """The cells of the given row, one for each column."""
        if not 0 <= rowidx < self._num_rows:
            raise RangeError(f"Row {rowidx} out of range")
        return tuple(column[rowidx] for column in self._columns)

    def rows(self) -> Iterator[tuple[Cell, ...]]:
        """Iterate over the rows of the frame."""
        return zip(*self._columns)

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return self._num_rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return self._columns == other._columns

    def __str__(self) -> str:
        return tabulate.tabulate(self)

    def __repr__(self) -> str:
        return f"Frame(columns={self.column_names}, rows={self._num_rows})"

    def parse_columns(
        self,
        types: Sequence[DataType | str] | Mapping[str, DataType | str],
        options: ParseOptions = DEFAULT_OPTIONS,
    ) -> Self:
        """Return a new Frame where columns are converted to the given types.

        ``types`` can be a list with one type for each column
        or a ``{name: type}`` mapping. Columns that don't appear
        in the mapping keep their current type.

        Missing values are accepted by any type, any other value
        must be representable in the target type or
        a :class:`cellframe.errors.ConversionError` is raised.

        >>> frame = Frame.from_records([["age"], ["31"], ["NA"]])
        >>> frame.parse_columns({"age": "Int"}).column("age").to_pylist()
        [31, None]
        """
        if isinstance(types, Mapping):
            targets = {
                self.column_index(name): DataType.parse(dtype)
                for name, dtype in types.items()
            }
        elif isinstance(types, str):
            raise ColumnTypeError(f"Expected a list or mapping of types, got {types!r}")
        else:
            types = list(types)
            if len(types) != len(self._columns):
                raise ShapeError(
                    f"Got {len(types)} types for {len(self._columns)} columns"
                )
            targets = {
                colidx: DataType.parse(dtype) for colidx, dtype in enumerate(types)
            }

        columns = list(self._columns)
        for colidx, dtype in targets.items():
            columns[colidx] = columns[colidx].cast(dtype, options)
        logger.debug(
            "Parsed columns %s", {columns[i].name: t.label for i, t in targets.items()}
        )
        return self.__class__(columns)

    def infer_types(
        self, names: Iterable[str] | None = None, options: ParseOptions = DEFAULT_OPTIONS
    ) -> Self:
        """Return a new Frame where columns get the narrowest type for their values.

        :param names: The columns to retype, all of them when omitted.
        """
        if names is None:
            positions = range(len(self._columns))
        else:
            positions = [self.column_index(name) for name in names]

        columns = list(self._columns)
        for colidx in positions:
            columns[colidx] = columns[colidx].infer(options)
        return self.__class__(columns)

    def subset_columns(self, selection: Any) -> Self:
        """Return a new Frame with only the selected columns.

        See :func:`cellframe.subsetting.subset_columns`.
        """
        return subsetting.subset_columns(self, selection)

    def subset_rows(self, selection: Any) -> Self:
        """Return a new Frame with only the selected rows.

        See :func:`cellframe.subsetting.subset_rows`.
        """
        return subsetting.subset_rows(self, selection)

    def subset(self, columns: Any, rows: Any) -> Self:
        """Select columns and then rows of the frame."""
        return self.subset_columns(columns).subset_rows(rows)

    def rbind(self, other: "Frame") -> Self:
        """Return a new Frame with the rows of ``other`` appended."""
        return subsetting.rbind(self, other)

    def cbind(self, other: "Frame") -> Self:
        """Return a new Frame with the columns of ``other`` appended."""
        return subsetting.cbind(self, other)

    def row_signature(self, rowidx: int) -> dedup.Signature:
        """Key identifying the content of a row, see :mod:`cellframe.dedup`."""
        return dedup.row_signature(self, rowidx)

    def unique_rows(self) -> Self:
        """Rows that appear exactly once in the frame."""
        return dedup.unique_rows(self)

    def duplicated_rows(self) -> Self:
        """First occurrence of each row that appears more than once."""
        return dedup.duplicated_rows(self)

    def all_duplicate_occurrences(self) -> Self:
        """Every occurrence of each row that appears more than once."""
        return dedup.all_duplicate_occurrences(self)

    def deduplicated(self) -> Self:
        """One occurrence of every distinct row."""
        return dedup.deduplicated(self)

    def to_pydict(self) -> dict[str, list[Any]]:
        return {column.name: column.to_pylist() for column in self._columns}

    def to_records(self) -> list[list[str]]:
        """The frame as rows of text, the first row being the header."""
        records = [self.column_names]
        records.extend([cell.render() for cell in row] for row in self.rows())
        return records

    def to_arrow(self) -> pa.Table:
        """The frame as a :class:`pyarrow.Table`."""
        return pa.table({column.name: column.to_arrow() for column in self._columns})


def _fill_colnames(header: Sequence[str]) -> list[str]:
    """Replace blank names with unique ``V<n>`` placeholders.

    Placeholders skip any name already used in the header.
    """
    seen = set()
    for name in header:
        if name:
            if name in seen:
                raise ColumnNameError(f"Duplicated column names: {name}")
            seen.add(name)

    colnames = []
    counter = 0
    for name in header:
        if not name:
            while f"V{counter}" in seen:
                counter += 1
            name = f"V{counter}"
            seen.add(name)
        colnames.append(name)
    return colnames
