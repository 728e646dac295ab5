"""Named, homogeneously typed sequences of cells.

A :class:`Column` holds the cells of one field of a Frame.
All the cells of a column are either missing or of the column type,
so that the type of the column is enough to know how to interpret
any of its values.

Columns can be built in multiple ways:

* From cells with an explicit type, in which case all cells
  must already be of that type (or missing).
* From cells or Python values without a type,
  in which case the column type is unified to the widest
  type of its values and the values are converted to it.
* From text, in which case each string is parsed to the
  narrowest type able to represent it, and then the column
  is unified like in the previous case.

>>> from cellframe.column import Column
>>> Column.from_strings("n", ["1", "2", "3.5"])
Column(name='n', dtype=Float, rows=3)
>>> Column.from_strings("n", ["1", "2", "x"]).rendered()
['1', '2', 'x']

Columns are immutable, all operations return a new column.
"""

from typing import Any, Iterable, Iterator, Sequence

import pyarrow as pa

from .cells import DEFAULT_OPTIONS, NA, Cell, DataType, ParseOptions, common_type
from .errors import ColumnNameError, ColumnTypeError, ConversionError

ARROW_TYPES = {
    DataType.BOOL: pa.bool_(),
    DataType.INT: pa.int64(),
    DataType.FLOAT: pa.float64(),
    DataType.STRING: pa.string(),
}


class Column:
    """A named sequence of cells that share the same type."""

    def __init__(
        self, name: str, cells: Iterable[Cell], dtype: DataType | str
    ) -> None:
        """
        :param name: The name of the column, can't be empty.
        :param cells: The cells of the column.
        :param dtype: The type of the column,
                      every cell must be of this type or missing.
        """
        if not isinstance(name, str) or not name:
            raise ColumnNameError(f"Invalid column name: {name!r}")
        dtype = DataType.parse(dtype)
        cells = tuple(cells)
        for rowidx, cell in enumerate(cells):
            if not isinstance(cell, Cell):
                raise ColumnTypeError(
                    f"Column {name!r} expects cells, got {cell!r} at row {rowidx}"
                )
            if not cell.is_missing and cell.dtype is not dtype:
                raise ColumnTypeError(
                    f"Column {name!r} of type {dtype.label} can't hold {cell!r} at row {rowidx}"
                )

        self._name = name
        self._dtype = dtype
        self._cells = cells
        self._display_width = max(
            [len(name)] + [len(cell.render()) for cell in cells]
        )

    @classmethod
    def from_cells(
        cls, name: str, cells: Iterable[Cell], dtype: DataType | str | None = None
    ) -> "Column":
        """Build a column unifying the type of the given cells.

        When ``dtype`` is not provided, the column type is
        the widest type among the non missing cells.
        A column with only missing cells is a ``String`` column.

        :param name: The name of the column.
        :param cells: The cells, possibly of different types.
        :param dtype: Convert the cells to this type instead of
                      detecting the widest one.
        """
        cells = tuple(cells)
        if dtype is None:
            dtype = common_type(cells) or DataType.STRING
        else:
            dtype = DataType.parse(dtype)

        try:
            cells = [cell.coerce(dtype) for cell in cells]
        except ConversionError as err:
            raise err.in_column(name) from err
        return cls(name, cells, dtype)

    @classmethod
    def from_values(
        cls, name: str, values: Iterable[Any], dtype: DataType | str | None = None
    ) -> "Column":
        """Build a column from Python values, ``None`` being a missing value."""
        return cls.from_cells(name, [Cell.of(v) for v in values], dtype)

    @classmethod
    def from_strings(
        cls,
        name: str,
        texts: Iterable[str | None],
        dtype: DataType | str | None = None,
        options: ParseOptions = DEFAULT_OPTIONS,
    ) -> "Column":
        """Build a column parsing text values.

        Without ``dtype`` each text is parsed to its narrowest type
        and the column gets the widest of them. ``String`` columns
        keep the original text of each value.

        With ``dtype`` each text must be representable in that type.
        ``None`` and the missing tokens of ``options`` are always
        accepted and become missing cells.
        """
        texts = list(texts)
        if dtype is not None:
            dtype = DataType.parse(dtype)
            try:
                cells = [
                    NA if text is None else Cell.parse_as(text, dtype, options)
                    for text in texts
                ]
            except ConversionError as err:
                raise err.in_column(name) from err
            return cls(name, cells, dtype)

        parsed = [NA if text is None else Cell.parse(text, options) for text in texts]
        dtype = common_type(parsed) or DataType.STRING
        if dtype is DataType.STRING:
            # Keep the text as it was provided, "1.50" must not become "1.5"
            cells = [
                NA if cell.is_missing else Cell(DataType.STRING, text)
                for cell, text in zip(parsed, texts)
            ]
        else:
            cells = [cell.coerce(dtype, options) for cell in parsed]
        return cls(name, cells, dtype)

    @classmethod
    def from_arrow(cls, name: str, array: pa.Array | pa.ChunkedArray) -> "Column":
        """Build a column from the values of an Arrow array."""
        if pa.types.is_boolean(array.type):
            dtype = DataType.BOOL
        elif pa.types.is_integer(array.type):
            dtype = DataType.INT
        elif pa.types.is_floating(array.type):
            dtype = DataType.FLOAT
        elif pa.types.is_string(array.type) or pa.types.is_large_string(array.type):
            dtype = DataType.STRING
        elif pa.types.is_null(array.type):
            dtype = DataType.STRING
        else:
            raise ColumnTypeError(
                f"Unsupported arrow type {array.type} for column {name!r}"
            )
        return cls.from_values(name, array.to_pylist(), dtype)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dtype(self) -> DataType:
        return self._dtype

    @property
    def cells(self) -> tuple[Cell, ...]:
        return self._cells

    @property
    def display_width(self) -> int:
        """Width of the widest rendered value, including the column name."""
        return self._display_width

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, rowidx: int) -> Cell:
        return self._cells[rowidx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return (
            self._name == other._name
            and self._dtype is other._dtype
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Column(name={self._name!r}, dtype={self._dtype.label}, rows={len(self)})"

    def take(self, indices: Sequence[int]) -> "Column":
        """New column with the cells at the given rows, in the given order."""
        return self.__class__(self._name, [self._cells[i] for i in indices], self._dtype)

    def slice(self, start: int, stop: int) -> "Column":
        """New column with the cells in the ``[start, stop)`` rows."""
        return self.__class__(self._name, self._cells[start:stop], self._dtype)

    def concat(self, other: "Column") -> "Column":
        """New column with the cells of ``other`` appended after those of this one."""
        if other.dtype is not self._dtype:
            raise ColumnTypeError(
                f"Mismatching column types for {self._name!r}: "
                f"{self._dtype.label} and {other.dtype.label}"
            )
        return self.__class__(self._name, self._cells + other.cells, self._dtype)

    def rename(self, name: str) -> "Column":
        return self.__class__(name, self._cells, self._dtype)

    def cast(
        self, dtype: DataType | str, options: ParseOptions = DEFAULT_OPTIONS
    ) -> "Column":
        """Reinterpret the column as a column of a different type.

        ``String`` columns parse their text as ``dtype``,
        columns of other types convert their cells.
        Raises :class:`ConversionError` naming the column
        and the first value that can't be represented.
        """
        dtype = DataType.parse(dtype)
        if dtype is self._dtype:
            return self
        if self._dtype is DataType.STRING:
            texts = [None if cell.is_missing else cell.value for cell in self._cells]
            return self.from_strings(self._name, texts, dtype, options)

        try:
            cells = [cell.coerce(dtype, options) for cell in self._cells]
        except ConversionError as err:
            raise err.in_column(self._name) from err
        return self.__class__(self._name, cells, dtype)

    def infer(self, options: ParseOptions = DEFAULT_OPTIONS) -> "Column":
        """Detect again the narrowest type of the column from its text."""
        texts = [None if cell.is_missing else cell.render() for cell in self._cells]
        return self.from_strings(self._name, texts, None, options)

    def rendered(self) -> list[str]:
        """The textual representation of each cell."""
        return [cell.render() for cell in self._cells]

    def to_pylist(self) -> list[Any]:
        """The Python values of each cell, ``None`` for missing cells."""
        return [cell.value for cell in self._cells]

    def to_arrow(self) -> pa.Array:
        """The column as an Arrow array, missing cells become nulls."""
        return pa.array(self.to_pylist(), type=ARROW_TYPES[self._dtype])
