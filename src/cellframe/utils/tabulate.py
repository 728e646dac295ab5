"""Format a Frame into a text table for print.

The `tabulate` function takes a :class:`cellframe.Frame` and formats it into a text table.
Each column is as wide as its widest value, long strings are truncated,
missing values are shown as ``NA`` and the number of rows to display is limited.

Example:

    >>> from cellframe import Frame
    >>> data = {
    ...     "Product": ["Videogame", "Laptop", None],
    ...     "Quantity": [8, 8, 7],
    ... }
    >>> print(tabulate(Frame.from_pydict(data)))
      | Product   | Quantity
    - | --------- | --------
    0 | Videogame | 8
    1 | Laptop    | 8
    2 | NA        | 7
"""

from typing import TYPE_CHECKING

from ..cells import Cell

if TYPE_CHECKING:
    from ..frame import Frame

MAX_VALUE_WIDTH = 30


def tabulate(frame: "Frame", max_rows: int = 20) -> str:
    """Format a Frame into a text table.

    Row indices are right aligned to the width of the largest
    index shown. Will produce a string like::

          | Product   | Quantity
        - | --------- | --------
        0 | Videogame | 8
        1 | Laptop    | 8
    """
    columns = frame.columns
    shown = min(frame.num_rows, max_rows)
    index_width = len(str(max(shown - 1, 0)))
    rows = [
        [str(rowidx).rjust(index_width)]
        + [format_value(column[rowidx]) for column in columns]
        for rowidx in range(shown)
    ]

    colsizes = [index_width] + [
        max(len(column.name), min(column.display_width, MAX_VALUE_WIDTH))
        for column in columns
    ]
    header = [maketablerow([""] + frame.column_names, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(colsizes), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    table = "\n".join(header + separator + textrows)
    if frame.num_rows > max_rows:
        table += f"\n... and {frame.num_rows - max_rows} more rows"
    return table


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    ).rstrip()


def format_value(cell: Cell) -> str:
    """Format a cell to be printed in the table.

    Missing cells are printed as ``NA`` and long values are truncated.
    """
    v = cell.render()
    if len(v) > MAX_VALUE_WIDTH:
        v = v[: MAX_VALUE_WIDTH - 3] + "..."
    return v
