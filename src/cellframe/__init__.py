"""cellframe

An in-memory tabular data engine built around typed cells.

A :class:`Frame` is a table made of named :class:`Column` objects,
each column holding :class:`Cell` values of a single :class:`DataType`
(``Bool``, ``Int``, ``Float`` or ``String``) or missing values.

The primary components are:

* The cell model (:mod:`cellframe.cells`), in charge of representing
  values and converting them between types without losing information.
* Columns (:mod:`cellframe.column`), which detect the narrowest
  type able to represent all their values.
* The Frame itself (:mod:`cellframe.frame`), which guarantees that
  columns have unique names and the same number of rows.
* Subsetting and combination (:mod:`cellframe.subsetting`) and
  deduplication (:mod:`cellframe.dedup`) of frames.

>>> from cellframe import Frame
>>> frame = Frame.from_records([["n", "s"], ["1", "a"], ["2", "b"], ["2", "b"]])
>>> frame = frame.parse_columns(["Int", "String"])
>>> frame.duplicated_rows().to_pydict()
{'n': [2], 's': ['b']}
"""

from . import errors
from .cells import NA, Cell, DataType, ParseOptions
from .column import Column
from .datasources import read_csv
from .frame import Frame
from .subsetting import Indices, Names, Range, cbind, rbind

__all__ = (
    "errors",
    "Cell",
    "NA",
    "DataType",
    "ParseOptions",
    "Column",
    "Frame",
    "Range",
    "Indices",
    "Names",
    "rbind",
    "cbind",
    "read_csv",
)
