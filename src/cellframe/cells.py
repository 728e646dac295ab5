"""Typed cells, the atomic values stored in a Frame.

A :class:`Cell` is either missing or holds one scalar value
of one of the supported :class:`DataType`, and that type
never changes once the cell was created.

Moving a value from a type to another is done by projections
like :meth:`Cell.to_integer` or :meth:`Cell.to_float`, which
never modify the cell, they return the converted Python value
or raise a :class:`ConversionError` when the value can't
be represented in the new type without losing information.

>>> from cellframe.cells import Cell, DataType
>>> cell = Cell.parse("3.0")
>>> cell
Cell(Float, 3.0)
>>> cell.to_integer()
3
>>> Cell.parse("3.5").to_integer(truncate=True)
3
>>> cell.coerce(DataType.STRING)
Cell(String, '3.0')
>>> Cell.parse("NA").render()
'NA'

Text is parsed trying, in order, missing tokens,
integers, floats and booleans. Anything else is
kept as a string. Columns then unify the parsed cells
to the widest type among them, see :func:`common_type`.
"""

import dataclasses
import enum
import math
import re
from typing import Any, Iterable

from .errors import ColumnTypeError, ConversionError

__all__ = (
    "DataType",
    "ParseOptions",
    "Cell",
    "NA",
    "common_type",
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def _lex_integer(text: str) -> int | None:
    """The integer written in text, if it fits 64 bits."""
    if not _INTEGER.fullmatch(text):
        return None
    # Longer than any 64 bit integer, don't even try to convert it.
    if len(text.lstrip("+-").lstrip("0")) > 19:
        return None
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def _lex_float(text: str) -> float | None:
    """The finite float written in text, if any."""
    if not _FLOAT.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


class DataType(enum.IntEnum):
    """The types a non missing cell can have.

    Types are ordered from the narrowest to the widest,
    any value of a type can be represented in all the wider ones::

        BOOL < INT < FLOAT < STRING

    ``INT`` values are 64 bit integers, text representing an
    integer out of that range is parsed as a float or a string.
    """

    BOOL = 1
    INT = 2
    FLOAT = 3
    STRING = 4

    @property
    def label(self) -> str:
        """The name of the type as used in type declarations, like ``Int``."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, token: "str | DataType") -> "DataType":
        """Get the type for a type declaration token.

        Tokens are ``Bool``, ``Int``, ``Float`` and ``String``,
        they are matched case insensitively.

        >>> DataType.parse("int")
        <DataType.INT: 2>
        """
        if isinstance(token, DataType):
            return token
        if isinstance(token, str):
            try:
                return cls[token.strip().upper()]
            except KeyError:
                pass
        raise ColumnTypeError(f"Unknown type: {token!r}")


@dataclasses.dataclass(frozen=True)
class ParseOptions:
    """Options that drive how text is parsed into cells.

    :param null_values: Strings that denote a missing value.
    :param true_values: Strings that denote a true boolean.
    :param false_values: Strings that denote a false boolean.
    """

    null_values: tuple[str, ...] = ("", "NA")
    true_values: tuple[str, ...] = ("true", "True", "TRUE", "t", "T")
    false_values: tuple[str, ...] = ("false", "False", "FALSE", "f", "F")


DEFAULT_OPTIONS = ParseOptions()


@dataclasses.dataclass(frozen=True)
class Cell:
    """A single value of a column, typed or missing.

    A missing cell has no type and no value,
    use the :data:`NA` constant to refer to it.

    Cells are usually built with :meth:`Cell.of`
    from Python values or with :meth:`Cell.parse` from text.
    """

    dtype: DataType | None
    value: Any = None

    def __post_init__(self) -> None:
        expected = _PYTHON_TYPES.get(self.dtype)
        if self.dtype is None:
            if self.value is not None:
                raise ColumnTypeError(f"A missing cell can't hold {self.value!r}")
        elif type(self.value) is not expected:
            raise ColumnTypeError(
                f"A {self.dtype.label} cell can't hold {self.value!r}"
            )
        elif self.dtype is DataType.INT and not INT_MIN <= self.value <= INT_MAX:
            raise ColumnTypeError(f"Integer {self.value} out of the 64 bit range")

    @classmethod
    def of(cls, value: Any) -> "Cell":
        """Build a cell for a Python value.

        ``None`` is a missing value, booleans, integers,
        floats and strings get the matching type.
        """
        if isinstance(value, Cell):
            return value
        if value is None:
            return NA
        for dtype, pytype in _PYTHON_TYPES.items():
            if type(value) is pytype:
                return cls(dtype, value)
        raise ColumnTypeError(f"Unsupported value {value!r} of type {type(value)}")

    @classmethod
    def parse(cls, text: str, options: ParseOptions = DEFAULT_OPTIONS) -> "Cell":
        """Build the narrowest cell able to represent the given text.

        >>> Cell.parse("12"), Cell.parse("1e3"), Cell.parse("true"), Cell.parse("x")
        (Cell(Int, 12), Cell(Float, 1000.0), Cell(Bool, True), Cell(String, 'x'))
        """
        if text in options.null_values:
            return NA
        integer = _lex_integer(text)
        if integer is not None:
            return cls(DataType.INT, integer)
        number = _lex_float(text)
        if number is not None:
            return cls(DataType.FLOAT, number)
        if text in options.true_values:
            return cls(DataType.BOOL, True)
        if text in options.false_values:
            return cls(DataType.BOOL, False)
        return cls(DataType.STRING, text)

    @classmethod
    def parse_as(
        cls, text: str, dtype: DataType, options: ParseOptions = DEFAULT_OPTIONS
    ) -> "Cell":
        """Parse text into a cell of the given type.

        Missing tokens are always accepted and give a missing cell,
        for other text the value must be representable in ``dtype``.

        >>> Cell.parse_as("7", DataType.FLOAT)
        Cell(Float, 7.0)
        """
        if text in options.null_values:
            return NA
        if dtype is DataType.STRING:
            return cls(DataType.STRING, text)
        try:
            return cls.parse(text, options).coerce(dtype, options)
        except ConversionError as err:
            raise ConversionError(text, dtype) from err

    @property
    def is_missing(self) -> bool:
        return self.dtype is None

    def to_integer(self, truncate: bool = False) -> int:
        """Project the cell to an integer.

        Booleans become ``0`` or ``1``, strings must be
        written as integers. Floats are accepted only when
        they have no fractional part, unless ``truncate``
        is requested, in which case they are truncated toward zero.
        """
        match self.dtype:
            case DataType.INT:
                return self.value
            case DataType.BOOL:
                return int(self.value)
            case DataType.FLOAT:
                if math.isfinite(self.value) and (truncate or self.value.is_integer()):
                    integer = int(self.value)
                    if INT_MIN <= integer <= INT_MAX:
                        return integer
            case DataType.STRING:
                integer = _lex_integer(self.value)
                if integer is not None:
                    return integer
        raise ConversionError(self.render(), DataType.INT)

    def to_float(self) -> float:
        """Project the cell to a float."""
        match self.dtype:
            case DataType.FLOAT:
                return self.value
            case DataType.INT | DataType.BOOL:
                return float(self.value)
            case DataType.STRING:
                number = _lex_float(self.value)
                if number is not None:
                    return number
        raise ConversionError(self.render(), DataType.FLOAT)

    def to_bool(self, options: ParseOptions = DEFAULT_OPTIONS) -> bool:
        """Project the cell to a boolean.

        Only ``0`` and ``1`` numbers and the recognized
        boolean tokens can become a boolean.
        """
        match self.dtype:
            case DataType.BOOL:
                return self.value
            case DataType.INT | DataType.FLOAT:
                if self.value in (0, 1):
                    return bool(self.value)
            case DataType.STRING:
                if self.value in options.true_values:
                    return True
                if self.value in options.false_values:
                    return False
        raise ConversionError(self.render(), DataType.BOOL)

    def coerce(
        self, dtype: DataType, options: ParseOptions = DEFAULT_OPTIONS
    ) -> "Cell":
        """Get a cell with the same value represented as ``dtype``.

        Missing cells stay missing whatever the requested type.
        """
        if self.is_missing or self.dtype is dtype:
            return self
        match dtype:
            case DataType.BOOL:
                return Cell(DataType.BOOL, self.to_bool(options))
            case DataType.INT:
                return Cell(DataType.INT, self.to_integer())
            case DataType.FLOAT:
                return Cell(DataType.FLOAT, self.to_float())
            case DataType.STRING:
                return Cell(DataType.STRING, self.render())
        raise ColumnTypeError(f"Unknown type: {dtype!r}")

    def render(self) -> str:
        """Textual representation of the value, ``NA`` when missing."""
        match self.dtype:
            case None:
                return "NA"
            case DataType.BOOL:
                return "true" if self.value else "false"
            case DataType.FLOAT:
                return repr(self.value)
        return str(self.value)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        if self.is_missing:
            return "NA"
        return f"Cell({self.dtype.label}, {self.value!r})"


_PYTHON_TYPES = {
    DataType.BOOL: bool,
    DataType.INT: int,
    DataType.FLOAT: float,
    DataType.STRING: str,
}

NA = Cell(None)


def common_type(cells: Iterable[Cell]) -> DataType | None:
    """The narrowest type that can represent all the given cells.

    Missing cells are ignored, ``None`` is returned
    when there is no typed cell at all.

    >>> common_type([Cell.of(1), NA, Cell.of(2.5)])
    <DataType.FLOAT: 3>
    """
    return max((cell.dtype for cell in cells if not cell.is_missing), default=None)
