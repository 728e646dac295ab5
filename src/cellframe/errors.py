"""Errors raised by cellframe.

Every failure of the engine is reported by raising one of the
exceptions in this module, they all share :class:`FrameError`
as their base so that callers can catch any engine failure at once.

Each error also inherits from the closest Python builtin exception,
so code that only cares about the builtin categories
(like ``except LookupError``) keeps working.

No operation ever swallows an error or replaces the offending
value with a default, when an operation fails the whole
operation fails and no partial result is returned.
"""

from typing import Any


class FrameError(Exception):
    """Base class for all the errors raised by cellframe."""

    pass


class ShapeError(FrameError, ValueError):
    """The dimensions of the involved columns or frames don't match.

    Raised for columns of different length when building a frame,
    different number of rows when binding columns and different
    number of columns when binding rows.
    """

    pass


class ColumnNameError(FrameError, LookupError):
    """A column name is empty, duplicated or unknown."""

    pass


class RangeError(FrameError, IndexError):
    """A subset selection is out of bounds, inverted, empty or repeated."""

    pass


class ColumnTypeError(FrameError, TypeError):
    """Column types are incompatible or a type is not recognized."""

    pass


class ConversionError(FrameError, ValueError):
    """A cell can't be represented in the requested type.

    The error keeps track of the offending value, the target type and,
    when the conversion happened as part of a column operation,
    the name of the column.
    """

    def __init__(self, value: Any, target: Any, column: str | None = None) -> None:
        """
        :param value: The rendered value that could not be converted.
        :param target: The type the value was being converted to.
        :param column: The name of the column the value belongs to, if known.
        """
        self.value = value
        self.target = target
        self.column = column
        super().__init__(self._message())

    def in_column(self, column: str) -> "ConversionError":
        """Return the same error, attributed to the given column."""
        return ConversionError(self.value, self.target, column)

    def _message(self) -> str:
        target = getattr(self.target, "label", self.target)
        if self.column is None:
            return f"Cannot convert {self.value!r} to {target}"
        return f"Cannot convert {self.value!r} to {target} in column {self.column!r}"
