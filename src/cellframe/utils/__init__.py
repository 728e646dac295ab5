"""Generic utilities and helpers.

This is a collection of helpers that are not
bound to the data model itself, like formatting
frames for humans to read.
"""

from . import tabulate

__all__ = ("tabulate",)
