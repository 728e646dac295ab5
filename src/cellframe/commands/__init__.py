"""Shell commands exposing cellframe functionalities.

Show
====

``cellframe-show`` loads a CSV file and prints it as a table::

    cellframe-show -t age=Int -t score=Float people.csv

Columns are loaded as text, unless their type is declared with ``-t``
or ``--infer`` is provided to detect the narrowest type of every column.

Repeated rows can be inspected with ``--view``::

    cellframe-show --infer --view duplicates people.csv

"""
