"""Load data into Frames from external sources.

Sources are expected to provide their data as rows of text,
the first row being the header, which is the format
accepted by :meth:`cellframe.Frame.from_records`.

Reading files relies on the Arrow CSV reader, which takes care
of quoting, escaping and of verifying that all rows have the
same number of fields. Every field is read as text, so that
the typing of columns is left to the Frame itself.
"""

import logging

import pyarrow as pa
import pyarrow.csv

from .cells import DEFAULT_OPTIONS, ParseOptions
from .frame import Frame

logger = logging.getLogger(__name__)


def read_csv(
    filename: str,
    options: ParseOptions = DEFAULT_OPTIONS,
    block_size: int | None = None,
) -> Frame:
    """Load a CSV file into a Frame of ``String`` columns.

    :param filename: The path of the local CSV file.
    :param options: How to recognize missing values.
    :param block_size: How much data the CSV reader should read at once.
    """
    records = read_csv_records(filename, block_size=block_size)
    logger.debug("Read %d records from %s", len(records), filename)
    return Frame.from_records(records, options)


def read_csv_records(filename: str, block_size: int | None = None) -> list[list[str]]:
    """Read all the rows of a CSV file as text, header included.

    The file is loaded in memory once, the Arrow reader then parses
    that buffer, first to discover the fields and then to convert
    all of them to text.
    """
    # Autogenerated names make the header a row of data,
    # so blank and repeated names are left for the Frame to handle.
    read_options = pa.csv.ReadOptions(
        autogenerate_column_names=True, block_size=block_size
    )
    with pa.input_stream(filename) as source:
        data = source.read_buffer()

    with pa.csv.open_csv(pa.BufferReader(data), read_options=read_options) as reader:
        fields = reader.schema.names

    convert_options = pa.csv.ConvertOptions(
        column_types={name: pa.string() for name in fields},
        strings_can_be_null=False,
        quoted_strings_can_be_null=False,
    )
    table = pa.csv.read_csv(
        pa.BufferReader(data),
        read_options=read_options,
        convert_options=convert_options,
    )
    columns = [column.to_pylist() for column in table.columns]
    logger.debug("Parsed %d fields from %d bytes", table.num_columns, data.size)
    return [list(row) for row in zip(*columns)]
