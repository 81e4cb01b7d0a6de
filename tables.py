"""Tabular rendering of listing records for the console, CSV and spreadsheets."""
import csv
import io
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from models import ListingRecord

# Column order and labels for every output.
HEADERS = [
    "Car Name",
    "Price",
    "NCT",
    "Location",
    "Key Features",
    "Transmission",
    "Tax",
    "Mileage",
    "Fuel Type",
    "URL",
]

LINE_TERMINATOR = "\n"


@dataclass
class RenderedTable:
    """The three renderings of one batch of records."""
    console_table: str
    delimited_rows: list[list[str]]
    structured_rows: list[dict[str, str]]


def to_dataframe(structured_rows: Sequence[dict[str, str]]) -> pd.DataFrame:
    """DataFrame with exactly the HEADERS columns, in order."""
    return pd.DataFrame(list(structured_rows), columns=HEADERS)


def to_csv_text(delimited_rows: Sequence[Sequence[str]]) -> str:
    """Serialize rows as comma-separated text.

    A cell is quoted, with inner quotes doubled, only when it contains a
    comma or a double quote. Rows are joined by newlines, with no trailing
    newline after the last row.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=LINE_TERMINATOR)
    writer.writerows(delimited_rows)
    text = buffer.getvalue()
    if text.endswith(LINE_TERMINATOR):
        text = text[:-len(LINE_TERMINATOR)]
    return text


def render(records: Sequence[ListingRecord]) -> RenderedTable:
    """Render records as a console table, CSV rows and header-keyed rows.

    Args:
        records: Records in the order they should appear

    Returns:
        RenderedTable; ``delimited_rows`` starts with the header row
    """
    rows = [record.as_row() for record in records]
    structured_rows = [dict(zip(HEADERS, row)) for row in rows]
    if structured_rows:
        console_table = to_dataframe(structured_rows).to_string(index=False, justify="left")
    else:
        console_table = "  ".join(HEADERS)
    return RenderedTable(
        console_table=console_table,
        delimited_rows=[list(HEADERS)] + rows,
        structured_rows=structured_rows,
    )
