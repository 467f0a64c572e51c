"""CSV output formatter for listings."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Callable

from fmcontent.entry import Entry


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable returning the cell value for an entry.
    """

    name: str
    extract: Callable[[Entry], str]


def _optional(value: object) -> str:
    return "" if value is None else str(value)


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="type", extract=lambda entry: entry.type),
    CsvColumn(name="path", extract=lambda entry: entry.path),
    CsvColumn(name="basename", extract=lambda entry: entry.basename),
    CsvColumn(name="dirname", extract=lambda entry: _optional(entry.dirname)),
    CsvColumn(name="extension", extract=lambda entry: _optional(entry.extension)),
    CsvColumn(name="size", extract=lambda entry: _optional(entry.meta.get("size"))),
    CsvColumn(name="acl", extract=lambda entry: _optional(entry.acl)),
]


def format_csv(entries: list[Entry], columns: list[CsvColumn] | None = None) -> str:
    """Render entries as CSV text.

    Output always starts with a header row; missing values are empty cells.

    Args:
        entries: Entries to render.
        columns: Column definitions. Defaults to ``DEFAULT_COLUMNS``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    cols = columns or DEFAULT_COLUMNS

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([col.name for col in cols])
    for entry in entries:
        writer.writerow([col.extract(entry) for col in cols])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
