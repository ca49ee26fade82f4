"""Reading avails workbooks into rows of cell values.

XLSX workbooks are read sheet by sheet with openpyxl; TSV and CSV files are
read as a single sheet. Every cell is turned into a string so validators see
exactly what a user would type: dates as YYYY-MM-DD, whole numbers without a
trailing ``.0``, and blank cells as empty strings.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import openpyxl

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".xlsx", ".xlsm", ".tsv", ".csv"}


@dataclass
class SheetData:
    """One sheet of a workbook.

    Attributes:
        name: Sheet name (the file name for TSV/CSV input)
        index: 0-based position of the sheet in the workbook
        headers: Header row cells, in order
        rows: Data rows, each a dict of header -> cell value
    """

    name: str
    index: int
    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)


@dataclass
class Workbook:
    """All sheets read from one input file."""

    source: str
    sheets: list[SheetData] = field(default_factory=list)

    def get_sheet(self, name: str) -> SheetData | None:
        """Get a sheet by name, or None if the workbook has no such sheet."""
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None


def cell_to_string(value: Any) -> str:
    """Render a cell value the way it would be typed into the sheet."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_sheet(name: str, index: int, table: list[list[Any]]) -> SheetData:
    """Turn a raw table (header row first) into a SheetData.

    Cells beyond the header row's width are dropped; short rows are padded
    with empty strings.
    """
    if not table:
        return SheetData(name=name, index=index, headers=[])

    header, *data = table
    headers = [cell_to_string(cell).strip() for cell in header]
    # Trailing blank header cells are formatting, not columns
    while headers and not headers[-1]:
        headers.pop()

    rows = []
    for raw in data:
        cells = [cell_to_string(cell) for cell in raw[: len(headers)]]
        cells.extend([""] * (len(headers) - len(cells)))
        rows.append(dict(zip(headers, cells)))

    return SheetData(name=name, index=index, headers=headers, rows=rows)


def read_workbook(path: Path) -> Workbook:
    """Read every sheet of an XLSX workbook, or a single TSV/CSV sheet.

    Args:
        path: Input file

    Returns:
        Workbook with one SheetData per sheet

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file type is not supported or the file is empty
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported input file type '{suffix}'. Expected one of {sorted(SUPPORTED_SUFFIXES)}")

    if suffix in {".tsv", ".csv"}:
        delimiter = "\t" if suffix == ".tsv" else ","
        with path.open(newline="", encoding="utf-8-sig") as f:
            table: list[list[Any]] = list(csv.reader(f, delimiter=delimiter))
        sheets = [build_sheet(path.name, 0, table)]
    else:
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        try:
            sheets = [
                build_sheet(worksheet.title, index, [list(row) for row in worksheet.iter_rows(values_only=True)])
                for index, worksheet in enumerate(workbook.worksheets)
            ]
        finally:
            workbook.close()

    if not any(sheet.headers for sheet in sheets):
        raise ValueError(f"Input file '{path.name}' is empty")

    logger.info(f"Read {len(sheets)} sheet(s) from {path.name}")
    return Workbook(source=path.name, sheets=sheets)
