"""
Workbook Reader
===============
Loads ``.xlsx`` and legacy ``.xls`` workbooks into positional row grids.

Each sheet becomes a list of rows and each row a list of cell values, with
blank cells as ``None``.  The grid starts at the first used row and column
of the sheet and every row is trimmed after its last used cell, so a blank
row is an empty list.  Formula cells contribute their cached values.
"""

import logging
import os
from dataclasses import dataclass, field

import xlrd
from openpyxl import load_workbook

from .exceptions import WorkbookReadError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xls")


@dataclass
class SheetGrid:
    """A worksheet as an ordered list of positional rows."""
    name: str
    rows: list = field(default_factory=list)


def _is_blank(value):
    return value is None or value == ""


def _crop_grid(raw_rows):
    """Crop *raw_rows* to the used range and trim trailing blanks per row."""
    rows = [[None if _is_blank(v) else v for v in row] for row in raw_rows]

    used_rows = [i for i, row in enumerate(rows) if any(v is not None for v in row)]
    if not used_rows:
        return []
    first_col = min(
        next(ci for ci, v in enumerate(row) if v is not None)
        for row in rows if any(v is not None for v in row)
    )

    cropped = []
    for row in rows[used_rows[0]:used_rows[-1] + 1]:
        row = row[first_col:]
        while row and row[-1] is None:
            row.pop()
        cropped.append(row)
    return cropped


def _read_xlsx(path):
    wb = load_workbook(path, data_only=True)
    try:
        sheets = []
        for ws in wb.worksheets:
            raw_rows = [list(r) for r in ws.iter_rows(values_only=True)]
            sheets.append(SheetGrid(name=ws.title, rows=_crop_grid(raw_rows)))
    finally:
        wb.close()
    return sheets


def _xls_cell_value(cell):
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    return cell.value


def _read_xls(path):
    book = xlrd.open_workbook(path, formatting_info=False)
    try:
        sheets = []
        for sh in book.sheets():
            raw_rows = [
                [_xls_cell_value(c) for c in sh.row(r)]
                for r in range(sh.nrows)
            ]
            sheets.append(SheetGrid(name=sh.name, rows=_crop_grid(raw_rows)))
    finally:
        book.release_resources()
    return sheets


def read_workbook(path):
    """Read the workbook at *path* into a list of :class:`SheetGrid`.

    Raises:
        WorkbookReadError: the file is missing, has an unsupported
            extension, or the decoder rejects it.
    """
    if not path or not os.path.isfile(path):
        raise WorkbookReadError(path, "Excel file not found")

    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise WorkbookReadError(path, f"Unsupported Excel extension '{ext}'")

    try:
        sheets = _read_xls(path) if ext == ".xls" else _read_xlsx(path)
    except Exception as exc:
        # openpyxl and xlrd raise unrelated error types for corrupt files
        raise WorkbookReadError(path, f"Failed to read workbook ({exc})") from exc

    logger.info(f"Read {len(sheets)} sheets from {path}")
    for sheet in sheets:
        logger.debug(f"  {sheet.name}: {len(sheet.rows)} rows")
    return sheets
