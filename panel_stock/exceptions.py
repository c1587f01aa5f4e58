"""
Exceptions raised while reading and parsing stock workbooks.

    PanelStockError (base)
    ├── WorkbookReadError       file missing, unreadable or unsupported
    └── MalformedSectionError   strict mode only
"""


class PanelStockError(Exception):
    """Base class for all panel_stock errors."""


class WorkbookReadError(PanelStockError):
    """The workbook file could not be read or decoded."""

    def __init__(self, path, message):
        super().__init__(f"{message}: {path}")
        self.path = path


class MalformedSectionError(PanelStockError):
    """A section block does not have the expected layout.

    Only raised when ``strict_sections`` is enabled; the default policy is
    to skip rows that do not fit.
    """

    def __init__(self, message, sheet_name=None, row_number=None):
        location = ""
        if sheet_name is not None:
            location = f" (sheet '{sheet_name}'"
            if row_number is not None:
                location += f", row {row_number}"
            location += ")"
        super().__init__(message + location)
        self.sheet_name = sheet_name
        self.row_number = row_number
