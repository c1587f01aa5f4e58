"""
Upload / preview / export session for one workbook at a time.

``ProcessorSession`` keeps the records of the last successfully processed
file and its name.  User-visible notices go through the ``notify``
callable; diagnostic detail goes to the log.
"""

import logging
import os

from .config import DEFAULT_CONFIG
from .exceptions import PanelStockError
from .exporter import export_to_excel
from .formatters import to_json, to_markdown
from .parser import process_workbook
from .reader import read_workbook

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "Please select a valid Excel file."
FAILED_MESSAGE = "Failed to process the Excel file."


class ProcessorSession:
    """Holds the state behind the upload, preview and export actions."""

    def __init__(self, config=None, notify=print):
        self.config = config or DEFAULT_CONFIG
        self.notify = notify
        self.data = []
        self.file_name = ""

    def upload(self, path):
        """Read and process the workbook at *path*.

        On success the records replace :attr:`data` and the file name is
        recorded.  On failure nothing is committed and a generic notice is
        shown.  Returns True on success.
        """
        if not path:
            self.notify(NO_FILE_MESSAGE)
            return False

        try:
            sheets = read_workbook(path)
            records = process_workbook(sheets, self.config)
        except PanelStockError:
            logger.exception(f"Error reading or processing {path}")
            self.notify(FAILED_MESSAGE)
            return False

        self.data = records
        self.file_name = os.path.basename(path)
        logger.info("File processed successfully!")
        return True

    @property
    def can_export(self):
        return bool(self.file_name) and bool(self.data)

    def export(self, output_path=None):
        """Export the current records; see :func:`export_to_excel`."""
        return export_to_excel(self.data, output_path, self.config, self.notify)

    def render(self, fmt="markdown"):
        """Preview of the current records; empty before any upload."""
        if not self.file_name:
            return ""
        if fmt == "json":
            return to_json(self.data)
        return f"Uploaded: {self.file_name}\n\n" + to_markdown(self.data)
