"""
Export extracted stock records to a single-sheet ``.xlsx`` file.

The export is a terminal format: nothing here reads the file back.
"""

import logging
import os

from openpyxl import Workbook

from .config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data to export!"


def records_to_rows(records):
    """Return ``(headers, rows)`` for *records*.

    Headers come from the first record's field names; each row lists the
    record's values in that order.
    """
    dicts = [r.as_dict() for r in records]
    if not dicts:
        return [], []
    headers = list(dicts[0].keys())
    rows = [[d.get(h) for h in headers] for d in dicts]
    return headers, rows


def export_to_excel(records, output_path=None, config=None, notify=print):
    """Write *records* to *output_path*.

    Args:
        records: list of :class:`panel_stock.parser.OutputRecord`.
        output_path: target file; defaults to ``config["export_file_name"]``
            in the working directory.
        config: configuration dict.
        notify: callable receiving user-visible notices.

    Returns:
        str or None: the path written, or ``None`` when there was nothing
        to export.
    """
    config = config or DEFAULT_CONFIG
    if not records:
        notify(NO_DATA_MESSAGE)
        return None

    output_path = output_path or config["export_file_name"]
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    headers, rows = records_to_rows(records)
    wb = Workbook()
    ws = wb.active
    ws.title = config["export_sheet_name"]
    ws.append(headers)
    for row in rows:
        ws.append(row)

    wb.save(output_path)
    wb.close()

    logger.info(f"Exported {len(rows)} records to {output_path}")
    return output_path
