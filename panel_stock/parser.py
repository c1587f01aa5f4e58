"""
Section Parser
==============
Walks the rows of a stock workbook and emits one :class:`OutputRecord` per
pack row.

A stock sheet is a sequence of loosely formatted *sections*::

    row i     | ...      | redwood   | V      |        <- section header
    row i+1   | PACK     | 100       | 200    |        <- dimensions row
    row i+2   | 50*60    |           |        |        <- width
    row i+3   | 20231005.2 |         | 150    |        <- pack row
    ...

The parser threads a :class:`ParseContext` through the rows.  A header row
replaces the context wholesale; any other row may emit a record and may
update the width from the row below it.  The context is never reset
between sheets, so a sheet without its own header keeps reading under the
last section of the previous sheet.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from .cells import (
    cell_at,
    cell_text,
    find_index,
    find_next_non_empty_cell,
    matches_pack_id,
    matches_width,
    matches_wood,
    normalize_status,
    to_number,
)
from .config import DEFAULT_CONFIG
from .exceptions import MalformedSectionError

logger = logging.getLogger(__name__)

# Export column order
FIELD_NAMES = ("id", "packId", "amount", "status")


@dataclass(frozen=True)
class ParseContext:
    """Section state carried from row to row.

    ``pack_index`` indexes into ``dimensions``; both are always replaced
    together.  ``None`` everywhere means no section header has been seen.
    """
    wood_type: Any = None
    width: Any = None
    status: Any = None
    dimensions: Optional[tuple] = None
    pack_index: Optional[int] = None


@dataclass(frozen=True)
class OutputRecord:
    """One pack of stock."""
    id: str
    pack_id: Optional[float]
    amount: Any
    status: str

    def as_dict(self) -> dict:
        return dict(zip(FIELD_NAMES, (self.id, self.pack_id, self.amount, self.status)))


def _row(rows, index):
    if 0 <= index < len(rows):
        return rows[index]
    return None


# ---------------------------------------------------------------------------
# Section detection
# ---------------------------------------------------------------------------

def find_wood_type(row):
    """Return ``(index, cell)`` of the first wood-type cell, or ``(-1, None)``."""
    for i, cell in enumerate(row):
        if matches_wood(cell):
            return i, cell
    return -1, None


def detect_section(rows, index, config=None):
    """Build a fresh :class:`ParseContext` if ``rows[index]`` is a section header.

    Returns ``None`` for any other row.
    """
    config = config or DEFAULT_CONFIG
    row = rows[index]
    wood_index, wood_type = find_wood_type(row)
    if wood_type is None:
        return None

    dimensions = tuple(_row(rows, index + 1) or ())
    width = cell_at(_row(rows, index + 2), 0)
    status = find_next_non_empty_cell(row, wood_index)
    pack_index = find_index(dimensions, config["pack_marker"])

    if cell_text(wood_type) not in config["wood_types"]:
        logger.warning(f"Unrecognised wood type '{wood_type}' in section header")

    return ParseContext(
        wood_type=wood_type,
        width=width if width else "",
        status=status,
        dimensions=dimensions,
        pack_index=pack_index,
    )


# ---------------------------------------------------------------------------
# Pack rows
# ---------------------------------------------------------------------------

def is_data_row(row, context):
    """True when the cell under the ``PACK`` column holds a pack id."""
    return matches_pack_id(cell_at(row, context.pack_index))


def build_record_id(context, amount_index, config=None):
    """Prefix + width + dimension label + suffix, without ``.`` and ``*``.

    Unknown wood types, a missing width and a missing dimension label each
    contribute an empty string.
    """
    config = config or DEFAULT_CONFIG
    prefix = config["id_prefixes"].get(cell_text(context.wood_type), "")
    label = cell_at(context.dimensions, amount_index)
    raw = f"{prefix}{cell_text(context.width)}{cell_text(label)}{config['id_suffix']}"
    return raw.replace(".", "").replace("*", "")


def get_item_object(row, context, config=None):
    """Build the :class:`OutputRecord` for a pack row.

    The amount is the first non-blank cell right of the pack id.  Its
    column is looked up again by value, so an identical value further left
    in the row wins over the amount's own position.
    """
    amount = find_next_non_empty_cell(row, context.pack_index)
    amount_index = find_index(row, amount)
    return OutputRecord(
        id=build_record_id(context, amount_index, config),
        pack_id=to_number(row[context.pack_index]),
        amount=amount,
        status=normalize_status(context.status),
    )


def update_width(rows, index, context):
    """Take a new width from the first cell of the next row, if it is one."""
    width = cell_at(_row(rows, index + 1), 0)
    if matches_width(width):
        return replace(context, width=width)
    return context


# ---------------------------------------------------------------------------
# Walkers
# ---------------------------------------------------------------------------

def process_row(rows, index, context, config=None, sheet_name=None):
    """Process one row.

    Returns ``(context, record)`` where *record* is ``None`` for rows that
    are not pack rows.  Header rows return the new context and skip the
    width update.
    """
    config = config or DEFAULT_CONFIG
    section = detect_section(rows, index, config)
    if section is not None:
        if section.pack_index == -1 and config["strict_sections"]:
            raise MalformedSectionError(
                f"Section header without a '{config['pack_marker']}' column",
                sheet_name=sheet_name,
                row_number=index + 1,
            )
        logger.debug(f"Section '{section.wood_type}' at row {index + 1}")
        return section, None

    row = rows[index]
    record = None
    if is_data_row(row, context):
        record = get_item_object(row, context, config)

    return update_width(rows, index, context), record


def process_rows(rows, context=None, config=None, sheet_name=None):
    """Scan one sheet's *rows* starting from *context*.

    Returns ``(context, records)`` so the caller can carry the context into
    the next sheet.
    """
    config = config or DEFAULT_CONFIG
    context = context or ParseContext()
    records = []

    for index in range(len(rows)):
        context, record = process_row(rows, index, context, config, sheet_name)
        if record is not None:
            records.append(record)

    return context, records


def process_workbook(sheets, config=None):
    """Extract stock records from every sheet of a workbook.

    Args:
        sheets: list of :class:`panel_stock.reader.SheetGrid`, in workbook
            order.
        config: configuration dict (see :func:`panel_stock.config.load_config`).

    Returns:
        list[OutputRecord] in scan order across all sheets.
    """
    config = config or DEFAULT_CONFIG
    context = ParseContext()
    output = []

    for sheet in sheets:
        context, records = process_rows(sheet.rows, context, config, sheet.name)
        logger.debug(f"Sheet '{sheet.name}': {len(records)} records")
        output.extend(records)

    if config["strict_sections"] and context.wood_type is None:
        raise MalformedSectionError("No section header found in workbook")

    logger.info(f"Extracted {len(output)} records from {len(sheets)} sheets")
    return output
