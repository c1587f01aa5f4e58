"""
Cell and row helpers shared by the section parser.

Rows are plain lists as produced by :mod:`panel_stock.reader`: blank cells
are ``None`` and "not found" is signalled by falsy values throughout.
"""

import re

# Section header cells look like "redwood", "whitewood", "Redwood S/F", ...
WOOD_PATTERN = re.compile(r"(.+)wood")
# Pack ids are date-like numbers with a one-digit suffix: 20231005.2
PACK_ID_PATTERN = re.compile(r"[0-9]{8}\.[0-9]")
# Width tokens: 100*200
WIDTH_PATTERN = re.compile(r"[0-9]+\*[0-9]+")


def cell_text(value):
    """Render a cell value as text the way it reads in the sheet.

    Whole floats drop their ``.0`` so ``100.0`` renders as ``"100"``.
    ``None`` renders as an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def same_cell(a, b):
    """Strict, type-aware cell equality (``"1"`` is not ``1``, ``True`` is not ``1``)."""
    if a is None or b is None:
        return False
    a_num = isinstance(a, (int, float)) and not isinstance(a, bool)
    b_num = isinstance(b, (int, float)) and not isinstance(b, bool)
    if a_num or b_num:
        return a_num and b_num and a == b
    return type(a) is type(b) and a == b


def cell_at(row, index):
    """Return ``row[index]`` or ``None`` for unset, negative or out-of-range indices."""
    if row is None or index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def find_index(row, target):
    """Index of the first cell strictly equal to *target*, or ``-1``."""
    for i, cell in enumerate(row):
        if same_cell(cell, target):
            return i
    return -1


def find_next_non_empty_cell(row, index):
    """Return the first truthy cell after *index*, or ``None``."""
    for cell in row[index + 1:]:
        if cell:
            return cell
    return None


def normalize_status(status):
    """Map a raw section status label to its short code.

    First match wins: ``S/F`` -> ``SF``, ``IV`` -> ``IV``, exactly ``V`` ->
    ``V``; anything else passes through unchanged.
    """
    text = cell_text(status)
    if "S/F" in text:
        return "SF"
    if "IV" in text:
        return "IV"
    if text == "V":
        return "V"
    return text


def matches_wood(cell):
    return cell is not None and WOOD_PATTERN.search(cell_text(cell)) is not None


def matches_pack_id(cell):
    return bool(cell) and PACK_ID_PATTERN.search(cell_text(cell)) is not None


def matches_width(cell):
    return bool(cell) and WIDTH_PATTERN.search(cell_text(cell)) is not None


def to_number(value):
    """Numeric coercion of a pack id cell; ``None`` when it is not a number."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(cell_text(value).strip())
    except ValueError:
        return None
