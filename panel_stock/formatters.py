"""
Preview formatters: render extracted records as Markdown or JSON.
"""

import json

EMPTY_MESSAGE = "No data available to display."


def to_markdown(records) -> str:
    """Render *records* as a Markdown table, one row per record."""
    if not records:
        return EMPTY_MESSAGE + "\n"

    dicts = [r.as_dict() for r in records]
    cols = list(dicts[0].keys())
    lines = ["| " + " | ".join(cols) + " |"]
    lines.append("| " + " | ".join(["---"] * len(cols)) + " |")
    for d in dicts:
        vals = [str(d[c]) if d[c] is not None else "" for c in cols]
        lines.append("| " + " | ".join(vals) + " |")
    return "\n".join(lines) + "\n"


def to_json(records, pretty: bool = True) -> str:
    """Render *records* as a JSON array of objects."""
    indent = 2 if pretty else None
    return json.dumps([r.as_dict() for r in records], indent=indent, default=str)
