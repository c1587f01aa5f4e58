"""Panel Stock Extractor.

Reads loosely laid out wood-panel stock workbooks and turns every pack row
into a flat record:

  * **id** – wood type prefix, width and dimension label.
  * **packId** – the numeric pack number.
  * **amount** – the first value right of the pack number.
  * **status** – the section status, normalised to ``SF``, ``IV`` or ``V``.

The records can be previewed as a table and exported to a single-sheet
workbook.
"""

from .parser import OutputRecord, ParseContext, process_workbook
from .reader import read_workbook
from .exporter import export_to_excel
from .session import ProcessorSession

__all__ = [
    "OutputRecord",
    "ParseContext",
    "process_workbook",
    "read_workbook",
    "export_to_excel",
    "ProcessorSession",
]
