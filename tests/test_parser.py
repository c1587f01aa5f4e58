"""Tests for the section parser (panel_stock.parser)."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from panel_stock.config import load_config
from panel_stock.exceptions import MalformedSectionError
from panel_stock.parser import (
    OutputRecord,
    ParseContext,
    build_record_id,
    detect_section,
    get_item_object,
    process_row,
    process_rows,
    process_workbook,
    update_width,
)
from panel_stock.reader import SheetGrid


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SECTION = [
    ["", "redwood", "V"],
    ["PACK", "100", "200"],
    ["50*60"],
    ["20231005.2", "", "150"],
]


@pytest.fixture
def strict_config():
    config = load_config(None)
    config["strict_sections"] = True
    return config


# ---------------------------------------------------------------------------
# Section detection
# ---------------------------------------------------------------------------

class TestDetectSection:

    def test_header_builds_context(self):
        ctx = detect_section(SECTION, 0)
        assert ctx == ParseContext(
            wood_type="redwood",
            width="50*60",
            status="V",
            dimensions=("PACK", "100", "200"),
            pack_index=0,
        )

    def test_non_header_returns_none(self):
        assert detect_section(SECTION, 1) is None

    def test_missing_following_rows(self):
        ctx = detect_section([["whitewood", "S/F"]], 0)
        assert ctx.dimensions == ()
        assert ctx.width == ""
        assert ctx.pack_index == -1
        assert ctx.status == "S/F"

    def test_status_none_when_nothing_follows(self):
        ctx = detect_section([["x", "redwood"], ["PACK"]], 0)
        assert ctx.status is None

    def test_first_wood_cell_wins(self):
        ctx = detect_section([["whitewood", "redwood"], ["PACK"]], 0)
        assert ctx.wood_type == "whitewood"
        assert ctx.status == "redwood"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class TestGetItemObject:

    def test_worked_example(self):
        records = process_workbook([SheetGrid("Sheet1", SECTION)])
        assert records == [
            OutputRecord(id="R150602000", pack_id=20231005.2,
                         amount="150", status="V"),
        ]

    def test_id_strips_dots_and_stars(self):
        ctx = ParseContext(wood_type="whitewood", width="38*100",
                           dimensions=("PACK", 2.4), pack_index=0)
        assert build_record_id(ctx, 1) == "W138100240"

    def test_missing_amount_gives_empty_label(self):
        ctx = ParseContext(wood_type="redwood", width="50*60", status="IV",
                           dimensions=("PACK", "100"), pack_index=0)
        record = get_item_object(["20231005.2"], ctx)
        assert record.amount is None
        assert record.id == "R150600"
        assert record.status == "IV"

    def test_amount_index_matches_by_value(self):
        # The same value left of the pack column wins the label lookup
        ctx = ParseContext(wood_type="redwood", width="1*2", status="V",
                           dimensions=("A", "PACK", "B", "C"), pack_index=1)
        record = get_item_object([150, "20231005.2", None, 150], ctx)
        assert record.amount == 150
        assert record.id == "R112A0"

    def test_unknown_wood_type_has_no_prefix(self):
        ctx = ParseContext(wood_type="driftwood", width="1*2",
                           dimensions=("PACK", "9"), pack_index=0)
        record = get_item_object(["20231005.2", 5], ctx)
        assert record.id == "1290"

    def test_numeric_pack_id(self):
        ctx = ParseContext(wood_type="redwood", width="",
                           dimensions=("PACK", 100.0), pack_index=0)
        record = get_item_object([20231005.2, 7], ctx)
        assert record.pack_id == 20231005.2
        assert record.id == "R11000"

    def test_as_dict_field_order(self):
        record = OutputRecord(id="x", pack_id=1.0, amount=2, status="V")
        assert list(record.as_dict()) == ["id", "packId", "amount", "status"]


# ---------------------------------------------------------------------------
# Width updates
# ---------------------------------------------------------------------------

class TestWidthUpdate:

    def test_next_row_width_replaces_context_width(self):
        ctx = ParseContext(width="50*60")
        rows = [["x"], ["70*80"]]
        assert update_width(rows, 0, ctx).width == "70*80"

    def test_non_width_keeps_context(self):
        ctx = ParseContext(width="50*60")
        rows = [["x"], ["70x80"]]
        assert update_width(rows, 0, ctx) is ctx

    def test_last_row_keeps_context(self):
        ctx = ParseContext(width="50*60")
        assert update_width([["x"]], 0, ctx) is ctx

    def test_mid_section_width_change(self):
        rows = SECTION + [["70*80"], ["20231005.3", 9]]
        records = process_workbook([SheetGrid("Sheet1", rows)])
        assert [r.id for r in records] == ["R150602000", "R170801000"]

    def test_header_row_skips_width_update(self):
        rows = [["redwood", "V"], ["1*2", "PACK"], ["", "x"]]
        ctx, record = process_row(rows, 0, ParseContext())
        assert record is None
        assert ctx.width == ""


# ---------------------------------------------------------------------------
# Walkers
# ---------------------------------------------------------------------------

class TestProcessWorkbook:

    def test_context_bleeds_across_sheets(self):
        sheets = [
            SheetGrid("First", SECTION),
            SheetGrid("Second", [["note"], ["20231006.1", "", "40"]]),
        ]
        records = process_workbook(sheets)
        assert len(records) == 2
        assert records[1].id == "R150602000"
        assert records[1].amount == "40"
        assert records[1].pack_id == 20231006.1

    def test_no_header_yields_nothing(self):
        sheets = [SheetGrid("Sheet1", [["20231005.2", 5], ["x"]])]
        assert process_workbook(sheets) == []

    def test_section_without_pack_column_is_skipped(self):
        rows = [["redwood", "V"], ["LEN", "100"], ["50*60"], ["20231005.2", 5]]
        assert process_workbook([SheetGrid("Sheet1", rows)]) == []

    def test_process_rows_returns_context(self):
        ctx, records = process_rows(SECTION)
        assert ctx.wood_type == "redwood"
        assert len(records) == 1

    def test_empty_workbook(self):
        assert process_workbook([]) == []

    def test_duplicates_are_kept(self):
        rows = SECTION + [["20231005.2", "", "150"]]
        records = process_workbook([SheetGrid("Sheet1", rows)])
        assert len(records) == 2
        assert records[0] == records[1]


class TestStrictSections:

    def test_missing_pack_column_raises(self, strict_config):
        rows = [["x"], ["redwood", "V"], ["LEN", "100"]]
        with pytest.raises(MalformedSectionError) as exc_info:
            process_workbook([SheetGrid("Stock", rows)], strict_config)
        assert exc_info.value.sheet_name == "Stock"
        assert exc_info.value.row_number == 2

    def test_no_header_raises(self, strict_config):
        with pytest.raises(MalformedSectionError):
            process_workbook([SheetGrid("Stock", [["x"]])], strict_config)

    def test_well_formed_workbook_passes(self, strict_config):
        records = process_workbook([SheetGrid("Stock", SECTION)], strict_config)
        assert len(records) == 1
