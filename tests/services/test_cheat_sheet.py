from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from sheetqr.core.errors import CheatSheetError
from sheetqr.core.settings import CheatSheetSettings, load_settings
from sheetqr.services.cheat_sheet import (
    Label,
    export_cheat_sheets,
    labels_from_records,
    paginate,
    render_page,
)
from sheetqr_io.errors import SheetNotFoundError


def test_paginate_keeps_order_and_remainder() -> None:
    pages = list(paginate(list(range(31)), 15))
    assert [len(page) for page in pages] == [15, 15, 1]
    assert pages[2][0] == 30


def test_paginate_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        list(paginate([1], 0))


def test_labels_skip_rows_without_upc() -> None:
    records = [
        {"UPC": "0001", "DESCRIPTION": "Coffee"},
        {"UPC": "  ", "DESCRIPTION": "Blank"},
        {"DESCRIPTION": "No code"},
        {"UPC": "0002"},
    ]
    assert labels_from_records(records, "UPC", "DESCRIPTION") == [
        Label(upc="0001", description="Coffee"),
        Label(upc="0002", description=""),
    ]


def test_render_page_uses_configured_canvas() -> None:
    layout = CheatSheetSettings()
    labels = [Label(upc=f"00{idx}", description="A fairly long description " * 3) for idx in range(15)]

    page = render_page(labels, layout)

    assert page.size == (1056, 816)
    # the first label's border is drawn in the top-left cell
    assert page.getpixel((0, 60)) == (0, 0, 0)


def test_render_page_rejects_overflow() -> None:
    layout = CheatSheetSettings(columns=1, rows=1)
    with pytest.raises(ValueError):
        render_page([Label("1", "a"), Label("2", "b")], layout)


def test_export_writes_pages_per_sheet(inventory_workbook: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "labels"

    result = export_cheat_sheets(inventory_workbook, ["Aisle 1"], out_dir, load_settings())

    sheet_dir = out_dir / "Aisle_1"
    assert result.files == [sheet_dir / "cheat-sheet-1.png", sheet_dir / "cheat-sheet-2.png"]
    (export,) = result.sheets
    assert export.labels == 16
    assert export.skipped_rows == 0
    with Image.open(result.files[0]) as image:
        assert image.size == (1056, 816)


def test_export_sheet_without_upc_column_writes_nothing(inventory_workbook: Path, tmp_path: Path) -> None:
    result = export_cheat_sheets(inventory_workbook, ["Sheet1"], tmp_path / "labels")

    assert result.files == []
    assert result.sheets[0].skipped_rows == 1


def test_export_requires_sheets(inventory_workbook: Path, tmp_path: Path) -> None:
    with pytest.raises(CheatSheetError):
        export_cheat_sheets(inventory_workbook, [], tmp_path)


def test_export_propagates_extraction_errors(inventory_workbook: Path, tmp_path: Path) -> None:
    with pytest.raises(SheetNotFoundError):
        export_cheat_sheets(inventory_workbook, ["Missing"], tmp_path)
