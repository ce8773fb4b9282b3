"""Workbook endpoints exposed to the GUI."""

from __future__ import annotations

from sheetqr.core.settings import load_settings
from sheetqr_io.excel_reader import list_sheet_names, read_sheet_json


def get_sheet_names(file_path: str) -> list[str]:
    return list_sheet_names(file_path)


def get_sheet_data(file_path: str, sheet_name: str) -> str:
    """Return the sheet's data rows as a JSON array of header-keyed objects."""

    extract = load_settings().extract
    return read_sheet_json(
        file_path,
        sheet_name,
        max_workers=extract.max_workers,
        parallel_threshold=extract.parallel_threshold,
    )
