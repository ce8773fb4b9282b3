"""Cheat sheet service package."""

from .api import export_cheat_sheets
from .models import CheatSheetResult, Label, SheetExport, labels_from_records
from .render import paginate, render_page

__all__ = [
    "CheatSheetResult",
    "Label",
    "SheetExport",
    "export_cheat_sheets",
    "labels_from_records",
    "paginate",
    "render_page",
]
