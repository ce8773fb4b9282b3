from __future__ import annotations

import faulthandler
import sys
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

faulthandler.enable()  # Ensure crashes emit tracebacks.

from sheetqr.core import logger as core_logger


@pytest.fixture(autouse=True)
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point settings and logs at a per-test directory and keep console output quiet."""

    home = tmp_path / "sheetqr_home"
    monkeypatch.setenv("SHEETQR_HOME", str(home))
    monkeypatch.setenv("SHEETQR_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("SHEETQR_CONFIG", raising=False)
    core_logger.reset_logger()
    yield home
    core_logger.reset_logger()


def write_workbook(path: Path, sheets: Mapping[str, Sequence[Sequence[Any]]]) -> Path:
    """Save a workbook whose sheets hold the given rows, in order."""

    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture()
def make_workbook(tmp_path: Path):
    def _make(sheets: Mapping[str, Sequence[Sequence[Any]]], name: str = "book.xlsx") -> Path:
        return write_workbook(tmp_path / name, sheets)

    return _make


@pytest.fixture()
def inventory_workbook(make_workbook) -> Path:
    return make_workbook(
        {
            "Sheet1": [["Name", "Age"], ["Alice", 30]],
            "Aisle 1": [["UPC", "DESCRIPTION"]]
            + [[f"0001234{idx:05d}", f"Item {idx} shelf label"] for idx in range(16)],
            "Empty": [],
        },
        name="inventory.xlsx",
    )
