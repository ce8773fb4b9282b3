"""Tests for the command registry and its result envelope."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from sheetqr.commands import COMMANDS, CommandResult, invoke, resolve
from sheetqr.core.errors import CommandNotFoundError


def test_registry_exposes_gui_endpoints() -> None:
    assert set(COMMANDS) == {
        "get_sheet_names",
        "get_sheet_data",
        "generate_qrcode",
        "save_image",
        "export_cheat_sheets",
    }


def test_get_sheet_names(inventory_workbook: Path) -> None:
    result = invoke("get_sheet_names", file_path=str(inventory_workbook))
    assert result.ok
    assert result.value == ["Sheet1", "Aisle 1", "Empty"]
    assert result.error is None


def test_get_sheet_data_returns_json_text(inventory_workbook: Path) -> None:
    result = invoke("get_sheet_data", file_path=str(inventory_workbook), sheet_name="Sheet1")
    assert result.ok
    assert json.loads(result.value) == [{"Name": "Alice", "Age": "30"}]


@pytest.mark.parametrize(
    ("params", "kind", "prefix"),
    [
        ({"sheet_name": "Sheet1"}, "open", "Failed to open workbook"),
        ({"sheet_name": "Nope"}, "sheet_not_found", "Failed to extract worksheet table"),
        ({"sheet_name": "Empty"}, "empty_header", "No headers found"),
    ],
)
def test_get_sheet_data_failures(
    inventory_workbook: Path, tmp_path: Path, params: dict, kind: str, prefix: str
) -> None:
    file_path = tmp_path / "missing.xlsx" if kind == "open" else inventory_workbook
    result = invoke("get_sheet_data", file_path=str(file_path), **params)

    assert not result.ok
    assert result.value is None
    assert result.error is not None
    assert result.error.kind == kind
    assert result.error.message.startswith(prefix)


def test_missing_argument_is_reported() -> None:
    result = invoke("get_sheet_data", file_path="book.xlsx")
    assert not result.ok
    assert result.error.kind == "invalid_arguments"


def test_unknown_command() -> None:
    result = invoke("print_sheet")
    assert result.error.kind == "unknown_command"
    with pytest.raises(CommandNotFoundError):
        resolve("print_sheet")


def test_generate_qrcode_command() -> None:
    result = invoke("generate_qrcode", value="000123400001")
    assert result.ok
    assert result.value.startswith("<svg")
    assert 'width="200"' in result.value


def test_generate_qrcode_empty_value() -> None:
    result = invoke("generate_qrcode", value="")
    assert result.error.kind == "qrcode"


def test_save_image_accepts_plain_mapping(tmp_path: Path) -> None:
    data = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake").decode("ascii")
    request = {"directory": str(tmp_path / "imgs"), "filename": "a.png", "data": data}

    result = invoke("save_image", request=request)

    assert result.ok
    assert (tmp_path / "imgs" / "a.png").read_bytes() == b"\x89PNG fake"


def test_save_image_bad_payload(tmp_path: Path) -> None:
    request = {"directory": str(tmp_path), "filename": "a.png", "data": "%%%"}
    result = invoke("save_image", request=request)
    assert result.error.kind == "image_save"


def test_export_cheat_sheets_command(inventory_workbook: Path, tmp_path: Path) -> None:
    result = invoke(
        "export_cheat_sheets",
        file_path=str(inventory_workbook),
        sheet_names=["Aisle 1"],
        out_dir=str(tmp_path / "labels"),
    )
    assert result.ok
    assert [Path(p).name for p in result.value] == ["cheat-sheet-1.png", "cheat-sheet-2.png"]


def test_envelope_serializes_to_json() -> None:
    payload = json.loads(CommandResult.failure("x", "open", "boom").model_dump_json())
    assert payload == {
        "command": "x",
        "ok": False,
        "value": None,
        "error": {"kind": "open", "message": "boom"},
    }


def test_invalid_config_becomes_failed_result(
    inventory_workbook: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("extract:\n  max_workers: 0\n", encoding="utf-8")
    monkeypatch.setenv("SHEETQR_CONFIG", str(cfg))

    result = invoke("get_sheet_names", file_path=str(inventory_workbook))

    assert not result.ok
    assert result.error.kind == "config"
