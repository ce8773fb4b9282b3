"""File endpoints: image saving and cheat sheet export."""

from __future__ import annotations

from typing import Any, Mapping

from sheetqr.services.cheat_sheet import export_cheat_sheets as _export
from sheetqr_io.image_io import SaveImageRequest, save_image as _save_image


def save_image(request: SaveImageRequest | Mapping[str, Any]) -> str:
    if not isinstance(request, SaveImageRequest):
        request = SaveImageRequest.model_validate(request)
    return _save_image(request)


def export_cheat_sheets(file_path: str, sheet_names: list[str], out_dir: str) -> list[str]:
    """Render cheat sheet pages and return the written file paths."""

    result = _export(file_path, sheet_names, out_dir)
    return [str(path) for path in result.files]
