"""Public API for the cheat sheet service."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence
import logging

from sheetqr.core.errors import CheatSheetError
from sheetqr.core.settings import Settings, load_settings
from sheetqr_io.excel_reader import read_sheet_records
from sheetqr_io.image_io import write_image_bytes
from sheetqr_io.utils.paths import sheet_output_dir

from .models import CheatSheetResult, SheetExport, labels_from_records
from .render import paginate, render_page

LOGGER = logging.getLogger(__name__)


def _png_bytes(image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def export_cheat_sheets(
    file_path: str | Path,
    sheet_names: Sequence[str],
    out_dir: str | Path,
    settings: Settings | None = None,
) -> CheatSheetResult:
    """Render the labels of each sheet into PNG pages.

    Every sheet gets its own folder under ``out_dir`` named after the
    sanitized sheet name; pages are numbered per sheet starting at 1.

    Raises:
        CheatSheetError: When no sheet name is given.
        SheetIOError: Propagated from extraction, QR encoding or file writes.
    """

    if not sheet_names:
        raise CheatSheetError("No sheets selected")
    cfg = settings or load_settings()
    layout = cfg.cheat_sheet
    base = Path(out_dir)

    exports: list[SheetExport] = []
    for index, sheet_name in enumerate(sheet_names):
        records = read_sheet_records(
            file_path,
            sheet_name,
            max_workers=cfg.extract.max_workers,
            parallel_threshold=cfg.extract.parallel_threshold,
        )
        labels = labels_from_records(records, layout.upc_column, layout.description_column)
        skipped = len(records) - len(labels)
        if skipped:
            LOGGER.warning(
                "Skipped rows without %s in sheet %s: %d", layout.upc_column, sheet_name, skipped
            )

        directory = sheet_output_dir(base, sheet_name, index)
        pages: list[Path] = []
        for page_number, chunk in enumerate(paginate(labels, layout.per_page), start=1):
            image = render_page(chunk, layout)
            filename = f"{layout.file_prefix}-{page_number}.png"
            pages.append(write_image_bytes(directory, filename, _png_bytes(image)))

        LOGGER.info("Sheet %s rendered into %d page(s) under %s", sheet_name, len(pages), directory)
        exports.append(
            SheetExport(
                sheet_name=sheet_name,
                directory=directory,
                labels=len(labels),
                skipped_rows=skipped,
                pages=pages,
            )
        )

    return CheatSheetResult(out_dir=base, sheets=exports)
