from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True, slots=True)
class Label:
    """One printable label: the QR payload and the text shown beside it."""

    upc: str
    description: str


def labels_from_records(
    records: Iterable[Mapping[str, str]],
    upc_column: str,
    description_column: str,
) -> list[Label]:
    """Build labels from extracted records, skipping rows without a UPC."""

    labels: list[Label] = []
    for record in records:
        upc = record.get(upc_column, "").strip()
        if not upc:
            continue
        labels.append(Label(upc=upc, description=record.get(description_column, "")))
    return labels


class SheetExport(BaseModel):
    """Pages written for a single sheet."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    sheet_name: str
    directory: Path
    labels: int
    skipped_rows: int
    pages: list[Path]


class CheatSheetResult(BaseModel):
    """Aggregated outcome returned to callers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    out_dir: Path
    sheets: list[SheetExport]

    @property
    def files(self) -> list[Path]:
        return [page for sheet in self.sheets for page in sheet.pages]
