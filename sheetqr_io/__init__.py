"""`sheetqr_io` top-level package exports the workbook, QR code and image helpers."""

# Module responsibilities:
# - Re-export the I/O interfaces so the command layer has a stable API surface.

from __future__ import annotations

from .errors import (
    EmptyHeaderError,
    ErrorKind,
    ImageSaveError,
    OpenError,
    QRCodeError,
    SerializationError,
    SheetIOError,
    SheetNotFoundError,
)
from .excel_reader import (
    list_sheet_names,
    read_sheet_json,
    read_sheet_records,
    records_to_json,
)
from .image_io import SaveImageRequest, save_image
from .qrcode_io import generate_image, generate_svg

__all__ = [
    "ErrorKind",
    "SheetIOError",
    "OpenError",
    "SheetNotFoundError",
    "EmptyHeaderError",
    "SerializationError",
    "QRCodeError",
    "ImageSaveError",
    "list_sheet_names",
    "read_sheet_records",
    "read_sheet_json",
    "records_to_json",
    "SaveImageRequest",
    "save_image",
    "generate_svg",
    "generate_image",
]

__version__ = "0.1.0"
