"""Error types raised by the sheetqr_io helpers."""

# Module responsibilities:
# - Give every I/O failure a discriminated ``kind`` so callers branch without string matching.
# - Keep the human-readable message the GUI displays next to the raw library detail.

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Discriminator carried by :class:`SheetIOError`."""

    OPEN = "open"
    SHEET_NOT_FOUND = "sheet_not_found"
    EMPTY_HEADER = "empty_header"
    SERIALIZATION = "serialization"
    QRCODE = "qrcode"
    IMAGE_SAVE = "image_save"


class SheetIOError(RuntimeError):
    """Base error for I/O helper failures.

    Attributes:
        kind: Error discriminator.
        detail: Diagnostic text from the underlying library, if any.
    """

    kind: ErrorKind = ErrorKind.OPEN
    summary: str = "I/O operation failed"

    def __init__(self, detail: Optional[str] = None, *, summary: Optional[str] = None) -> None:
        self.detail = detail or ""
        if summary is not None:
            self.summary = summary
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary


class OpenError(SheetIOError):
    """Raised when a workbook is missing, unreadable or not a spreadsheet."""

    kind = ErrorKind.OPEN
    summary = "Failed to open workbook"


class SheetNotFoundError(SheetIOError):
    """Raised when the requested sheet cannot be extracted."""

    kind = ErrorKind.SHEET_NOT_FOUND
    summary = "Failed to extract worksheet table"


class EmptyHeaderError(SheetIOError):
    """Raised when a sheet has no row to use as headers."""

    kind = ErrorKind.EMPTY_HEADER
    summary = "No headers found"


class SerializationError(SheetIOError):
    """Raised when records cannot be encoded as JSON."""

    kind = ErrorKind.SERIALIZATION
    summary = "Failed to serialize"


class QRCodeError(SheetIOError):
    """Raised when a QR code cannot be generated."""

    kind = ErrorKind.QRCODE
    summary = "Failed to generate QR code"


class ImageSaveError(SheetIOError):
    """Raised when image data cannot be decoded or written."""

    kind = ErrorKind.IMAGE_SAVE
    summary = "Failed to save image"
