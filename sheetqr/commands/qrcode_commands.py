from __future__ import annotations

from typing import Optional

from sheetqr.core.settings import load_settings
from sheetqr_io.qrcode_io import generate_svg


def generate_qrcode(value: str, size: Optional[int] = None) -> str:
    """Return the QR code for ``value`` as SVG markup."""

    cfg = load_settings().qrcode
    return generate_svg(
        value,
        size or cfg.size,
        border=cfg.border,
        error_correction=cfg.error_correction,
    )
