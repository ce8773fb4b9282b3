"""QR code encoding helpers."""

# Module responsibilities:
# - Encode text into a QR code with the qrcode library.
# - Render it through the library's image factories: SVG markup for the GUI, a Pillow image for raster pages.

from __future__ import annotations

from typing import List

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathFillImage
from PIL import Image

from .errors import QRCodeError
from .utils.log import get_logger

logger = get_logger("qrcode_io")

ERROR_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

# One module per SVG user unit: the svg factory maps 10 pixels to one unit.
SVG_BOX_SIZE = 10

Matrix = List[List[bool]]


def _build(
    value: str, *, border: int, error_correction: str, box_size: int = SVG_BOX_SIZE
) -> qrcode.QRCode:
    if not value:
        raise QRCodeError("value is empty")
    level = ERROR_LEVELS.get(error_correction.upper())
    if level is None:
        raise QRCodeError(f"unknown error correction level: {error_correction}")

    qr = qrcode.QRCode(error_correction=level, border=border, box_size=box_size)
    qr.add_data(value)
    try:
        qr.make(fit=True)
    except DataOverflowError as exc:
        raise QRCodeError(f"data too long for a QR code ({len(value)} chars)") from exc
    return qr


def encode_matrix(value: str, *, border: int = 4, error_correction: str = "M") -> Matrix:
    """Encode ``value`` and return the module matrix including the quiet zone."""

    return _build(value, border=border, error_correction=error_correction).get_matrix()


def generate_svg(value: str, size: int = 200, *, border: int = 4, error_correction: str = "M") -> str:
    """Return SVG markup of a ``size`` x ``size`` pixel QR code for ``value``."""

    if size <= 0:
        raise QRCodeError("size must be positive")
    qr = _build(value, border=border, error_correction=error_correction)
    image = qr.make_image(image_factory=SvgPathFillImage)

    root = image.get_image()
    root.set("width", str(size))
    root.set("height", str(size))
    svg = image.to_string(encoding="unicode")
    logger.debug(
        "QR code encoded", extra={"chars": len(value), "modules": qr.modules_count + 2 * border}
    )
    return svg


def generate_image(
    value: str,
    size: int,
    *,
    border: int = 4,
    error_correction: str = "M",
) -> Image.Image:
    """Return a square, black-on-white RGB image exactly ``size`` pixels wide.

    Modules are drawn at the largest whole-pixel box that fits; the rest of
    the canvas is extra white margin around the code.
    """

    if size <= 0:
        raise QRCodeError("size must be positive")
    qr = _build(value, border=border, error_correction=error_correction)
    dimension = qr.modules_count + 2 * border
    box = size // dimension
    if box < 1:
        raise QRCodeError(f"size {size} is smaller than the {dimension} modules of the code")

    qr.box_size = box
    code = qr.make_image(image_factory=PilImage).get_image().convert("RGB")
    if code.size == (size, size):
        return code
    canvas = Image.new("RGB", (size, size), "white")
    offset = (size - code.size[0]) // 2
    canvas.paste(code, (offset, offset))
    return canvas
