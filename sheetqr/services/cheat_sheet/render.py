"""Raster rendering of cheat sheet pages."""

from __future__ import annotations

from typing import Iterator, Sequence, TypeVar

from PIL import Image, ImageDraw, ImageFont

from sheetqr.core.settings import CheatSheetSettings
from sheetqr_io.qrcode_io import generate_image

from .models import Label

T = TypeVar("T")

PADDING = 4
TEXT_GAP = 8
LINE_SPACING = 2


def paginate(items: Sequence[T], per_page: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most ``per_page`` items."""

    if per_page <= 0:
        raise ValueError("per_page must be positive")
    for start in range(0, len(items), per_page):
        yield items[start : start + per_page]


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if draw.textlength(candidate, font=font) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        # a single word wider than the column is cut by characters
        while draw.textlength(word, font=font) > max_width and len(word) > 1:
            cut = len(word)
            while cut > 1 and draw.textlength(word[:cut], font=font) > max_width:
                cut -= 1
            lines.append(word[:cut])
            word = word[cut:]
        current = word
    if current:
        lines.append(current)
    return lines


def _line_height(draw: ImageDraw.ImageDraw, font) -> int:
    left, top, right, bottom = draw.textbbox((0, 0), "Ag", font=font)
    return bottom - top + LINE_SPACING


def _draw_label(
    page: Image.Image,
    draw: ImageDraw.ImageDraw,
    label: Label,
    box: tuple[int, int, int, int],
    layout: CheatSheetSettings,
    font,
) -> None:
    x0, y0, x1, y1 = box
    draw.rounded_rectangle(box, radius=8, outline="black", width=1)

    line_height = _line_height(draw, font)
    qr_size = min(layout.qr_size, (y1 - y0) - 2 * PADDING - line_height)
    qr_image = generate_image(label.upc, qr_size, border=2)
    qr_left = x0 + PADDING
    qr_top = y0 + ((y1 - y0) - qr_size - line_height) // 2
    page.paste(qr_image, (qr_left, qr_top))

    upc_width = draw.textlength(label.upc, font=font)
    upc_left = qr_left + max(0, (qr_size - int(upc_width)) // 2)
    draw.text((upc_left, qr_top + qr_size), label.upc, fill="black", font=font)

    text_left = qr_left + qr_size + TEXT_GAP
    text_width = x1 - PADDING - text_left
    lines = _wrap(draw, label.description, font, text_width)
    max_lines = max(1, ((y1 - y0) - 2 * PADDING) // line_height)
    lines = lines[:max_lines]
    text_top = y0 + ((y1 - y0) - len(lines) * line_height) // 2
    for index, line in enumerate(lines):
        draw.text((text_left, text_top + index * line_height), line, fill="black", font=font)


def render_page(labels: Sequence[Label], layout: CheatSheetSettings) -> Image.Image:
    """Render up to ``layout.per_page`` labels on one landscape page.

    Labels fill the grid row by row, left to right.
    """

    if len(labels) > layout.per_page:
        raise ValueError(f"a page holds at most {layout.per_page} labels, got {len(labels)}")

    page = Image.new("RGB", (layout.page_width, layout.page_height), "white")
    draw = ImageDraw.Draw(page)
    font = ImageFont.load_default()

    cell_width = (layout.page_width - layout.gap * (layout.columns - 1)) // layout.columns
    cell_height = (layout.page_height - layout.gap * (layout.rows - 1)) // layout.rows
    for index, label in enumerate(labels):
        row, column = divmod(index, layout.columns)
        left = column * (cell_width + layout.gap)
        top = row * (cell_height + layout.gap)
        _draw_label(
            page,
            draw,
            label,
            (left, top, left + cell_width - 1, top + cell_height - 1),
            layout,
            font,
        )
    return page
