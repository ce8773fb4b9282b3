from __future__ import annotations

import pytest

from sheetqr_io.errors import ErrorKind, QRCodeError
from sheetqr_io.qrcode_io import encode_matrix, generate_image, generate_svg


def test_generate_svg_has_requested_size() -> None:
    svg = generate_svg("000123400001", 200)

    assert svg.startswith("<svg")
    assert 'width="200"' in svg and 'height="200"' in svg
    assert svg.endswith("</svg>")


def test_svg_viewbox_matches_matrix() -> None:
    matrix = encode_matrix("hello", border=4)
    svg = generate_svg("hello", 120, border=4)
    dimension = len(matrix)
    assert f'viewBox="0 0 {dimension} {dimension}"' in svg


def test_same_value_gives_same_svg() -> None:
    assert generate_svg("ABC-1") == generate_svg("ABC-1")


def test_matrix_includes_quiet_zone() -> None:
    matrix = encode_matrix("hello", border=4)
    assert not any(matrix[0])
    assert not any(row[0] for row in matrix)
    assert any(any(row) for row in matrix)


def test_generate_image_is_square() -> None:
    image = generate_image("000123400001", 120)
    assert image.size == (120, 120)
    assert image.getpixel((0, 0)) == (255, 255, 255)


def test_empty_value_rejected() -> None:
    with pytest.raises(QRCodeError) as excinfo:
        generate_svg("")
    assert excinfo.value.kind is ErrorKind.QRCODE


def test_oversized_value_rejected() -> None:
    with pytest.raises(QRCodeError, match="too long"):
        generate_svg("x" * 8000)


def test_unknown_error_correction_rejected() -> None:
    with pytest.raises(QRCodeError):
        encode_matrix("hello", error_correction="Z")


def test_generate_image_uses_whole_pixel_modules() -> None:
    # "hello" is a version 1 code: 21 modules plus a 4-module quiet zone on each side
    image = generate_image("hello", 100, border=4)
    box = 100 // 29
    offset = (100 - 29 * box) // 2
    finder_corner = offset + 4 * box

    assert image.size == (100, 100)
    assert image.getpixel((finder_corner, finder_corner)) == (0, 0, 0)
    assert image.getpixel((finder_corner + box - 1, finder_corner + box - 1)) == (0, 0, 0)
    assert image.getpixel((finder_corner - 1, finder_corner - 1)) == (255, 255, 255)


def test_generate_image_too_small_for_modules() -> None:
    with pytest.raises(QRCodeError, match="smaller than"):
        generate_image("hello", 20)
