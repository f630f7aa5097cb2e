"""Tests for the tray icon image."""

from datetime import date

from icon_gen import HEADER_FILL, create_icon_image


def test_icon_image_size():
    img = create_icon_image(date(2025, 1, 1))
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_icon_has_header_band():
    img = create_icon_image(date(2025, 1, 31))
    assert img.getpixel((32, 4)) == (255, 77, 77, 255)
    assert HEADER_FILL == "#ff4d4d"
