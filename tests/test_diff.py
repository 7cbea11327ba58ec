"""
Tests for the pixel diff rule: pass-through on equal pixels, red where the
first page is brighter, blue otherwise (ties included).
"""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
src_path = ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import numpy as np
from PIL import Image

from pdf_diff.diff import BLUE, RED, brightness, diff_images  # type: ignore


def _solid(color, size=(4, 3)):
    return Image.new("RGBA", size, color)


def test_brightness_luma():
    assert brightness((200, 200, 200)) == 200
    assert brightness((255, 255, 255)) == 255
    assert brightness((0, 255, 0)) == 149
    assert brightness((10, 20, 30, 0)) == 18


def test_brighter_first_pixel_is_red():
    out, stats = diff_images(_solid((200, 200, 200, 255)), _solid((50, 50, 50, 255)))
    assert out.getpixel((0, 0)) == (255, 0, 0, 255)
    assert stats.red == 12 and stats.blue == 0 and stats.changed == 12


def test_darker_first_pixel_is_blue():
    out, stats = diff_images(_solid((50, 50, 50, 255)), _solid((200, 200, 200, 255)))
    assert out.getpixel((1, 1)) == BLUE
    assert stats.blue == 12 and stats.red == 0


def test_equal_pixels_pass_through():
    out, stats = diff_images(_solid((10, 20, 30, 255)), _solid((10, 20, 30, 255)))
    assert out.getpixel((2, 2)) == (10, 20, 30, 255)
    assert stats.identical


def test_equal_brightness_tie_is_blue():
    c1, c2 = (100, 100, 100, 255), (100, 100, 101, 255)
    assert brightness(c1) == brightness(c2)
    out, _ = diff_images(_solid(c1), _solid(c2))
    assert out.getpixel((0, 0)) == BLUE


def test_alpha_only_difference_counts_as_different():
    out, stats = diff_images(_solid((10, 20, 30, 255)), _solid((10, 20, 30, 0)))
    assert out.getpixel((0, 0)) == BLUE
    assert stats.changed == 12


def test_diff_of_image_with_itself_is_identity():
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(9, 11, 4), dtype=np.uint8)
    img = Image.fromarray(arr)
    out, stats = diff_images(img, img.copy())
    assert np.array_equal(np.asarray(out), arr)
    assert stats.changed == 0


def test_red_blue_rule_matches_scalar_definition():
    rng = np.random.default_rng(11)
    a = rng.integers(0, 4, size=(6, 5, 4), dtype=np.uint8) * 80
    b = rng.integers(0, 4, size=(6, 5, 4), dtype=np.uint8) * 80
    out, stats = diff_images(Image.fromarray(a), Image.fromarray(b))
    got = np.asarray(out)

    red = blue = 0
    for y in range(6):
        for x in range(5):
            c1, c2 = tuple(a[y, x]), tuple(b[y, x])
            if c1 == c2:
                expected = c1
            elif brightness(c1) > brightness(c2):
                expected = RED
                red += 1
            else:
                expected = BLUE
                blue += 1
            assert tuple(got[y, x]) == expected
    assert (stats.red, stats.blue) == (red, blue)


def test_output_is_sized_to_first_image_and_smaller_second_is_padded():
    p1 = _solid((255, 255, 255, 255), size=(10, 10))
    p2 = _solid((255, 255, 255, 255), size=(4, 4))
    out, stats = diff_images(p1, p2)
    assert out.size == (10, 10)
    # inside p2: unchanged; outside: compared against the empty pixel
    assert out.getpixel((3, 3)) == (255, 255, 255, 255)
    assert out.getpixel((9, 9)) == RED
    assert stats.changed == 100 - 16
    assert stats.red == 84


def test_larger_second_image_is_cropped():
    p1 = _solid((255, 255, 255, 255), size=(4, 4))
    p2 = _solid((255, 255, 255, 255), size=(10, 10))
    out, stats = diff_images(p1, p2)
    assert out.size == (4, 4)
    assert stats.identical


def test_rgb_inputs_are_compared_as_opaque_rgba():
    p1 = Image.new("RGB", (3, 3), (255, 255, 255))
    p2 = _solid((255, 255, 255, 255), size=(3, 3))
    out, stats = diff_images(p1, p2)
    assert out.mode == "RGBA"
    assert stats.identical
