"""Side-by-side composition of a page pair.

Horizontal: A on the left, B on the right. Width is wA + wB, height is
max(hA, hB). Vertical: A on top, B below. Width is max(wA, wB), height is
hA + hB. Canvas not covered by either page keeps the zero pixel.
"""

from __future__ import annotations

from typing import Tuple

from PIL import Image


def composite_size(size_a: Tuple[int, int], size_b: Tuple[int, int], vertical: bool = False) -> Tuple[int, int]:
    wa, ha = size_a
    wb, hb = size_b
    if vertical:
        return max(wa, wb), ha + hb
    return wa + wb, max(ha, hb)


def compose_side_by_side(p1: Image.Image, p2: Image.Image, vertical: bool = False) -> Image.Image:
    """Place ``p1`` at the origin and ``p2`` right of it (or below it when ``vertical``)."""
    W, H = composite_size(p1.size, p2.size, vertical)
    canvas = Image.new("RGBA", (W, H), (0, 0, 0, 0))
    canvas.paste(p1.convert("RGBA"), (0, 0))
    # Shift B by A's width (or height)
    origin_b = (0, p1.height) if vertical else (p1.width, 0)
    canvas.paste(p2.convert("RGBA"), origin_b)
    return canvas
