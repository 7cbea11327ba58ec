"""
pdf_diff.diff

Pixel-level comparison of two rasterized pages.

Every pixel of the first page is compared with the pixel at the same
position in the second page. Equal pixels are copied through unchanged.
Differing pixels are painted red when the first page is brighter there and
blue otherwise (ties included), so red marks content that disappeared and
blue marks content that was added on a white page.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from PIL import Image

# Integer luma approximation (ITU-R BT.601), per mille.
LUMA_WEIGHTS = (299, 587, 114)
LUMA_SCALE = 1000

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@dataclass(frozen=True)
class DiffStats:
    width: int
    height: int
    changed: int
    red: int
    blue: int

    @property
    def identical(self) -> bool:
        return self.changed == 0

    @property
    def changed_ratio(self) -> float:
        total = self.width * self.height
        return self.changed / total if total else 0.0

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "changed": self.changed,
            "red": self.red,
            "blue": self.blue,
            "changed_ratio": self.changed_ratio,
        }


def brightness(color: Sequence[int]) -> int:
    """Luma of an 8-bit (r, g, b[, a]) color; alpha is ignored."""
    r, g, b = int(color[0]), int(color[1]), int(color[2])
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * r + wg * g + wb * b) // LUMA_SCALE


def _as_rgba_array(img: Image.Image) -> np.ndarray:
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return np.asarray(img, dtype=np.uint8)


def _fit_to(arr: np.ndarray, height: int, width: int) -> np.ndarray:
    """Crop or zero-pad ``arr`` to ``height`` x ``width``.

    Padding uses the zero pixel (0, 0, 0, 0), the same value an empty canvas
    holds, so pixels outside the second page compare like a blank page.
    """
    if arr.shape[0] == height and arr.shape[1] == width:
        return arr
    out = np.zeros((height, width, 4), dtype=np.uint8)
    h = min(height, arr.shape[0])
    w = min(width, arr.shape[1])
    out[:h, :w] = arr[:h, :w]
    return out


def _luma(arr: np.ndarray) -> np.ndarray:
    rgb = arr[..., :3].astype(np.int32)
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]) // LUMA_SCALE


def diff_images(p1: Image.Image, p2: Image.Image) -> Tuple[Image.Image, DiffStats]:
    """Return the diff image (sized to ``p1``) and its change statistics."""
    a = _as_rgba_array(p1)
    height, width = a.shape[0], a.shape[1]
    b = _fit_to(_as_rgba_array(p2), height, width)

    differs = np.any(a != b, axis=2)
    brighter = _luma(a) > _luma(b)
    red = differs & brighter
    blue = differs & ~brighter

    out = a.copy()
    out[red] = RED
    out[blue] = BLUE

    stats = DiffStats(
        width=width,
        height=height,
        changed=int(np.count_nonzero(differs)),
        red=int(np.count_nonzero(red)),
        blue=int(np.count_nonzero(blue)),
    )
    return Image.fromarray(out), stats
