"""Image file helpers (Pillow)."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from PIL import Image

POINTS_PER_INCH = 72.0


def save_image(img: Image.Image, path: str | Path) -> Path:
    """Write ``img`` as PNG (format taken from the suffix); create parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)
    return path


def image_extent(path: str | Path, dpi: float = POINTS_PER_INCH) -> Tuple[float, float]:
    """Width and height of the image file in points, assuming ``dpi``."""
    with Image.open(path) as im:
        w, h = im.size
    scale = POINTS_PER_INCH / dpi
    return w * scale, h * scale
