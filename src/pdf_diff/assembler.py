"""
pdf_diff.assembler

Builds the output PDFs from the per-page images once every job is done.
Pages are added in aligned-index order, so the result does not depend on
the order in which workers finished.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from utils.imaging import image_extent
from utils.pdf_writer import PdfWriter

from .alignment import aligned_range, job_count
from .artifacts import composite_path, diff_path
from .config import IMAGE_DPI, DiffConfig, Orientation
from .errors import AssemblyError

logger = logging.getLogger(__name__)


def fit_centered(page_w: float, page_h: float, img_w: float, img_h: float) -> Tuple[float, float, float, float]:
    """Scale an image uniformly to fit the page and centre it; return x, y, w, h."""
    scale = min(page_w / img_w, page_h / img_h)
    w, h = img_w * scale, img_h * scale
    return (page_w - w) / 2, (page_h - h) / 2, w, h


def _extent(path: Path) -> Tuple[float, float]:
    try:
        return image_extent(path, IMAGE_DPI)
    except OSError as e:
        raise AssemblyError(f"cannot read image {path}: {e}") from e


def assemble_merged(config: DiffConfig, pages_a: int, pages_b: int) -> Path:
    """One print-size page per aligned index, each holding that index's diff image."""
    writer = PdfWriter(config.orientation or Orientation.PORTRAIT, "pt", config.print_size)
    page_w, page_h = writer.page_size()

    indices = aligned_range(pages_a, pages_b, config.offset)
    n = len(indices)
    step = max(n // 10, 1)
    for k in indices:
        path = diff_path(config.workdir, k)
        if not path.exists():
            raise AssemblyError(f"missing difference image {path}")
        img_w, img_h = _extent(path)
        x, y, w, h = fit_centered(page_w, page_h, img_w, img_h)
        writer.add_page()
        writer.place_image(path, x, y, w, h)

        # Report every 10% or on the last image
        if k % step == 0 or k == n - 1:
            logger.info("Progress: %.2f%%", (k + 1) / n * 100.0)

    out = writer.output(config.output)
    logger.info("The difference images have been merged into %s", out)
    return out


def assemble_side_by_side(config: DiffConfig, pages_a: int, pages_b: int) -> Path:
    """One page per composite image of this run, sized exactly to the image.

    Composites are keyed by job index, so only ``[0, job_count)`` is read;
    other ``combined_*.png`` files in the work directory are ignored.
    """
    writer = PdfWriter(Orientation.PORTRAIT, "pt", config.print_size)
    for i in range(job_count(pages_a, pages_b)):
        path = composite_path(config.workdir, i)
        if not path.exists():
            raise AssemblyError(f"missing side-by-side image {path}")
        w, h = _extent(path)
        writer.add_page(w, h)
        writer.place_image(path, 0, 0, w, h)

    out = writer.output(config.combined_output)
    logger.info("The combined images have been merged into %s", out)
    return out
