"""
Utility to build a multi-page PDF out of image files (reportlab).

Coordinates passed to PdfWriter are in the writer's unit and measured from
the top-left corner of the current page; they are converted to reportlab's
bottom-left point space internally.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from reportlab.lib.pagesizes import A0, A1, A2, A3, A4, landscape, portrait
from reportlab.lib.units import cm, inch, mm
from reportlab.pdfgen import canvas

from pdf_diff.config import Orientation, PrintSize
from pdf_diff.errors import AssemblyError

logger = logging.getLogger(__name__)

PAGE_SIZES = {
    PrintSize.A4: A4,
    PrintSize.A3: A3,
    PrintSize.A2: A2,
    PrintSize.A1: A1,
    PrintSize.A0: A0,
}

# Points per unit.
UNITS = {
    "pt": 1.0,
    "mm": mm,
    "cm": cm,
    "in": inch,
}


def print_size_points(size: PrintSize, orientation: Orientation) -> Tuple[float, float]:
    base = PAGE_SIZES[PrintSize.parse(size)]
    if orientation == Orientation.LANDSCAPE:
        return landscape(base)
    return portrait(base)


class PdfWriter:
    def __init__(
        self,
        orientation: Orientation = Orientation.PORTRAIT,
        unit: str = "pt",
        page_size: PrintSize | Tuple[float, float] = PrintSize.A4,
        title: str = "PDF Visual Diff",
    ):
        if unit not in UNITS:
            raise ValueError(f"unknown unit {unit!r}; expected one of {sorted(UNITS)}")
        self._k = UNITS[unit]
        orientation = Orientation.parse(orientation) or Orientation.PORTRAIT
        if isinstance(page_size, tuple):
            w, h = page_size[0] * self._k, page_size[1] * self._k
            self._default_size = landscape((w, h)) if orientation == Orientation.LANDSCAPE else portrait((w, h))
        else:
            self._default_size = print_size_points(page_size, orientation)
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=self._default_size)
        self._canvas.setTitle(title)
        self._canvas.setCreator("pdf_visual_diff")
        self._current: Optional[Tuple[float, float]] = None
        self.page_count = 0

    def page_size(self) -> Tuple[float, float]:
        """Size of the current page (the default page size before any page exists), in the writer unit."""
        w, h = self._current or self._default_size
        return w / self._k, h / self._k

    def add_page(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        """Start a new page; default print size unless both ``width`` and ``height`` are given."""
        if self._current is not None:
            self._canvas.showPage()
        if width is not None and height is not None:
            size = (width * self._k, height * self._k)
        else:
            size = self._default_size
        self._canvas.setPageSize(size)
        self._current = size
        self.page_count += 1

    def place_image(self, path: str | Path, x: float, y: float, w: float, h: float) -> None:
        if self._current is None:
            raise AssemblyError("place_image called before add_page")
        page_h = self._current[1]
        k = self._k
        try:
            self._canvas.drawImage(
                str(path),
                x * k,
                page_h - (y + h) * k,
                width=w * k,
                height=h * k,
                mask="auto",
            )
        except Exception as e:
            raise AssemblyError(f"cannot place image {path}: {e}") from e

    def output(self, path: str | Path) -> Path:
        """Finish the document and write it to ``path``."""
        path = Path(path)
        try:
            if self._current is not None:
                self._canvas.showPage()
                self._current = None
            self._canvas.save()
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self._buffer.getvalue())
        except AssemblyError:
            raise
        except Exception as e:
            raise AssemblyError(f"cannot write {path}: {e}") from e
        finally:
            self._buffer.close()
        logger.debug("Wrote %s (%d pages)", path, self.page_count)
        return path
