"""
PDF page rendering utilities (PyMuPDF).

- open_document(src) accepts a path or raw PDF bytes
- PdfDocument.render_page(index, dpi) rasterizes one page to an RGBA image

Rendering calls on one document are not thread-safe; callers running
workers in parallel must serialize them.
"""

from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF
from PIL import Image

from pdf_diff.errors import RenderError

logger = logging.getLogger(__name__)

# PDF user space unit: 72 points per inch.
POINTS_PER_INCH = 72.0


class PdfDocument:
    """Thin wrapper over a :class:`fitz.Document`."""

    def __init__(self, doc: fitz.Document, name: str = ""):
        self._doc = doc
        self.name = name

    @property
    def page_count(self) -> int:
        return len(self._doc)

    def render_page(self, index: int, dpi: float) -> Image.Image:
        if index < 0 or index >= self.page_count:
            raise RenderError(f"page {index} out of range for {self.name or 'document'} ({self.page_count} pages)")
        zoom = dpi / POINTS_PER_INCH
        try:
            page = self._doc[index]
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
            img = Image.frombytes("RGB", [pix.width, pix.height], pix.samples)
        except Exception as e:
            raise RenderError(f"failed to render page {index} of {self.name or 'document'}: {e}") from e
        return img.convert("RGBA")

    def close(self) -> None:
        self._doc.close()

    def __enter__(self) -> "PdfDocument":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_document(src: bytes | str | Path) -> PdfDocument:
    """Open a PDF from a path or bytes; raise RenderError if it cannot be read."""
    try:
        if isinstance(src, (bytes, bytearray)):
            doc = fitz.open(stream=src, filetype="pdf")
            name = "<bytes>"
        else:
            doc = fitz.open(str(src))
            name = str(src)
    except Exception as e:
        raise RenderError(f"cannot open {src if not isinstance(src, (bytes, bytearray)) else 'PDF bytes'}: {e}") from e
    logger.debug("Opened %s (%d pages)", name, len(doc))
    return PdfDocument(doc, name=name)
