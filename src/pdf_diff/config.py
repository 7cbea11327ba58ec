"""
pdf_diff.config

Run configuration, validated once before any page job is scheduled.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError

# Blank substitute page, in pixels: an A4 page (595x842 pt) rasterized at 72 dpi.
BLANK_PAGE_SIZE = (595, 842)

# Resolution artifacts are assumed to carry when placed into an output PDF
# (one pixel == one PDF point).
IMAGE_DPI = 72.0

# Rasterization resolution for page rendering.
DEFAULT_DPI = 300.0

DEFAULT_OUTPUT = "differences.pdf"


class Orientation(str, Enum):
    PORTRAIT = "P"
    LANDSCAPE = "L"

    @classmethod
    def parse(cls, value: Union[str, "Orientation", None]) -> Optional["Orientation"]:
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            raise ConfigurationError(
                "The orientation is invalid. It should be either 'P' or 'L'."
            ) from None

    @classmethod
    def for_size(cls, width: float, height: float) -> "Orientation":
        """Landscape when wider than tall, portrait otherwise."""
        return cls.LANDSCAPE if width > height else cls.PORTRAIT


class PrintSize(str, Enum):
    A4 = "A4"
    A3 = "A3"
    A2 = "A2"
    A1 = "A1"
    A0 = "A0"

    @classmethod
    def parse(cls, value: Union[str, "PrintSize"]) -> "PrintSize":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ConfigurationError(
                "Invalid print size. It should be one of 'A4', 'A3', 'A2', 'A1', or 'A0'."
            ) from None


@dataclass
class DiffConfig:
    """Options for one comparison run.

    ``orientation`` left as None is auto-detected from the first page of
    document A. ``workers`` left as None (or 0) uses the host's CPU count.
    ``workdir`` left as None is the directory of ``output``.
    """

    output: Path = Path(DEFAULT_OUTPUT)
    merge: bool = False
    clean: bool = False
    offset: int = 0
    start_offset: int = 0
    orientation: Optional[Orientation] = None
    print_size: PrintSize = PrintSize.A3
    workers: Optional[int] = None
    side_by_side: bool = False
    vertical_align: bool = False
    dpi: float = DEFAULT_DPI
    workdir: Optional[Path] = None

    def __post_init__(self) -> None:
        self.output = Path(self.output)
        self.orientation = Orientation.parse(self.orientation)
        self.print_size = PrintSize.parse(self.print_size)
        if not self.workers:
            self.workers = os.cpu_count() or 1
        if self.workers < 1:
            raise ConfigurationError(f"The number of workers must be at least 1, got {self.workers}.")
        if self.dpi <= 0:
            raise ConfigurationError(f"The dpi must be positive, got {self.dpi}.")
        if self.offset < 0:
            raise ConfigurationError(f"The offset is invalid: {self.offset} is negative.")
        if self.start_offset < 0:
            raise ConfigurationError(f"The startOffset is invalid: {self.start_offset} is negative.")
        self.workdir = Path(self.workdir) if self.workdir is not None else self.output.parent

    @property
    def combined_output(self) -> Path:
        """Side-by-side PDF path: ``combined_`` + output name, next to the output."""
        return self.output.parent / ("combined_" + self.output.name)
