"""pdf_diff package

Visual page-by-page PDF comparison. The building blocks are exported here;
the concurrent pipeline lives in :mod:`pdf_diff.pipeline` and the output
PDF assembly in :mod:`pdf_diff.assembler`.
"""

from .alignment import aligned_range, offset_window, resolve_target, validate_offsets  # noqa: F401
from .compositor import compose_side_by_side  # noqa: F401
from .config import DiffConfig, Orientation, PrintSize  # noqa: F401
from .diff import DiffStats, brightness, diff_images  # noqa: F401
from .errors import AssemblyError, ConfigurationError, PdfDiffError, RenderError  # noqa: F401
from .progress import ProgressTracker, expected_operations  # noqa: F401

__all__ = [
	"resolve_target",
	"validate_offsets",
	"offset_window",
	"aligned_range",
	"diff_images",
	"brightness",
	"DiffStats",
	"compose_side_by_side",
	"DiffConfig",
	"Orientation",
	"PrintSize",
	"ProgressTracker",
	"expected_operations",
	"PdfDiffError",
	"ConfigurationError",
	"RenderError",
	"AssemblyError",
]

__version__ = "0.1.0"
