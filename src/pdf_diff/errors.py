"""Custom exceptions used across pdf_diff."""

__all__ = [
    "PdfDiffError",
    "ConfigurationError",
    "RenderError",
    "AssemblyError",
]


class PdfDiffError(Exception):
    """Base class for all pipeline errors."""

    pass


class ConfigurationError(PdfDiffError):
    """Raised before scheduling when files, offsets or options are invalid."""

    pass


class RenderError(PdfDiffError):
    """Raised when a document cannot be opened or a page cannot be rasterized."""

    pass


class AssemblyError(PdfDiffError):
    """Raised when an output PDF cannot be built or written."""

    pass
