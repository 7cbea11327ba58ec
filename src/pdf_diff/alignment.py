"""
pdf_diff.alignment

Maps a page of document A to the page of document B it is compared with.

Pages before ``start_offset`` are compared index for index. From
``start_offset`` on, every page of A is compared with the page ``offset``
positions further in B, which skips the ``offset`` pages B inserted at
``start_offset``. Those skipped pages are not diffed; they are copied into
the output at their own position (see :func:`offset_window`).
"""
from __future__ import annotations

from .errors import ConfigurationError


def resolve_target(index: int, offset: int, start_offset: int) -> int:
    """Return the page index of B to diff page ``index`` of A against.

    The result is also the aligned index under which the diff is stored.
    """
    if index < start_offset:
        return index
    return index + offset


def validate_offsets(offset: int, start_offset: int, pages_a: int, pages_b: int) -> None:
    """Raise ConfigurationError unless ``0 <= offset < pages_b`` and ``0 <= start_offset < pages_a``."""
    if offset < 0 or offset >= pages_b:
        raise ConfigurationError(
            f"The offset is invalid. It should be between 0 and {pages_b - 1}."
        )
    if start_offset < 0 or start_offset >= pages_a:
        raise ConfigurationError(
            f"The startOffset is invalid. It should be between 0 and {pages_a - 1}."
        )


def offset_window(offset: int, start_offset: int) -> range:
    """Aligned positions filled with verbatim copies of B's pages."""
    return range(start_offset, start_offset + offset)


def job_count(pages_a: int, pages_b: int) -> int:
    return max(pages_a, pages_b)


def aligned_range(pages_a: int, pages_b: int, offset: int) -> range:
    """Every aligned index the output assembler walks, in order."""
    return range(max(pages_a + offset, pages_b + offset))
