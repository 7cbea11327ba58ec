"""
pdf_diff.pipeline

Concurrent page diff pipeline.

One job per page index in ``[0, max(pages_A, pages_B))`` goes onto a shared
queue consumed by ``config.workers`` threads. Rendering goes through a
single :class:`PageSource` whose lock is shared by every worker; diffing,
compositing and writing images run in parallel. Every job puts exactly one
:class:`PageResult` on the results queue, failed or not, and the
coordinating thread drains exactly that many results before assembling the
output PDFs.
"""
from __future__ import annotations

import dataclasses
import logging
import queue
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from PIL import Image

from utils.imaging import save_image
from utils.renderer import open_document

from .alignment import job_count, offset_window, resolve_target, validate_offsets
from .artifacts import composite_path, diff_path, remove_artifacts
from .assembler import assemble_merged, assemble_side_by_side
from .compositor import compose_side_by_side
from .config import BLANK_PAGE_SIZE, DiffConfig, Orientation
from .diff import DiffStats, diff_images
from .errors import ConfigurationError, RenderError
from .progress import ProgressCallback, ProgressTracker, expected_operations

logger = logging.getLogger(__name__)


class Document(Protocol):
    @property
    def page_count(self) -> int: ...

    def render_page(self, index: int, dpi: float) -> Image.Image: ...


@dataclass
class PageResult:
    index: int
    aligned_index: int
    stats: Optional[DiffStats] = None
    error: Optional[BaseException] = None
    window_pages: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "aligned_index": self.aligned_index,
            "stats": self.stats.to_dict() if self.stats else None,
            "error": str(self.error) if self.error else None,
            "window_pages": list(self.window_pages),
        }


@dataclass
class PipelineResult:
    config: DiffConfig
    pages_a: int
    pages_b: int
    pages: List[PageResult]
    total: int
    completed: int
    merged_path: Optional[Path] = None
    combined_path: Optional[Path] = None

    @property
    def failures(self) -> List[PageResult]:
        return [p for p in self.pages if not p.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def changed_pages(self) -> List[PageResult]:
        return [p for p in self.pages if p.stats is not None and not p.stats.identical]

    def to_dict(self) -> Dict[str, Any]:
        cfg = self.config
        return {
            "meta": {
                "pages_a": self.pages_a,
                "pages_b": self.pages_b,
                "offset": cfg.offset,
                "start_offset": cfg.start_offset,
                "workers": cfg.workers,
                "dpi": cfg.dpi,
                "orientation": cfg.orientation.value if cfg.orientation else None,
                "print_size": cfg.print_size.value,
                "merge": cfg.merge,
                "side_by_side": cfg.side_by_side,
                "vertical_align": cfg.vertical_align,
                "clean": cfg.clean,
            },
            "pages": [p.to_dict() for p in self.pages],
            "failures": len(self.failures),
            "changed": len(self.changed_pages),
            "total": self.total,
            "completed": self.completed,
            "merged_path": str(self.merged_path) if self.merged_path else None,
            "combined_path": str(self.combined_path) if self.combined_path else None,
        }


def blank_page() -> Image.Image:
    """Empty canvas used in place of a page a document does not have."""
    return Image.new("RGBA", BLANK_PAGE_SIZE, (0, 0, 0, 0))


class PageSource:
    """Access to both documents' pages through one shared render lock.

    Indexes past the end of a document yield :func:`blank_page`.
    """

    def __init__(self, doc_a: Document, doc_b: Document, dpi: float, lock: Optional[threading.Lock] = None):
        self.doc_a = doc_a
        self.doc_b = doc_b
        self.dpi = dpi
        self.lock = lock if lock is not None else threading.Lock()
        self.pages_a = doc_a.page_count
        self.pages_b = doc_b.page_count

    def _render(self, doc: Document, count: int, index: int) -> Image.Image:
        if index >= count:
            return blank_page()
        with self.lock:
            return doc.render_page(index, self.dpi)

    def page_a(self, index: int) -> Image.Image:
        return self._render(self.doc_a, self.pages_a, index)

    def page_b(self, index: int) -> Image.Image:
        return self._render(self.doc_b, self.pages_b, index)


def _emit_offset_window(source: PageSource, config: DiffConfig) -> List[int]:
    """Copy B's pages at the offset window positions to their diff slots."""
    emitted = []
    for k in offset_window(config.offset, config.start_offset):
        save_image(source.page_b(k), diff_path(config.workdir, k))
        emitted.append(k)
    return emitted


def process_page(index: int, source: PageSource, config: DiffConfig) -> PageResult:
    """Run one job. Never raises: failures are logged and returned in the result."""
    target = resolve_target(index, config.offset, config.start_offset)
    result = PageResult(index=index, aligned_index=target)
    try:
        img_a = source.page_a(index)
        img_b = source.page_b(target)

        diff_img, stats = diff_images(img_a, img_b)
        save_image(diff_img, diff_path(config.workdir, target))
        result.stats = stats

        if config.side_by_side:
            combined = compose_side_by_side(img_a, img_b, vertical=config.vertical_align)
            save_image(combined, composite_path(config.workdir, index))

        if index == config.start_offset and config.offset > 0:
            result.window_pages = _emit_offset_window(source, config)
    except Exception as e:
        logger.error("Page %d (B page %d) failed: %s", index, target, e)
        result.error = e
    else:
        logger.debug("Page %d -> %d: %d pixels changed", index, target, stats.changed)
    return result


def _worker(jobs: "queue.Queue[Optional[int]]", results: "queue.Queue[PageResult]", source: PageSource, config: DiffConfig) -> None:
    while True:
        index = jobs.get()
        if index is None:  # sentinel value.
            break
        results.put(process_page(index, source, config))


def detect_orientation(source: PageSource) -> Orientation:
    """Orientation of the first page of A, landscape when wider than tall."""
    width, height = source.page_a(0).size
    return Orientation.for_size(width, height)


def run_pipeline(
    doc_a: Document,
    doc_b: Document,
    config: DiffConfig,
    progress_callback: Optional[ProgressCallback] = None,
) -> PipelineResult:
    """Diff every page pair, then assemble and clean up as configured.

    Raises ConfigurationError before any work when the offsets do not fit the
    documents. Page failures do not raise; they are reported in the result
    and the assembly step is skipped.
    """
    pages_a, pages_b = doc_a.page_count, doc_b.page_count
    validate_offsets(config.offset, config.start_offset, pages_a, pages_b)

    source = PageSource(doc_a, doc_b, config.dpi)
    if config.merge and config.orientation is None:
        try:
            orientation = detect_orientation(source)
        except RenderError as e:
            raise ConfigurationError(f"cannot detect orientation from the first page: {e}") from e
        config = dataclasses.replace(config, orientation=orientation)
        logger.info("Detected orientation %s", orientation.value)

    config.workdir.mkdir(parents=True, exist_ok=True)

    n_jobs = job_count(pages_a, pages_b)
    tracker = ProgressTracker(
        expected_operations(pages_a, pages_b, merge=config.merge, clean=config.clean),
        callback=progress_callback,
    )

    jobs: "queue.Queue[Optional[int]]" = queue.Queue(maxsize=n_jobs + config.workers)
    results: "queue.Queue[PageResult]" = queue.Queue()
    threads = [
        threading.Thread(
            target=_worker,
            args=(jobs, results, source, config),
            name=f"pdf-diff-worker-{w}",
            daemon=True,
        )
        for w in range(1, config.workers + 1)
    ]
    logger.info("Comparing %d pages with %d workers", n_jobs, len(threads))
    for t in threads:
        t.start()

    for i in range(n_jobs):
        jobs.put(i)
    for _ in threads:
        jobs.put(None)

    collected: List[PageResult] = []
    for _ in range(n_jobs):
        collected.append(results.get())
        tracker.advance()

    for t in threads:
        t.join()

    collected.sort(key=lambda r: r.index)
    result = PipelineResult(
        config=config,
        pages_a=pages_a,
        pages_b=pages_b,
        pages=collected,
        total=tracker.total,
        completed=tracker.completed,
    )

    if result.failures:
        logger.error(
            "%d of %d pages failed (%s); skipping assembly",
            len(result.failures),
            n_jobs,
            ", ".join(str(p.index) for p in result.failures),
        )
        return result

    if config.merge:
        logger.info("Merging difference images...")
        result.merged_path = assemble_merged(config, pages_a, pages_b)
        tracker.advance("completed (merged)")

    if config.side_by_side:
        result.combined_path = assemble_side_by_side(config, pages_a, pages_b)

    if config.clean:
        remove_artifacts(config.workdir)
        tracker.advance("completed (images removed)")

    result.completed = tracker.completed
    return result


def compare_files(
    path_a: str | Path,
    path_b: str | Path,
    config: DiffConfig,
    progress_callback: Optional[ProgressCallback] = None,
) -> PipelineResult:
    """Open both PDFs, run the pipeline and close them again."""
    for path in (path_a, path_b):
        if not Path(path).is_file():
            raise ConfigurationError(f"file {path} does not exist")
    try:
        doc_a = open_document(path_a)
    except RenderError as e:
        raise ConfigurationError(str(e)) from e
    with doc_a:
        try:
            doc_b = open_document(path_b)
        except RenderError as e:
            raise ConfigurationError(str(e)) from e
        with doc_b:
            return run_pipeline(doc_a, doc_b, config, progress_callback=progress_callback)
