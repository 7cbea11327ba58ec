"""Per-page artifact naming and cleanup.

Diff images are keyed by aligned index, composites by raw job index. The
two name families never overlap, and both are removable by pattern.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

DIFF_PREFIX = "differences_"
COMPOSITE_PREFIX = "combined_"
ARTIFACT_SUFFIX = ".png"


def diff_path(workdir: Path, aligned_index: int) -> Path:
    return Path(workdir) / f"{DIFF_PREFIX}{aligned_index}{ARTIFACT_SUFFIX}"


def composite_path(workdir: Path, index: int) -> Path:
    return Path(workdir) / f"{COMPOSITE_PREFIX}{index}{ARTIFACT_SUFFIX}"


def _is_artifact(path: Path, prefix: str) -> bool:
    """True for ``<prefix><digits>.png``; other files sharing the prefix are not ours."""
    return path.stem[len(prefix):].isdigit()


def remove_artifacts(workdir: Path) -> List[Path]:
    """Delete every diff and composite image in ``workdir``; return what was removed.

    Only ``differences_<n>.png`` and ``combined_<n>.png`` are matched. A file
    that cannot be removed is logged and skipped.
    """
    removed: List[Path] = []
    for prefix in (DIFF_PREFIX, COMPOSITE_PREFIX):
        for path in sorted(Path(workdir).glob(f"{prefix}*{ARTIFACT_SUFFIX}")):
            if not _is_artifact(path, prefix):
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.error("Error removing image %s: %s", path, e)
                continue
            removed.append(path)
    logger.info("Removed %d images from %s", len(removed), workdir)
    return removed
