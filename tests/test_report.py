"""Tests for the HTML run report."""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
src_path = ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from pdf_diff.config import DiffConfig  # type: ignore
from pdf_diff.diff import DiffStats  # type: ignore
from pdf_diff.errors import RenderError  # type: ignore
from pdf_diff.pipeline import PageResult, PipelineResult  # type: ignore
from utils.report import render_html_report  # type: ignore


def _result(tmp_path):
    cfg = DiffConfig(output=tmp_path / "differences.pdf", offset=1, start_offset=1, merge=True, workers=2, orientation="P")
    pages = [
        PageResult(0, 0, stats=DiffStats(10, 10, 0, 0, 0)),
        PageResult(1, 2, stats=DiffStats(10, 10, 25, 5, 20), window_pages=[1]),
        PageResult(2, 3, error=RenderError("bad <page>")),
    ]
    return PipelineResult(config=cfg, pages_a=3, pages_b=4, pages=pages, total=4, completed=3)


def test_report_contents(tmp_path):
    html = render_html_report(_result(tmp_path))
    assert "Pages compared: 3" in html
    assert "Changed pages: 1" in html
    assert "Failed pages: 1" in html
    assert "Operations: 3 / 4" in html
    assert "copied B pages 2" in html
    assert "25.00%" in html
    assert "not assembled" in html


def test_report_escapes_error_text(tmp_path):
    html = render_html_report(_result(tmp_path))
    assert "bad &lt;page&gt;" in html
    assert "bad <page>" not in html


def test_report_written_to_disk_from_dict(tmp_path):
    out = tmp_path / "reports" / "run.html"
    html = render_html_report(_result(tmp_path).to_dict(), str(out))
    assert out.read_text(encoding="utf-8") == html
