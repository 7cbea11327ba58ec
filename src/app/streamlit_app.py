"""Streamlit web app for visual PDF diffs."""

from __future__ import annotations

import uuid
from pathlib import Path

import streamlit as st

import sys
ROOT = Path(__file__).resolve().parents[2]
src_path = ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from pdf_diff.artifacts import composite_path, diff_path  # type: ignore
from pdf_diff.config import DEFAULT_DPI, DiffConfig, PrintSize  # type: ignore
from pdf_diff.errors import AssemblyError, ConfigurationError  # type: ignore
from pdf_diff.pipeline import compare_files  # type: ignore
from utils.env import configure_logging, env_float, env_int  # type: ignore
from utils.report import render_html_report  # type: ignore

configure_logging()
st.set_page_config(page_title="PDF Visual Diff", page_icon="🧾", layout="wide")

# Session state
if "runs" not in st.session_state:
    st.session_state.runs = []

# Sidebar
st.sidebar.title("🧾 PDF Visual Diff")
st.sidebar.markdown("#### Alignment")
offset = st.sidebar.number_input("Pages inserted in B (offset)", min_value=0, value=0, step=1)
start_offset = st.sidebar.number_input("Inserted before page of A (start offset, 0-based)", min_value=0, value=0, step=1)
st.sidebar.markdown("#### Output")
merge = st.sidebar.checkbox("Merge diffs into one PDF", value=True)
print_size = st.sidebar.selectbox("Print size", [p.value for p in PrintSize], index=1)
orientation = st.sidebar.selectbox("Orientation", ["Auto", "P", "L"], index=0)
side_by_side = st.sidebar.checkbox("Side-by-side PDF", value=False)
vertical_align = st.sidebar.checkbox("Stack vertically", value=False, disabled=not side_by_side)
st.sidebar.markdown("#### Performance")
DPI_OPTIONS = [72, 100, 150, 200, 300]
_dpi_default = env_float("DPI", 150) or 150
dpi = st.sidebar.select_slider(
    "Resolution (dpi)", options=DPI_OPTIONS, value=min(DPI_OPTIONS, key=lambda o: abs(o - _dpi_default))
)
workers = st.sidebar.number_input("Workers", min_value=1, value=int(env_int("WORKERS", 4) or 4), step=1)

st.sidebar.markdown("---")
st.sidebar.markdown("#### Recent runs")
if not st.session_state.runs:
    st.sidebar.caption("No runs yet.")
else:
    for i, run in enumerate(st.session_state.runs[:5]):
        st.sidebar.download_button(
            key=f"sdl_{i}", label=run["title"], data=run["html"], file_name=run["title"], mime="text/html",
            use_container_width=True,
        )
    if st.sidebar.button("Clear all runs", type="secondary"):
        st.session_state.runs = []
        st.rerun()


def _run(file_a, file_b):
    run_dir = Path(".tmp_uploads") / uuid.uuid4().hex[:12]
    run_dir.mkdir(parents=True, exist_ok=True)
    path_a = run_dir / ("A_" + (file_a.name or "a.pdf"))
    path_b = run_dir / ("B_" + (file_b.name or "b.pdf"))
    path_a.write_bytes(file_a.getvalue())
    path_b.write_bytes(file_b.getvalue())

    config = DiffConfig(
        output=run_dir / "differences.pdf",
        merge=merge,
        offset=int(offset),
        start_offset=int(start_offset),
        orientation=None if orientation == "Auto" else orientation,
        print_size=print_size,
        workers=int(workers),
        side_by_side=side_by_side,
        vertical_align=vertical_align,
        dpi=float(dpi or DEFAULT_DPI),
        workdir=run_dir / "pages",
    )

    bar = st.progress(0.0, text="Comparing pages…")

    def _on_progress(done: int, total: int) -> None:
        bar.progress(min(done / total, 1.0) if total else 1.0, text=f"{done}/{total} operations")

    result = compare_files(path_a, path_b, config, progress_callback=_on_progress)
    bar.empty()
    return result


def _render_result(result):
    cfg = result.config
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Pages compared", len(result.pages))
    with col2:
        st.metric("Changed pages", len(result.changed_pages))
    with col3:
        st.metric("Failed pages", len(result.failures))

    for page in result.failures:
        st.error(f"Page {page.index + 1}: {page.error}")

    pages = result.pages
    if len(pages) > 1:
        pg = st.slider("Page of A", 1, len(pages), 1, key="page_diff")
    else:
        pg = 1
    page = pages[pg - 1]
    if page.stats is not None:
        st.caption(
            f"A page {page.index + 1} vs B page {page.aligned_index + 1}: "
            f"{page.stats.changed} pixels changed ({page.stats.red} red, {page.stats.blue} blue)"
        )
    img_path = diff_path(cfg.workdir, page.aligned_index)
    if img_path.exists():
        st.image(str(img_path), use_container_width=True)
    if cfg.side_by_side:
        combined = composite_path(cfg.workdir, page.index)
        if combined.exists():
            with st.expander("Side-by-side", expanded=False):
                st.image(str(combined), use_container_width=True)

    st.markdown("#### Export")
    colx, coly = st.columns(2)
    with colx:
        if result.merged_path and Path(result.merged_path).exists():
            st.download_button(
                label="Download merged diff PDF",
                data=Path(result.merged_path).read_bytes(),
                file_name="differences.pdf",
                mime="application/pdf",
            )
    with coly:
        if result.combined_path and Path(result.combined_path).exists():
            st.download_button(
                label="Download side-by-side PDF",
                data=Path(result.combined_path).read_bytes(),
                file_name="combined_differences.pdf",
                mime="application/pdf",
            )


st.title("Visual PDF Comparison")
st.caption("Red: brighter in A (removed). Blue: brighter in B (added).")
c1, c2 = st.columns(2, gap="large")
with c1:
    file_a = st.file_uploader("Upload PDF A", type=["pdf"], key="pdf_a")
with c2:
    file_b = st.file_uploader("Upload PDF B", type=["pdf"], key="pdf_b")

if st.button("Compare", type="primary"):
    if not file_a or not file_b:
        st.warning("Please upload both PDFs.")
        st.stop()
    try:
        st.session_state.result = _run(file_a, file_b)
    except (ConfigurationError, AssemblyError) as e:
        st.error(f"❌ {e}")
        st.stop()
    html = render_html_report(st.session_state.result, out_path=None)
    fname = f"report_{Path(file_a.name).stem}_vs_{Path(file_b.name).stem}.html"
    st.session_state.runs.insert(0, {"title": fname, "html": html})
    st.session_state.runs = st.session_state.runs[:10]
    st.success("Comparison complete.")

if st.session_state.get("result") is not None:
    _render_result(st.session_state.result)
