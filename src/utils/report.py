"""
Report generation utilities:
- render_html_report(result, out_path) formats a pipeline run as HTML
  using an inline Jinja2 template: run options, KPIs, and one row per page
  with its aligned index, changed pixel counts and error (if any).
"""

from __future__ import annotations

import os
from typing import Any, Dict, Union

from jinja2 import Environment, select_autoescape

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<title>PDF Visual Diff Report</title>
<style>
body { font-family: Arial, sans-serif; margin: 1.5rem; background: #fafafa; }
h1, h2 { color: #333; }
.table { border-collapse: collapse; width: 100%; margin-top: 10px; background: white; }
.table td, .table th { border: 1px solid #ddd; padding: 8px; text-align: left; }
.table th { background: #f0f0f0; font-weight: 600; }
.table tr.changed { background-color: #fff3cd; }
.table tr.failed { background-color: #f8d7da; }
.badge { display: inline-block; padding: 4px 10px; border-radius: 6px; background: #e5e7eb; margin-right: 6px; font-size: 14px; }
.kpi { display: inline-block; padding: 10px 14px; border-radius: 8px; background: white; margin: 6px 6px 0 0; border: 1px solid #e5e7eb; box-shadow: 0 1px 2px rgba(0,0,0,0.05); }
.muted { color: #6b7280; font-size: 14px; }
.red { color: #b91c1c; }
.blue { color: #1d4ed8; }
.bad { color: #b91c1c; }
</style>
</head>
<body>
<h1>PDF Visual Diff Report</h1>
<p>
  <span class="badge">A: {{ meta.pages_a }} pages</span>
  <span class="badge">B: {{ meta.pages_b }} pages</span>
  <span class="badge">offset {{ meta.offset }} from page {{ meta.start_offset }}</span>
  <span class="badge">{{ meta.workers }} workers</span>
  <span class="badge">{{ meta.dpi }} dpi</span>
  {% if meta.merge %}<span class="badge">merge: {{ meta.print_size }}{% if meta.orientation %} {{ meta.orientation }}{% endif %}</span>{% endif %}
  {% if meta.side_by_side %}<span class="badge">side-by-side{% if meta.vertical_align %} (vertical){% endif %}</span>{% endif %}
</p>

<h2>Overview</h2>
<div>
  <span class="kpi">Pages compared: {{ pages|length }}</span>
  <span class="kpi">Changed pages: {{ changed }}</span>
  <span class="kpi {{ 'bad' if failures else '' }}">Failed pages: {{ failures }}</span>
  <span class="kpi">Operations: {{ completed }} / {{ total }}</span>
</div>
{% if merged_path %}<p class="muted">Merged PDF: {{ merged_path }}</p>{% endif %}
{% if combined_path %}<p class="muted">Side-by-side PDF: {{ combined_path }}</p>{% endif %}
{% if failures %}<p class="bad">Output PDFs were not assembled because some pages failed.</p>{% endif %}

<h2>Pages</h2>
<table class="table">
  <thead>
    <tr><th>Page A</th><th>Page B</th><th>Size</th><th>Changed pixels</th><th class="red">Red</th><th class="blue">Blue</th><th>Notes</th></tr>
  </thead>
  <tbody>
  {% for p in pages %}
    <tr class="{{ 'failed' if p.error else ('changed' if p.stats and p.stats.changed else '') }}">
      <td>{{ p.index + 1 }}</td>
      <td>{{ p.aligned_index + 1 }}</td>
      {% if p.stats %}
      <td>{{ p.stats.width }}×{{ p.stats.height }}</td>
      <td>{{ p.stats.changed }} ({{ '%.2f'|format(p.stats.changed_ratio * 100) }}%)</td>
      <td>{{ p.stats.red }}</td>
      <td>{{ p.stats.blue }}</td>
      {% else %}
      <td colspan="4" class="muted">n/a</td>
      {% endif %}
      <td>
        {% if p.error %}<span class="bad">{{ p.error }}</span>{% endif %}
        {% if p.window_pages %}<span class="muted">copied B pages {% for k in p.window_pages %}{{ k + 1 }}{% if not loop.last %}, {% endif %}{% endfor %}</span>{% endif %}
      </td>
    </tr>
  {% endfor %}
  </tbody>
</table>
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))


def render_html_report(result: Union[Dict[str, Any], Any], out_path: str | None = None) -> str:
    """Render an HTML string from a PipelineResult (or its ``to_dict()``); if out_path provided, write to disk."""
    data = result if isinstance(result, dict) else result.to_dict()
    html = _env.from_string(DEFAULT_TEMPLATE).render(**data)

    if out_path:
        os.makedirs(os.path.dirname(str(out_path)) or ".", exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(html)

    return html
