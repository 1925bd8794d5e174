"""
Standalone HTML view of a rendered scene.

Wraps the SVG produced by a Scene in a page with a header, stats, the
legend and an inspector panel for the selected node.
"""

import re
import webbrowser
from pathlib import Path
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape, quoteattr

from ..core.result import SinkResult, then
from ..core.sinks import save_file
from .palette import LEGEND
from .render import RenderCoordinator, SelectionDetail
from .svg import Scene

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <style>
        :root {
            --bg-base: #F3F3F3;
            --bg-surface: #FFFFFF;
            --border-default: #DDDBDA;
            --text-primary: #181818;
            --text-secondary: #706E6B;
            --color-warning: #FE9339;
            --font-sans: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        }

        * { box-sizing: border-box; }

        body {
            margin: 0;
            background: var(--bg-base);
            color: var(--text-primary);
            font-family: var(--font-sans);
        }

        .header {
            padding: 12px 16px;
            background: var(--bg-surface);
            border-bottom: 1px solid var(--border-default);
        }

        .header h1 { margin: 0; font-size: 18px; }

        .stats { color: var(--text-secondary); font-size: 13px; margin-top: 4px; }

        .warning {
            margin: 12px 16px 0;
            padding: 8px 12px;
            border-left: 4px solid var(--color-warning);
            background: var(--bg-surface);
            font-size: 13px;
        }

        .layout { display: flex; gap: 16px; padding: 16px; }

        .graph-viewport {
            flex: 1;
            overflow: auto;
            background: var(--bg-surface);
            border: 1px solid var(--border-default);
            border-radius: 4px;
        }

        .sidebar { width: 280px; display: flex; flex-direction: column; gap: 16px; }

        .panel {
            background: var(--bg-surface);
            border: 1px solid var(--border-default);
            border-radius: 4px;
            padding: 12px;
            font-size: 13px;
        }

        .panel h2 { margin: 0 0 8px; font-size: 14px; }

        .legend-item { display: flex; align-items: center; gap: 8px; margin: 4px 0; }

        .swatch { width: 12px; height: 12px; border-radius: 50%; }

        dt { color: var(--text-secondary); margin-top: 6px; }
        dd { margin: 0; }
    </style>
</head>
<body>
    <div class="header">
        <h1>__TITLE__</h1>
        <div class="stats">__STATS__</div>
    </div>
__WARNINGS__
    <div class="layout">
        <div class="graph-viewport">
__SCENE__
        </div>
        <div class="sidebar">
            <div class="panel">
                <h2>Selected</h2>
__INSPECTOR__
            </div>
            <div class="panel">
                <h2>Legend</h2>
__LEGEND__
            </div>
        </div>
    </div>
</body>
</html>
"""

PLACEHOLDER = re.compile(r"__(TITLE|STATS|WARNINGS|SCENE|INSPECTOR|LEGEND)__")


def _legend_html() -> str:
    return "\n".join(
        f'                <div class="legend-item"><span class="swatch" '
        f'style="background-color: {item.color};"></span>{escape(item.label)}</div>'
        for item in LEGEND
    )


def _inspector_html(detail: Optional[SelectionDetail]) -> str:
    if detail is None:
        return "                <p>Nothing selected.</p>"

    rows: List[Tuple[str, str]] = [
        ("Name", detail.node.name),
        ("Type", detail.type_label),
        ("Depth", str(detail.rank)),
        ("Relationship", detail.relationship_summary),
        ("Detail", detail.detail_text),
    ]
    if detail.direction_label:
        rows.insert(2, ("Direction", detail.direction_label))

    items = "\n".join(
        f"                    <dt>{escape(label)}</dt><dd>{escape(value)}</dd>"
        for label, value in rows
    )
    link = ""
    if detail.setup_url:
        link = f'\n                <a href={quoteattr(detail.setup_url)} target="_blank">Open in Setup</a>'
    return f"                <dl>\n{items}\n                </dl>{link}"


def generate_html(coordinator: RenderCoordinator, scene: Scene, title: str = "Blast Radius") -> str:
    """
    Generate the HTML page for a scene built by coordinator.
    """
    graph = scene.graph
    stats = graph.stats
    stats_text = (
        f"{stats.total_nodes} nodes &middot; {stats.total_edges} edges &middot; "
        f"max depth {stats.max_rank_reached} &middot; {coordinator.cycle_count} cycle nodes"
    )
    warnings = "\n".join(
        f'    <div class="warning">{escape(warning)}</div>' for warning in graph.warnings
    )

    parts = {
        "TITLE": escape(title),
        "STATS": stats_text,
        "WARNINGS": warnings,
        "SCENE": scene.to_svg(),
        "INSPECTOR": _inspector_html(coordinator.selection_detail()),
        "LEGEND": _legend_html(),
    }
    # One pass, so placeholder text inside node names or the title stays literal
    return PLACEHOLDER.sub(lambda match: parts[match.group(1)], HTML_TEMPLATE)


def open_visualization(html_content: str, output_path: str = "graph.html") -> SinkResult[Path]:
    """
    Write the page and open it in the browser.

    The browser is only launched once the page is on disk; a refused write
    comes back as an Err and nothing is opened.
    """
    def _open(out_file: Path) -> Path:
        webbrowser.open(out_file.resolve().as_uri())
        return out_file

    return then(save_file(output_path, html_content), _open)
