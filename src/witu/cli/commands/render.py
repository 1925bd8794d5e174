"""
Render Command - Draw a dependency graph as SVG or a standalone HTML page.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from ...config import DEFAULT_MAX_RANK, MAX_MAX_RANK, MIN_MAX_RANK, load_config
from ...core.exceptions import NodeNotFoundError, UpstreamFetchError
from ...core.sinks import save_file
from ...core.source import FileGraphSource, load_graph
from ...graph.render import (
    GraphLoaded,
    LoadFailed,
    LoadRequested,
    NodeSelected,
    RenderCoordinator,
    ViewStatus,
    ZoomSet,
)
from ...graph.visualize import generate_html, open_visualization
from ..utils import echo_error, echo_info, echo_no_data, echo_warning, report_sink

OUTPUT_SUFFIXES = (".svg", ".html")


@click.command()
@click.argument("graph_file", default=".")
@click.option("-o", "--output", default="blast-radius.html", help="Output file (.svg or .html)")
@click.option("--width", type=click.IntRange(min=1), default=None,
              help="Viewport width in pixels; the graph is shrunk to fit")
@click.option("--zoom", type=click.FloatRange(min=0, min_open=True), default=1.0,
              help="Zoom factor applied on top of the fit scale")
@click.option("--select", "select_id", default=None, help="Node id to select (defaults to the root)")
@click.option("--title", default="Blast Radius", help="Page title for HTML output")
@click.option("--open", "open_browser", is_flag=True, help="Open the HTML page in a browser")
@click.option("--root-id", default=None,
              help="Load <ROOT_ID>.json from GRAPH_FILE, a directory of saved responses")
@click.option("--max-rank", type=click.IntRange(MIN_MAX_RANK, MAX_MAX_RANK),
              default=DEFAULT_MAX_RANK, show_default=True,
              help="Traversal depth requested with --root-id")
def render(
    graph_file: str,
    output: str,
    width: Optional[int],
    zoom: float,
    select_id: Optional[str],
    title: str,
    open_browser: bool,
    root_id: Optional[str],
    max_rank: int,
):
    """
    Render a blast radius or data journey graph.

    GRAPH_FILE is a saved service response (JSON) or a directory
    containing .witu/graph.json. With --root-id it is a directory of
    responses keyed by root component id.
    """
    suffix = Path(output).suffix.lower()
    if suffix not in OUTPUT_SUFFIXES:
        echo_error(f"Unsupported output format: {suffix or output} (use .svg or .html)")
        sys.exit(1)

    config = load_config()
    coordinator = RenderCoordinator(
        layout_config=config.layout,
        viewport_width=width or config.default_viewport_width,
    )

    coordinator.update(LoadRequested())
    try:
        if root_id:
            graph = FileGraphSource(graph_file).fetch(root_id, max_rank)
        else:
            graph = load_graph(graph_file)
    except UpstreamFetchError as e:
        coordinator.update(LoadFailed(coordinator.sequence, e.message))
        echo_error(str(e))
        sys.exit(1)
    coordinator.update(GraphLoaded(coordinator.sequence, graph))

    for warning in coordinator.graph.warnings:
        echo_warning(warning)

    if coordinator.status is ViewStatus.EMPTY:
        echo_no_data()
        return

    if select_id and coordinator.graph.get_node(select_id) is None:
        echo_warning(f"{NodeNotFoundError(select_id)}, keeping the root selected")
    elif select_id:
        coordinator.update(NodeSelected(select_id))

    coordinator.update(ZoomSet(zoom))
    scene = coordinator.render()

    if suffix == ".svg":
        report_sink(save_file(output, scene.to_svg()), f"Graph written to {output}")
        return

    html = generate_html(coordinator, scene, title=title)
    if open_browser:
        if report_sink(open_visualization(html, output), f"Graph written to {output}"):
            echo_info("Opened in browser")
        return
    report_sink(save_file(output, html), f"Graph written to {output}")
