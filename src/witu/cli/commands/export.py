"""
Export Command - Turn a saved service response into CSV, package.xml,
Markdown, Mermaid or plain text.

Each view accepts a fixed set of formats; the matrix lives in EXPORTERS.
"""

import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Type

import click
from pydantic import BaseModel

from ...analysis.ranks import classify_graph, needs_classification
from ...config import load_config
from ...core.exceptions import MalformedInputError
from ...core.graph import Graph
from ...core.sinks import copy_to_clipboard, save_file
from ...core.types import DependencyResult, ProcessFlow, SearchContext
from ...export import (
    blast_radius_csv,
    dependency_csv,
    dependency_text,
    edges_csv,
    journey_csv,
    journey_text,
    markdown_table,
    mermaid_diagram,
    package_xml,
    process_flow_csv,
    process_flow_text,
)
from ...export.base import group_records, records_from_graph, records_from_groups
from ..utils import echo_error, echo_no_data, echo_warning, load_or_report, report_sink

Exporter = Callable[[BaseModel, SearchContext, str], str]

VIEW_MODELS: Dict[str, Type[BaseModel]] = {
    "dependencies": DependencyResult,
    "blast-radius": Graph,
    "journey": Graph,
    "process-flow": ProcessFlow,
}

FORMAT_EXTENSIONS: Dict[str, str] = {
    "csv": "csv",
    "edges-csv": "csv",
    "manifest": "xml",
    "markdown": "md",
    "mermaid": "mmd",
    "text": "txt",
}

EXPORTERS: Dict[Tuple[str, str], Exporter] = {
    ("dependencies", "csv"): lambda r, ctx, v: dependency_csv(r.groups),
    ("dependencies", "manifest"): lambda r, ctx, v: package_xml(
        records_from_groups(r.groups), ctx, version=v
    ),
    ("dependencies", "markdown"): lambda r, ctx, v: markdown_table(r.groups, ctx),
    ("dependencies", "text"): lambda r, ctx, v: dependency_text(r.groups, ctx),
    ("blast-radius", "csv"): lambda g, ctx, v: blast_radius_csv(g.nodes),
    ("blast-radius", "edges-csv"): lambda g, ctx, v: edges_csv(g.edges),
    ("blast-radius", "manifest"): lambda g, ctx, v: package_xml(
        records_from_graph(g), ctx, version=v
    ),
    ("blast-radius", "markdown"): lambda g, ctx, v: markdown_table(
        group_records(records_from_graph(g)), ctx
    ),
    ("blast-radius", "mermaid"): lambda g, ctx, v: mermaid_diagram(g.nodes, g.edges, ctx),
    ("blast-radius", "text"): lambda g, ctx, v: dependency_text(
        group_records(records_from_graph(g)), ctx
    ),
    ("journey", "csv"): lambda g, ctx, v: journey_csv(g.nodes),
    ("journey", "edges-csv"): lambda g, ctx, v: edges_csv(g.edges),
    ("journey", "mermaid"): lambda g, ctx, v: mermaid_diagram(g.nodes, g.edges, ctx, "LR"),
    ("journey", "text"): lambda g, ctx, v: journey_text(g, ctx),
    ("process-flow", "csv"): lambda f, ctx, v: process_flow_csv(f.phases),
    ("process-flow", "text"): lambda f, ctx, v: process_flow_text(f),
}


def supported_formats(view: str) -> List[str]:
    return [fmt for (v, fmt) in EXPORTERS if v == view]


def default_context(payload: BaseModel) -> SearchContext:
    """Search context implied by the payload itself."""
    if isinstance(payload, DependencyResult):
        return payload.context
    if isinstance(payload, ProcessFlow):
        return SearchContext(object_name=payload.object_name or None)
    root = payload.root
    if root is None:
        return SearchContext()
    return SearchContext(component_name=root.name, metadata_type=root.component_type or None)


def default_filename(view: str, fmt: str, context: SearchContext) -> str:
    """File name used when -o names a directory."""
    if fmt == "manifest":
        return "package.xml"
    return f"{context.file_prefix}-{view}.{FORMAT_EXTENSIONS[fmt]}"


def is_empty(payload: BaseModel) -> bool:
    if isinstance(payload, DependencyResult):
        return not payload.groups
    if isinstance(payload, ProcessFlow):
        return payload.total_automations == 0
    return payload.is_empty


def build_export(
    view: str,
    fmt: str,
    payload: BaseModel,
    context: Optional[SearchContext] = None,
    version: Optional[str] = None,
) -> str:
    """
    Run the emitter for one view/format pair.

    Raises:
        click.UsageError: If the view does not support the format.
        MalformedInputError: If the payload does not fit the emitter.
    """
    exporter = EXPORTERS.get((view, fmt))
    if exporter is None:
        raise click.UsageError(
            f"View '{view}' cannot be exported as '{fmt}'. "
            f"Supported: {', '.join(supported_formats(view))}"
        )

    if isinstance(payload, Graph) and needs_classification(payload):
        payload = classify_graph(payload)
    if context is None:
        context = default_context(payload)
    return exporter(payload, context, version or load_config().manifest_version)


@click.command()
@click.argument("input_file", default=".")
@click.option("--view", type=click.Choice(list(VIEW_MODELS)), default="blast-radius",
              help="Which service response INPUT_FILE holds")
@click.option("-f", "--format", "fmt", type=click.Choice(list(FORMAT_EXTENSIONS)), default="csv",
              help="Output format")
@click.option("-o", "--output", default=None,
              help="Write to this file (or into this directory) instead of stdout")
@click.option("--copy", "copy", is_flag=True, help="Copy the output to the clipboard")
@click.option("--component-name", default=None, help="Override the searched component name")
@click.option("--metadata-type", default=None, help="Override the searched metadata type")
@click.option("--object-name", default=None, help="Object of a data journey search")
@click.option("--field-name", default=None, help="Field of a data journey search")
def export(
    input_file: str,
    view: str,
    fmt: str,
    output: Optional[str],
    copy: bool,
    component_name: Optional[str],
    metadata_type: Optional[str],
    object_name: Optional[str],
    field_name: Optional[str],
):
    """
    Export a saved service response.

    \b
    Examples:
      witu export graph.json --view blast-radius -f csv -o impact.csv
      witu export deps.json --view dependencies -f manifest -o package.xml
      witu export journey.json --view journey -f mermaid --copy
    """
    if (view, fmt) not in EXPORTERS:
        raise click.UsageError(
            f"View '{view}' cannot be exported as '{fmt}'. "
            f"Supported: {', '.join(supported_formats(view))}"
        )

    payload = load_or_report(input_file, VIEW_MODELS[view])
    if payload is None:
        sys.exit(1)

    for warning in getattr(payload, "warnings", []):
        echo_warning(warning)

    if is_empty(payload):
        echo_no_data()
        return

    context = default_context(payload)
    overrides = {
        "component_name": component_name,
        "metadata_type": metadata_type,
        "object_name": object_name,
        "field_name": field_name,
    }
    overrides = {key: value for key, value in overrides.items() if value}
    if overrides:
        context = context.model_copy(update=overrides)

    config = load_config()
    try:
        content = build_export(view, fmt, payload, context, config.manifest_version)
    except MalformedInputError as e:
        echo_error(str(e))
        sys.exit(1)

    if copy:
        report_sink(
            copy_to_clipboard(content, config.clipboard_command), "Copied to clipboard"
        )
    if output:
        target = Path(output)
        if target.is_dir():
            target = target / default_filename(view, fmt, context)
        report_sink(save_file(target, content), f"Exported to {target}")
    if not copy and not output:
        click.echo(content, nl=False)
