"""
Plain text reports.

Human-readable dumps that mirror the tabular exports. There is no
machine-readable contract for these.
"""

from typing import Any, Dict, List, Optional

from ..core.graph import Graph
from ..core.types import DependencyGroup, Direction, Node, ProcessFlow, SearchContext
from .base import coerce_items, coerce_one

HEADING_RULE = "=" * 60
GROUP_RULE = "-" * 40


def _context(emitter: str, context: Any):
    return coerce_one(emitter, context, SearchContext) if context is not None else None


def dependency_text(groups: Any, context: Any = None) -> str:
    groups = coerce_items("dependency_text", groups, DependencyGroup)
    context = _context("dependency_text", context)

    lines: List[str] = []
    if context is not None and context.heading:
        lines.append(f"Dependencies of {context.heading}")
        lines.append(HEADING_RULE)
        lines.append("")

    for group in groups:
        lines.append(f"{group.component_type} ({group.count})")
        lines.append(GROUP_RULE)
        for r in group.records:
            entry = f"  • {r.name}"
            if r.access_type:
                entry += f" [{r.access_type}]"
            if r.namespace:
                entry += f" ({r.namespace})"
            lines.append(entry)
        lines.append("")

    return "\n".join(lines) + "\n" if lines else ""


def _journey_node_line(node: Node, indent: int = 0) -> str:
    pad = "  " * indent
    rank = node.rank if node.rank is not None else 0
    return (
        f"{pad}- {node.name} | type={node.component_type} | "
        f"direction={node.direction or 'n/a'} | access={node.access_type or 'n/a'} | depth={rank}"
    )


def journey_text(graph: Any, context: Any = None, depth: Optional[int] = None) -> str:
    """
    Report of a data journey: nodes grouped by direction, then edges.

    depth is the traversal bound the journey was requested with; when it is
    not known the deepest rank present in the graph is reported instead.

    Downstream nodes are indented by how many hops they are past the first
    downstream step.
    """
    graph = coerce_one("journey_text", graph, Graph)
    context = _context("journey_text", context)

    title = "Data Journey"
    if context is not None and context.object_name:
        title += f": {context.object_name}.{context.field_name or ''}"

    lines = [
        title,
        f"Depth: {depth if depth is not None else graph.stats.max_rank_reached}",
        f"Nodes: {graph.node_count}",
        f"Edges: {graph.edge_count}",
        "",
    ]

    if graph.warnings:
        lines.append("Warnings:")
        lines.extend(f"- {warning}" for warning in graph.warnings)
        lines.append("")

    by_direction: Dict[Direction, List[Node]] = {d: [] for d in Direction}
    for node in graph.nodes:
        by_direction[node.direction or Direction.ROOT].append(node)

    lines.append("Root:")
    lines.extend(_journey_node_line(n) for n in by_direction[Direction.ROOT])
    lines.append("")

    lines.append("Upstream:")
    upstream = sorted(by_direction[Direction.UPSTREAM], key=lambda n: n.name)
    lines.extend(_journey_node_line(n) for n in upstream)
    lines.append("")

    lines.append("Downstream:")
    downstream = sorted(
        by_direction[Direction.DOWNSTREAM], key=lambda n: (n.rank or 1, n.name)
    )
    lines.extend(_journey_node_line(n, indent=max((n.rank or 1) - 1, 0)) for n in downstream)
    lines.append("")

    lines.append("Edges:")
    for edge in graph.edges:
        source = graph.get_node(edge.source_id)
        target = graph.get_node(edge.target_id)
        lines.append(
            f"- {source.name if source else edge.source_id} -> "
            f"{target.name if target else edge.target_id} | "
            f"{edge.relationship_label} | {edge.detail or ''}"
        )

    return "\n".join(lines) + "\n"


def automation_counts(flow: ProcessFlow) -> Dict[str, int]:
    counts = {"triggers": 0, "validation_rules": 0, "flows": 0, "workflows": 0}
    for step in flow.iter_steps():
        kind = step.automation_type
        if kind in ("BeforeTrigger", "AfterTrigger"):
            counts["triggers"] += 1
        elif kind == "ValidationRule":
            counts["validation_rules"] += 1
        elif kind.startswith("Flow_"):
            counts["flows"] += 1
        elif kind in ("WorkflowRule", "WorkflowFieldUpdate"):
            counts["workflows"] += 1
    return counts


def process_flow_text(flow: Any) -> str:
    flow = coerce_one("process_flow_text", flow, ProcessFlow)
    counts = automation_counts(flow)

    lines = [
        "Process Flow Map",
        f"Object: {flow.object_name}",
        f"Context: {flow.trigger_context}",
        f"Total automations: {flow.total_automations}",
        (
            f"Summary: {counts['triggers']} triggers, {counts['validation_rules']} VRs, "
            f"{counts['flows']} flows, {counts['workflows']} workflows"
        ),
        "",
    ]

    for phase in flow.phases:
        lines.append(f"{phase.phase_number}. {phase.phase_name}")
        if not phase.steps:
            lines.append("  [none]")
            lines.append("")
            continue

        for step in phase.steps:
            state = "Active" if step.is_active else "Inactive"
            lines.append(f"  - {step.name or '[unnamed]'} [{state}]")
            lines.append(f"    Context: {step.trigger_context or 'n/a'}")
            if step.description:
                lines.append(f"    Description: {step.description}")
            if step.setup_url:
                lines.append(f"    Setup: {step.setup_url}")
        lines.append("")

    if flow.warnings:
        lines.append("Warnings:")
        lines.extend(f"- {warning}" for warning in flow.warnings)
        lines.append("")

    return "\n".join(lines) + "\n"
