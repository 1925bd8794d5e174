"""
CSV emitters, one per view.

Each view has a fixed column order. Quoting is standard CSV: a cell with a
comma, double quote or newline is wrapped in double quotes and inner quotes
are doubled.
"""

import csv
import io
from typing import Any, Iterable, Sequence

from ..core.types import DependencyGroup, Edge, FlowPhase, Node
from .base import cell, coerce_items

DEPENDENCY_COLUMNS = ["Component Name", "Component Type", "Namespace", "Access Type", "Setup URL"]
BLAST_RADIUS_COLUMNS = [
    "Component Name", "Component Type", "Depth", "Is Root", "Is Cycle Node", "Setup URL",
]
JOURNEY_COLUMNS = ["Node Name", "Node Type", "Direction", "Access Type", "Depth", "Setup URL"]
PROCESS_FLOW_COLUMNS = [
    "Phase", "Phase Name", "Automation Name", "Automation Type", "Is Active", "Setup URL",
]
EDGE_COLUMNS = ["Source Id", "Target Id", "Relationship", "Detail"]


def build_csv(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([cell(value) for value in row])
    return buffer.getvalue()


def dependency_csv(groups: Any) -> str:
    groups = coerce_items("dependency_csv", groups, DependencyGroup)
    return build_csv(
        DEPENDENCY_COLUMNS,
        (
            [r.name, r.component_type, r.namespace, r.access_type, r.setup_url]
            for group in groups
            for r in group.records
        ),
    )


def blast_radius_csv(nodes: Any) -> str:
    nodes = coerce_items("blast_radius_csv", nodes, Node)
    return build_csv(
        BLAST_RADIUS_COLUMNS,
        (
            [n.name, n.component_type, n.rank, n.is_root, n.is_cycle_node, n.setup_url]
            for n in nodes
        ),
    )


def journey_csv(nodes: Any) -> str:
    nodes = coerce_items("journey_csv", nodes, Node)
    return build_csv(
        JOURNEY_COLUMNS,
        (
            [n.name, n.component_type, n.direction, n.access_type, n.rank or 0, n.setup_url]
            for n in nodes
        ),
    )


def process_flow_csv(phases: Any) -> str:
    phases = coerce_items("process_flow_csv", phases, FlowPhase)
    return build_csv(
        PROCESS_FLOW_COLUMNS,
        (
            [p.phase_number, p.phase_name, s.name, s.automation_type, s.is_active, s.setup_url]
            for p in phases
            for s in p.steps
        ),
    )


def edges_csv(edges: Any) -> str:
    """Raw edges, including those whose endpoints are not in the graph."""
    edges = coerce_items("edges_csv", edges, Edge)
    return build_csv(
        EDGE_COLUMNS,
        ([e.source_id, e.target_id, e.relationship, e.detail] for e in edges),
    )
