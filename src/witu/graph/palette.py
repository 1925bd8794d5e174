"""
Node colors and labels.

Every ComponentKind has an entry in each table; unknown component types
parse to ComponentKind.OTHER, so lookups never fail.
"""

from typing import Dict, List, NamedTuple

from ..core.types import ComponentKind, Direction, Node

ROOT_COLOR = "#FF538A"
CYCLE_COLOR = "#FE9339"
FALLBACK_COLOR = "#5F6A7D"

KIND_COLORS: Dict[ComponentKind, str] = {
    ComponentKind.FLOW: "#1B96FF",
    ComponentKind.APEX_CLASS: "#9050E9",
    ComponentKind.APEX_TRIGGER: "#BA01FF",
    ComponentKind.VALIDATION_RULE: "#FE5C4C",
    ComponentKind.LAYOUT: "#04844B",
    ComponentKind.LIGHTNING_COMPONENT: "#0D9DDA",
    ComponentKind.AURA_COMPONENT: "#0D9DDA",
    ComponentKind.JOURNEY_FIELD: "#1B96FF",
    ComponentKind.JOURNEY_FLOW: "#9050E9",
    ComponentKind.JOURNEY_APEX: "#04844B",
    ComponentKind.JOURNEY_VALIDATION_RULE: "#FE5C4C",
    ComponentKind.JOURNEY_FORMULA: "#0D9DDA",
    ComponentKind.JOURNEY_WORKFLOW_UPDATE: "#FE9339",
    ComponentKind.OTHER: FALLBACK_COLOR,
}

KIND_LABELS: Dict[ComponentKind, str] = {
    ComponentKind.FLOW: "Flow",
    ComponentKind.APEX_CLASS: "Apex Class",
    ComponentKind.APEX_TRIGGER: "Apex Trigger",
    ComponentKind.VALIDATION_RULE: "Validation Rule",
    ComponentKind.LAYOUT: "Layout",
    ComponentKind.LIGHTNING_COMPONENT: "Lightning Web Component",
    ComponentKind.AURA_COMPONENT: "Aura Component",
    ComponentKind.JOURNEY_FIELD: "Field",
    ComponentKind.JOURNEY_FLOW: "Flow",
    ComponentKind.JOURNEY_APEX: "Apex",
    ComponentKind.JOURNEY_VALIDATION_RULE: "Validation Rule",
    ComponentKind.JOURNEY_FORMULA: "Formula",
    ComponentKind.JOURNEY_WORKFLOW_UPDATE: "Workflow Field Update",
    ComponentKind.OTHER: "Metadata",
}

DIRECTION_LABELS: Dict[Direction, str] = {
    Direction.ROOT: "Root",
    Direction.UPSTREAM: "Upstream",
    Direction.DOWNSTREAM: "Downstream",
}


class LegendItem(NamedTuple):
    label: str
    color: str


LEGEND: List[LegendItem] = [
    LegendItem("Flow", KIND_COLORS[ComponentKind.FLOW]),
    LegendItem("Apex Class", KIND_COLORS[ComponentKind.APEX_CLASS]),
    LegendItem("Apex Trigger", KIND_COLORS[ComponentKind.APEX_TRIGGER]),
    LegendItem("Validation Rule", KIND_COLORS[ComponentKind.VALIDATION_RULE]),
    LegendItem("Layout", KIND_COLORS[ComponentKind.LAYOUT]),
    LegendItem("LWC/Aura", KIND_COLORS[ComponentKind.LIGHTNING_COMPONENT]),
    LegendItem("Root", ROOT_COLOR),
    LegendItem("Cycle", CYCLE_COLOR),
]


def node_color(node: Node) -> str:
    """Root and cycle colors win over the per-type color."""
    if node.is_root:
        return ROOT_COLOR
    if node.is_cycle_node:
        return CYCLE_COLOR
    return KIND_COLORS.get(node.kind, FALLBACK_COLOR)


def kind_label(node: Node) -> str:
    if node.kind is ComponentKind.OTHER and node.component_type:
        return node.component_type
    return KIND_LABELS[node.kind]


def direction_label(node: Node) -> str:
    if node.direction is None:
        return DIRECTION_LABELS[Direction.ROOT] if node.is_root else ""
    return DIRECTION_LABELS[node.direction]
