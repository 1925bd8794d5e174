"""
Mermaid diagram emitter.

Node declarations come first, then edges. Identifiers are reduced to
[A-Za-z0-9_] so any id yields a valid bare Mermaid identifier. Edges are
written as given, including those that point at unknown nodes.
"""

import re
from typing import Any, Optional

from ..core.types import Edge, Node
from .base import coerce_items

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")

DIRECTIONS = {"TD", "TB", "BT", "LR", "RL"}


def sanitize_id(value: Optional[str]) -> str:
    if not value:
        return "unknown"
    return _UNSAFE_ID_CHARS.sub("_", value)


def _label(name: str) -> str:
    # A raw line break ends the node statement
    flat = name.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    return flat.replace('"', "#quot;")


def mermaid_diagram(nodes: Any, edges: Any, context: Any = None, direction: str = "TD") -> str:
    """
    Render nodes and edges as a Mermaid flowchart.

    The root node is drawn as a subroutine box ([[...]]), all others as
    plain boxes. `context` is accepted for symmetry with the other emitters
    and does not change the output.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"Unsupported direction: {direction}")
    nodes = coerce_items("mermaid_diagram", nodes, Node)
    edges = coerce_items("mermaid_diagram", edges, Edge)

    lines = [f"graph {direction}"]
    for node in nodes:
        label = _label(node.name)
        shape = f'[["{label}"]]' if node.is_root else f'["{label}"]'
        lines.append(f"    {sanitize_id(node.id)}{shape}")

    for edge in edges:
        lines.append(f"    {sanitize_id(edge.source_id)} --> {sanitize_id(edge.target_id)}")

    return "\n".join(lines) + "\n"
