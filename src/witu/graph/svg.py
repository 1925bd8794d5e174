"""
SVG scene drawing.

A Scene is one accepted render pass: the layout, the scale it is shown at
and the current selection. `to_svg` redraws the whole scene every time;
there is no incremental patching.
"""

from dataclasses import dataclass
from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

from ..core.graph import Graph
from ..core.types import Edge
from .layout import Layout
from .palette import node_color

SVG_NS = "http://www.w3.org/2000/svg"

SVG_STYLE = """
    .edge { fill: none; stroke: #A0A8B8; stroke-width: 1.5; }
    .edge.selected { stroke: #0176D3; stroke-width: 2.5; }
    .node { stroke: #FFFFFF; stroke-width: 2; cursor: pointer; }
    .node.selected { stroke: #032D60; stroke-width: 3; }
    .node-label { font: 12px -apple-system, "Segoe UI", sans-serif; fill: #181818; }
"""


def _num(value: float) -> str:
    return f"{value:.12g}"


@dataclass(frozen=True)
class Scene:
    """Everything needed to draw one frame of the graph."""
    graph: Graph
    layout: Layout
    scale: float
    canvas_width: float
    canvas_height: float
    node_radius: int
    selected_node_id: Optional[str] = None

    @property
    def view_box(self) -> str:
        return f"0 0 {_num(self.canvas_width)} {_num(self.canvas_height)}"

    def drawable_edges(self) -> List[Edge]:
        return [
            edge for edge in self.graph.resolvable_edges()
            if edge.source_id in self.layout.positions and edge.target_id in self.layout.positions
        ]

    def is_highlighted(self, edge: Edge) -> bool:
        return edge.touches(self.selected_node_id)

    def highlighted_edges(self) -> List[Edge]:
        return [edge for edge in self.drawable_edges() if self.is_highlighted(edge)]

    def edge_path(self, edge: Edge) -> str:
        """Quadratic curve from the right of the source to the left of the target."""
        source = self.layout.positions[edge.source_id]
        target = self.layout.positions[edge.target_id]
        r = self.node_radius
        control_x = (source.x + target.x) / 2
        return (
            f"M {_num(source.x + r)} {_num(source.y)} "
            f"Q {_num(control_x)} {_num(source.y)} "
            f"{_num(target.x - r)} {_num(target.y)}"
        )

    def to_svg(self) -> str:
        lines = [
            f'<svg xmlns="{SVG_NS}" viewBox="{self.view_box}" '
            f'width="100%" height="{_num(self.canvas_height)}">',
            f"  <style>{SVG_STYLE}  </style>",
            f'  <g class="graph-content" transform="scale({_num(self.scale)})">',
        ]

        for edge in self.drawable_edges():
            css = "edge selected" if self.is_highlighted(edge) else "edge"
            lines.append(f'    <path d="{self.edge_path(edge)}" class="{css}"/>')

        for node in self.graph.nodes:
            point = self.layout.positions.get(node.id)
            if point is None:
                continue
            css = "node selected" if node.id == self.selected_node_id else "node"
            lines.append(f'    <g class="node-group" data-node-id={quoteattr(node.id)}>')
            lines.append(
                f'      <circle cx="{_num(point.x)}" cy="{_num(point.y)}" '
                f'r="{self.node_radius}" fill="{node_color(node)}" class="{css}"/>'
            )
            lines.append(
                f'      <text x="{_num(point.x + self.node_radius + 8)}" '
                f'y="{_num(point.y + 4)}" class="node-label">{escape(node.name)}</text>'
            )
            lines.append("    </g>")

        lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines) + "\n"
