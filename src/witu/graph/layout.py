"""
Layered Layout Engine.

Places nodes in columns by rank and in rows by name. Each column is
centered vertically against the tallest one. The layout is a pure function
of its input: identical nodes always produce identical coordinates.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..config import DEFAULT_RANK, LayoutConfig
from ..core.types import Node

DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Layout:
    """Node positions plus the canvas extent needed to show them."""
    positions: Dict[str, Position] = field(default_factory=dict)
    width: float = 0
    height: float = 0

    def get(self, node_id: str):
        return self.positions.get(node_id)


def rank_of(node: Node) -> int:
    return node.rank if node.rank is not None else DEFAULT_RANK


def group_layers(nodes: Sequence[Node]) -> Dict[int, List[Node]]:
    """Nodes bucketed by rank, each bucket sorted by name then id."""
    layers: Dict[int, List[Node]] = defaultdict(list)
    for node in nodes:
        layers[rank_of(node)].append(node)
    return {
        rank: sorted(layers[rank], key=lambda n: (n.name, n.id))
        for rank in sorted(layers)
    }


def layout(nodes: Sequence[Node], config: LayoutConfig = DEFAULT_LAYOUT) -> Layout:
    """
    Compute (x, y) for every node and the canvas size.

    x = margin_x + rank * h_spacing
    y = margin_y + (tallest - this_layer) * v_spacing / 2 + row * v_spacing
    """
    layers = group_layers(nodes)
    max_layer_size = max((len(layer) for layer in layers.values()), default=1)
    max_rank = max(layers, default=0)

    positions: Dict[str, Position] = {}
    for rank, layer in layers.items():
        x = config.margin_x + rank * config.h_spacing
        top = config.margin_y + (max_layer_size - len(layer)) * config.v_spacing / 2
        for row, node in enumerate(layer):
            positions[node.id] = Position(x=x, y=top + row * config.v_spacing)

    width = config.margin_x * 2 + max_rank * config.h_spacing + config.label_allowance
    height = (
        config.margin_y * 2
        + max(1, max_layer_size - 1) * config.v_spacing
        + config.bottom_allowance
    )
    return Layout(positions=positions, width=width, height=height)
