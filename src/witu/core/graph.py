"""
Graph model and its derived index.

A Graph is the immutable unit handed over by the dependency discovery
service. Everything derived from it (the id lookup, the incoming edge lists
and the content fingerprint) is computed once at construction and travels
with the Graph, so two graphs can never share or corrupt each other's index.

Cycle detection is backed by rustworkx.
"""

import hashlib
import json
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

import rustworkx as rx
from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    PrivateAttr,
    model_validator,
)

from .types import WIRE_CONFIG, Edge, Node

logger = logging.getLogger(__name__)


class GraphIndex:
    """
    O(1) lookups over one graph's nodes and edges.

    Edges are indexed as given, so dangling references still show up in
    `incoming_by_target`; use `resolvable_edges` to filter them.
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge]):
        self.node_by_id: Dict[str, Node] = {}
        self.incoming_by_target: Dict[str, List[Edge]] = defaultdict(list)
        self.outgoing_by_source: Dict[str, List[Edge]] = defaultdict(list)

        for node in nodes:
            self.node_by_id[node.id] = node
        for edge in edges:
            self.incoming_by_target[edge.target_id].append(edge)
            self.outgoing_by_source[edge.source_id].append(edge)

    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self.node_by_id.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.node_by_id

    def incoming(self, node_id: str) -> List[Edge]:
        return list(self.incoming_by_target.get(node_id, []))

    def outgoing(self, node_id: str) -> List[Edge]:
        return list(self.outgoing_by_source.get(node_id, []))

    def resolves(self, edge: Edge) -> bool:
        """True when both endpoints of the edge are known nodes."""
        return edge.source_id in self.node_by_id and edge.target_id in self.node_by_id


class GraphStats(BaseModel):
    """Summary counts reported alongside a graph."""
    model_config = WIRE_CONFIG

    total_nodes: int = 0
    total_edges: int = 0
    max_rank_reached: int = Field(
        default=0,
        validation_alias=AliasChoices(
            "maxRankReached", "maxDepthReached", "max_rank_reached"
        ),
    )

    @classmethod
    def derive(cls, nodes: Sequence[Node], edges: Sequence[Edge]) -> "GraphStats":
        ranks = [node.rank for node in nodes if node.rank is not None]
        return cls(
            total_nodes=len(nodes),
            total_edges=len(edges),
            max_rank_reached=max(ranks, default=0),
        )


class Graph(BaseModel):
    """
    Nodes, edges, stats and warnings of one service response.

    Invariants: node ids are unique and at most one node is flagged as root.
    When no node is flagged, the first node acts as root.
    """
    model_config = WIRE_CONFIG

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    stats: Optional[GraphStats] = None
    warnings: List[str] = Field(default_factory=list)

    _index: GraphIndex = PrivateAttr()
    _fingerprint: str = PrivateAttr(default="")

    @model_validator(mode="before")
    @classmethod
    def _accept_warning_message(cls, data: Any) -> Any:
        # Older payloads carry a single warningMessage string
        if isinstance(data, dict) and data.get("warningMessage") and not data.get("warnings"):
            data = {**data, "warnings": [data["warningMessage"]]}
        return data

    @model_validator(mode="after")
    def _check_invariants(self) -> "Graph":
        seen: Set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"duplicate node id: {node.id}")
            seen.add(node.id)

        roots = [node.id for node in self.nodes if node.is_root]
        if len(roots) > 1:
            raise ValueError(f"multiple root nodes: {', '.join(roots)}")
        return self

    def model_post_init(self, __context) -> None:
        if self.stats is None:
            object.__setattr__(self, "stats", GraphStats.derive(self.nodes, self.edges))
        self._index = GraphIndex(self.nodes, self.edges)
        self._fingerprint = self._compute_fingerprint()

    def _compute_fingerprint(self) -> str:
        payload = {
            "nodes": [
                [n.id, n.name, n.component_type, n.rank, n.is_root, n.is_cycle_node]
                for n in self.nodes
            ],
            "edges": [[e.source_id, e.target_id, e.relationship] for e in self.edges],
        }
        encoded = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()

    @property
    def index(self) -> GraphIndex:
        return self._index

    @property
    def fingerprint(self) -> str:
        """Content hash over node identity, rank, flags and edge endpoints."""
        return self._fingerprint

    @property
    def root(self) -> Optional[Node]:
        for node in self.nodes:
            if node.is_root:
                return node
        return self.nodes[0] if self.nodes else None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        return self._index.get_node(node_id)

    def resolvable_edges(self) -> List[Edge]:
        """Edges whose endpoints are both known. Dangling edges are dropped."""
        kept = [edge for edge in self.edges if self._index.resolves(edge)]
        dropped = len(self.edges) - len(kept)
        if dropped:
            logger.debug(f"Dropped {dropped} edge(s) referencing unknown nodes")
        return kept

    def replace_nodes(self, nodes: Iterable[Node]) -> "Graph":
        """New Graph with the same edges and warnings and recomputed max rank."""
        nodes = list(nodes)
        stats = self.stats.model_copy(
            update={"max_rank_reached": GraphStats.derive(nodes, self.edges).max_rank_reached}
        )
        return Graph(nodes=nodes, edges=self.edges, stats=stats, warnings=self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def find_cycle_nodes(
    nodes: Sequence[Node], edges: Sequence[Edge], root_id: Optional[str]
) -> Set[str]:
    """
    Ids of nodes on a directed cycle reachable from the root.

    A node is on a cycle when its strongly connected component has more than
    one member or it has a self-loop. An unknown root yields an empty set.
    """
    graph = rx.PyDiGraph(multigraph=True)
    id_to_idx: Dict[str, int] = {}
    for node in nodes:
        id_to_idx[node.id] = graph.add_node(node.id)

    if root_id not in id_to_idx:
        return set()

    self_loops: Set[int] = set()
    for edge in edges:
        u = id_to_idx.get(edge.source_id)
        v = id_to_idx.get(edge.target_id)
        if u is None or v is None:
            continue
        if u == v:
            self_loops.add(u)
        graph.add_edge(u, v, edge.relationship)

    root_idx = id_to_idx[root_id]
    reachable = set(rx.descendants(graph, root_idx)) | {root_idx}

    on_cycle: Set[int] = set(self_loops)
    for component in rx.strongly_connected_components(graph):
        if len(component) > 1:
            on_cycle.update(component)

    return {graph[idx] for idx in on_cycle & reachable}
