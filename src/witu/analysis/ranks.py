"""
Rank Classification.

Assigns each node its hop distance from the root when the service response
does not already carry one. Ranks drive the column a node is drawn in.
"""

import logging
from collections import defaultdict, deque
from typing import Dict, List, Optional, Sequence

from ..config import DEFAULT_RANK
from ..core.graph import Graph, find_cycle_nodes
from ..core.types import Edge, Node

logger = logging.getLogger(__name__)


def _forward_adjacency(nodes: Sequence[Node], edges: Sequence[Edge]) -> Dict[str, List[str]]:
    known = {node.id for node in nodes}
    adjacency: Dict[str, List[str]] = defaultdict(list)
    for edge in edges:
        if edge.source_id in known and edge.target_id in known:
            adjacency[edge.source_id].append(edge.target_id)
    return adjacency


def _bfs_depths(adjacency: Dict[str, List[str]], root_id: str) -> Dict[str, int]:
    """
    Shortest hop count from root_id to every reachable node.

    A target's depth is relaxed to the minimum seen on every discovery. A node
    may sit in the queue more than once but is expanded only the first time
    it is dequeued, which bounds the walk on cyclic graphs.
    """
    depths: Dict[str, int] = {root_id: 0}
    visited = set()
    queue = deque([(root_id, 0)])

    while queue:
        current_id, depth = queue.popleft()
        if current_id in visited:
            continue
        visited.add(current_id)

        for target_id in adjacency.get(current_id, []):
            next_depth = depth + 1
            if target_id not in depths or next_depth < depths[target_id]:
                depths[target_id] = next_depth
            if target_id not in visited:
                queue.append((target_id, next_depth))

    return depths


def classify_ranks(
    nodes: Sequence[Node], edges: Sequence[Edge], root_id: Optional[str]
) -> Dict[str, int]:
    """
    Compute rank (hop distance from root) for every node.

    The root gets 0, reachable nodes their shortest path length, unreachable
    nodes DEFAULT_RANK. Edges with unknown endpoints are ignored. If root_id
    is not one of the nodes the result is empty and callers should fall back
    to DEFAULT_RANK for every node.
    """
    if root_id is None or not any(node.id == root_id for node in nodes):
        logger.debug(f"Root {root_id!r} not in node set, skipping rank classification")
        return {}

    depths = _bfs_depths(_forward_adjacency(nodes, edges), root_id)
    return {node.id: depths.get(node.id, DEFAULT_RANK) for node in nodes}


def classify_graph(graph: Graph, detect_cycles: bool = True) -> Graph:
    """
    Fill in what the service left out: ranks, the root flag and cycle flags.

    Nodes that already carry a rank keep it. Existing cycle flags are kept;
    detection only adds flags.
    """
    root = graph.root
    if root is None:
        return graph

    ranks = classify_ranks(graph.nodes, graph.edges, root.id)
    cycle_ids = find_cycle_nodes(graph.nodes, graph.edges, root.id) if detect_cycles else set()

    updated: List[Node] = []
    for node in graph.nodes:
        changes = {}
        if node.rank is None:
            changes["rank"] = ranks.get(node.id, DEFAULT_RANK)
        if node.id == root.id and not node.is_root:
            changes["is_root"] = True
        if node.id in cycle_ids and not node.is_cycle_node:
            changes["is_cycle_node"] = True
        updated.append(node.model_copy(update=changes) if changes else node)

    if cycle_ids:
        logger.debug(f"Flagged {len(cycle_ids)} cycle node(s)")
    return graph.replace_nodes(updated)


def needs_classification(graph: Graph) -> bool:
    return any(node.rank is None for node in graph.nodes)
