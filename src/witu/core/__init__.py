"""
Core modules for witu.

This package contains the fundamental building blocks:
- types: Node, Edge and the auxiliary view payloads
- graph: Immutable Graph with its derived index, cycle detection
- source: Loading service responses
- sinks: File and clipboard output
"""

from .graph import Graph, GraphIndex, GraphStats, find_cycle_nodes
from .types import (
    ComponentKind,
    DependencyGroup,
    DependencyRecord,
    DependencyResult,
    Direction,
    Edge,
    FlowPhase,
    FlowStep,
    Node,
    ProcessFlow,
    RelationshipType,
    SearchContext,
)

__all__ = [
    "ComponentKind",
    "DependencyGroup",
    "DependencyRecord",
    "DependencyResult",
    "Direction",
    "Edge",
    "FlowPhase",
    "FlowStep",
    "Graph",
    "GraphIndex",
    "GraphStats",
    "Node",
    "ProcessFlow",
    "RelationshipType",
    "SearchContext",
    "find_cycle_nodes",
]
