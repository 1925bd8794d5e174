"""
Witu - Where Is This Used?

Visualizes which metadata components use, or are used by, a given
component. Dependency data arrives as a graph of nodes and directed edges
annotated with a rank (hop distance from the searched component).

Key Components:
- core: Data types, derived graph index, payload loading and output sinks
- analysis: Rank classification and cycle detection
- graph: Layered layout, render coordination and SVG/HTML scenes
- export: CSV, package.xml, Markdown, Mermaid and plain text emitters

Usage:
    from witu.core.source import load_graph
    from witu.graph.layout import layout

    graph = load_graph("blast_radius.json")
    result = layout(graph.nodes)
"""

__version__ = "0.1.0"

from .core import (
    Direction,
    Edge,
    Graph,
    GraphStats,
    Node,
    RelationshipType,
    SearchContext,
)

__all__ = [
    "__version__",
    "Direction",
    "Edge",
    "Graph",
    "GraphStats",
    "Node",
    "RelationshipType",
    "SearchContext",
]
