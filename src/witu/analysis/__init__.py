"""Graph analysis: rank classification and cycle detection."""

from .ranks import classify_graph, classify_ranks

__all__ = ["classify_graph", "classify_ranks"]
