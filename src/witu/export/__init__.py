"""
Export emitters.

Each emitter is a pure function from view data (and an optional search
context) to text. None of them depend on layout or on each other.
"""

from .diagram import mermaid_diagram
from .manifest import package_xml
from .markdown import markdown_table
from .tabular import (
    blast_radius_csv,
    dependency_csv,
    edges_csv,
    journey_csv,
    process_flow_csv,
)
from .text import dependency_text, journey_text, process_flow_text

__all__ = [
    "blast_radius_csv",
    "dependency_csv",
    "dependency_text",
    "edges_csv",
    "journey_csv",
    "journey_text",
    "markdown_table",
    "mermaid_diagram",
    "package_xml",
    "process_flow_csv",
    "process_flow_text",
]
