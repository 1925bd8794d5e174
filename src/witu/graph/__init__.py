"""
Graph drawing: layered layout, render coordination and scene output.
"""

from .layout import Layout, Position, layout
from .render import RenderCoordinator, ViewStatus
from .svg import Scene

__all__ = ["Layout", "Position", "RenderCoordinator", "Scene", "ViewStatus", "layout"]
