"""
Render Coordinator.

Owns the interactive view state (selection, zoom, viewport) for one graph
view and decides when the drawn scene is stale. All UI events arrive as
message objects through a single `update()` entry point, so the state
machine lives in one place.

Fetches are guarded by a monotonically increasing sequence number: a
response is applied only if it answers the most recent request.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional, Union

from ..analysis.ranks import classify_graph, needs_classification
from ..config import MAX_ZOOM, MIN_CANVAS_HEIGHT, MIN_ZOOM, ZOOM_STEP, LayoutConfig
from ..core.graph import Graph
from ..core.types import Node, access_label
from .layout import DEFAULT_LAYOUT, layout, rank_of
from .palette import direction_label, kind_label
from .svg import Scene

logger = logging.getLogger(__name__)

NO_DETAIL = "No additional detail available."


class ViewStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


# --- Messages ---

@dataclass(frozen=True)
class LoadRequested:
    """A new fetch was started (depth change, new search)."""


@dataclass(frozen=True)
class GraphLoaded:
    sequence: int
    graph: Graph


@dataclass(frozen=True)
class LoadFailed:
    sequence: int
    message: str


@dataclass(frozen=True)
class NodeSelected:
    node_id: str


@dataclass(frozen=True)
class ZoomIn:
    pass


@dataclass(frozen=True)
class ZoomOut:
    pass


@dataclass(frozen=True)
class ZoomSet:
    factor: float


@dataclass(frozen=True)
class ZoomFit:
    pass


@dataclass(frozen=True)
class ViewportResized:
    width: int


Message = Union[
    LoadRequested, GraphLoaded, LoadFailed, NodeSelected,
    ZoomIn, ZoomOut, ZoomSet, ZoomFit, ViewportResized,
]


@dataclass(frozen=True)
class RenderKey:
    """Everything whose change makes the drawn scene stale."""
    graph_version: str
    selected_node_id: Optional[str]
    zoom_factor: float
    node_count: int
    edge_count: int
    viewport_width: Optional[int]


@dataclass
class ViewState:
    selected_node_id: Optional[str] = None
    zoom_factor: float = 1.0
    last_render_key: Optional[RenderKey] = None


@dataclass(frozen=True)
class SelectionDetail:
    """What the inspector panel shows for the selected node."""
    node: Node
    type_label: str
    direction_label: str
    rank: int
    relationships: List[str] = field(default_factory=list)
    detail_text: str = NO_DETAIL
    setup_url: Optional[str] = None

    @property
    def relationship_summary(self) -> str:
        return ", ".join(self.relationships)


def fit_scale(viewport_width: Optional[int], layout_width: float) -> float:
    """Shrink to fit the viewport, never enlarge past 100%."""
    if not viewport_width or layout_width <= 0:
        return 1.0
    return min(viewport_width / layout_width, 1.0)


def default_selection(graph: Graph) -> Optional[str]:
    root = graph.root
    return root.id if root else None


class RenderCoordinator:
    """
    View state machine for one graph panel.

    Usage:
        coordinator = RenderCoordinator(viewport_width=1200)
        coordinator.update(LoadRequested())
        coordinator.update(GraphLoaded(coordinator.sequence, graph))
        scene = coordinator.render()
    """

    def __init__(
        self,
        layout_config: LayoutConfig = DEFAULT_LAYOUT,
        viewport_width: Optional[int] = None,
    ):
        self.layout_config = layout_config
        self.viewport_width = viewport_width
        self.status = ViewStatus.IDLE
        self.graph: Optional[Graph] = None
        self.error_message: Optional[str] = None
        self.view = ViewState()
        self._sequence = 0
        self._loads = 0

    @property
    def sequence(self) -> int:
        """Sequence number of the most recent fetch request."""
        return self._sequence

    @property
    def has_data(self) -> bool:
        return self.graph is not None and not self.graph.is_empty

    @property
    def selected_node(self) -> Optional[Node]:
        if self.graph is None:
            return None
        return self.graph.get_node(self.view.selected_node_id)

    @property
    def cycle_count(self) -> int:
        if self.graph is None:
            return 0
        return sum(1 for node in self.graph.nodes if node.is_cycle_node)

    def load(self, graph: Graph) -> bool:
        """Request and apply a graph in one step, for synchronous sources."""
        self.update(LoadRequested())
        return self.update(GraphLoaded(self._sequence, graph))

    def update(self, message: Message) -> bool:
        """
        Apply one message. Returns True when view state changed.
        """
        if isinstance(message, LoadRequested):
            return self._on_load_requested()
        if isinstance(message, GraphLoaded):
            return self._on_graph_loaded(message)
        if isinstance(message, LoadFailed):
            return self._on_load_failed(message)
        if isinstance(message, NodeSelected):
            return self._on_node_selected(message.node_id)
        if isinstance(message, ZoomIn):
            return self._set_zoom(min(self.view.zoom_factor * ZOOM_STEP, MAX_ZOOM))
        if isinstance(message, ZoomOut):
            return self._set_zoom(max(self.view.zoom_factor / ZOOM_STEP, MIN_ZOOM))
        if isinstance(message, ZoomSet):
            if not math.isfinite(message.factor) or message.factor <= 0:
                raise ValueError(f"Zoom factor must be a positive finite number, got {message.factor}")
            return self._set_zoom(message.factor)
        if isinstance(message, ZoomFit):
            return self._set_zoom(1.0)
        if isinstance(message, ViewportResized):
            return self._on_resize(message.width)
        raise TypeError(f"Unknown message: {message!r}")

    def _on_load_requested(self) -> bool:
        self._sequence += 1
        # Drop the previous graph now so stale data is never shown next to a spinner
        self.graph = None
        self.error_message = None
        self.view = ViewState()
        self.status = ViewStatus.LOADING
        return True

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._sequence:
            logger.debug(f"Discarding response #{sequence}, latest request is #{self._sequence}")
            return True
        return False

    def _on_graph_loaded(self, message: GraphLoaded) -> bool:
        if self._is_stale(message.sequence):
            return False

        graph = message.graph
        if needs_classification(graph):
            graph = classify_graph(graph)

        self.graph = graph
        self._loads += 1
        self.error_message = None
        self.view = ViewState(selected_node_id=default_selection(graph))
        self.status = ViewStatus.EMPTY if graph.is_empty else ViewStatus.READY
        return True

    def _on_load_failed(self, message: LoadFailed) -> bool:
        if self._is_stale(message.sequence):
            return False

        self.graph = None
        self.error_message = message.message
        self.view = ViewState()
        self.status = ViewStatus.ERROR
        return True

    def _on_node_selected(self, node_id: str) -> bool:
        if self.graph is None or self.graph.get_node(node_id) is None:
            return False
        if node_id == self.view.selected_node_id:
            return False
        self.view.selected_node_id = node_id
        self.view.last_render_key = None
        return True

    def _set_zoom(self, factor: float) -> bool:
        if factor == self.view.zoom_factor:
            return False
        self.view.zoom_factor = factor
        return True

    def _on_resize(self, width: int) -> bool:
        if width <= 0 or width == self.viewport_width:
            return False
        self.viewport_width = width
        return True

    def render_key(self) -> Optional[RenderKey]:
        if self.graph is None:
            return None
        return RenderKey(
            graph_version=f"{self._loads}:{self.graph.fingerprint}",
            selected_node_id=self.view.selected_node_id,
            zoom_factor=self.view.zoom_factor,
            node_count=self.graph.node_count,
            edge_count=self.graph.edge_count,
            viewport_width=self.viewport_width,
        )

    def render(self, force: bool = False) -> Optional[Scene]:
        """
        Build a fresh Scene if anything visible changed since the last call.

        Returns None when there is nothing to draw or the scene is current.
        """
        if not self.has_data:
            return None

        key = self.render_key()
        if not force and key == self.view.last_render_key:
            logger.debug("Render skipped, scene is current")
            return None
        self.view.last_render_key = key
        return self.build_scene()

    def build_scene(self) -> Optional[Scene]:
        """Lay out and build the scene unconditionally."""
        if not self.has_data:
            return None

        result = layout(self.graph.nodes, self.layout_config)
        scale = self.view.zoom_factor * fit_scale(self.viewport_width, result.width)
        return Scene(
            graph=self.graph,
            layout=result,
            scale=scale,
            canvas_width=max(result.width, self.viewport_width or 0),
            canvas_height=max(result.height, MIN_CANVAS_HEIGHT),
            node_radius=self.layout_config.node_radius,
            selected_node_id=self.view.selected_node_id,
        )

    def selection_detail(self) -> Optional[SelectionDetail]:
        node = self.selected_node
        if node is None:
            return None

        incoming = self.graph.index.incoming(node.id)
        relationships: List[str] = []
        for edge in incoming:
            label = edge.relationship_label
            if label and label not in relationships:
                relationships.append(label)
        if not relationships:
            relationships = [access_label(node.access_type)]

        edge_detail = " | ".join(edge.detail for edge in incoming if edge.detail)
        return SelectionDetail(
            node=node,
            type_label=kind_label(node),
            direction_label=direction_label(node),
            rank=rank_of(node),
            relationships=relationships,
            detail_text=node.detail or edge_detail or NO_DETAIL,
            setup_url=node.setup_url,
        )
