"""
Exception types raised by witu.

Dangling edge references and empty results are deliberately absent: the
former are dropped silently during layout, the latter is a view status.
"""

from typing import Optional


class WituError(Exception):
    """Base class for all witu errors."""


class UpstreamFetchError(WituError):
    """
    Raised when the dependency discovery service cannot deliver a graph.

    Attributes:
        source: Where the graph was requested from (URL, file, service name).
        message: Human-readable error message.
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Failed to fetch graph from {source}: {message}")


class MalformedInputError(WituError):
    """
    Raised when an emitter receives data that does not match its model.

    Attributes:
        emitter: Name of the emitter that rejected the input.
        detail: Description of what was wrong.
    """

    def __init__(self, emitter: str, detail: str):
        self.emitter = emitter
        self.detail = detail
        super().__init__(f"{emitter}: malformed input: {detail}")


class SinkError(WituError):
    """
    Raised (or returned) when a file or clipboard write is refused.

    Attributes:
        target: File path or clipboard command.
        message: Human-readable error message.
    """

    def __init__(self, target: str, message: str):
        self.target = target
        self.message = message
        super().__init__(f"Could not write to {target}: {message}")


class NodeNotFoundError(WituError):
    """Raised when a caller names a node id the graph does not contain."""

    def __init__(self, node_id: Optional[str]):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")
