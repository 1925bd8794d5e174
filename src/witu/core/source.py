"""
Inbound payload loading.

The discovery service itself lives outside witu. Its responses reach us as
JSON documents; a file on disk stands in for the service call, and every way
that call can fail is reported as an UpstreamFetchError.
"""

import json
import logging
from pathlib import Path
from typing import List, Protocol, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..config import MAX_MAX_RANK, MIN_MAX_RANK
from .exceptions import UpstreamFetchError
from .graph import Graph

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# File names tried, in order, when a directory is given instead of a file
DEFAULT_GRAPH_FILES: List[str] = [".witu/graph.json", "graph.json"]


class GraphSource(Protocol):
    """Anything that can produce a Graph for a root component."""

    def fetch(self, root_id: str, max_rank: int) -> Graph:
        ...


def validate_max_rank(max_rank: int) -> int:
    """The service accepts a traversal bound between 1 and 5 hops."""
    if not MIN_MAX_RANK <= max_rank <= MAX_MAX_RANK:
        raise ValueError(
            f"max_rank must be between {MIN_MAX_RANK} and {MAX_MAX_RANK}, got {max_rank}"
        )
    return max_rank


def resolve_payload_path(path: Union[str, Path]) -> Path:
    """Resolve a directory to the first default graph file it contains."""
    candidate = Path(path)
    if candidate.is_dir():
        for name in DEFAULT_GRAPH_FILES:
            if (candidate / name).exists():
                return candidate / name
        raise UpstreamFetchError(str(path), "no graph.json found in directory")
    return candidate


def load_payload(path: Union[str, Path], model: Type[M]) -> M:
    """Read a JSON payload from disk and validate it against model."""
    payload_path = resolve_payload_path(path)
    try:
        data = json.loads(payload_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise UpstreamFetchError(str(payload_path), "file not found")
    except (OSError, json.JSONDecodeError) as e:
        raise UpstreamFetchError(str(payload_path), str(e)) from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise UpstreamFetchError(
            str(payload_path), f"response is not a valid {model.__name__}: {e}"
        ) from e


def load_graph(path: Union[str, Path]) -> Graph:
    graph = load_payload(path, Graph)
    logger.debug(f"Loaded graph with {graph.node_count} nodes, {graph.edge_count} edges")
    return graph


class FileGraphSource:
    """
    Serves graphs from a directory of saved service responses.

    Responses are stored as `<root_id>.json`; characters that are not safe
    in file names are replaced with underscores.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, root_id: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in root_id)
        return self.directory / f"{safe}.json"

    def fetch(self, root_id: str, max_rank: int) -> Graph:
        validate_max_rank(max_rank)
        return load_graph(self.path_for(root_id))
