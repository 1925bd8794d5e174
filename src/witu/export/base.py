"""
Input checking shared by the emitters.

Emitters are total over their documented models but refuse anything else
up front, so a bad payload never produces half-written output.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.exceptions import MalformedInputError
from ..core.graph import Graph
from ..core.types import DependencyGroup, DependencyRecord

M = TypeVar("M", bound=BaseModel)


def coerce_items(emitter: str, items: Any, model: Type[M]) -> List[M]:
    """
    Validate a sequence of model instances or wire dicts.

    None is treated as empty. Strings, mappings and non-iterables are
    rejected, as is any element that does not validate.
    """
    if items is None:
        return []
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        raise MalformedInputError(
            emitter, f"expected a sequence of {model.__name__}, got {type(items).__name__}"
        )
    try:
        return TypeAdapter(List[model]).validate_python(list(items))
    except ValidationError as e:
        raise MalformedInputError(emitter, str(e)) from e


def coerce_one(emitter: str, value: Any, model: Type[M]) -> M:
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        raise MalformedInputError(
            emitter, f"expected {model.__name__}, got {type(value).__name__}"
        )
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise MalformedInputError(emitter, str(e)) from e


def cell(value: Any) -> str:
    """Render an optional value as text. Booleans are lower-case."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def records_from_graph(graph: Graph) -> List[DependencyRecord]:
    """Every non-root node of a graph as a dependency record."""
    root = graph.root
    return [
        DependencyRecord(
            component_id=node.id,
            name=node.name,
            component_type=node.component_type,
            namespace=node.namespace,
            access_type=node.access_type,
            setup_url=node.setup_url,
        )
        for node in graph.nodes
        if root is None or node.id != root.id
    ]


def group_records(records: List[DependencyRecord]) -> List[DependencyGroup]:
    """Group records by component type, keeping first-seen order."""
    by_type: Dict[str, List[DependencyRecord]] = {}
    for record in records:
        by_type.setdefault(record.component_type, []).append(record)
    return [
        DependencyGroup(component_type=component_type, records=members)
        for component_type, members in by_type.items()
    ]


def records_from_groups(groups: List[DependencyGroup]) -> List[DependencyRecord]:
    """Flatten groups. A record without its own type takes the group's."""
    return [
        record if record.component_type
        else record.model_copy(update={"component_type": group.component_type})
        for group in groups
        for record in group.records
    ]
