"""
Core type definitions for witu.

Payloads from the dependency discovery service use camelCase keys. Every
model here accepts both the wire names and the snake_case field names, and
dumps back to the wire names with `model_dump(by_alias=True)`.
"""

from enum import StrEnum
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class Direction(StrEnum):
    """Side of the searched component a journey node sits on."""
    ROOT = "root"
    UPSTREAM = "upstream"
    DOWNSTREAM = "downstream"


class RelationshipType(StrEnum):
    """Known edge relationships. Anything else is kept as a free-form label."""
    WRITES_TO = "writes_to"
    READ_BY = "read_by"
    TRIGGERS = "triggers"
    FEEDS_INTO = "feeds_into"


RELATIONSHIP_LABELS: Dict[str, str] = {
    RelationshipType.WRITES_TO: "writes to",
    RelationshipType.READ_BY: "reads from",
    RelationshipType.TRIGGERS: "triggers",
    RelationshipType.FEEDS_INTO: "feeds into",
}


class ComponentKind(StrEnum):
    """
    Closed set of component types the UI knows how to draw.

    Blast radius graphs use metadata type names; data journey graphs use the
    lower-case journey vocabulary. Unknown strings parse to OTHER.
    """
    FLOW = "Flow"
    APEX_CLASS = "ApexClass"
    APEX_TRIGGER = "ApexTrigger"
    VALIDATION_RULE = "ValidationRule"
    LAYOUT = "Layout"
    LIGHTNING_COMPONENT = "LightningComponentBundle"
    AURA_COMPONENT = "AuraDefinitionBundle"

    JOURNEY_FIELD = "field"
    JOURNEY_FLOW = "flow"
    JOURNEY_APEX = "apex"
    JOURNEY_VALIDATION_RULE = "validationRule"
    JOURNEY_FORMULA = "formula"
    JOURNEY_WORKFLOW_UPDATE = "workflowUpdate"

    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        return cls.OTHER

    @classmethod
    def parse(cls, value: Optional[str]) -> "ComponentKind":
        return cls(value or cls.OTHER.value)


def relationship_label(relationship: str) -> str:
    """Human label for an edge relationship, falling back to the raw value."""
    return RELATIONSHIP_LABELS.get(relationship, relationship)


def access_label(access_type: Optional[str]) -> str:
    """Collapse a free-form access type into reads, writes or reads/writes."""
    access = (access_type or "").lower()
    if "write" in access and "read" in access:
        return "reads/writes"
    if "write" in access:
        return "writes"
    return "reads"


class Node(BaseModel):
    """
    A metadata component in a dependency graph.

    `rank` is the hop distance from the root. It is None when the service did
    not classify the node; see `witu.analysis.ranks.classify_graph`.
    """
    model_config = WIRE_CONFIG

    id: str
    name: str
    component_type: str = Field(
        default="",
        validation_alias=AliasChoices("componentType", "nodeType", "component_type"),
    )
    rank: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("rank", "depth")
    )
    is_root: bool = False
    is_cycle_node: bool = False
    direction: Optional[Direction] = None
    access_type: Optional[str] = None
    detail: Optional[str] = None
    setup_url: Optional[str] = None
    namespace: Optional[str] = None

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.parse(self.component_type)


class Edge(BaseModel):
    """Directed relationship between two nodes, by id."""
    model_config = WIRE_CONFIG

    source_id: str
    target_id: str
    relationship: str = ""
    detail: Optional[str] = None

    @property
    def relationship_label(self) -> str:
        return relationship_label(self.relationship)

    def touches(self, node_id: Optional[str]) -> bool:
        """True when either endpoint is node_id."""
        return node_id is not None and node_id in (self.source_id, self.target_id)


class SearchContext(BaseModel):
    """What the user searched for. Used for headings and file names."""
    model_config = WIRE_CONFIG

    metadata_type: Optional[str] = None
    component_name: Optional[str] = None
    object_name: Optional[str] = None
    field_name: Optional[str] = None

    @property
    def heading(self) -> Optional[str]:
        if not self.component_name:
            return None
        return f"{self.component_name} ({self.metadata_type or ''})"

    @property
    def file_prefix(self) -> str:
        if self.component_name:
            return self.component_name
        if self.object_name and self.field_name:
            return f"{self.object_name}_{self.field_name}"
        return "witu"


# --- Dependency list view ---

class DependencyRecord(BaseModel):
    """One component that references the searched component."""
    model_config = WIRE_CONFIG

    component_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("metadataComponentId", "componentId", "component_id"),
    )
    name: str = Field(
        validation_alias=AliasChoices("metadataComponentName", "name"),
    )
    component_type: str = Field(
        default="",
        validation_alias=AliasChoices(
            "metadataComponentType", "componentType", "component_type"
        ),
    )
    namespace: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("metadataComponentNamespace", "namespace"),
    )
    access_type: Optional[str] = None
    setup_url: Optional[str] = None
    is_subflow_reference: bool = False


class DependencyGroup(BaseModel):
    """Records sharing one component type."""
    model_config = WIRE_CONFIG

    component_type: str
    count: Optional[int] = None
    records: List[DependencyRecord] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        if self.count is None:
            object.__setattr__(self, "count", len(self.records))


class DependencyResult(BaseModel):
    """Response of a "where is this used" search."""
    model_config = WIRE_CONFIG

    component_name: str = ""
    metadata_type: str = ""
    total_count: Optional[int] = None
    limit_reached: bool = False
    warnings: List[str] = Field(default_factory=list)
    groups: List[DependencyGroup] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        if self.total_count is None:
            total = sum(group.count or 0 for group in self.groups)
            object.__setattr__(self, "total_count", total)

    @property
    def context(self) -> SearchContext:
        return SearchContext(
            metadata_type=self.metadata_type or None,
            component_name=self.component_name or None,
        )


# --- Process flow view ---

class FlowStep(BaseModel):
    """One automation that runs during a save."""
    model_config = WIRE_CONFIG

    id: Optional[str] = None
    name: Optional[str] = None
    automation_type: str = ""
    is_active: bool = False
    trigger_context: Optional[str] = None
    description: Optional[str] = None
    setup_url: Optional[str] = None


class FlowPhase(BaseModel):
    """A numbered phase of the order of execution."""
    model_config = WIRE_CONFIG

    phase_number: int
    phase_name: str = ""
    steps: List[FlowStep] = Field(
        default_factory=list,
        validation_alias=AliasChoices("steps", "automations"),
    )


class ProcessFlow(BaseModel):
    """Automations on one object, grouped by execution phase."""
    model_config = WIRE_CONFIG

    object_name: str = ""
    trigger_context: str = "All"
    total_automations: Optional[int] = None
    phases: List[FlowPhase] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        if self.total_automations is None:
            total = sum(len(phase.steps) for phase in self.phases)
            object.__setattr__(self, "total_automations", total)

    def iter_steps(self):
        for phase in self.phases:
            yield from phase.steps
