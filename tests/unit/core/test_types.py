"""Unit tests for the wire models in witu.core.types."""

import pytest
from pydantic import ValidationError

from witu.core.types import (
    ComponentKind,
    DependencyGroup,
    DependencyRecord,
    DependencyResult,
    Direction,
    Edge,
    FlowPhase,
    Node,
    ProcessFlow,
    SearchContext,
    access_label,
)


class TestNode:
    def test_accepts_wire_names(self):
        node = Node.model_validate({
            "id": "01p000000000001",
            "name": "AccountService",
            "componentType": "ApexClass",
            "rank": 2,
            "isRoot": False,
            "isCycleNode": True,
            "setupUrl": "/lightning/setup/ApexClasses/home",
        })

        assert node.component_type == "ApexClass"
        assert node.rank == 2
        assert node.is_cycle_node is True
        assert node.setup_url == "/lightning/setup/ApexClasses/home"

    def test_journey_aliases(self):
        node = Node.model_validate({
            "id": "n1", "name": "Update Owner", "nodeType": "flow",
            "depth": 1, "direction": "downstream", "accessType": "write",
        })

        assert node.component_type == "flow"
        assert node.rank == 1
        assert node.direction is Direction.DOWNSTREAM
        assert node.kind is ComponentKind.JOURNEY_FLOW

    def test_optional_fields_default(self):
        node = Node(id="a", name="A")
        assert node.rank is None
        assert node.is_root is False
        assert node.direction is None
        assert node.kind is ComponentKind.OTHER

    def test_negative_rank_rejected(self):
        with pytest.raises(ValidationError):
            Node(id="a", name="A", rank=-1)

    def test_dump_uses_wire_names(self):
        data = Node(id="a", name="A", component_type="Flow", is_root=True).model_dump(by_alias=True)
        assert data["componentType"] == "Flow"
        assert data["isRoot"] is True

    def test_nodes_are_immutable(self):
        node = Node(id="a", name="A")
        with pytest.raises(ValidationError):
            node.name = "B"


class TestComponentKind:
    @pytest.mark.parametrize("value,expected", [
        ("Flow", ComponentKind.FLOW),
        ("ApexTrigger", ComponentKind.APEX_TRIGGER),
        ("validationRule", ComponentKind.JOURNEY_VALIDATION_RULE),
        ("CustomMetadataThing", ComponentKind.OTHER),
        ("", ComponentKind.OTHER),
        (None, ComponentKind.OTHER),
    ])
    def test_parse_never_fails(self, value, expected):
        assert ComponentKind.parse(value) is expected


class TestEdge:
    def test_known_relationship_label(self):
        edge = Edge(source_id="a", target_id="b", relationship="read_by")
        assert edge.relationship_label == "reads from"

    def test_unknown_relationship_passes_through(self):
        edge = Edge(source_id="a", target_id="b", relationship="calls")
        assert edge.relationship_label == "calls"

    def test_touches(self):
        edge = Edge.model_validate({"sourceId": "a", "targetId": "b"})
        assert edge.touches("a")
        assert edge.touches("b")
        assert not edge.touches("c")
        assert not edge.touches(None)


@pytest.mark.parametrize("access,expected", [
    ("Read/Write", "reads/writes"),
    ("write", "writes"),
    ("read", "reads"),
    (None, "reads"),
])
def test_access_label(access, expected):
    assert access_label(access) == expected


class TestSearchContext:
    def test_heading(self):
        ctx = SearchContext(component_name="Account.Status__c", metadata_type="CustomField")
        assert ctx.heading == "Account.Status__c (CustomField)"

    def test_heading_without_name(self):
        assert SearchContext(metadata_type="Flow").heading is None

    def test_file_prefix(self):
        assert SearchContext(component_name="MyFlow").file_prefix == "MyFlow"
        assert SearchContext(object_name="Account", field_name="Status__c").file_prefix == (
            "Account_Status__c"
        )
        assert SearchContext().file_prefix == "witu"


class TestDependencyModels:
    def test_record_accepts_tooling_names(self):
        record = DependencyRecord.model_validate({
            "metadataComponentId": "300000000000001",
            "metadataComponentName": "Lead_Router",
            "metadataComponentType": "Flow",
            "metadataComponentNamespace": "acme",
        })
        assert record.component_id == "300000000000001"
        assert record.name == "Lead_Router"
        assert record.component_type == "Flow"
        assert record.namespace == "acme"

    def test_group_count_derived(self):
        group = DependencyGroup(
            component_type="Flow",
            records=[DependencyRecord(name="A"), DependencyRecord(name="B")],
        )
        assert group.count == 2

    def test_group_count_kept_when_given(self):
        group = DependencyGroup(component_type="Flow", count=10, records=[])
        assert group.count == 10

    def test_result_total_and_context(self):
        result = DependencyResult.model_validate({
            "componentName": "Status__c",
            "metadataType": "CustomField",
            "groups": [
                {"componentType": "Flow", "records": [{"name": "A"}]},
                {"componentType": "ApexClass", "records": [{"name": "B"}, {"name": "C"}]},
            ],
        })
        assert result.total_count == 3
        assert result.context.heading == "Status__c (CustomField)"


class TestProcessFlow:
    def test_automations_alias_and_total(self):
        flow = ProcessFlow.model_validate({
            "objectName": "Account",
            "phases": [
                {"phaseNumber": 1, "phaseName": "Before Triggers",
                 "automations": [{"name": "AccountTrigger", "automationType": "BeforeTrigger"}]},
                {"phaseNumber": 2, "phaseName": "Validation Rules", "steps": []},
            ],
        })
        assert flow.total_automations == 1
        assert [s.name for s in flow.iter_steps()] == ["AccountTrigger"]
        assert flow.phases[0].steps[0].automation_type == "BeforeTrigger"
