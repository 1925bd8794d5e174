"""Unit tests for the plain text reports."""

from witu.core.graph import Graph
from witu.core.types import (
    DependencyGroup,
    DependencyRecord,
    Edge,
    FlowPhase,
    FlowStep,
    Node,
    ProcessFlow,
    SearchContext,
)
from witu.export.text import automation_counts, dependency_text, journey_text, process_flow_text


class TestDependencyText:
    def test_grouped_report(self):
        groups = [DependencyGroup(component_type="Flow", records=[
            DependencyRecord(name="LeadRouter", access_type="write", namespace="acme"),
            DependencyRecord(name="Intake"),
        ])]
        ctx = SearchContext(component_name="Status__c", metadata_type="CustomField")
        lines = dependency_text(groups, ctx).splitlines()

        assert lines[0] == "Dependencies of Status__c (CustomField)"
        assert lines[1] == "=" * 60
        assert "Flow (2)" in lines
        assert "  • LeadRouter [write] (acme)" in lines
        assert "  • Intake" in lines

    def test_empty(self):
        assert dependency_text([]) == ""


class TestJourneyText:
    def test_sections(self):
        graph = Graph(
            nodes=[
                Node(id="f", name="Status__c", component_type="field", rank=0,
                     direction="root", is_root=True),
                Node(id="u", name="Intake Flow", component_type="flow", rank=1,
                     direction="upstream", access_type="write"),
                Node(id="d1", name="Sync", component_type="apex", rank=1, direction="downstream"),
                Node(id="d2", name="Audit", component_type="apex", rank=2, direction="downstream"),
            ],
            edges=[
                Edge(source_id="u", target_id="f", relationship="writes_to"),
                Edge(source_id="f", target_id="d1", relationship="read_by", detail="SOQL"),
                Edge(source_id="d1", target_id="ghost", relationship="triggers"),
            ],
            warnings=["Depth limit reached"],
        )
        ctx = SearchContext(object_name="Account", field_name="Status__c")
        text = journey_text(graph, ctx)
        lines = text.splitlines()

        assert lines[0] == "Data Journey: Account.Status__c"
        assert lines[1] == "Depth: 2"
        assert "Nodes: 4" in lines
        assert "- Depth limit reached" in lines
        assert "- Intake Flow | type=flow | direction=upstream | access=write | depth=1" in lines
        assert "- Sync | type=apex | direction=downstream | access=n/a | depth=1" in lines
        assert "  - Audit | type=apex | direction=downstream | access=n/a | depth=2" in lines
        assert "- Intake Flow -> Status__c | writes to | " in lines
        assert "- Status__c -> Sync | reads from | SOQL" in lines
        assert "- Sync -> ghost | triggers | " in lines

    def test_requested_depth_and_missing_direction(self):
        graph = Graph(nodes=[Node(id="x", name="Loose", component_type="flow", rank=1)])
        lines = journey_text(graph, depth=3).splitlines()

        assert lines[1] == "Depth: 3"
        assert "- Loose | type=flow | direction=n/a | access=n/a | depth=1" in lines

    def test_empty_graph(self):
        text = journey_text(Graph())
        assert text.startswith("Data Journey\nDepth: 0\nNodes: 0\nEdges: 0\n")


class TestProcessFlowText:
    def test_report(self):
        flow = ProcessFlow(
            object_name="Account",
            trigger_context="Insert",
            phases=[
                FlowPhase(phase_number=1, phase_name="Before Triggers", steps=[
                    FlowStep(name="AccountTrigger", automation_type="BeforeTrigger",
                             is_active=True, trigger_context="Insert"),
                ]),
                FlowPhase(phase_number=2, phase_name="Validation Rules"),
                FlowPhase(phase_number=3, phase_name="After-Save Flows", steps=[
                    FlowStep(name="Enrich", automation_type="Flow_AfterSave",
                             description="Fills region", setup_url="/flows/1"),
                ]),
            ],
        )
        lines = process_flow_text(flow).splitlines()

        assert lines[0] == "Process Flow Map"
        assert "Total automations: 2" in lines
        assert "Summary: 1 triggers, 0 VRs, 1 flows, 0 workflows" in lines
        assert "  - AccountTrigger [Active]" in lines
        assert "  [none]" in lines
        assert "  - Enrich [Inactive]" in lines
        assert "    Context: n/a" in lines
        assert "    Description: Fills region" in lines
        assert "    Setup: /flows/1" in lines

    def test_automation_counts(self):
        flow = ProcessFlow(phases=[FlowPhase(phase_number=1, steps=[
            FlowStep(automation_type="AfterTrigger"),
            FlowStep(automation_type="ValidationRule"),
            FlowStep(automation_type="WorkflowFieldUpdate"),
            FlowStep(automation_type="Flow_BeforeSave"),
            FlowStep(automation_type="AssignmentRule"),
        ])])
        assert automation_counts(flow) == {
            "triggers": 1, "validation_rules": 1, "flows": 1, "workflows": 1,
        }

    def test_empty(self):
        assert "Total automations: 0" in process_flow_text(ProcessFlow())
