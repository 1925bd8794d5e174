"""Unit tests for node colors and labels."""

import pytest

from witu.core.types import ComponentKind, Direction, Node
from witu.graph.palette import (
    CYCLE_COLOR,
    DIRECTION_LABELS,
    FALLBACK_COLOR,
    KIND_COLORS,
    KIND_LABELS,
    ROOT_COLOR,
    direction_label,
    kind_label,
    node_color,
)


class TestPalette:
    @pytest.mark.parametrize("kind", list(ComponentKind))
    def test_every_kind_has_color_and_label(self, kind):
        assert kind in KIND_COLORS
        assert kind in KIND_LABELS

    def test_root_beats_cycle(self):
        node = Node(id="a", name="A", component_type="Flow", is_root=True, is_cycle_node=True)
        assert node_color(node) == ROOT_COLOR

    def test_cycle_beats_type(self):
        node = Node(id="a", name="A", component_type="Flow", is_cycle_node=True)
        assert node_color(node) == CYCLE_COLOR

    def test_unknown_type_falls_back(self):
        node = Node(id="a", name="A", component_type="EmailTemplate")
        assert node_color(node) == FALLBACK_COLOR
        assert kind_label(node) == "EmailTemplate"

    def test_known_label(self):
        assert kind_label(Node(id="a", name="A", component_type="ApexTrigger")) == "Apex Trigger"

    def test_direction_label(self):
        assert direction_label(Node(id="a", name="A", direction=Direction.UPSTREAM)) == "Upstream"
        assert direction_label(Node(id="a", name="A", is_root=True)) == DIRECTION_LABELS[Direction.ROOT]
        assert direction_label(Node(id="a", name="A")) == ""
