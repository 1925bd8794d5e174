"""
Unit tests for the 'ranks' command.
"""

import json

import pytest
from click.testing import CliRunner

from witu.cli.commands.ranks import ranks

GRAPH = {
    "nodes": [
        {"id": "root", "name": "Root", "isRoot": True},
        {"id": "a", "name": "Alpha"},
        {"id": "b", "name": "Beta"},
        {"id": "island", "name": "Island"},
    ],
    "edges": [
        {"sourceId": "root", "targetId": "a"},
        {"sourceId": "a", "targetId": "b"},
        {"sourceId": "b", "targetId": "a"},
    ],
}


@pytest.fixture
def graph_file(tmp_path):
    f = tmp_path / "graph.json"
    f.write_text(json.dumps(GRAPH))
    return f


class TestRanksCommand:
    def test_json(self, graph_file):
        result = CliRunner().invoke(ranks, [str(graph_file), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"root": 0, "a": 1, "b": 2, "island": 1}

    def test_custom_root(self, graph_file):
        result = CliRunner().invoke(ranks, [str(graph_file), "--root", "b", "--json"])
        assert json.loads(result.output) == {"root": 1, "a": 1, "b": 0, "island": 1}

    def test_unknown_root_falls_back(self, graph_file):
        result = CliRunner().invoke(ranks, [str(graph_file), "--root", "nope"])

        assert result.exit_code == 0
        assert "Root not found: nope" in result.output

    def test_table(self, graph_file):
        result = CliRunner().invoke(ranks, [str(graph_file)])

        assert result.exit_code == 0
        assert "Ranks from root" in result.output
        assert "Island" in result.output
        assert "yes" in result.output

    def test_empty_graph(self, tmp_path):
        f = tmp_path / "empty.json"
        f.write_text(json.dumps({"nodes": []}))
        result = CliRunner().invoke(ranks, [str(f)])
        assert "No dependencies found" in result.output
