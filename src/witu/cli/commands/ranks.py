"""
Ranks Command - Show each node's hop distance from the root.

Useful for checking what the layout will do with a response that carries
no ranks of its own.
"""

import json
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...analysis.ranks import classify_ranks
from ...config import DEFAULT_RANK
from ...core.graph import Graph, find_cycle_nodes
from ..utils import echo_no_data, echo_warning, load_or_report

console = Console()


@click.command()
@click.argument("graph_file", default=".")
@click.option("--root", "root_id", default=None, help="Rank from this node instead of the root")
@click.option("--json", "as_json", is_flag=True, help="Output the rank map as JSON")
def ranks(graph_file: str, root_id: Optional[str], as_json: bool):
    """
    Classify nodes by hop distance from the root.
    """
    graph = load_or_report(graph_file, Graph)
    if graph is None:
        sys.exit(1)

    if graph.is_empty:
        echo_no_data()
        return

    if root_id is None:
        root_id = graph.root.id

    rank_map = classify_ranks(graph.nodes, graph.edges, root_id)
    if not rank_map:
        echo_warning(f"Root not found: {root_id}. Every node falls back to rank {DEFAULT_RANK}")
        rank_map = {node.id: DEFAULT_RANK for node in graph.nodes}

    if as_json:
        click.echo(json.dumps(rank_map, indent=2))
        return

    cycle_ids = find_cycle_nodes(graph.nodes, graph.edges, root_id)

    table = Table(title=f"Ranks from {root_id}")
    table.add_column("Rank", justify="right", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Id", style="dim")
    table.add_column("Cycle", justify="center")

    for node in sorted(graph.nodes, key=lambda n: (rank_map[n.id], n.name, n.id)):
        table.add_row(
            str(rank_map[node.id]),
            node.name,
            node.component_type,
            node.id,
            "[yellow]yes[/yellow]" if node.id in cycle_ids else "",
        )

    console.print(table)
