"""
Markdown table emitter.

Cells are written as-is. Component names are identifier-like upstream, so
pipes and backticks are not expected and are not escaped.
"""

from typing import Any

from ..core.types import DependencyGroup, SearchContext
from .base import coerce_items, coerce_one


def markdown_table(groups: Any, context: Any = None) -> str:
    groups = coerce_items("markdown_table", groups, DependencyGroup)
    context = coerce_one("markdown_table", context, SearchContext) if context is not None else None

    lines = []
    if context is not None and context.heading:
        lines.append(f"## Dependencies of {context.heading}")
        lines.append("")
    lines.append("| Component Name | Type | Namespace | Access |")
    lines.append("|---|---|---|---|")

    for group in groups:
        for r in group.records:
            lines.append(
                f"| {r.name} | {r.component_type} | {r.namespace or ''} | {r.access_type or ''} |"
            )
    return "\n".join(lines) + "\n"
