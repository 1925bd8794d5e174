"""
package.xml (deployment manifest) emitter.

Records are grouped by metadata type. Tooling API type names are translated
to their Metadata API equivalents; unknown names pass through unchanged.
Types and their members are sorted so the same records always produce the
same document, apart from the generation timestamp.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set
from xml.sax.saxutils import escape

from ..config import GENERATOR_NAME, MANIFEST_API_VERSION, MANIFEST_NAMESPACE
from ..core.types import DependencyRecord, SearchContext
from .base import coerce_items, coerce_one

TOOLING_TO_METADATA_TYPE: Dict[str, str] = {
    "ApexClass": "ApexClass",
    "ApexTrigger": "ApexTrigger",
    "Flow": "Flow",
    "FlowDefinition": "Flow",
    "ValidationRule": "ValidationRule",
    "Layout": "Layout",
    "LightningComponentBundle": "LightningComponentBundle",
    "AuraDefinitionBundle": "AuraDefinitionBundle",
    "CustomField": "CustomField",
    "CustomObject": "CustomObject",
    "FlexiPage": "FlexiPage",
    "QuickAction": "QuickAction",
    "CustomLabel": "CustomLabel",
    "RecordType": "RecordType",
    "PermissionSet": "PermissionSet",
    "Profile": "Profile",
    "Page": "ApexPage",
    "StaticResource": "StaticResource",
    "EmailTemplate": "EmailTemplate",
    "CustomTab": "CustomTab",
    "WorkflowRule": "WorkflowRule",
}


def metadata_type_for(tooling_type: str) -> str:
    return TOOLING_TO_METADATA_TYPE.get(tooling_type, tooling_type)


def _comment(text: str) -> str:
    # "--" is not allowed inside an XML comment
    return text.replace("--", "- -")


def members_by_type(records: Any) -> Dict[str, Set[str]]:
    records = coerce_items("package_xml", records, DependencyRecord)
    grouped: Dict[str, Set[str]] = {}
    for record in records:
        grouped.setdefault(metadata_type_for(record.component_type), set()).add(record.name)
    return grouped


def package_xml(
    records: Any,
    context: Any = None,
    *,
    version: str = MANIFEST_API_VERSION,
    now: Optional[datetime] = None,
) -> str:
    """
    Build a package.xml listing every distinct member per metadata type.

    Args:
        records: DependencyRecord instances (or their wire dicts).
        context: Optional SearchContext, added as a header comment.
        version: Metadata API version written to <version>.
        now: Timestamp for the header comment. Defaults to the current UTC time.
    """
    grouped = members_by_type(records)
    context = coerce_one("package_xml", context, SearchContext) if context is not None else None
    generated = (now or datetime.now(timezone.utc)).isoformat(timespec="seconds")

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<Package xmlns="{MANIFEST_NAMESPACE}">',
        f"    <!-- Generated by {GENERATOR_NAME} -->",
    ]
    if context is not None and context.heading:
        lines.append(f"    <!-- Dependencies of: {_comment(context.heading)} -->")
    lines.append(f"    <!-- Generated: {generated} -->")

    for type_name in sorted(grouped):
        lines.append("    <types>")
        for member in sorted(grouped[type_name]):
            lines.append(f"        <members>{escape(member)}</members>")
        lines.append(f"        <name>{escape(type_name)}</name>")
        lines.append("    </types>")

    lines.append(f"    <version>{escape(version)}</version>")
    lines.append("</Package>")
    return "\n".join(lines) + "\n"
