"""Plain-text rendering of nodes and issues for MCP tool responses.

Pure functions.  Codes missing from the label tables render as "Unknown";
nothing here raises for unexpected upstream values.
"""

from __future__ import annotations

from datetime import UTC, datetime

from drupalorg_mcp.models import ContentNode, Issue

UNKNOWN = "Unknown"
SEPARATOR = "---"

# project_issue field_issue_status values on drupal.org
ISSUE_STATUS_LABELS: dict[int, str] = {
    1: "Active",
    2: "Fixed",
    3: "Closed (duplicate)",
    4: "Postponed",
    5: "Closed (won't fix)",
    6: "Closed (works as designed)",
    7: "Closed (fixed)",
    8: "Needs Review",
    13: "Needs Work",
    14: "Reviewed & Tested",
    15: "Patch (to be ported)",
    16: "Postponed (maintainer needs more info)",
    17: "Closed (outdated)",
    18: "Closed (cannot reproduce)",
}

ISSUE_PRIORITY_LABELS: dict[int, str] = {
    400: "Critical",
    300: "Major",
    200: "Normal",
    100: "Minor",
}

ISSUE_CATEGORY_LABELS: dict[int, str] = {
    1: "Bug report",
    2: "Task",
    3: "Feature request",
    4: "Support request",
    5: "Plan",
}


def status_label(code: int) -> str:
    return ISSUE_STATUS_LABELS.get(code, UNKNOWN)


def priority_label(code: int) -> str:
    return ISSUE_PRIORITY_LABELS.get(code, UNKNOWN)


def category_label(code: int | None) -> str:
    if code is None:
        return UNKNOWN
    return ISSUE_CATEGORY_LABELS.get(code, UNKNOWN)


def format_timestamp(seconds: int) -> str:
    """Render epoch seconds as an ISO-8601 UTC instant, e.g. ``1970-01-01T00:00:00.000Z``.

    Out-of-range values render as "Unknown".
    """
    try:
        instant = datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> int:
    """Inverse of :func:`format_timestamp` at seconds granularity."""
    instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return int(instant.timestamp())


def format_node(node: ContentNode) -> str:
    return "\n".join(
        [
            f"Title: {node.title}",
            f"Type: {node.type}",
            f"Created: {format_timestamp(node.created)}",
            f"Changed: {format_timestamp(node.changed)}",
            SEPARATOR,
        ]
    )


def format_issue(issue: Issue) -> str:
    return "\n".join(
        [
            f"Title: {issue.title}",
            f"Status: {status_label(issue.field_issue_status)}",
            f"Priority: {priority_label(issue.field_issue_priority)}",
            f"Created: {format_timestamp(issue.created)}",
            f"Changed: {format_timestamp(issue.changed)}",
            SEPARATOR,
        ]
    )


def format_node_detail(node: ContentNode) -> str:
    """Longer single-node block used by ``get-node``."""
    lines = [
        f"ID: {node.nid}",
        f"Title: {node.title}",
        f"Type: {node.type}",
        f"Published: {'yes' if node.status == 1 else 'no'}",
    ]
    if node.url:
        lines.append(f"URL: {node.url}")
    if isinstance(node, Issue):
        lines.append(f"Status: {status_label(node.field_issue_status)}")
        lines.append(f"Priority: {priority_label(node.field_issue_priority)}")
        lines.append(f"Category: {category_label(node.field_issue_category)}")
    lines.extend(
        [
            f"Created: {format_timestamp(node.created)}",
            f"Changed: {format_timestamp(node.changed)}",
            SEPARATOR,
        ]
    )
    return "\n".join(lines)
