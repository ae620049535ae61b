"""MCP tools for project issue queues."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import TextContent, Tool

from drupalorg_mcp.formatting import format_issue
from drupalorg_mcp.mcp_tools.common import _parse_args, _render_listing
from drupalorg_mcp.types.inputs import GetIssuesArgs


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for issue-domain tools."""
    tools = [
        Tool(
            name="get-issues",
            description="Get issues for a Drupal project",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectName": {"type": "string", "minLength": 1, "description": "Machine name of the project (e.g. views)"},
                    "status": {"type": "integer", "description": "Issue status ID (1=Active, 8=Needs review, 13=Needs work, ...)"},
                    "priority": {"type": "integer", "description": "Issue priority ID (400=Critical, 300=Major, 200=Normal, 100=Minor)"},
                },
                "required": ["projectName"],
                "additionalProperties": False,
            },
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "get-issues": _handle_get_issues,
    }

    return tools, handlers


async def _handle_get_issues(arguments: dict[str, Any]) -> list[TextContent]:
    from drupalorg_mcp.mcp_server import _get_client

    args = _parse_args(arguments, GetIssuesArgs)
    project = args["projectName"]
    result = await _get_client().get_issues(project, status=args.get("status"), priority=args.get("priority"))
    return _render_listing(
        result,
        failure="Failed to retrieve issues",
        empty=f"No issues found for project: {project}",
        header=lambda count: f"Found {count} issues for {project}:",
        formatter=format_issue,
    )
