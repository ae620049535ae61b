"""MCP tools for Drupal security advisories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import TextContent, Tool

from drupalorg_mcp.formatting import format_node
from drupalorg_mcp.mcp_tools.common import _parse_args, _render_listing
from drupalorg_mcp.types.inputs import GetSecurityAdvisoriesArgs


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for security advisory tools."""
    tools = [
        Tool(
            name="get-security-advisories",
            description="Get published Drupal security advisories",
            inputSchema={
                "type": "object",
                "properties": {
                    "limit": {"type": "integer", "minimum": 1, "description": "Number of results to return"},
                    "page": {"type": "integer", "minimum": 0, "description": "Page number for pagination (0-based)"},
                },
                "additionalProperties": False,
            },
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "get-security-advisories": _handle_get_security_advisories,
    }

    return tools, handlers


async def _handle_get_security_advisories(arguments: dict[str, Any]) -> list[TextContent]:
    from drupalorg_mcp.mcp_server import _get_client

    args = _parse_args(arguments, GetSecurityAdvisoriesArgs)
    result = await _get_client().get_security_advisories(dict(args))
    return _render_listing(
        result,
        failure="Failed to retrieve security advisories",
        empty="No security advisories found",
        header=lambda count: f"Found {count} security advisories:",
        formatter=format_node,
    )
