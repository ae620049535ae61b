"""MCP tools for generic node search and single-node lookup."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import TextContent, Tool

from drupalorg_mcp.client import FetchFailed
from drupalorg_mcp.formatting import format_node, format_node_detail
from drupalorg_mcp.mcp_tools.common import _parse_args, _render_listing, _text
from drupalorg_mcp.types.inputs import GetNodeArgs, SearchNodesArgs


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for node-domain tools."""
    tools = [
        Tool(
            name="search-nodes",
            description="Search for nodes on Drupal.org",
            inputSchema={
                "type": "object",
                "properties": {
                    "type": {"type": "string", "description": "Content type to filter by (e.g. project_module, project_issue)"},
                    "field_issue_status": {"type": "integer", "description": "Issue status ID"},
                    "field_issue_priority": {"type": "integer", "description": "Issue priority ID"},
                    "limit": {"type": "integer", "minimum": 1, "description": "Number of results to return"},
                    "page": {"type": "integer", "minimum": 0, "description": "Page number for pagination (0-based)"},
                },
                "additionalProperties": False,
            },
        ),
        Tool(
            name="get-node",
            description="Get a single Drupal.org node by its node ID",
            inputSchema={
                "type": "object",
                "properties": {
                    "nid": {"type": "string", "pattern": "^[0-9]+$", "description": "Numeric node ID"},
                },
                "required": ["nid"],
                "additionalProperties": False,
            },
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "search-nodes": _handle_search_nodes,
        "get-node": _handle_get_node,
    }

    return tools, handlers


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_search_nodes(arguments: dict[str, Any]) -> list[TextContent]:
    from drupalorg_mcp.mcp_server import _get_client

    args = _parse_args(arguments, SearchNodesArgs)
    result = await _get_client().search_nodes(dict(args))
    return _render_listing(
        result,
        failure="Failed to retrieve nodes",
        empty="No nodes found matching the criteria",
        header=lambda count: f"Found {count} nodes:",
        formatter=format_node,
    )


async def _handle_get_node(arguments: dict[str, Any]) -> list[TextContent]:
    from drupalorg_mcp.mcp_server import _get_client

    args = _parse_args(arguments, GetNodeArgs)
    result = await _get_client().get_node(args["nid"])
    if isinstance(result, FetchFailed):
        if result.reason == "not_found":
            return _text(f"Node {args['nid']} not found")
        return _text(f"Failed to retrieve node {args['nid']}")
    return _text(format_node_detail(result.value))
