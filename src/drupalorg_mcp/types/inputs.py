# IMPORT CONSTRAINT: types/ modules must only import from typing, stdlib, and each other.
"""TypedDict contracts for MCP tool handler input arguments.

Each TypedDict mirrors the JSON Schema ``inputSchema`` on the corresponding
``mcp.types.Tool`` definition.  ``TOOL_ARGS_MAP`` maps tool names to their
TypedDict class so the sync test can verify structural agreement.

Handlers run ``validation.validate_arguments`` before casting, so the
TypedDicts are trusted once a handler body is reached.
"""

# NOTE: Do NOT add ``from __future__ import annotations`` to this module.
# It breaks TypedDict.__required_keys__ / __optional_keys__ introspection,
# which the sync test in test_input_type_contracts.py depends on.

from typing import NotRequired, TypedDict

# ---------------------------------------------------------------------------
# nodes.py handlers
# ---------------------------------------------------------------------------


class SearchNodesArgs(TypedDict):
    type: NotRequired[str]
    field_issue_status: NotRequired[int]
    field_issue_priority: NotRequired[int]
    limit: NotRequired[int]
    page: NotRequired[int]


class GetNodeArgs(TypedDict):
    nid: str


# ---------------------------------------------------------------------------
# issues.py handlers
# ---------------------------------------------------------------------------


class GetIssuesArgs(TypedDict):
    projectName: str
    status: NotRequired[int]
    priority: NotRequired[int]


# ---------------------------------------------------------------------------
# advisories.py handlers
# ---------------------------------------------------------------------------


class GetSecurityAdvisoriesArgs(TypedDict):
    limit: NotRequired[int]
    page: NotRequired[int]


TOOL_ARGS_MAP: dict[str, type] = {
    "search-nodes": SearchNodesArgs,
    "get-node": GetNodeArgs,
    "get-issues": GetIssuesArgs,
    "get-security-advisories": GetSecurityAdvisoriesArgs,
}
