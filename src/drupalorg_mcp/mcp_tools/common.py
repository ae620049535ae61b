"""Pure helpers shared across MCP tool modules.

This module has NO dependency on ``mcp_server`` module globals, so it can
be imported freely without triggering circular-import issues.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar, cast

from mcp.types import TextContent

from drupalorg_mcp.client import FetchFailed, FetchResult
from drupalorg_mcp.models import ApiListResponse, ContentNode

_T = TypeVar("_T")
_N = TypeVar("_N", bound=ContentNode)


def _parse_args(arguments: Mapping[str, Any], cls: type[_T]) -> _T:
    """Cast validated MCP arguments to their TypedDict for static analysis.

    ``call_tool`` runs ``validate_arguments`` before any handler, so this is
    type narrowing only.
    """
    return cast(_T, arguments)


def _text(content: str) -> list[TextContent]:
    return [TextContent(type="text", text=content)]


def _render_listing(
    result: FetchResult[ApiListResponse[_N]],
    *,
    failure: str,
    empty: str,
    header: Callable[[int], str],
    formatter: Callable[[_N], str],
) -> list[TextContent]:
    """Turn a list fetch into exactly one text block.

    ``header`` receives the upstream total match count, not the page size.
    """
    if isinstance(result, FetchFailed):
        return _text(failure)
    page = result.value
    if not page.items:
        return _text(empty)
    body = "\n".join(formatter(item) for item in page.items)
    return _text(f"{header(page.count)}\n\n{body}")
