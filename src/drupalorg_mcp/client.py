"""Async client for the Drupal.org api-d7 REST endpoints.

Every public method issues exactly one ``GET`` and returns a
:data:`FetchResult`.  Transport errors, non-2xx responses and unparsable
bodies are logged and returned as :class:`FetchFailed`, never raised, so a
caller can always tell "upstream unavailable" apart from "zero matches".
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from drupalorg_mcp.config import ClientConfig
from drupalorg_mcp.errors import MalformedEntityError
from drupalorg_mcp.models import ApiListResponse, ContentNode, Issue
from drupalorg_mcp.types.core import QueryParams

logger = logging.getLogger(__name__)

ISSUE_TYPE = "project_issue"
SECURITY_ADVISORY_TYPE = "sa"
PUBLISHED = 1

_T = TypeVar("_T")


@dataclass(frozen=True)
class Fetched(Generic[_T]):
    value: _T


@dataclass(frozen=True)
class FetchFailed:
    """Upstream could not be read.

    ``reason`` is a short machine-friendly tag: ``not_found``,
    ``http_<status>``, ``transport_error``, ``invalid_json`` or
    ``malformed_response``.
    """

    reason: str
    detail: str = ""


FetchResult = Fetched[_T] | FetchFailed


def build_query(defaults: Mapping[str, Any], params: Mapping[str, Any] | None = None) -> QueryParams:
    """Merge *params* over *defaults*, caller wins; drop keys whose value is None."""
    merged: dict[str, Any] = {**defaults, **(params or {})}
    return {k: v for k, v in merged.items() if v is not None}


def parse_node(data: Mapping[str, Any]) -> ContentNode:
    """Parse a single node, as an :class:`Issue` when it carries issue fields."""
    if isinstance(data, Mapping) and data.get("type") == ISSUE_TYPE and "field_issue_status" in data:
        return Issue.from_dict(data)
    return ContentNode.from_dict(data)


class DrupalClient:
    """Thin wrapper over an explicitly configured ``httpx.AsyncClient``.

    Pass *http* to share or mock the transport; otherwise one is built from
    *config* and owned (closed by :meth:`aclose`).
    """

    def __init__(self, http: httpx.AsyncClient | None = None, config: ClientConfig | None = None) -> None:
        self.config = config or ClientConfig()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            headers=self.config.headers,
            timeout=self.config.timeout,
        )

    async def __aenter__(self) -> DrupalClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # -- Request plumbing -----------------------------------------------------

    async def _get_json(self, path: str, params: QueryParams | None = None) -> Fetched[Any] | FetchFailed:
        url = f"{self.config.base_url}/{path}"
        try:
            response = await self._http.get(url, params=params or None, headers=self.config.headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Drupal.org request failed: %s returned %d", url, status)
            return FetchFailed("not_found" if status == 404 else f"http_{status}", str(e))
        except httpx.HTTPError as e:
            logger.warning("Error making Drupal.org request to %s: %s", url, e, exc_info=True)
            return FetchFailed("transport_error", str(e))
        try:
            return Fetched(response.json())
        except ValueError as e:
            logger.warning("Drupal.org returned a non-JSON body for %s", url, exc_info=True)
            return FetchFailed("invalid_json", str(e))

    async def _get_list(
        self,
        params: QueryParams,
        parse: Callable[[Mapping[str, Any]], Any],
    ) -> Fetched[Any] | FetchFailed:
        result = await self._get_json("node.json", params)
        if isinstance(result, FetchFailed):
            return result
        try:
            return Fetched(ApiListResponse.from_dict(result.value, parse))
        except MalformedEntityError as e:
            logger.warning("Malformed node list from Drupal.org: %s", e)
            return FetchFailed("malformed_response", str(e))

    # -- Operations -----------------------------------------------------------

    async def get_node(self, nid: str) -> FetchResult[ContentNode]:
        """Fetch a single node by id (``GET /node/{nid}.json``)."""
        result = await self._get_json(f"node/{nid}.json")
        if isinstance(result, FetchFailed):
            return result
        try:
            return Fetched(parse_node(result.value))
        except MalformedEntityError as e:
            logger.warning("Malformed node %s from Drupal.org: %s", nid, e)
            return FetchFailed("malformed_response", str(e))

    async def search_nodes(self, params: Mapping[str, Any] | None = None) -> FetchResult[ApiListResponse[ContentNode]]:
        """Fetch one page of nodes matching arbitrary equality filters."""
        return await self._get_list(build_query({}, params), ContentNode.from_dict)

    async def get_issues(
        self,
        project_name: str,
        status: int | None = None,
        priority: int | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> FetchResult[ApiListResponse[Issue]]:
        """Fetch one page of issues for the project with machine name *project_name*."""
        query = build_query(
            {
                "type": ISSUE_TYPE,
                "field_project_machine_name": project_name,
                "field_issue_status": status,
                "field_issue_priority": priority,
            },
            params,
        )
        return await self._get_list(query, Issue.from_dict)

    async def get_security_advisories(
        self, params: Mapping[str, Any] | None = None
    ) -> FetchResult[ApiListResponse[ContentNode]]:
        """Fetch one page of published security advisories.

        Caller params override the ``type``/``status`` defaults.
        """
        query = build_query({"type": SECURITY_ADVISORY_TYPE, "status": PUBLISHED}, params)
        return await self._get_list(query, ContentNode.from_dict)
