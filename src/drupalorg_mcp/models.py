"""Entity records for Drupal.org api-d7 payloads.

Each record keeps the core fields typed and stores every other upstream key
in ``extra`` untouched, so ``from_dict(d).to_dict()`` loses nothing.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from drupalorg_mcp.errors import MalformedEntityError
from drupalorg_mcp.types.core import ApiListResponseDict

_INT_STRING = re.compile(r"-?[0-9]+")

_NODE_FIELDS = ("nid", "type", "title", "created", "changed", "status")
_ISSUE_FIELDS = ("field_issue_status", "field_issue_priority", "field_issue_category")


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data or data[key] is None:
        raise MalformedEntityError(key, "is missing")
    return data[key]


def _as_int(value: Any, key: str) -> int:
    """Coerce an upstream integer field.

    api-d7 serialises most numbers as strings ("1500000000"), so digit
    strings are accepted.  Booleans and floats are not.
    """
    if isinstance(value, bool):
        raise MalformedEntityError(key, "must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_STRING.fullmatch(value.strip()):
        return int(value)
    raise MalformedEntityError(key, "must be an integer")


def _as_str(value: Any, key: str) -> str:
    if isinstance(value, str):
        return value
    raise MalformedEntityError(key, "must be a string")


def _as_id(value: Any, key: str) -> str:
    # nid arrives as "123" from api-d7 but some mirrors send 123
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _as_str(value, key)


@dataclass(frozen=True)
class ContentNode:
    nid: str
    type: str
    title: str
    created: int
    changed: int
    status: int
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContentNode:
        if not isinstance(data, Mapping):
            raise MalformedEntityError("node", "must be a JSON object")
        return cls(
            nid=_as_id(_require(data, "nid"), "nid"),
            type=_as_str(_require(data, "type"), "type"),
            title=_as_str(_require(data, "title"), "title"),
            created=_as_int(_require(data, "created"), "created"),
            changed=_as_int(_require(data, "changed"), "changed"),
            status=_as_int(_require(data, "status"), "status"),
            extra={k: v for k, v in data.items() if k not in _NODE_FIELDS},
        )

    @property
    def url(self) -> str | None:
        value = self.extra.get("url")
        return value if isinstance(value, str) else None

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "nid": self.nid,
            "type": self.type,
            "title": self.title,
            "created": self.created,
            "changed": self.changed,
            "status": self.status,
        }


@dataclass(frozen=True)
class Issue(ContentNode):
    """A ``project_issue`` node.

    ``field_issue_category`` is optional: search results do not always
    include it, and rendering never needs it.
    """

    field_issue_status: int = 0
    field_issue_priority: int = 0
    field_issue_category: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Issue:
        node = ContentNode.from_dict(data)
        category = data.get("field_issue_category")
        return cls(
            nid=node.nid,
            type=node.type,
            title=node.title,
            created=node.created,
            changed=node.changed,
            status=node.status,
            field_issue_status=_as_int(_require(data, "field_issue_status"), "field_issue_status"),
            field_issue_priority=_as_int(_require(data, "field_issue_priority"), "field_issue_priority"),
            field_issue_category=None if category is None else _as_int(category, "field_issue_category"),
            extra={k: v for k, v in node.extra.items() if k not in _ISSUE_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field_issue_status"] = self.field_issue_status
        data["field_issue_priority"] = self.field_issue_priority
        if self.field_issue_category is not None:
            data["field_issue_category"] = self.field_issue_category
        return data


_T = TypeVar("_T", bound=ContentNode)


@dataclass(frozen=True)
class ApiListResponse(Generic[_T]):
    """One page of ``GET /node.json`` results.

    ``count`` is the total number of matches upstream; ``items`` may hold
    only a single page of them.  The navigation URLs are kept as-is.
    """

    items: list[_T]
    count: int
    self_url: str = ""
    first_url: str = ""
    last_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parse: Callable[[Mapping[str, Any]], _T]) -> ApiListResponse[_T]:
        if not isinstance(data, Mapping):
            raise MalformedEntityError("response", "must be a JSON object")
        raw_items = _require(data, "list")
        if not isinstance(raw_items, list):
            raise MalformedEntityError("list", "must be an array")
        return cls(
            items=[parse(item) for item in raw_items],
            count=_as_int(_require(data, "count"), "count"),
            self_url=str(data.get("self", "")),
            first_url=str(data.get("first", "")),
            last_url=str(data.get("last", "")),
        )

    def to_dict(self) -> ApiListResponseDict:
        return {
            "list": [item.to_dict() for item in self.items],
            "count": self.count,
            "self": self.self_url,
            "first": self.first_url,
            "last": self.last_url,
        }
