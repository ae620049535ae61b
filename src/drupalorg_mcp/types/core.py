# IMPORT CONSTRAINT: types/ modules must only import from typing, stdlib, and each other.
"""Foundational types for the Drupal.org api-d7 JSON shapes."""

from __future__ import annotations

from typing import Any, TypedDict

# Query string for GET /node.json.  Values are primitives; None means "omit".
QueryParams = dict[str, str | int | None]


class ApiListResponseDict(TypedDict):
    """Envelope returned by ``GET /node.json``.

    ``count`` is the server-side total, not ``len(list)``.  Each ``list``
    entry is a node object with arbitrary extra keys.
    """

    list: list[dict[str, Any]]
    count: int
    self: str
    first: str
    last: str
