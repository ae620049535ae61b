"""Typed wire-format and tool-argument contracts for drupalorg-mcp."""

from __future__ import annotations

from drupalorg_mcp.types.core import ApiListResponseDict, QueryParams

__all__ = [
    "ApiListResponseDict",
    "QueryParams",
]
