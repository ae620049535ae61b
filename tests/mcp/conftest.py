"""Fixtures for MCP server tests."""

from __future__ import annotations

from typing import Any

import pytest

from tests._factories import FakeDrupal


@pytest.fixture
def upstream(mcp_client: Any, fake_drupal: FakeDrupal) -> FakeDrupal:
    """The fake api-d7 behind the patched MCP client."""
    return fake_drupal
