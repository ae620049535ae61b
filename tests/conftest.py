"""Shared pytest fixtures for drupalorg-mcp tests.

Upstream HTTP is simulated with ``httpx.MockTransport``; no test touches
the network.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import httpx
import pytest

from drupalorg_mcp.client import DrupalClient
from tests._factories import FakeDrupal


@pytest.fixture
def fake_drupal() -> FakeDrupal:
    return FakeDrupal()


@pytest.fixture
async def drupal_client(fake_drupal: FakeDrupal) -> AsyncGenerator[DrupalClient, None]:
    """DrupalClient wired to ``fake_drupal`` instead of the network."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_drupal))
    yield DrupalClient(http=http)
    await http.aclose()


@pytest.fixture
def mcp_client(drupal_client: DrupalClient) -> Generator[DrupalClient, None, None]:
    """Patch the MCP module global so tool handlers use ``drupal_client``."""
    import drupalorg_mcp.mcp_server as mcp_mod

    original = mcp_mod.client
    mcp_mod.client = drupal_client
    yield drupal_client
    mcp_mod.client = original
