"""drupalorg-mcp: Drupal.org's read-only REST API exposed as MCP tools."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("drupalorg-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from drupalorg_mcp.client import DrupalClient
from drupalorg_mcp.models import ApiListResponse, ContentNode, Issue

__all__ = ["ApiListResponse", "ContentNode", "DrupalClient", "Issue", "__version__"]
