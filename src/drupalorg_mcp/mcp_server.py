"""MCP server exposing the Drupal.org api-d7 REST API.

Read-only, stateless.  Each tool call makes one upstream GET and answers
with a single text block.

Usage:
    drupalorg-mcp                                   # Defaults / DRUPALORG_* env vars
    drupalorg-mcp --timeout 10 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from collections.abc import Callable
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from drupalorg_mcp import __version__
from drupalorg_mcp.client import DrupalClient
from drupalorg_mcp.config import ClientConfig
from drupalorg_mcp.errors import ConfigError
from drupalorg_mcp.logging import setup_logging
from drupalorg_mcp.mcp_tools import advisories, issues, nodes
from drupalorg_mcp.validation import validate_arguments

# ---------------------------------------------------------------------------
# Server setup
# ---------------------------------------------------------------------------

server = Server("drupalorg", version=__version__)
client: DrupalClient | None = None
_logger: logging.Logger = logging.getLogger(__name__)


def _get_client() -> DrupalClient:
    if client is None:
        msg = "Drupal.org client not initialized"
        raise RuntimeError(msg)
    return client


def _collect_tools() -> tuple[dict[str, Tool], dict[str, Callable[..., Any]]]:
    tools: dict[str, Tool] = {}
    handlers: dict[str, Callable[..., Any]] = {}
    for module in (nodes, issues, advisories):
        module_tools, module_handlers = module.register()
        for tool in module_tools:
            tools[tool.name] = tool
        handlers.update(module_handlers)
    return tools, handlers


_TOOLS, _HANDLERS = _collect_tools()


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@server.list_tools()  # type: ignore[untyped-decorator,no-untyped-call]
async def list_tools() -> list[Tool]:
    return list(_TOOLS.values())


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
    """Validate, dispatch, and log one tool call.

    Validation errors and unknown tool names are raised; the SDK reports
    them to the caller as an error result.  Upstream failures never raise:
    handlers turn them into a failure message.
    """
    tool = _TOOLS.get(name)
    handler = _HANDLERS.get(name)
    if tool is None or handler is None:
        msg = f"Unknown tool: {name}"
        raise ValueError(msg)

    t0 = time.monotonic()
    try:
        validated = validate_arguments(tool.inputSchema, arguments)
        result: list[TextContent] = await handler(validated)
    except Exception as e:
        _logger.error("tool_error", extra={"tool": name, "args_data": arguments, "error": str(e)}, exc_info=True)
        raise
    else:
        duration_ms = round((time.monotonic() - t0) * 1000, 1)
        _logger.info("tool_call", extra={"tool": name, "args_data": arguments, "duration_ms": duration_ms})
        return result


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


async def _run(config: ClientConfig) -> None:
    global client

    client = DrupalClient(config=config)
    _logger.info(
        "mcp_server_start",
        extra={"tool": "server", "args_data": {"base_url": config.base_url, "timeout": config.timeout}},
    )
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client.aclose()
        client = None


def main() -> None:
    parser = argparse.ArgumentParser(description="Drupal.org MCP server (stdio)")
    parser.add_argument("--base-url", default=None, help="api-d7 base URL (default: https://www.drupal.org/api-d7)")
    parser.add_argument("--timeout", type=float, default=None, help="Upstream request timeout in seconds (default: 30)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="stderr log level")
    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        config = ClientConfig.from_env().with_overrides(base_url=args.base_url, timeout=args.timeout)
        asyncio.run(_run(config))
    except ConfigError as e:
        _logger.critical("Invalid configuration: %s", e)
        sys.exit(2)
    except Exception:
        _logger.critical("Fatal error in main()", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
