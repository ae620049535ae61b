"""MCP tool definitions and handlers, one module per upstream domain."""
