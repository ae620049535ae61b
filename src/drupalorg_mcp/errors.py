"""Exception types shared across the package.

Upstream failures are not exceptions: the client returns ``FetchFailed``
values instead (see ``drupalorg_mcp.client``).
"""

from __future__ import annotations


class DrupalMCPError(Exception):
    """Base class for drupalorg-mcp errors."""


class ParameterValidationError(DrupalMCPError, ValueError):
    """Tool arguments failed a schema constraint.

    Raised before any upstream request is made.
    """

    def __init__(self, field: str, constraint: str) -> None:
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")


class MalformedEntityError(DrupalMCPError, ValueError):
    """An upstream payload is missing a required field or has the wrong type."""

    def __init__(self, field: str, problem: str) -> None:
        self.field = field
        self.problem = problem
        super().__init__(f"{field} {problem}")


class ConfigError(DrupalMCPError):
    """Invalid configuration value (environment or command line)."""
