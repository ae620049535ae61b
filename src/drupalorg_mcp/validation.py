"""Tool argument validation.

Pure functions, no MCP dependency.  Checks the subset of JSON Schema the
tool definitions use (``required``, ``type`` string/integer, ``minimum``,
``minLength``, ``pattern``, ``additionalProperties: false``) and raises
:class:`ParameterValidationError` naming the first offending field.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from drupalorg_mcp.errors import ParameterValidationError


def validate_int(value: Any, name: str, min_val: int | None = None) -> None:
    # bool is an int subclass but never a valid filter value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParameterValidationError(name, "must be an integer")
    if min_val is not None and value < min_val:
        raise ParameterValidationError(name, f"must be >= {min_val}")


def validate_str(value: Any, name: str, min_length: int | None = None, pattern: str | None = None) -> None:
    if not isinstance(value, str):
        raise ParameterValidationError(name, "must be a string")
    if min_length is not None and len(value) < min_length:
        raise ParameterValidationError(name, "must not be empty" if min_length == 1 else f"must be at least {min_length} characters")
    if pattern is not None and re.search(pattern, value) is None:
        raise ParameterValidationError(name, f"must match pattern {pattern}")


def validate_arguments(schema: Mapping[str, Any], arguments: Mapping[str, Any] | None) -> dict[str, Any]:
    """Check *arguments* against a tool ``inputSchema``.

    Returns a plain dict copy of the arguments on success.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ParameterValidationError("arguments", "must be an object")

    properties: Mapping[str, Any] = schema.get("properties", {})

    for name in schema.get("required", []):
        if arguments.get(name) is None:
            raise ParameterValidationError(name, "is required")

    if schema.get("additionalProperties") is False:
        for name in arguments:
            if name not in properties:
                raise ParameterValidationError(name, "is not an accepted parameter")

    for name, value in arguments.items():
        spec = properties.get(name)
        if spec is None or value is None:
            continue
        kind = spec.get("type")
        if kind == "integer":
            validate_int(value, name, min_val=spec.get("minimum"))
        elif kind == "string":
            validate_str(value, name, min_length=spec.get("minLength"), pattern=spec.get("pattern"))

    return dict(arguments)
