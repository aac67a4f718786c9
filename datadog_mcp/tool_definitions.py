"""
Datadog MCP Tool Definitions

Every tool advertised by tools/list, in a fixed order: domains in
registration order, then tools in the order each domain declares them.

Descriptors are derived from the tools' parameter models (see schema.py)
and built once, at import. A duplicate name fails the import.
"""

from mcp.types import Tool

from .errors import DuplicateToolError
from .tools import (
    DASHBOARDS_TOOLS,
    DOWNTIMES_TOOLS,
    HOSTS_TOOLS,
    INCIDENT_TOOLS,
    LOGS_TOOLS,
    METRICS_TOOLS,
    MONITORS_TOOLS,
    TRACES_TOOLS,
)


def build_tool_definitions(*groups: list[Tool]) -> list[Tool]:
    """Concatenate domain tool lists, rejecting any name seen twice."""
    definitions: list[Tool] = []
    seen: set[str] = set()
    for group in groups:
        for tool in group:
            if tool.name in seen:
                raise DuplicateToolError(tool.name)
            seen.add(tool.name)
            definitions.append(tool)
    return definitions


TOOL_DEFINITIONS = build_tool_definitions(
    INCIDENT_TOOLS,
    METRICS_TOOLS,
    LOGS_TOOLS,
    MONITORS_TOOLS,
    DASHBOARDS_TOOLS,
    TRACES_TOOLS,
    HOSTS_TOOLS,
    DOWNTIMES_TOOLS,
)

TOOL_NAMES = frozenset(tool.name for tool in TOOL_DEFINITIONS)
