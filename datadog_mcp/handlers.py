"""
Datadog MCP Handlers - Handler table and dispatch

This module builds the name -> handler table and routes tool calls through it.
Each handler:
1. Validates its arguments against its own parameter model
2. Makes one Datadog API call
3. Returns a list of text blocks
"""

import json
from typing import Any, Optional

from mcp.types import TextContent

from .api import (
    DashboardsApi,
    DowntimesApi,
    HostsApi,
    IncidentsApi,
    LogsApi,
    MetricsApi,
    MonitorsApi,
    SpansApi,
)
from .client import DatadogClient
from .errors import DuplicateToolError, UnknownToolError
from .logger import get_logger
from .schema import ToolHandlers
from .tool_definitions import TOOL_NAMES
from .tools import (
    create_dashboards_tool_handlers,
    create_downtimes_tool_handlers,
    create_hosts_tool_handlers,
    create_incident_tool_handlers,
    create_logs_tool_handlers,
    create_metrics_tool_handlers,
    create_monitors_tool_handlers,
    create_traces_tool_handlers,
)


log = get_logger("handlers")


def merge_tool_handlers(*tables: ToolHandlers) -> ToolHandlers:
    """Merge per-domain handler maps. Names must be unique across domains."""
    merged: ToolHandlers = {}
    for table in tables:
        for name, handler in table.items():
            if name in merged:
                raise DuplicateToolError(name)
            merged[name] = handler
    return merged


def _serialize_arguments(arguments: Optional[dict[str, Any]]) -> str:
    try:
        return json.dumps(arguments)
    except (TypeError, ValueError):
        return repr(arguments)


class Handlers:
    """
    Central handler table for all Datadog tool calls.

    Built once at startup around a single configured client; read-only
    afterwards, so concurrent calls need no locking.
    """

    def __init__(self, client: DatadogClient):
        """Build every domain's handlers over the shared client."""
        self.client = client
        self.tool_handlers = merge_tool_handlers(
            create_incident_tool_handlers(IncidentsApi(client)),
            create_metrics_tool_handlers(MetricsApi(client)),
            create_logs_tool_handlers(LogsApi(client)),
            create_monitors_tool_handlers(MonitorsApi(client)),
            create_dashboards_tool_handlers(DashboardsApi(client)),
            create_traces_tool_handlers(SpansApi(client)),
            create_hosts_tool_handlers(HostsApi(client)),
            create_downtimes_tool_handlers(DowntimesApi(client)),
        )

        # Every advertised tool has a handler and every handler is advertised
        handled = set(self.tool_handlers)
        if handled != TOOL_NAMES:
            raise RuntimeError(
                f"Tool registry and handler table disagree: "
                f"unhandled={sorted(TOOL_NAMES - handled)}, "
                f"unadvertised={sorted(handled - TOOL_NAMES)}"
            )

        log.info(f"Registered {len(self.tool_handlers)} tools")

    async def aclose(self):
        """Close the backend client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def dispatch(self, name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        """
        Route one tool call.

        An unknown name fails before any validation. Any failure is logged
        once here, with the tool name and arguments, then re-raised.
        """
        try:
            handler = self.tool_handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            return await handler(arguments)
        except Exception as e:
            log.error(
                f"Request: {name}, {_serialize_arguments(arguments)} failed: "
                f"{str(e) or type(e).__name__}",
                exc_info=True,
            )
            raise
