"""
Monitor tools - monitor status plus a per-state summary.

The response carries two blocks in a fixed order: the monitors themselves,
then the summary counts.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import MonitorsApi
from ..errors import MissingDataError
from ..schema import ToolHandlers, ToolParams, create_tool_schema, parse_arguments, text_content, to_json


# overall_state value -> summary counter
STATE_COUNTERS = {
    "Alert": "alert",
    "Warn": "warn",
    "No Data": "noData",
    "OK": "ok",
    "Ignored": "ignored",
    "Skipped": "skipped",
    "Unknown": "unknown",
}


class GetMonitorsParams(ToolParams):
    group_states: Optional[list[Literal["alert", "warn", "no data", "ok"]]] = Field(
        None, description="Filter monitors by their states"
    )
    name: Optional[str] = Field(None, description="Filter monitors by name")
    tags: Optional[list[str]] = Field(None, description="Filter monitors by tags")


MONITORS_TOOLS = [
    create_tool_schema(GetMonitorsParams, "get_monitors", "Get monitors status from Datadog"),
]


def _epoch_seconds(timestamp: Optional[str]) -> Optional[int]:
    if not timestamp:
        return None
    return int(datetime.fromisoformat(timestamp.replace("Z", "+00:00")).timestamp())


def summarize_monitor_states(monitors: list[dict[str, Any]]) -> dict[str, int]:
    """Count monitors per overall state. Missing or unrecognised states are skipped."""
    summary = {counter: 0 for counter in STATE_COUNTERS.values()}
    for monitor in monitors:
        state = monitor.get("overall_state")
        counter = STATE_COUNTERS.get(state) if isinstance(state, str) else None
        if counter:
            summary[counter] += 1
    return summary


def create_monitors_tool_handlers(api: MonitorsApi) -> ToolHandlers:

    async def get_monitors(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetMonitorsParams, arguments)

        response = await api.list_monitors(
            group_states=",".join(params.group_states) if params.group_states else None,
            name=params.name,
            tags=",".join(params.tags) if params.tags else None,
        )

        if response is None:
            raise MissingDataError("No monitors data returned")

        monitors = [
            {
                "name": monitor.get("name") or "",
                "id": monitor.get("id") or 0,
                "status": monitor.get("overall_state") or "unknown",
                "message": monitor.get("message"),
                "tags": monitor.get("tags") or [],
                "query": monitor.get("query") or "",
                "lastUpdatedTs": _epoch_seconds(monitor.get("modified")),
            }
            for monitor in response
        ]

        return [
            text_content(f"Monitors: {to_json(monitors)}"),
            text_content(f"Summary of monitors: {to_json(summarize_monitor_states(response))}"),
        ]

    return {"get_monitors": get_monitors}
