"""
Downtime tools - list, schedule and cancel downtimes.
"""

from typing import Any, Literal, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import DowntimesApi
from ..errors import MissingDataError
from ..schema import (
    ToolHandlers,
    ToolParams,
    create_tool_schema,
    drop_none,
    parse_arguments,
    text_content,
    to_json,
)


class ListDowntimesParams(ToolParams):
    current_only: Optional[bool] = Field(None, description="Only return downtimes that are active now")


class Recurrence(ToolParams):
    type: Literal["days", "weeks", "months", "years"] = Field(..., description="Recurrence unit")
    period: int = Field(..., ge=1, description="How often to repeat, in units of type")
    week_days: Optional[list[Literal["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]]] = Field(
        None, description="Days of the week to repeat on (weeks only)"
    )
    until: Optional[float] = Field(None, description="UNIX timestamp when the recurrence ends")


class ScheduleDowntimeParams(ToolParams):
    scope: str = Field(..., min_length=1, description="Scope to apply the downtime to, e.g. 'host:my-host'")
    start: Optional[float] = Field(None, description="Start time as a UNIX timestamp")
    end: Optional[float] = Field(None, description="End time as a UNIX timestamp")
    message: Optional[str] = Field(None, description="Message to include with the downtime")
    timezone: Optional[str] = Field(None, description="Timezone, e.g. 'UTC' or 'America/New_York'")
    monitor_id: Optional[int] = Field(None, description="Only silence this monitor")
    monitor_tags: Optional[list[str]] = Field(None, description="Only silence monitors with these tags")
    recurrence: Optional[Recurrence] = Field(None, description="Repeat the downtime on a schedule")


class CancelDowntimeParams(ToolParams):
    downtime_id: int = Field(..., description="ID of the downtime to cancel")


DOWNTIMES_TOOLS = [
    create_tool_schema(ListDowntimesParams, "list_downtimes", "List scheduled downtimes from Datadog"),
    create_tool_schema(ScheduleDowntimeParams, "schedule_downtime", "Schedule a downtime in Datadog"),
    create_tool_schema(CancelDowntimeParams, "cancel_downtime", "Cancel a scheduled downtime in Datadog"),
]


def _whole_seconds(timestamp: Optional[float]) -> Optional[int]:
    # v1 downtimes take integer POSIX seconds
    return int(timestamp) if timestamp is not None else None


def build_downtime_body(params: ScheduleDowntimeParams) -> dict[str, Any]:
    """Map tool parameters onto the v1 downtime payload."""
    body = drop_none({
        "scope": [params.scope],
        "start": _whole_seconds(params.start),
        "end": _whole_seconds(params.end),
        "message": params.message,
        "timezone": params.timezone,
        "monitor_id": params.monitor_id,
        "monitor_tags": params.monitor_tags,
    })

    if params.recurrence:
        body["recurrence"] = drop_none({
            "type": params.recurrence.type,
            "period": params.recurrence.period,
            "week_days": params.recurrence.week_days,
            "until": _whole_seconds(params.recurrence.until),
        })

    return body


def create_downtimes_tool_handlers(api: DowntimesApi) -> ToolHandlers:

    async def list_downtimes(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(ListDowntimesParams, arguments)

        response = await api.list_downtimes(current_only=params.current_only)

        if response is None:
            raise MissingDataError("No downtimes data returned")

        return [text_content(f"Listed downtimes:\n{to_json(response, indent=2)}")]

    async def schedule_downtime(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(ScheduleDowntimeParams, arguments)

        response = await api.create_downtime(build_downtime_body(params))

        return [text_content(f"Scheduled downtime: {to_json(response, indent=2)}")]

    async def cancel_downtime(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(CancelDowntimeParams, arguments)

        await api.cancel_downtime(params.downtime_id)

        return [text_content(f"Cancelled downtime with ID: {params.downtime_id}")]

    return {
        "list_downtimes": list_downtimes,
        "schedule_downtime": schedule_downtime,
        "cancel_downtime": cancel_downtime,
    }
