"""
Incident tools - list and fetch Datadog incidents.
"""

from typing import Any, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import IncidentsApi
from ..errors import MissingDataError
from ..schema import ToolHandlers, ToolParams, create_tool_schema, parse_arguments, text_content, to_json


class ListIncidentsParams(ToolParams):
    page_size: int = Field(10, ge=1, le=100, description="Number of incidents per page")
    page_offset: int = Field(0, ge=0, description="Offset of the first incident to return")


class GetIncidentParams(ToolParams):
    incident_id: str = Field(..., min_length=1, description="The incident ID")


INCIDENT_TOOLS = [
    create_tool_schema(ListIncidentsParams, "list_incidents", "Get incidents from Datadog"),
    create_tool_schema(GetIncidentParams, "get_incident", "Get an incident from Datadog"),
]


def create_incident_tool_handlers(api: IncidentsApi) -> ToolHandlers:

    async def list_incidents(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(ListIncidentsParams, arguments)

        response = await api.list_incidents(
            page_size=params.page_size,
            page_offset=params.page_offset,
        )

        data = (response or {}).get("data")
        if data is None:
            raise MissingDataError("No incidents data returned")

        lines = "\n".join(to_json(incident) for incident in data)
        return [text_content(f"Listed incidents:\n{lines}")]

    async def get_incident(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetIncidentParams, arguments)

        response = await api.get_incident(params.incident_id)

        if (response or {}).get("data") is None:
            raise MissingDataError("No incident data returned")

        return [text_content(f"Incident: {to_json(response)}")]

    return {
        "list_incidents": list_incidents,
        "get_incident": get_incident,
    }
