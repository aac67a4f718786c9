"""
Log tools - log search and service discovery.

Both tools go through the same search endpoint. get_all_services reads the
service attribute off each matching log and reports the distinct names.
"""

from typing import Any, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import LogsApi
from ..errors import MissingDataError
from ..schema import ToolHandlers, ToolParams, create_tool_schema, parse_arguments, text_content, to_json


class GetLogsParams(ToolParams):
    query: str = Field("", description="Datadog logs query string")
    from_: float = Field(..., alias="from", description="Start time in epoch seconds")
    to: float = Field(..., description="End time in epoch seconds")
    limit: int = Field(100, description="Maximum number of logs to return. Default is 100.")


class GetAllServicesParams(ToolParams):
    query: str = Field("*", description="Optional query filter for log search")
    from_: float = Field(..., alias="from", description="Start time in epoch seconds")
    to: float = Field(..., description="End time in epoch seconds")
    limit: int = Field(
        1000,
        description="Maximum number of logs to search through. Default is 1000.",
    )


LOGS_TOOLS = [
    create_tool_schema(GetLogsParams, "get_logs", "Search and retrieve logs from Datadog"),
    create_tool_schema(
        GetAllServicesParams,
        "get_all_services",
        "Extract all unique service names from logs",
    ),
]


def _search_body(query: str, from_: float, to: float, limit: int) -> dict[str, Any]:
    # The API wants milliseconds; tools take epoch seconds
    return {
        "filter": {
            "query": query,
            "from": str(int(from_ * 1000)),
            "to": str(int(to * 1000)),
        },
        "page": {"limit": limit},
        "sort": "-timestamp",
    }


def create_logs_tool_handlers(api: LogsApi) -> ToolHandlers:

    async def get_logs(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetLogsParams, arguments)

        response = await api.list_logs(
            _search_body(params.query, params.from_, params.to, params.limit)
        )

        data = (response or {}).get("data")
        if data is None:
            raise MissingDataError("No logs data returned")

        return [text_content(f"Logs data: {to_json(data)}")]

    async def get_all_services(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetAllServicesParams, arguments)

        response = await api.list_logs(
            _search_body(params.query, params.from_, params.to, params.limit)
        )

        data = (response or {}).get("data")
        if data is None:
            raise MissingDataError("No logs data returned")

        services = set()
        for log in data:
            service = (log.get("attributes") or {}).get("service")
            if service:
                services.add(service)

        return [text_content(f"Services: {to_json(sorted(services))}")]

    return {
        "get_logs": get_logs,
        "get_all_services": get_all_services,
    }
