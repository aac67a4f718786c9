"""
Trace tools - APM span search.
"""

from typing import Any, Literal, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import SpansApi
from ..errors import MissingDataError
from ..schema import (
    ToolHandlers,
    ToolParams,
    create_tool_schema,
    epoch_to_iso,
    parse_arguments,
    text_content,
    to_json,
)


class ListTracesParams(ToolParams):
    query: str = Field(..., description="Datadog APM trace query string")
    from_: float = Field(..., alias="from", description="Start time in epoch seconds")
    to: float = Field(..., description="End time in epoch seconds")
    limit: int = Field(100, description="Maximum number of traces to return")
    sort: Literal["timestamp", "-timestamp"] = Field("-timestamp", description="Sort order for traces")
    service: Optional[str] = Field(None, description="Filter by service name")
    operation: Optional[str] = Field(None, description="Filter by operation name")


TRACES_TOOLS = [
    create_tool_schema(ListTracesParams, "list_traces", "Get APM traces from Datadog"),
]


def build_span_query(query: str, service: Optional[str], operation: Optional[str]) -> str:
    parts = [query]
    if service:
        parts.append(f"service:{service}")
    if operation:
        parts.append(f"operation:{operation}")
    return " ".join(parts)


def create_traces_tool_handlers(api: SpansApi) -> ToolHandlers:

    async def list_traces(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(ListTracesParams, arguments)

        response = await api.list_spans({
            "data": {
                "attributes": {
                    "filter": {
                        "query": build_span_query(params.query, params.service, params.operation),
                        "from": epoch_to_iso(params.from_),
                        "to": epoch_to_iso(params.to),
                    },
                    "sort": params.sort,
                    "page": {"limit": params.limit},
                },
                "type": "search_request",
            }
        })

        data = (response or {}).get("data")
        if data is None:
            raise MissingDataError("No traces data returned")

        return [text_content(f"Traces: {to_json({'traces': data, 'count': len(data)})}")]

    return {"list_traces": list_traces}
