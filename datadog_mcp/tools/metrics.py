"""
Metrics tools - timeseries queries.
"""

from typing import Any, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import MetricsApi
from ..errors import MissingDataError
from ..schema import ToolHandlers, ToolParams, create_tool_schema, parse_arguments, text_content, to_json


class GetMetricsParams(ToolParams):
    from_: float = Field(..., alias="from", description="Start time in epoch seconds")
    to: float = Field(..., description="End time in epoch seconds")
    query: str = Field(
        ...,
        description='Datadog metrics query string. e.g. "avg:system.cpu.user{*}"',
    )


METRICS_TOOLS = [
    create_tool_schema(GetMetricsParams, "get_metrics", "Get metrics data from Datadog"),
]


def create_metrics_tool_handlers(api: MetricsApi) -> ToolHandlers:

    async def get_metrics(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetMetricsParams, arguments)

        response = await api.query_metrics(
            from_=int(params.from_),
            to=int(params.to),
            query=params.query,
        )

        if response is None:
            raise MissingDataError("No metrics data returned")

        # A query-level failure comes back as status "error" with a 200,
        # and is passed through as data so the caller sees the reason.
        return [text_content(f"Metrics data: {to_json({'response': response})}")]

    return {"get_metrics": get_metrics}
