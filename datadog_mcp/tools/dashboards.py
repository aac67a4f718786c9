"""
Dashboard tools - list and fetch dashboards.

Datadog has no server-side name or tag filter for dashboards, so both are
applied to the listing here. Tags are read from the dashboard description
as a comma-separated list.
"""

from typing import Any, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import DashboardsApi
from ..errors import MissingDataError
from ..schema import ToolHandlers, ToolParams, create_tool_schema, parse_arguments, text_content, to_json


class ListDashboardsParams(ToolParams):
    name: Optional[str] = Field(None, description="Filter dashboards by name")
    tags: Optional[list[str]] = Field(None, description="Filter dashboards by tags")


class GetDashboardParams(ToolParams):
    dashboard_id: str = Field(..., description="The dashboard ID")


DASHBOARDS_TOOLS = [
    create_tool_schema(ListDashboardsParams, "list_dashboards", "Get list of dashboards from Datadog"),
    create_tool_schema(GetDashboardParams, "get_dashboard", "Get a dashboard from Datadog"),
]


def filter_dashboards(
    dashboards: list[dict[str, Any]],
    name: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> list[dict[str, Any]]:
    if name:
        search_term = name.lower()
        dashboards = [d for d in dashboards if search_term in (d.get("title") or "").lower()]
    if tags:
        dashboards = [
            d for d in dashboards
            if all(tag in (d.get("description") or "").split(",") for tag in tags)
        ]
    return dashboards


def create_dashboards_tool_handlers(api: DashboardsApi) -> ToolHandlers:

    async def list_dashboards(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(ListDashboardsParams, arguments)

        response = await api.list_dashboards(filter_shared=False)

        all_dashboards = (response or {}).get("dashboards")
        if all_dashboards is None:
            raise MissingDataError("No dashboards data returned")

        dashboards = [
            {**dashboard, "url": f"https://app.{api.site}/dashboard/{dashboard.get('id')}"}
            for dashboard in filter_dashboards(all_dashboards, params.name, params.tags)
        ]

        return [text_content(f"Dashboards: {to_json(dashboards)}")]

    async def get_dashboard(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetDashboardParams, arguments)

        response = await api.get_dashboard(params.dashboard_id)

        if not response:
            raise MissingDataError("No dashboard data returned")

        return [text_content(f"Dashboard: {to_json(response)}")]

    return {
        "list_dashboards": list_dashboards,
        "get_dashboard": get_dashboard,
    }
