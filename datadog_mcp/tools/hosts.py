"""
Host tools - list hosts, count active hosts, mute and unmute.

Host tools keep snake_case parameter names on the wire, matching the
Datadog hosts API query parameters.
"""

from typing import Any, Optional

from mcp.types import TextContent
from pydantic import Field

from ..api import HostsApi
from ..errors import MissingDataError
from ..schema import (
    SnakeCaseToolParams,
    ToolHandlers,
    create_tool_schema,
    drop_none,
    epoch_to_iso,
    parse_arguments,
    text_content,
    to_json,
)


class MuteHostParams(SnakeCaseToolParams):
    hostname: str = Field(..., description="The name of the host to mute")
    message: Optional[str] = Field(None, description="Message to associate with the muting of this host")
    end: Optional[int] = Field(None, description="POSIX timestamp for when the mute should end")
    override: bool = Field(
        False,
        description="If true and the host is already muted, replaces existing end time",
    )


class UnmuteHostParams(SnakeCaseToolParams):
    hostname: str = Field(..., description="The name of the host to unmute")


class GetActiveHostsCountParams(SnakeCaseToolParams):
    from_: int = Field(
        7200,
        alias="from",
        description="Number of seconds from which you want to get total number of active hosts (defaults to 2h)",
    )


class ListHostsParams(SnakeCaseToolParams):
    filter: Optional[str] = Field(None, description="Filter string for search results")
    sort_field: Optional[str] = Field(None, description="Field to sort hosts by")
    sort_dir: Optional[str] = Field(None, description="Sort direction (asc/desc)")
    start: Optional[int] = Field(None, description="Starting offset for pagination")
    count: Optional[int] = Field(None, le=1000, description="Max number of hosts to return (max: 1000)")
    from_: Optional[int] = Field(None, alias="from", description="Search hosts from this UNIX timestamp")
    include_muted_hosts_data: Optional[bool] = Field(
        None, description="Include muted hosts status and expiry"
    )
    include_hosts_metadata: Optional[bool] = Field(
        None, description="Include host metadata (version, platform, etc)"
    )


HOSTS_TOOLS = [
    create_tool_schema(MuteHostParams, "mute_host", "Mute a host in Datadog"),
    create_tool_schema(UnmuteHostParams, "unmute_host", "Unmute a host in Datadog"),
    create_tool_schema(ListHostsParams, "list_hosts", "Get list of hosts from Datadog"),
    create_tool_schema(
        GetActiveHostsCountParams,
        "get_active_hosts_count",
        "Get the total number of active hosts in Datadog (defaults to last 2 hours)",
    ),
]


def create_hosts_tool_handlers(api: HostsApi) -> ToolHandlers:

    async def mute_host(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(MuteHostParams, arguments)

        await api.mute_host(
            params.hostname,
            drop_none({"message": params.message, "end": params.end, "override": params.override}),
        )

        message = f"Host {params.hostname} has been muted successfully"
        if params.message:
            message += f" with message: {params.message}"
        if params.end:
            message += f" until {epoch_to_iso(params.end)}"

        return [text_content(to_json({"status": "success", "message": message}, indent=2))]

    async def unmute_host(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(UnmuteHostParams, arguments)

        await api.unmute_host(params.hostname)

        return [text_content(to_json(
            {"status": "success", "message": f"Host {params.hostname} has been unmuted successfully"},
            indent=2,
        ))]

    async def get_active_hosts_count(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(GetActiveHostsCountParams, arguments)

        response = await api.get_host_totals(from_=params.from_)

        if response is None:
            raise MissingDataError("No host totals data returned")

        return [text_content(to_json(
            {
                "total_active": response.get("total_active") or 0,  # UP and reporting
                "total_up": response.get("total_up") or 0,
            },
            indent=2,
        ))]

    async def list_hosts(arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        params = parse_arguments(ListHostsParams, arguments)

        response = await api.list_hosts({
            "filter": params.filter,
            "sort_field": params.sort_field,
            "sort_dir": params.sort_dir,
            "start": params.start,
            "count": params.count,
            "from": params.from_,
            "include_muted_hosts_data": params.include_muted_hosts_data,
            "include_hosts_metadata": params.include_hosts_metadata,
        })

        host_list = (response or {}).get("host_list")
        if host_list is None:
            raise MissingDataError("No hosts data returned")

        hosts = [
            {
                "name": host.get("name"),
                "id": host.get("id"),
                "aliases": host.get("aliases"),
                "apps": host.get("apps"),
                "mute": host.get("is_muted"),
                "last_reported": host.get("last_reported_time"),
                "meta": host.get("meta"),
                "metrics": host.get("metrics"),
                "sources": host.get("sources"),
                "up": host.get("up"),
                "url": f"https://app.{api.site}/infrastructure?host={host.get('name')}",
            }
            for host in host_list
        ]

        return [text_content(f"Hosts: {to_json(hosts)}")]

    return {
        "mute_host": mute_host,
        "unmute_host": unmute_host,
        "list_hosts": list_hosts,
        "get_active_hosts_count": get_active_hosts_count,
    }
