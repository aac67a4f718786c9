"""
Datadog API facades - one per tool domain.

Each facade names the endpoints a domain uses and passes parameters through
to the shared DatadogClient. Field mapping and result shaping belong to the
tool modules, not here.
"""

from typing import Any, Optional

from .client import DatadogClient


class DatadogApi:
    """Base facade bound to the shared client."""

    def __init__(self, client: DatadogClient):
        self.client = client

    @property
    def site(self) -> str:
        return self.client.site


class IncidentsApi(DatadogApi):
    async def list_incidents(self, page_size: int, page_offset: int) -> Any:
        return await self.client.get(
            "/api/v2/incidents",
            params={"page[size]": page_size, "page[offset]": page_offset},
        )

    async def get_incident(self, incident_id: str) -> Any:
        return await self.client.get(f"/api/v2/incidents/{incident_id}")


class MetricsApi(DatadogApi):
    async def query_metrics(self, from_: int, to: int, query: str) -> Any:
        return await self.client.get(
            "/api/v1/query",
            params={"from": from_, "to": to, "query": query},
        )


class LogsApi(DatadogApi):
    async def list_logs(self, body: dict[str, Any]) -> Any:
        return await self.client.post("/api/v2/logs/events/search", json=body)


class MonitorsApi(DatadogApi):
    async def list_monitors(
        self,
        group_states: Optional[str] = None,
        name: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> Any:
        return await self.client.get(
            "/api/v1/monitor",
            params={"group_states": group_states, "name": name, "tags": tags},
        )


class DashboardsApi(DatadogApi):
    async def list_dashboards(self, filter_shared: Optional[bool] = None) -> Any:
        return await self.client.get(
            "/api/v1/dashboard",
            params={"filter[shared]": filter_shared},
        )

    async def get_dashboard(self, dashboard_id: str) -> Any:
        return await self.client.get(f"/api/v1/dashboard/{dashboard_id}")


class SpansApi(DatadogApi):
    async def list_spans(self, body: dict[str, Any]) -> Any:
        return await self.client.post("/api/v2/spans/events/search", json=body)


class HostsApi(DatadogApi):
    async def list_hosts(self, params: dict[str, Any]) -> Any:
        return await self.client.get("/api/v1/hosts", params=params)

    async def get_host_totals(self, from_: Optional[int] = None) -> Any:
        return await self.client.get("/api/v1/hosts/totals", params={"from": from_})

    async def mute_host(self, host_name: str, body: dict[str, Any]) -> Any:
        return await self.client.post(f"/api/v1/host/{host_name}/mute", json=body)

    async def unmute_host(self, host_name: str) -> Any:
        return await self.client.post(f"/api/v1/host/{host_name}/unmute")


class DowntimesApi(DatadogApi):
    async def list_downtimes(self, current_only: Optional[bool] = None) -> Any:
        return await self.client.get(
            "/api/v1/downtime",
            params={"current_only": current_only},
        )

    async def create_downtime(self, body: dict[str, Any]) -> Any:
        return await self.client.post("/api/v1/downtime", json=body)

    async def cancel_downtime(self, downtime_id: int) -> Any:
        return await self.client.delete(f"/api/v1/downtime/{downtime_id}")
