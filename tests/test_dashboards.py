"""Tests for the dashboard tools."""

import json

import pytest

from datadog_mcp.errors import DatadogApiError, MissingDataError
from datadog_mcp.tools.dashboards import filter_dashboards

pytestmark = pytest.mark.anyio


DASHBOARDS = [
    {"id": "abc-123", "title": "Web Service Overview", "description": "team:web,env:prod"},
    {"id": "def-456", "title": "Database Health", "description": "team:db,env:prod"},
    {"id": "ghi-789", "title": "Web Staging", "description": None},
]


def parse_dashboards(text):
    prefix = "Dashboards: "
    assert text.startswith(prefix)
    return json.loads(text[len(prefix):])


class TestListDashboards:

    async def test_adds_urls(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard", {"dashboards": DASHBOARDS})

        content = await handlers.dispatch("list_dashboards", {})

        dashboards = parse_dashboards(content[0].text)
        assert [d["id"] for d in dashboards] == ["abc-123", "def-456", "ghi-789"]
        assert dashboards[0]["url"] == "https://app.datadoghq.com/dashboard/abc-123"
        assert datadog.requests[0].url.params["filter[shared]"] == "false"

    async def test_name_filter_is_case_insensitive(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard", {"dashboards": DASHBOARDS})

        content = await handlers.dispatch("list_dashboards", {"name": "WEB"})

        assert [d["id"] for d in parse_dashboards(content[0].text)] == ["abc-123", "ghi-789"]

    async def test_tag_filter(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard", {"dashboards": DASHBOARDS})

        content = await handlers.dispatch("list_dashboards", {"tags": ["env:prod", "team:db"]})

        assert [d["id"] for d in parse_dashboards(content[0].text)] == ["def-456"]

    async def test_null_dashboards(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard", {"dashboards": None})

        with pytest.raises(MissingDataError, match="No dashboards data returned"):
            await handlers.dispatch("list_dashboards", {})

    async def test_forbidden(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard", {"errors": ["Forbidden"]}, status=403)

        with pytest.raises(DatadogApiError, match="Forbidden"):
            await handlers.dispatch("list_dashboards", {})


class TestGetDashboard:

    async def test_returns_dashboard(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard/abc-123", {"id": "abc-123", "title": "Web Service Overview", "widgets": []})

        content = await handlers.dispatch("get_dashboard", {"dashboardId": "abc-123"})

        assert content[0].text.startswith("Dashboard: ")
        assert json.loads(content[0].text[len("Dashboard: "):])["title"] == "Web Service Overview"

    async def test_not_found(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard/nope", {"errors": ["Dashboard not found"]}, status=404)

        with pytest.raises(DatadogApiError, match="Dashboard not found"):
            await handlers.dispatch("get_dashboard", {"dashboardId": "nope"})

    async def test_empty_body(self, handlers, datadog):
        datadog.on("GET", "/api/v1/dashboard/abc-123", None)

        with pytest.raises(MissingDataError, match="No dashboard data returned"):
            await handlers.dispatch("get_dashboard", {"dashboardId": "abc-123"})


def test_filter_without_criteria_keeps_everything():
    assert filter_dashboards(DASHBOARDS) == DASHBOARDS
