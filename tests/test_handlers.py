"""
Tests for the handler table and dispatcher.

Covers the registry/handler bijection, unknown tools, validation before
any backend call, error logging at the dispatch boundary, and the
end-to-end scenarios for monitors, downtimes and logs.
"""

import logging

import pytest
from pydantic import ValidationError

from datadog_mcp.errors import DatadogApiError, DuplicateToolError, MissingDataError, UnknownToolError
from datadog_mcp.handlers import merge_tool_handlers
from datadog_mcp.tool_definitions import TOOL_DEFINITIONS

pytestmark = pytest.mark.anyio


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def error_log():
    logger = logging.getLogger("datadog_mcp.handlers")
    recorder = RecordingHandler()
    logger.addHandler(recorder)
    yield recorder.records
    logger.removeHandler(recorder)


# ═══════════════════════════════════════════════════════════════════════════
# Handler table
# ═══════════════════════════════════════════════════════════════════════════


class TestHandlerTable:

    async def test_registry_and_handler_table_match(self, handlers):
        assert set(handlers.tool_handlers) == {t.name for t in TOOL_DEFINITIONS}

    def test_merge_rejects_duplicate_names(self):
        async def first(arguments):
            return []

        async def second(arguments):
            return []

        with pytest.raises(DuplicateToolError, match="get_logs"):
            merge_tool_handlers({"get_logs": first}, {"get_logs": second})

    def test_merge_order_does_not_matter(self):
        async def a(arguments):
            return []

        async def b(arguments):
            return []

        assert merge_tool_handlers({"a": a}, {"b": b}) == merge_tool_handlers({"b": b}, {"a": a})


# ═══════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════


class TestDispatch:

    async def test_unknown_tool(self, handlers, datadog):
        calls = []
        for name, handler in list(handlers.tool_handlers.items()):
            async def spy(arguments, _name=name, _handler=handler):
                calls.append(_name)
                return await _handler(arguments)
            handlers.tool_handlers[name] = spy

        with pytest.raises(UnknownToolError) as exc_info:
            await handlers.dispatch("no_such_tool", {"query": "x"})

        assert str(exc_info.value) == "Unknown tool"
        assert calls == []
        assert datadog.requests == []

    async def test_missing_required_field_names_it(self, handlers, datadog):
        with pytest.raises(ValidationError) as exc_info:
            await handlers.dispatch("get_logs", {"query": "service:x", "to": 200})

        assert "from" in str(exc_info.value)
        assert datadog.requests == []

    async def test_out_of_range_value(self, handlers, datadog):
        with pytest.raises(ValidationError) as exc_info:
            await handlers.dispatch("list_incidents", {"pageSize": 500})

        assert "pageSize" in str(exc_info.value)
        assert datadog.requests == []

    async def test_wrong_type(self, handlers):
        with pytest.raises(ValidationError):
            await handlers.dispatch("cancel_downtime", {"downtimeId": "not-a-number"})

    @pytest.mark.parametrize(
        "tool",
        [t for t in TOOL_DEFINITIONS if t.inputSchema["required"]],
        ids=lambda t: t.name,
    )
    async def test_every_required_field_is_enforced(self, handlers, datadog, tool):
        with pytest.raises(ValidationError) as exc_info:
            await handlers.dispatch(tool.name, {})

        for field in tool.inputSchema["required"]:
            assert field in str(exc_info.value)
        assert datadog.requests == []

    async def test_success_returns_handler_envelope_unchanged(self, handlers, datadog):
        datadog.on("GET", "/api/v1/hosts/totals", {"total_active": 3, "total_up": 2})

        content = await handlers.dispatch("get_active_hosts_count", {})

        assert len(content) == 1
        assert content[0].type == "text"
        assert '"total_active": 3' in content[0].text

    async def test_failure_is_logged_and_reraised(self, handlers, datadog, error_log):
        datadog.on("GET", "/api/v1/monitor", {"errors": ["Internal server error"]}, status=500)

        with pytest.raises(DatadogApiError, match="Internal server error"):
            await handlers.dispatch("get_monitors", {"name": "cpu"})

        assert len(error_log) == 1
        record = error_log[0]
        assert record.levelno == logging.ERROR
        assert "get_monitors" in record.getMessage()
        assert '{"name": "cpu"}' in record.getMessage()
        assert "Internal server error" in record.getMessage()
        assert record.exc_info is not None

    async def test_unknown_tool_is_logged(self, handlers, error_log):
        with pytest.raises(UnknownToolError):
            await handlers.dispatch("no_such_tool", None)

        assert "no_such_tool" in error_log[0].getMessage()

    async def test_concurrent_calls_are_independent(self, handlers, datadog):
        import anyio

        datadog.on("GET", "/api/v1/monitor", [{"name": "m", "overall_state": "OK"}])
        datadog.on("GET", "/api/v1/hosts/totals", {"total_active": 1, "total_up": 1})
        results = {}

        async def call(name):
            results[name] = await handlers.dispatch(name, {})

        async with anyio.create_task_group() as tg:
            tg.start_soon(call, "get_monitors")
            tg.start_soon(call, "get_active_hosts_count")

        assert len(results["get_monitors"]) == 2
        assert len(results["get_active_hosts_count"]) == 1


# ═══════════════════════════════════════════════════════════════════════════
# End-to-end scenarios
# ═══════════════════════════════════════════════════════════════════════════


class TestScenarios:

    async def test_get_monitors_with_summary(self, handlers, datadog):
        datadog.on("GET", "/api/v1/monitor", [
            {"id": 1, "name": "Test API Monitor", "overall_state": "OK", "tags": ["env:test"]},
        ])

        content = await handlers.dispatch("get_monitors", {"tags": ["env:test"]})

        assert "Monitors:" in content[0].text
        assert "Test API Monitor" in content[0].text
        summary = content[1].text
        assert '"ok":1' in summary
        for counter in ("alert", "warn", "noData", "ignored", "skipped", "unknown"):
            assert f'"{counter}":0' in summary
        assert datadog.requests[0].url.params["tags"] == "env:test"

    async def test_schedule_downtime(self, handlers, datadog):
        datadog.on("POST", "/api/v1/downtime", {"id": 42, "scope": ["host:x"]})

        content = await handlers.dispatch(
            "schedule_downtime",
            {"scope": "host:x", "start": 1700000000, "end": 1700003600},
        )

        assert "Scheduled downtime:" in content[0].text
        assert "42" in content[0].text

    async def test_get_logs_null_data(self, handlers, datadog):
        datadog.on("POST", "/api/v2/logs/events/search", {"data": None})

        with pytest.raises(MissingDataError) as exc_info:
            await handlers.dispatch("get_logs", {"query": "service:x", "from": 100, "to": 200})

        assert str(exc_info.value) == "No logs data returned"

    async def test_unknown_tool_reaches_no_backend(self, handlers, datadog):
        with pytest.raises(UnknownToolError, match="^Unknown tool$"):
            await handlers.dispatch("definitely_not_a_tool", {})

        assert datadog.requests == []
