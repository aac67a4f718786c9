"""Datadog MCP Tools - one module per Datadog domain."""

from .incidents import INCIDENT_TOOLS, create_incident_tool_handlers
from .metrics import METRICS_TOOLS, create_metrics_tool_handlers
from .logs import LOGS_TOOLS, create_logs_tool_handlers
from .monitors import MONITORS_TOOLS, create_monitors_tool_handlers
from .dashboards import DASHBOARDS_TOOLS, create_dashboards_tool_handlers
from .traces import TRACES_TOOLS, create_traces_tool_handlers
from .hosts import HOSTS_TOOLS, create_hosts_tool_handlers
from .downtimes import DOWNTIMES_TOOLS, create_downtimes_tool_handlers

__all__ = [
    "INCIDENT_TOOLS",
    "METRICS_TOOLS",
    "LOGS_TOOLS",
    "MONITORS_TOOLS",
    "DASHBOARDS_TOOLS",
    "TRACES_TOOLS",
    "HOSTS_TOOLS",
    "DOWNTIMES_TOOLS",
    "create_incident_tool_handlers",
    "create_metrics_tool_handlers",
    "create_logs_tool_handlers",
    "create_monitors_tool_handlers",
    "create_dashboards_tool_handlers",
    "create_traces_tool_handlers",
    "create_hosts_tool_handlers",
    "create_downtimes_tool_handlers",
]
