"""
Datadog MCP - Datadog observability tools for MCP clients.

Exposes Datadog APIs as schema-validated tools:
- Incidents, metrics, logs and APM traces (read)
- Monitors, dashboards and hosts (status and listing)
- Host muting and downtimes (write)
"""

__version__ = "1.0.0"
