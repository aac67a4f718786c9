"""
Datadog MCP Server

The main entry point that exposes Datadog observability APIs (incidents,
metrics, logs, monitors, dashboards, traces, hosts, downtimes) as tools
via the Model Context Protocol.

This file is intentionally kept as a thin routing layer.
All handler logic is in handlers.py and tools/.
"""

import asyncio
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .client import DatadogClient, DatadogConfig
from .errors import ConfigError
from .handlers import Handlers
from .logger import get_logger
from .tool_definitions import TOOL_DEFINITIONS


SERVER_NAME = "Datadog MCP Server"

log = get_logger("server")


def create_server(handlers: Handlers) -> Server:
    """Create the MCP server and wire it to the handler table."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available Datadog tools."""
        return TOOL_DEFINITIONS

    # Arguments are validated by each tool's parameter model, not by the
    # SDK against the advertised JSON schema.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Route tool calls to the handler table."""
        return await handlers.dispatch(name, arguments)

    return server


def main():
    """Main entry point."""
    # Credentials are checked before any handler is built
    try:
        config = DatadogConfig.from_env()
    except ConfigError as e:
        log.error(f"Server error: {e}")
        sys.exit(1)

    handlers = Handlers(DatadogClient(config))
    server = create_server(handlers)

    async def run():
        try:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
        finally:
            # Clean up resources on shutdown
            await handlers.aclose()

    try:
        asyncio.run(run())
    except Exception as e:
        log.error(f"Server error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
