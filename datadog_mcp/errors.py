"""
Datadog MCP error types.

Errors carry a message and nothing else; the MCP layer hands that message
back to the caller. Argument validation failures are pydantic's own
ValidationError and transport failures are httpx's, both left untouched.
"""


class DatadogMCPError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(DatadogMCPError):
    """Required configuration is missing or invalid."""


class DuplicateToolError(DatadogMCPError):
    """Two tools were registered under the same name."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate tool name: {name}")
        self.name = name


class UnknownToolError(DatadogMCPError):
    """The requested tool is not in the handler table."""

    def __init__(self, name: str = ""):
        super().__init__("Unknown tool")
        self.name = name


class MissingDataError(DatadogMCPError):
    """The backend answered but the payload the tool needs was null."""


class DatadogApiError(DatadogMCPError):
    """Non-2xx answer from the Datadog API. The backend's own text is kept."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Datadog API error (HTTP {status_code}): {message}")
        self.status_code = status_code
        self.message = message
