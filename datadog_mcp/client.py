"""
Datadog HTTP Client

Handles communication with the Datadog REST API. One client, built once at
startup from one configuration, is shared by every tool domain.

No retries, no caching: a failed call surfaces immediately.

Environment variables:
- DATADOG_API_KEY: API key (required)
- DATADOG_APP_KEY: Application key (required)
- DATADOG_SITE: Datadog site, e.g. us3.datadoghq.com (default: datadoghq.com)
- DATADOG_TIMEOUT: Timeout in seconds for API calls (default: 30)
"""

import os
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from .errors import ConfigError, DatadogApiError


DEFAULT_SITE = "datadoghq.com"
DEFAULT_TIMEOUT = 30.0


class DatadogConfig(BaseModel):
    """Credentials and site selection. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    api_key: str
    app_key: str
    site: str = DEFAULT_SITE
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"https://api.{self.site}"

    @classmethod
    def from_env(cls) -> "DatadogConfig":
        env_timeout = os.environ.get("DATADOG_TIMEOUT")
        return create_datadog_config(
            api_key=os.environ.get("DATADOG_API_KEY", ""),
            app_key=os.environ.get("DATADOG_APP_KEY", ""),
            site=os.environ.get("DATADOG_SITE"),
            timeout=float(env_timeout) if env_timeout else None,
        )


def create_datadog_config(
    api_key: Optional[str],
    app_key: Optional[str],
    site: Optional[str] = None,
    timeout: Optional[float] = None,
) -> DatadogConfig:
    """Build a config, failing fast when either key is missing."""
    if not api_key or not app_key:
        raise ConfigError("Datadog API key and APP key are required")
    return DatadogConfig(
        api_key=api_key,
        app_key=app_key,
        site=site or DEFAULT_SITE,
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
    )


def get_datadog_site(config: DatadogConfig) -> str:
    return config.site


class DatadogClient:
    """Async client for the Datadog REST API."""

    def __init__(
        self,
        config: DatadogConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
            headers={
                "DD-API-KEY": config.api_key,
                "DD-APPLICATION-KEY": config.app_key,
                "Accept": "application/json",
            },
        )

    @property
    def site(self) -> str:
        return self.config.site

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Perform one API call.

        Returns the parsed JSON body, or None when the body is empty.
        Raises DatadogApiError on any non-2xx status; transport failures
        propagate as httpx errors.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        response = await self._client.request(method, path, params=params or None, json=json)

        if not response.is_success:
            raise DatadogApiError(response.status_code, _error_message(response))

        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()


def _error_message(response: httpx.Response) -> str:
    """The backend's own error text: its errors list if it sent one."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("errors"):
        errors = body["errors"]
        if isinstance(errors, list):
            return "; ".join(str(e) for e in errors)
        return str(errors)

    return response.text or response.reason_phrase
