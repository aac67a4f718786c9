"""Shared fixtures: a real DatadogClient talking to an in-process fake Datadog."""

import json

import httpx
import pytest

from datadog_mcp.client import DatadogClient, create_datadog_config
from datadog_mcp.handlers import Handlers


EMPTY = object()


class FakeDatadog:
    """
    Answers Datadog API calls from a route table and records every request.

    Unrouted calls get a 404 in Datadog's error format.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, body: object = EMPTY, status: int = 200):
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path),
            (404, {"errors": ["Not found"]}),
        )
        if body is EMPTY:
            return httpx.Response(status)
        return httpx.Response(
            status,
            content=json.dumps(body).encode(),
            headers={"content-type": "application/json"},
        )

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def datadog():
    return FakeDatadog()


@pytest.fixture
def config():
    return create_datadog_config(api_key="test-api-key", app_key="test-app-key")


@pytest.fixture
async def client(datadog, config):
    async with DatadogClient(config, transport=httpx.MockTransport(datadog)) as client:
        yield client


@pytest.fixture
async def handlers(client):
    return Handlers(client)
