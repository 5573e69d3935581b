"""Pytest configuration and fixtures."""

import json

import httpx
import pytest

from declarest import HttpService, HTTPTransport, Resource
from declarest.client.config import ClientConfig


class UserResource(Resource):
    """Resource used across tests."""

    def get_base_url(self) -> str:
        return "/api/users"


class RecordingTransport:
    """Transport that records requests and answers from a handler."""

    def __init__(self, handler=None):
        self.requests = []
        self.closed = False
        self._handler = handler or (lambda request: httpx.Response(200, json={"status": "ok"}))

    async def request(self, request):
        self.requests.append(request)
        result = self._handler(request)
        if isinstance(result, BaseException):
            raise result
        return result

    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    """Create a test config."""
    return ClientConfig(
        api_url="http://localhost:8000",
        timeout=10.0,
    )


@pytest.fixture
def transport_factory():
    """Build a RecordingTransport from a request -> response/exception handler."""
    return RecordingTransport


@pytest.fixture
def recording_transport():
    """Transport answering 200 {"status": "ok"} and recording requests."""
    return RecordingTransport()


@pytest.fixture
def http(recording_transport):
    """HttpService without interceptors over the recording transport."""
    return HttpService(recording_transport)


@pytest.fixture
def users(http):
    """UserResource bound to the recording HTTP service."""
    return UserResource(http)


@pytest.fixture
def mock_server():
    """httpx MockTransport echoing the request back as JSON."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/missing"):
            return httpx.Response(404, json={"detail": "Not found"})
        if request.url.path.endswith("/plain"):
            return httpx.Response(200, text="not json")
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "url": str(request.url),
                "headers": dict(request.headers),
                "body": json.loads(request.content) if request.content else None,
            },
        )

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport


@pytest.fixture
def http_transport(mock_server, config):
    """HTTPTransport over the mock server."""
    client = httpx.AsyncClient(transport=mock_server, base_url=config.api_url)
    return HTTPTransport(config, client=client)
