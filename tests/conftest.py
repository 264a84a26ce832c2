"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from pcdb.config import ClientConfig


@pytest.fixture
def client_config() -> ClientConfig:
    """Connection parameters pointing at test hosts."""
    return ClientConfig(
        api_key="test-key",
        base_url="https://api.test",
        api_version="2024-07",
        custom_endpoint="https://idx-test.svc.test",
    )


class RecordingHandler:
    """httpx mock handler that records requests and replays responses.

    Responses are matched by ``(method, path)``; unmatched requests get an
    empty 200 response.
    """

    def __init__(self, routes: dict[tuple[str, str], httpx.Response] | None = None) -> None:
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.routes.get(
            (request.method, request.url.path),
            httpx.Response(200),
        )

    def body(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request."""
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture
def make_http_client() -> Callable[[RecordingHandler], httpx.Client]:
    """Build an httpx client backed by a recording handler."""

    def _make(handler: RecordingHandler) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Build a recording handler from a route table."""

    def _make(
        routes: dict[tuple[str, str], httpx.Response] | None = None,
    ) -> RecordingHandler:
        return RecordingHandler(routes)

    return _make
