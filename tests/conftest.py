from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from services.api_client import SpeechTrackerClient

BASE_URL = "http://speech-tracker.test"


@dataclass
class RecordedCall:
    method: str
    path: str
    body: Any
    headers: httpx.Headers


@dataclass
class _Route:
    status: int
    payload: Any
    text: str | None
    headers: dict[str, str]
    error: type[httpx.TransportError] | None


class FakeBackend:
    """In-memory stand-in for the REST backend that records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], _Route] = {}
        self.calls: list[RecordedCall] = []

    def on(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        status: int = 200,
        text: str | None = None,
        headers: dict[str, str] | None = None,
        error: type[httpx.TransportError] | None = None,
    ) -> None:
        """Register a response; ``json`` may be a callable taking the request body."""
        self.routes[(method, path)] = _Route(status, json, text, headers or {}, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append(
            RecordedCall(request.method, request.url.path, body, request.headers)
        )
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if route.error is not None:
            raise route.error("backend unreachable", request=request)

        if route.text is not None:
            return httpx.Response(route.status, text=route.text, headers=route.headers)
        payload = route.payload(body) if callable(route.payload) else route.payload
        return httpx.Response(route.status, json=payload, headers=route.headers)

    def requests(self, method: str | None = None) -> list[tuple[str, str]]:
        return [
            (call.method, call.path)
            for call in self.calls
            if method is None or call.method == method
        ]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend: FakeBackend) -> Iterator[SpeechTrackerClient]:
    api_client = SpeechTrackerClient(
        BASE_URL, transport=httpx.MockTransport(backend.handler)
    )
    yield api_client
    api_client.close()


@pytest.fixture
def make_listing() -> Callable[[list[dict[str, Any]]], Callable[[Any], Any]]:
    """Listing handler that returns a snapshot of a mutable record list."""

    def _factory(records: list[dict[str, Any]]) -> Callable[[Any], Any]:
        return lambda _body: [dict(record) for record in records]

    return _factory
