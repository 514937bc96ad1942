"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from algolia_client.config.settings import Settings

APP_ID = "testapp"
API_KEY = "test-api-key-123456"


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with credentials and defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        application_id=APP_ID,
        api_key=API_KEY,
    )


class ScriptedBackend:
    """Fake Algolia backend for ``httpx.MockTransport``.

    Replays ``steps`` in order, one per request; the last step repeats
    once the script runs out. A step is an exception to raise, a
    ``(status, body)`` tuple (body is JSON-encoded unless it is bytes), or
    a callable taking the request and returning one of those.
    """

    def __init__(self, *steps: Any) -> None:
        self.steps = list(steps)
        self.requests: list[httpx.Request] = []

    @property
    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if callable(step) and not isinstance(step, Exception):
            step = step(request)
        if isinstance(step, Exception):
            raise step
        status, body = step
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def make_backend() -> type[ScriptedBackend]:
    """Factory for scripted fake backends."""
    return ScriptedBackend
