"""Tests for the retry controller."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from algolia_client.config.settings import Credentials, HostSettings
from algolia_client.dispatch.retry import dispatch_with_retry
from algolia_client.exceptions import ConfigurationError, DecodeError, HTTPError, TransportError
from algolia_client.models.request import Method, Request, Role
from algolia_client.models.result import HTTPFailure, TransportFailure

CREDENTIALS = Credentials(api_key="key", application_id="app")


class FakeSender:
    """Replays scripted responses/exceptions, recording each URL."""

    def __init__(self, *steps: Any) -> None:
        self.steps = list(steps)
        self.urls: list[str] = []
        self.requests: list[Request] = []

    async def __call__(self, request: Request, url: str) -> httpx.Response:
        self.urls.append(url)
        self.requests.append(request)
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if isinstance(step, Exception):
            raise step
        return step


def _request(role: Role = Role.READ) -> Request:
    return Request(method=Method.GET, path="/1/indexes", role=role)


async def _dispatch(sender: FakeSender, role: Role = Role.READ, budget: int = 3, **kwargs: Any):
    return await dispatch_with_retry(
        sender,
        _request(role),
        credentials=kwargs.get("credentials", CREDENTIALS),
        hosts=kwargs.get("hosts", HostSettings()),
        budget=budget,
    )


# ── Success and terminal statuses ────────────────────────────────────────────


class TestTerminalOutcomes:
    async def test_returns_successful_response(self) -> None:
        sender = FakeSender(httpx.Response(200, json={"items": []}))
        result = await _dispatch(sender)

        assert result.ok
        assert result.body == {"items": []}
        assert result.retries == 0
        assert sender.urls == ["https://app-dsn.algolia.net/1/indexes"]

    async def test_404_is_not_retried(self) -> None:
        sender = FakeSender(httpx.Response(404, json={"message": "Index does not exist"}))
        result = await _dispatch(sender, budget=10)

        assert not result.ok
        assert len(sender.urls) == 1
        assert isinstance(result.error, HTTPError)
        assert result.error.status == 404
        assert result.error.body == {"message": "Index does not exist"}

    async def test_decode_error_is_not_retried(self) -> None:
        sender = FakeSender(httpx.Response(200, content=b"<html>"))
        result = await _dispatch(sender)

        assert len(sender.urls) == 1
        assert isinstance(result.error, DecodeError)
        with pytest.raises(DecodeError):
            result.unwrap()


# ── Retryable outcomes ───────────────────────────────────────────────────────


class TestRetries:
    async def test_retries_when_request_errors(self) -> None:
        sender = FakeSender(
            httpx.ConnectError("refused"),
            httpx.ConnectError("refused"),
            httpx.ConnectError("refused"),
            httpx.Response(200, json={"objectID": "1"}),
        )
        result = await _dispatch(sender, role=Role.WRITE, budget=10)

        assert result.ok
        assert result.retries == 3
        assert sender.urls == [
            "https://app.algolia.net/1/indexes",
            "https://app-1.algolianet.com/1/indexes",
            "https://app-2.algolianet.com/1/indexes",
            "https://app-3.algolianet.com/1/indexes",
        ]

    @pytest.mark.parametrize("status", [429, 500, 503])
    async def test_retries_rate_limit_and_server_errors(self, status: int) -> None:
        sender = FakeSender(httpx.Response(status, json={}), httpx.Response(200, json={"ok": True}))
        result = await _dispatch(sender)

        assert result.ok
        assert result.retries == 1
        assert len(sender.urls) == 2

    async def test_gives_up_after_budget_with_last_transport_error(self) -> None:
        errors = [httpx.ConnectError(f"refused #{i}") for i in range(4)]
        sender = FakeSender(*errors)
        result = await _dispatch(sender, role=Role.READ, budget=3)

        assert not result.ok
        assert result.retries == 3
        assert len(sender.urls) == 4
        assert isinstance(result.outcome, TransportFailure)
        assert result.outcome.cause is errors[-1]

        error = result.error
        assert isinstance(error, TransportError)
        assert error.cause is errors[-1]
        assert "refused #3" in str(error)

    async def test_gives_up_after_budget_with_last_http_error(self) -> None:
        sender = FakeSender(
            httpx.ConnectError("refused"),
            httpx.Response(502, json={"message": "first"}),
            httpx.Response(503, json={"message": "last"}),
        )
        result = await _dispatch(sender, budget=2)

        assert result.retries == 2
        assert isinstance(result.outcome, HTTPFailure)
        assert result.outcome.status == 503
        with pytest.raises(HTTPError, match="last"):
            result.unwrap()

    async def test_zero_budget_means_single_attempt(self) -> None:
        sender = FakeSender(httpx.ConnectError("refused"))
        result = await _dispatch(sender, budget=0)

        assert len(sender.urls) == 1
        assert result.retries == 0

    async def test_insights_retries_stay_on_insights_host(self) -> None:
        sender = FakeSender(httpx.ConnectError("refused"))
        await _dispatch(sender, role=Role.INSIGHTS, budget=5)

        assert sender.urls == ["https://insights.algolia.io/1/indexes"] * 6

    async def test_fallback_order_is_followed(self) -> None:
        sender = FakeSender(httpx.ConnectError("refused"))
        await _dispatch(sender, budget=3, hosts=HostSettings(fallback_host_order=[3, 1, 2]))

        assert sender.urls == [
            "https://app-dsn.algolia.net/1/indexes",
            "https://app-3.algolianet.com/1/indexes",
            "https://app-1.algolianet.com/1/indexes",
            "https://app-2.algolianet.com/1/indexes",
        ]


# ── Decoration ───────────────────────────────────────────────────────────────


class TestDecoration:
    async def test_credentials_attached_on_every_attempt(self) -> None:
        sender = FakeSender(httpx.ConnectError("refused"), httpx.Response(200, json={}))
        await _dispatch(sender)

        for request in sender.requests:
            assert ("X-Algolia-API-Key", "key") in request.headers
            assert ("X-Algolia-Application-Id", "app") in request.headers
            assert len(request.headers) == 2

    async def test_missing_credentials_fail_before_any_attempt(self) -> None:
        sender = FakeSender(httpx.Response(200, json={}))
        with pytest.raises(ConfigurationError):
            await _dispatch(sender, credentials=Credentials(api_key="key"))

        assert sender.urls == []

    async def test_every_attempt_targets_the_request_path(self) -> None:
        sender = FakeSender(httpx.ConnectError("refused"), httpx.Response(200, json={}))
        request = Request(method=Method.POST, path="/1/indexes/my%20index/batch", role=Role.WRITE)
        await dispatch_with_retry(sender, request, credentials=CREDENTIALS, hosts=HostSettings(), budget=10)

        assert sender.urls == [
            "https://app.algolia.net/1/indexes/my%20index/batch",
            "https://app-1.algolianet.com/1/indexes/my%20index/batch",
        ]
