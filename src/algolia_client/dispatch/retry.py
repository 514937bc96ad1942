"""Retry controller — repeats an attempt across hosts until a terminal outcome.

Each attempt goes to the host chosen for ``(role, attempt)``, so a retry
fails over to the next fallback host immediately, with no backoff. The
loop stops on the first non-retryable outcome, or once the role's budget
of extra attempts is spent, and returns the outcome of the last attempt.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import httpx

from algolia_client.dispatch.classifier import classify, is_retryable
from algolia_client.dispatch.credentials import attach_credentials
from algolia_client.dispatch.hosts import build_url
from algolia_client.models.result import DispatchResult, Outcome, TransportFailure

if TYPE_CHECKING:
    from algolia_client.config.settings import Credentials, HostSettings
    from algolia_client.models.request import Request

logger = logging.getLogger(__name__)

Sender = Callable[["Request", str], Awaitable[httpx.Response]]
"""Sends a decorated request to an absolute URL and returns the raw response."""


async def dispatch_with_retry(
    send: Sender,
    request: Request,
    *,
    credentials: Credentials,
    hosts: HostSettings,
    budget: int,
) -> DispatchResult:
    """Dispatch *request*, retrying retryable outcomes up to *budget* times.

    Args:
        send: Coroutine function performing one HTTP exchange.
        request: The undecorated request.
        credentials: API key and application ID.
        hosts: Host naming configuration.
        budget: Extra attempts allowed after the first one.

    Returns:
        The result of the last attempt, with ``retries`` set to the number
        of attempts made after the first.

    Raises:
        ConfigurationError: If credentials are missing. Raised before any
            network attempt.
    """
    authed = attach_credentials(request, credentials)
    application_id = str(credentials.application_id)

    attempt = 0
    while True:
        url = build_url(request.role, attempt, application_id, hosts, request.path)
        try:
            raw: httpx.Response | httpx.RequestError = await send(authed, url)
        except httpx.RequestError as e:
            raw = e

        outcome = classify(raw)
        if not is_retryable(outcome):
            break
        if attempt >= budget:
            logger.warning(
                "Retry budget exhausted: %s %s role=%s attempts=%d last=%s",
                request.method.value,
                request.path,
                request.role.value,
                attempt + 1,
                _describe(outcome),
            )
            break

        logger.info(
            "Retrying %s %s role=%s attempt=%d after %s on %s",
            request.method.value,
            request.path,
            request.role.value,
            attempt + 1,
            _describe(outcome),
            url,
        )
        attempt += 1

    return DispatchResult(role=request.role, retries=attempt, outcome=outcome)


def _describe(outcome: Outcome) -> str:
    if isinstance(outcome, TransportFailure):
        return type(outcome.cause).__name__
    return f"HTTP {outcome.status}"
