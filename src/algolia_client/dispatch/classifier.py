"""Response classification — turns one HTTP attempt into an outcome.

Retry policy::

    transport error (no response)   retry
    429 Too Many Requests           retry
    5xx                             retry
    2xx                             terminal, success
    decode failure on 2xx           terminal
    other 4xx                       terminal
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from algolia_client.models.result import (
    DecodeFailure,
    HTTPFailure,
    Outcome,
    Success,
    TransportFailure,
)


def classify(raw: httpx.Response | httpx.RequestError) -> Outcome:
    """Classify a response, or the request error raised instead of one.

    Args:
        raw: The ``httpx.Response`` of an attempt, or the
            ``httpx.RequestError`` raised when no response was obtained.

    Returns:
        The attempt's outcome.
    """
    if isinstance(raw, httpx.RequestError):
        return TransportFailure(cause=raw)

    status = raw.status_code
    if 200 <= status < 300:
        try:
            body = _decode(raw)
        except ValueError as e:
            return DecodeFailure(status=status, cause=e)
        return Success(status=status, body=body)

    try:
        body = _decode(raw)
    except ValueError:
        # Error pages from proxies are not JSON; the status still decides retries.
        body = raw.text
    return HTTPFailure(status=status, body=body)


def is_retryable(outcome: Outcome) -> bool:
    """Return whether another attempt should be made after *outcome*."""
    if isinstance(outcome, TransportFailure):
        return True
    if isinstance(outcome, HTTPFailure):
        return outcome.status == 429 or outcome.status >= 500
    return False


def _decode(response: httpx.Response) -> Any:
    """Decode a JSON body. An empty body decodes to ``None``."""
    if not response.content:
        return None
    return json.loads(response.content)
