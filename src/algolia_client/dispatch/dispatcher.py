"""Dispatcher — the single entry point every API operation goes through.

Composes credential attachment, host selection, retries and response
classification over one shared ``httpx.AsyncClient``, and emits a
start/stop telemetry event pair around each dispatch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from algolia_client.dispatch.credentials import masked_headers, require_credentials
from algolia_client.dispatch.retry import dispatch_with_retry
from algolia_client.observability.telemetry import REQUEST_START, REQUEST_STOP, Telemetry

if TYPE_CHECKING:
    from algolia_client.config.settings import Settings
    from algolia_client.models.request import Request
    from algolia_client.models.result import DispatchResult

logger = logging.getLogger(__name__)


class Dispatcher:
    """Sends requests through the retrying dispatch pipeline.

    The dispatcher holds no per-call state, so one instance can serve many
    concurrent operations.

    Args:
        http: HTTP client used for every attempt. Its transport is the
            pluggable adapter (e.g. ``httpx.MockTransport`` in tests).
        settings: Client settings; credentials are validated eagerly.
        telemetry: Event registry. A private one is created if omitted.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        settings: Settings,
        telemetry: Telemetry | None = None,
    ) -> None:
        self._http = http
        self._settings = settings
        self._credentials = settings.credentials()
        require_credentials(self._credentials)
        self.telemetry = telemetry or Telemetry()

    async def execute(self, request: Request) -> DispatchResult:
        """Dispatch *request* and return its terminal result.

        The role hint carried by the request selects hosts and the retry
        budget. Failures are returned inside the result, not raised.
        """
        start_metadata: dict[str, Any] = {
            "method": request.method.value,
            "path": request.path,
            "role": request.role.value,
            "headers": masked_headers(request.headers),
        }
        with self.telemetry.span(REQUEST_START, REQUEST_STOP, start_metadata) as stop:
            result = await dispatch_with_retry(
                self._send,
                request,
                credentials=self._credentials,
                hosts=self._settings.hosts,
                budget=self._settings.retry.budget_for(request.role),
            )
            stop.update(success=result.ok, retries=result.retries, status=result.status)
            if result.ok:
                stop["result"] = result.body
            else:
                stop["error"] = result.error

        logger.debug(
            "%s %s role=%s success=%s retries=%d took=%dms",
            request.method.value,
            request.path,
            request.role.value,
            result.ok,
            result.retries,
            stop["duration_ms"],
        )
        return result

    async def _send(self, request: Request, url: str) -> httpx.Response:
        return await self._http.request(
            request.method.value,
            url,
            headers=list(request.headers),
            json=request.body,
        )
