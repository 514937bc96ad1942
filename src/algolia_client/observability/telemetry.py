"""Telemetry events — named events with metadata, fanned out to handlers.

Events emitted by the client:

    algolia.request.start   method, path, role, headers (API key masked)
    algolia.request.stop    start metadata + success, retries, status,
                            result or error, duration_ms
    algolia.search.result   index, query, hits, processing_time
    algolia.browse.result   index, hits, processing_time

``span()`` pairs a start and a stop event around a block; the stop event is
emitted even when the block raises.

Handlers run synchronously in the dispatching task. A handler that raises
is logged and detached; it never changes what the client returns.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

EventHandler = Callable[[str, dict[str, Any]], None]

REQUEST_START = "algolia.request.start"
REQUEST_STOP = "algolia.request.stop"
SEARCH_RESULT = "algolia.search.result"
BROWSE_RESULT = "algolia.browse.result"


class Telemetry:
    """Registry of event handlers.

    Example:
        >>> telemetry = Telemetry()
        >>> telemetry.attach("printer", lambda event, meta: print(event, meta["retries"]))
    """

    def __init__(self) -> None:
        self._handlers: dict[str, EventHandler] = {}
        self._lock = threading.Lock()

    def attach(self, handler_id: str, handler: EventHandler) -> None:
        """Register *handler* under *handler_id*, replacing any previous one."""
        with self._lock:
            if handler_id in self._handlers:
                logger.warning("Overwriting existing telemetry handler: %s", handler_id)
            self._handlers[handler_id] = handler

    def detach(self, handler_id: str) -> bool:
        """Remove a handler. Returns False if it was not attached."""
        with self._lock:
            return self._handlers.pop(handler_id, None) is not None

    @property
    def handler_ids(self) -> list[str]:
        with self._lock:
            return list(self._handlers)

    @contextmanager
    def span(self, start_event: str, stop_event: str, metadata: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Emit *start_event*, run the block, then always emit *stop_event*.

        The block fills the yielded dict with its stop fields. The stop event
        carries *metadata*, those fields and ``duration_ms``. If the block
        raises, the stop event gets ``success=False`` and ``error`` set to the
        exception, which is then re-raised.

        Example:
            >>> with telemetry.span("job.start", "job.stop", {"job": "sync"}) as stop:
            ...     stop["success"] = run_job()
        """
        self.emit(start_event, metadata)
        stop: dict[str, Any] = {}
        started = time.monotonic()
        try:
            yield stop
        except Exception as e:
            stop.update(success=False, error=e)
            raise
        finally:
            stop["duration_ms"] = int((time.monotonic() - started) * 1000)
            self.emit(stop_event, {**metadata, **stop})

    def emit(self, event: str, metadata: dict[str, Any]) -> None:
        """Deliver *event* to every attached handler."""
        logger.debug("telemetry %s", event, extra={"telemetry": metadata})

        with self._lock:
            handlers = list(self._handlers.items())

        for handler_id, handler in handlers:
            try:
                handler(event, metadata)
            except Exception:
                logger.exception("Telemetry handler %s failed on %s; detaching it", handler_id, event)
                self.detach(handler_id)
