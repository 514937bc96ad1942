"""Client exceptions.

Everything raised by the client derives from :class:`AlgoliaError`.
Transport failures, 429 and 5xx statuses are retried inside the dispatch
pipeline; these exceptions only describe the terminal outcome.
"""

from __future__ import annotations

from typing import Any


class AlgoliaError(Exception):
    """Base exception for client errors."""


class ConfigurationError(AlgoliaError):
    """Raised when credentials or settings are missing or invalid.

    Raised before any network attempt and never retried.
    """


class TransportError(AlgoliaError):
    """Raised when no HTTP response could be obtained from any host tried.

    ``cause`` is the transport exception of the last attempt.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause


class HTTPError(AlgoliaError):
    """Raised for a terminal non-2xx response."""

    def __init__(self, status: int, body: Any = None) -> None:
        message = body.get("message") if isinstance(body, dict) else body
        super().__init__(f"HTTP {status}: {message}" if message else f"HTTP {status}")
        self.status = status
        self.body = body


class DecodeError(AlgoliaError):
    """Raised when a successful response body is not valid JSON."""

    def __init__(self, status: int, cause: BaseException) -> None:
        super().__init__(f"Could not decode HTTP {status} response body: {cause}")
        self.status = status
        self.cause = cause


class TaskStatusError(AlgoliaError):
    """Raised when a task reports a status other than published/notPublished."""

    def __init__(self, index: str, task_id: int | str, status: Any) -> None:
        super().__init__(f"Task {task_id} on index '{index}' reported unknown status {status!r}")
        self.index = index
        self.task_id = task_id
        self.status = status


class InvalidObjectIDError(AlgoliaError):
    """Raised when an object ID is empty."""

    def __init__(self, message: str = "The objectID cannot be an empty string") -> None:
        super().__init__(message)
