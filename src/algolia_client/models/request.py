"""Request models — the descriptor handed to the dispatch pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Traffic class of an operation.

    Drives host naming and retry budget. Fixed for the lifetime of one
    logical operation.
    """

    READ = "read"
    WRITE = "write"
    INSIGHTS = "insights"


class Method(str, Enum):
    """HTTP methods used by the REST API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Request(BaseModel):
    """A logical request, before host selection and authentication.

    The pipeline derives decorated copies of a request (extra headers,
    absolute URL) but never changes ``method``, ``path`` or ``body``.
    """

    model_config = {"frozen": True}

    method: Method = Field(description="HTTP method")
    path: str = Field(description="Path relative to the selected host, e.g. '/1/indexes'")
    body: Any = Field(default=None, description="JSON-serializable payload, opaque to the pipeline")
    headers: tuple[tuple[str, str], ...] = Field(default=(), description="Ordered extra headers")
    role: Role = Field(default=Role.READ, description="Role hint for host and retry selection")

    def with_headers(self, headers: list[tuple[str, str]] | tuple[tuple[str, str], ...]) -> Request:
        """Return a copy with *headers* appended after the existing ones."""
        return self.model_copy(update={"headers": (*self.headers, *headers)})
