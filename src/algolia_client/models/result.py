"""Outcome and result models for one dispatch.

An *outcome* describes a single HTTP attempt. A :class:`DispatchResult`
is the terminal value of a full dispatch, after retries.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from algolia_client.exceptions import (
    AlgoliaError,
    DecodeError,
    HTTPError,
    TransportError,
)
from algolia_client.models.request import Role


class Success(BaseModel):
    """A 2xx response with a decoded body."""

    model_config = {"frozen": True}

    kind: Literal["success"] = "success"
    status: int
    body: Any = None


class HTTPFailure(BaseModel):
    """A non-2xx response."""

    model_config = {"frozen": True}

    kind: Literal["http_error"] = "http_error"
    status: int
    body: Any = None


class TransportFailure(BaseModel):
    """No HTTP response was obtained."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    kind: Literal["transport_error"] = "transport_error"
    cause: Exception


class DecodeFailure(BaseModel):
    """A 2xx response whose body could not be decoded."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    kind: Literal["decode_error"] = "decode_error"
    status: int
    cause: Exception


Outcome = Success | HTTPFailure | TransportFailure | DecodeFailure


def outcome_to_error(outcome: Outcome) -> AlgoliaError | None:
    """Convert a failed outcome into the exception surfaced to callers."""
    if isinstance(outcome, TransportFailure):
        error: AlgoliaError = TransportError(outcome.cause)
        error.__cause__ = outcome.cause
        return error
    if isinstance(outcome, HTTPFailure):
        return HTTPError(outcome.status, outcome.body)
    if isinstance(outcome, DecodeFailure):
        error = DecodeError(outcome.status, outcome.cause)
        error.__cause__ = outcome.cause
        return error
    return None


class DispatchResult(BaseModel):
    """Terminal result of one dispatch call.

    ``ok`` results carry the decoded body; failed results carry the error
    from the last attempt. ``retries`` counts attempts after the first.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    role: Role = Field(description="Role hint the request was dispatched with")
    retries: int = Field(default=0, ge=0, description="Number of attempts after the first")
    outcome: Outcome = Field(description="Outcome of the last attempt")

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def status(self) -> int | None:
        return getattr(self.outcome, "status", None)

    @property
    def body(self) -> Any:
        return getattr(self.outcome, "body", None)

    @property
    def error(self) -> AlgoliaError | None:
        return outcome_to_error(self.outcome)

    def unwrap(self) -> Any:
        """Return the decoded body, or raise the terminal error."""
        error = self.error
        if error is not None:
            raise error
        return self.body
