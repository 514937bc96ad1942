"""Data models shared by the dispatch pipeline and the client."""

from algolia_client.models.request import Method, Request, Role
from algolia_client.models.result import (
    DecodeFailure,
    DispatchResult,
    HTTPFailure,
    Outcome,
    Success,
    TransportFailure,
)

__all__ = [
    "DecodeFailure",
    "DispatchResult",
    "HTTPFailure",
    "Method",
    "Outcome",
    "Request",
    "Role",
    "Success",
    "TransportFailure",
]
