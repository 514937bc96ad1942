"""Credential attachment — adds the authentication headers to a request."""

from __future__ import annotations

from typing import TYPE_CHECKING

from algolia_client.exceptions import ConfigurationError

if TYPE_CHECKING:
    from algolia_client.config.settings import Credentials
    from algolia_client.models.request import Request

API_KEY_HEADER = "X-Algolia-API-Key"
APPLICATION_ID_HEADER = "X-Algolia-Application-Id"


def require_credentials(credentials: Credentials) -> tuple[str, str]:
    """Return ``(api_key, application_id)`` or raise if either is missing.

    Raises:
        ConfigurationError: If the API key or application ID is empty.
    """
    if not credentials.api_key:
        raise ConfigurationError("The API key is required. Pass api_key=... or set ALGOLIA_API_KEY.")
    if not credentials.application_id:
        raise ConfigurationError(
            "The application ID is required. Pass application_id=... or set ALGOLIA_APPLICATION_ID."
        )
    return credentials.api_key, credentials.application_id


def attach_credentials(request: Request, credentials: Credentials) -> Request:
    """Append the API key and application ID headers to *request*.

    Existing headers are kept in place and in order.
    """
    api_key, application_id = require_credentials(credentials)
    return request.with_headers(
        [
            (API_KEY_HEADER, api_key),
            (APPLICATION_ID_HEADER, application_id),
        ]
    )


def masked_headers(headers: tuple[tuple[str, str], ...]) -> list[tuple[str, str]]:
    """Return *headers* with the API key value masked, for logs and events."""
    masked: list[tuple[str, str]] = []
    for name, value in headers:
        if name.lower() == API_KEY_HEADER.lower():
            value = value[:4] + "..." if len(value) > 8 else "***"
        masked.append((name, value))
    return masked
