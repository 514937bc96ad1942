"""Algolia client — resilient HTTP dispatch for the Algolia search REST API.

Quick start::

    from algolia_client import AlgoliaClient

    client = AlgoliaClient("MY_APP_ID", "MY_API_KEY")
    client.search("products", "apple")
"""

__version__ = "0.1.0"

from algolia_client.client import AlgoliaClient, AsyncAlgoliaClient  # noqa: E402
from algolia_client.config.settings import Settings  # noqa: E402
from algolia_client.exceptions import (  # noqa: E402
    AlgoliaError,
    ConfigurationError,
    DecodeError,
    HTTPError,
    InvalidObjectIDError,
    TaskStatusError,
    TransportError,
)
from algolia_client.models.request import Role  # noqa: E402

__all__ = [
    "AlgoliaClient",
    "AlgoliaError",
    "AsyncAlgoliaClient",
    "ConfigurationError",
    "DecodeError",
    "HTTPError",
    "InvalidObjectIDError",
    "Role",
    "Settings",
    "TaskStatusError",
    "TransportError",
    "__version__",
]
