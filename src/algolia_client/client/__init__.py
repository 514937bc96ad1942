"""Algolia Python SDK — Client library for the Algolia search REST API.

Provides both async and sync clients. Every request goes through the
retrying dispatch pipeline in :mod:`algolia_client.dispatch`.

Quick start::

    from algolia_client.client import AlgoliaClient

    client = AlgoliaClient("MY_APP_ID", "MY_API_KEY")

    task = client.add_objects("products", [{"name": "apple"}, {"name": "pear"}])
    client.wait(task)

    response = client.search("products", "apple", hitsPerPage=5)
"""

from algolia_client.client.client import AlgoliaClient, AsyncAlgoliaClient

__all__ = ["AlgoliaClient", "AsyncAlgoliaClient"]
