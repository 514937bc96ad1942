"""Algolia Python SDK — Async and sync clients for the Algolia REST API.

Usage::

    # Async
    async with AsyncAlgoliaClient("MY_APP_ID", "MY_API_KEY") as client:
        response = await client.search("products", "red shoes")

    # Sync (wraps async client internally)
    client = AlgoliaClient("MY_APP_ID", "MY_API_KEY")
    response = client.search("products", "red shoes")

Every operation builds a :class:`~algolia_client.models.request.Request`
and sends it through the :class:`~algolia_client.dispatch.Dispatcher`.
Failures raise :class:`~algolia_client.exceptions.AlgoliaError` subclasses.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, Literal, TypeVar
from urllib.parse import urlencode

import httpx

from algolia_client import paths
from algolia_client.config.settings import Settings
from algolia_client.dispatch.credentials import require_credentials
from algolia_client.dispatch.dispatcher import Dispatcher
from algolia_client.dispatch.tasks import Sleep, TaskPoller
from algolia_client.exceptions import InvalidObjectIDError
from algolia_client.models.request import Method, Request, Role
from algolia_client.observability.telemetry import BROWSE_RESULT, SEARCH_RESULT, Telemetry

_T = TypeVar("_T")

logger = logging.getLogger(__name__)

Headers = list[tuple[str, str]] | dict[str, str] | None

# ═══════════════════════════════════════════════════════════════════════════════
# Response types (lightweight dicts — the service's JSON is passed through)
# ═══════════════════════════════════════════════════════════════════════════════

SearchResult = dict[str, Any]
"""Search response dict (``hits``, ``nbHits``, ``processingTimeMS``, ...)."""

WriteResult = dict[str, Any]
"""Write response dict, with ``taskID`` and the injected ``indexName``."""

MultiStrategy = Literal["stop_if_enough_matches"] | None


def _resolve_settings(
    settings: Settings | None,
    application_id: str | None,
    api_key: str | None,
) -> Settings:
    settings = settings or Settings()
    overrides = {
        key: value for key, value in (("application_id", application_id), ("api_key", api_key)) if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


def _header_pairs(headers: Headers) -> tuple[tuple[str, str], ...]:
    if not headers:
        return ()
    if isinstance(headers, dict):
        return tuple(headers.items())
    return tuple(headers)


def _with_index(body: Any, index: str) -> Any:
    """Inject ``indexName`` so the response can be passed to ``wait()``."""
    if isinstance(body, dict):
        return {**body, "indexName": index}
    return body


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncAlgoliaClient:
    """Async Python client for the Algolia API.

    Credentials passed explicitly win over ``settings``; anything still
    missing is read from ``ALGOLIA_*`` environment variables once, here.

    Args:
        application_id: Algolia application ID.
        api_key: Algolia API key.
        settings: Full client settings. Loaded from the environment if None.
        transport: httpx transport used for every attempt.
        telemetry: Event registry shared with other clients, if any.
        sleep: Coroutine function used between task status checks.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``,
            e.g. ``event_hooks`` to observe or modify every attempt.

    Raises:
        ConfigurationError: If the application ID or API key is missing.

    Example::

        async with AsyncAlgoliaClient("MY_APP_ID", "MY_API_KEY") as client:
            task = await client.add_object("products", {"name": "apple"})
            await client.wait(task)
    """

    def __init__(
        self,
        application_id: str | None = None,
        api_key: str | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        telemetry: Telemetry | None = None,
        sleep: Sleep = asyncio.sleep,
        **httpx_kwargs: Any,
    ) -> None:
        self.settings = _resolve_settings(settings, application_id, api_key)
        require_credentials(self.settings.credentials())
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout),
            transport=transport,
            **httpx_kwargs,
        )
        self._dispatcher = Dispatcher(self._client, self.settings, telemetry)
        self._poller = TaskPoller(self._dispatcher, self.settings.tasks.poll_interval, sleep)

    async def __aenter__(self) -> AsyncAlgoliaClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @property
    def telemetry(self) -> Telemetry:
        return self._dispatcher.telemetry

    async def _request(
        self,
        role: Role,
        method: Method,
        path: str,
        body: Any = None,
        headers: Headers = None,
    ) -> Any:
        request = Request(method=method, path=path, body=body, headers=_header_pairs(headers), role=role)
        result = await self._dispatcher.execute(request)
        return result.unwrap()

    # ── Search ──

    async def multi(
        self,
        queries: list[dict[str, Any]],
        *,
        strategy: MultiStrategy = None,
        headers: Headers = None,
    ) -> dict[str, Any]:
        """Run several search queries in one request.

        Each query is a dict with ``index_name`` and any search parameters.

        Raises:
            ValueError: If a query has no ``index_name``.
        """
        requests = []
        for query in queries:
            params = dict(query)
            index_name = params.pop("index_name", None)
            if not index_name:
                raise ValueError("Missing index_name for one of the multiple queries")
            requests.append({"indexName": index_name, "params": urlencode(params, doseq=True)})

        return await self._request(
            Role.READ, Method.POST, paths.multiple_queries(strategy), {"requests": requests}, headers
        )

    async def search(self, index: str, query: str, *, headers: Headers = None, **params: Any) -> SearchResult:
        """Search a single index.

        Args:
            index: Index name.
            query: Full-text query.
            headers: Extra request headers.
            **params: Search parameters, e.g. ``hitsPerPage=20``.

        Returns:
            Search response dict.
        """
        body = {**params, "query": query}
        data = await self._request(Role.READ, Method.POST, paths.search(index), body, headers)
        if isinstance(data, dict):
            self.telemetry.emit(
                SEARCH_RESULT,
                {
                    "index": index,
                    "query": query,
                    "options": params,
                    "hits": data.get("nbHits"),
                    "processing_time": data.get("processingTimeMS"),
                },
            )
        return data

    async def search_for_facet_values(
        self,
        index: str,
        facet: str,
        text: str,
        *,
        headers: Headers = None,
        **params: Any,
    ) -> dict[str, Any]:
        """Search the values of a searchable facet attribute."""
        body = {**params, "facetQuery": text}
        return await self._request(Role.READ, Method.POST, paths.search_facet(index, facet), body, headers)

    async def browse(self, index: str, *, headers: Headers = None, **params: Any) -> SearchResult:
        """Browse an index, skipping ranking."""
        data = await self._request(Role.READ, Method.POST, paths.browse(index), params, headers)
        if isinstance(data, dict):
            self.telemetry.emit(
                BROWSE_RESULT,
                {
                    "index": index,
                    "options": params,
                    "hits": data.get("nbHits"),
                    "processing_time": data.get("processingTimeMS"),
                },
            )
        return data

    # ── Objects ──

    async def get_object(self, index: str, object_id: str, *, headers: Headers = None) -> dict[str, Any]:
        """Retrieve one object by ID."""
        data = await self._request(Role.READ, Method.GET, paths.obj(index, object_id), headers=headers)
        return _with_index(data, index)

    async def add_object(
        self,
        index: str,
        obj: dict[str, Any],
        *,
        id_attribute: str | None = None,
        headers: Headers = None,
    ) -> WriteResult:
        """Add an object, letting the service assign an ``objectID``.

        With ``id_attribute``, the object is saved under the value of that
        attribute instead (see :meth:`save_object`).
        """
        if id_attribute:
            return await self.save_object(index, obj, id_attribute=id_attribute, headers=headers)
        data = await self._request(Role.WRITE, Method.POST, paths.index(index), obj, headers)
        return _with_index(data, index)

    async def add_objects(
        self,
        index: str,
        objects: list[dict[str, Any]],
        *,
        id_attribute: str | None = None,
        headers: Headers = None,
    ) -> WriteResult:
        """Add several objects in one batch."""
        if id_attribute:
            return await self.save_objects(index, objects, id_attribute=id_attribute, headers=headers)
        return await self._batch(index, _batch_body(objects, "addObject"), headers)

    async def save_object(
        self,
        index: str,
        obj: dict[str, Any],
        object_id: str | None = None,
        *,
        id_attribute: str | None = None,
        headers: Headers = None,
    ) -> WriteResult:
        """Add or replace an object under a known ID.

        The ID is, in order: ``object_id``, the ``id_attribute`` value, or
        the object's own ``objectID``.

        Raises:
            ValueError: If no ID can be found.
        """
        if object_id is None:
            if id_attribute:
                if obj.get(id_attribute) is None:
                    raise ValueError(f"Your object does not have a '{id_attribute}' attribute")
                object_id = str(obj[id_attribute])
            elif obj.get("objectID") is not None:
                object_id = str(obj["objectID"])
            else:
                raise ValueError("Your object must have an objectID to be saved using save_object")

        data = await self._request(Role.WRITE, Method.PUT, paths.obj(index, object_id), obj, headers)
        return _with_index(data, index)

    async def save_objects(
        self,
        index: str,
        objects: list[dict[str, Any]],
        *,
        id_attribute: str = "objectID",
        headers: Headers = None,
    ) -> WriteResult:
        """Add or replace several objects in one batch."""
        objects = _add_object_ids(objects, id_attribute)
        return await self._batch(index, _batch_body(objects, "updateObject"), headers)

    async def partial_update_object(
        self,
        index: str,
        obj: dict[str, Any],
        object_id: str,
        *,
        upsert: bool = True,
        headers: Headers = None,
    ) -> WriteResult:
        """Update some attributes of an object, creating it if ``upsert``."""
        path = paths.partial_object(index, object_id, upsert)
        data = await self._request(Role.WRITE, Method.POST, path, obj, headers)
        return _with_index(data, index)

    async def partial_update_objects(
        self,
        index: str,
        objects: list[dict[str, Any]],
        *,
        id_attribute: str = "objectID",
        upsert: bool = True,
        headers: Headers = None,
    ) -> WriteResult:
        """Partially update several objects in one batch."""
        action = "partialUpdateObject" if upsert else "partialUpdateObjectNoCreate"
        objects = _add_object_ids(objects, id_attribute)
        return await self._batch(index, _batch_body(objects, action), headers)

    async def delete_object(self, index: str, object_id: str, *, headers: Headers = None) -> WriteResult:
        """Delete one object.

        Raises:
            InvalidObjectIDError: If ``object_id`` is empty.
        """
        if not object_id:
            raise InvalidObjectIDError()
        data = await self._request(Role.WRITE, Method.DELETE, paths.obj(index, object_id), headers=headers)
        return _with_index(data, index)

    async def delete_objects(self, index: str, object_ids: list[str], *, headers: Headers = None) -> WriteResult:
        """Delete several objects in one batch."""
        objects = [{"objectID": object_id} for object_id in object_ids]
        return await self._batch(index, _batch_body(objects, "deleteObject"), headers)

    async def delete_by(self, index: str, *, headers: Headers = None, **filters: Any) -> WriteResult:
        """Delete every object matching the given filters.

        Raises:
            ValueError: If no filter is given. Use :meth:`clear_index` to wipe an index.
        """
        filters = {
            key: value for key, value in filters.items() if key not in ("hitsPerPage", "attributesToRetrieve")
        }
        if not filters:
            raise ValueError("filters are required, use clear_index() to wipe the index")
        data = await self._request(Role.WRITE, Method.POST, paths.delete_by(index), filters, headers)
        return _with_index(data, index)

    async def _batch(self, index: str, body: dict[str, Any], headers: Headers) -> WriteResult:
        data = await self._request(Role.WRITE, Method.POST, paths.batch(index), body, headers)
        return _with_index(data, index)

    # ── Indexes ──

    async def list_indexes(self, *, headers: Headers = None) -> dict[str, Any]:
        """List all indexes."""
        return await self._request(Role.READ, Method.GET, paths.indexes(), headers=headers)

    async def delete_index(self, index: str, *, headers: Headers = None) -> WriteResult:
        """Delete an index."""
        data = await self._request(Role.WRITE, Method.DELETE, paths.index(index), headers=headers)
        return _with_index(data, index)

    async def clear_index(self, index: str, *, headers: Headers = None) -> WriteResult:
        """Remove all objects from an index, keeping its settings."""
        data = await self._request(Role.WRITE, Method.POST, paths.clear(index), headers=headers)
        return _with_index(data, index)

    async def set_settings(self, index: str, settings: dict[str, Any], *, headers: Headers = None) -> WriteResult:
        """Replace index settings."""
        data = await self._request(Role.WRITE, Method.PUT, paths.settings(index), settings, headers)
        return _with_index(data, index)

    async def get_settings(self, index: str, *, headers: Headers = None) -> dict[str, Any]:
        """Fetch index settings."""
        data = await self._request(Role.READ, Method.GET, paths.settings(index), headers=headers)
        return _with_index(data, index)

    async def move_index(self, src_index: str, dst_index: str, *, headers: Headers = None) -> WriteResult:
        """Rename ``src_index`` to ``dst_index``, replacing the destination."""
        body = {"operation": "move", "destination": dst_index}
        data = await self._request(Role.WRITE, Method.POST, paths.operation(src_index), body, headers)
        return _with_index(data, src_index)

    async def copy_index(self, src_index: str, dst_index: str, *, headers: Headers = None) -> WriteResult:
        """Copy ``src_index`` to ``dst_index``, replacing the destination."""
        body = {"operation": "copy", "destination": dst_index}
        data = await self._request(Role.WRITE, Method.POST, paths.operation(src_index), body, headers)
        return _with_index(data, src_index)

    async def get_logs(
        self,
        *,
        index_name: str | None = None,
        length: int | None = None,
        offset: int | None = None,
        type: Literal["all", "query", "build", "error"] | None = None,
        headers: Headers = None,
    ) -> dict[str, Any]:
        """Fetch the latest search and indexing log entries."""
        path = paths.logs(index_name=index_name, length=length, offset=offset, type=type)
        return await self._request(Role.WRITE, Method.GET, path, headers=headers)

    # ── Tasks ──

    async def wait_task(
        self,
        index: str,
        task_id: int | str,
        *,
        poll_interval: float | None = None,
        headers: Headers = None,
    ) -> dict[str, Any]:
        """Wait until a task on ``index`` is published.

        Args:
            index: Index the task belongs to.
            task_id: ``taskID`` from a write response.
            poll_interval: Seconds between checks (default from settings).
            headers: Extra headers for each status check.

        Returns:
            The final task status dict.
        """
        return await self._poller.wait_for_task(
            index, task_id, poll_interval=poll_interval, headers=list(_header_pairs(headers))
        )

    async def wait(
        self,
        response: dict[str, Any],
        *,
        poll_interval: float | None = None,
        headers: Headers = None,
    ) -> dict[str, Any]:
        """Wait for the task of a write response, then return the response.

        Responses without ``indexName`` and ``taskID`` are returned as-is.
        """
        if isinstance(response, dict) and "indexName" in response and "taskID" in response:
            await self.wait_task(
                response["indexName"], response["taskID"], poll_interval=poll_interval, headers=headers
            )
        return response

    # ── Insights ──

    async def push_events(self, events: list[dict[str, Any]], *, headers: Headers = None) -> dict[str, Any]:
        """Send click/conversion/view events to the Insights API."""
        return await self._request(Role.INSIGHTS, Method.POST, paths.events(), {"events": events}, headers)


def _add_object_ids(objects: list[dict[str, Any]], id_attribute: str) -> list[dict[str, Any]]:
    if id_attribute == "objectID":
        return objects
    with_ids = []
    for obj in objects:
        if obj.get(id_attribute) is None:
            raise ValueError(f"id attribute `{id_attribute}` doesn't exist")
        with_ids.append({**obj, "objectID": obj[id_attribute]})
    return with_ids


def _batch_body(objects: list[dict[str, Any]], action: str) -> dict[str, Any]:
    requests = []
    for obj in objects:
        entry: dict[str, Any] = {"action": action, "body": obj}
        if obj.get("objectID") is not None:
            entry["objectID"] = obj["objectID"]
        requests.append(entry)
    return {"requests": requests}


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncAlgoliaClient)
# ═══════════════════════════════════════════════════════════════════════════════


class AlgoliaClient:
    """Synchronous Python client for the Algolia API.

    Wraps :class:`AsyncAlgoliaClient` using ``asyncio.run``; each call opens
    and closes its own async client. Settings and credentials are resolved
    once, at construction.

    Example::

        client = AlgoliaClient("MY_APP_ID", "MY_API_KEY")
        task = client.save_object("products", {"objectID": "1", "name": "apple"})
        client.wait(task)
        print(client.get_object("products", "1"))
    """

    def __init__(
        self,
        application_id: str | None = None,
        api_key: str | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        telemetry: Telemetry | None = None,
        **httpx_kwargs: Any,
    ) -> None:
        self.settings = _resolve_settings(settings, application_id, api_key)
        self.telemetry = telemetry or Telemetry()
        self._transport = transport
        self._httpx_kwargs = httpx_kwargs
        require_credentials(self.settings.credentials())

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter), run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncAlgoliaClient:
        return AsyncAlgoliaClient(
            settings=self.settings,
            transport=self._transport,
            telemetry=self.telemetry,
            **self._httpx_kwargs,
        )

    def _call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        async def _invoke() -> Any:
            async with self._make_client() as c:
                return await getattr(c, name)(*args, **kwargs)

        return self._run(_invoke())

    def multi(self, queries: list[dict[str, Any]], **kwargs: Any) -> dict[str, Any]:
        """Run several search queries in one request."""
        return self._call("multi", queries, **kwargs)

    def search(self, index: str, query: str, **kwargs: Any) -> SearchResult:
        """Search a single index."""
        return self._call("search", index, query, **kwargs)

    def search_for_facet_values(self, index: str, facet: str, text: str, **kwargs: Any) -> dict[str, Any]:
        return self._call("search_for_facet_values", index, facet, text, **kwargs)

    def browse(self, index: str, **kwargs: Any) -> SearchResult:
        return self._call("browse", index, **kwargs)

    def get_object(self, index: str, object_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._call("get_object", index, object_id, **kwargs)

    def add_object(self, index: str, obj: dict[str, Any], **kwargs: Any) -> WriteResult:
        return self._call("add_object", index, obj, **kwargs)

    def add_objects(self, index: str, objects: list[dict[str, Any]], **kwargs: Any) -> WriteResult:
        return self._call("add_objects", index, objects, **kwargs)

    def save_object(self, index: str, obj: dict[str, Any], object_id: str | None = None, **kwargs: Any) -> WriteResult:
        return self._call("save_object", index, obj, object_id, **kwargs)

    def save_objects(self, index: str, objects: list[dict[str, Any]], **kwargs: Any) -> WriteResult:
        return self._call("save_objects", index, objects, **kwargs)

    def partial_update_object(self, index: str, obj: dict[str, Any], object_id: str, **kwargs: Any) -> WriteResult:
        return self._call("partial_update_object", index, obj, object_id, **kwargs)

    def partial_update_objects(self, index: str, objects: list[dict[str, Any]], **kwargs: Any) -> WriteResult:
        return self._call("partial_update_objects", index, objects, **kwargs)

    def delete_object(self, index: str, object_id: str, **kwargs: Any) -> WriteResult:
        return self._call("delete_object", index, object_id, **kwargs)

    def delete_objects(self, index: str, object_ids: list[str], **kwargs: Any) -> WriteResult:
        return self._call("delete_objects", index, object_ids, **kwargs)

    def delete_by(self, index: str, **kwargs: Any) -> WriteResult:
        return self._call("delete_by", index, **kwargs)

    def list_indexes(self, **kwargs: Any) -> dict[str, Any]:
        """List all indexes."""
        return self._call("list_indexes", **kwargs)

    def delete_index(self, index: str, **kwargs: Any) -> WriteResult:
        return self._call("delete_index", index, **kwargs)

    def clear_index(self, index: str, **kwargs: Any) -> WriteResult:
        return self._call("clear_index", index, **kwargs)

    def set_settings(self, index: str, settings: dict[str, Any], **kwargs: Any) -> WriteResult:
        return self._call("set_settings", index, settings, **kwargs)

    def get_settings(self, index: str, **kwargs: Any) -> dict[str, Any]:
        return self._call("get_settings", index, **kwargs)

    def move_index(self, src_index: str, dst_index: str, **kwargs: Any) -> WriteResult:
        return self._call("move_index", src_index, dst_index, **kwargs)

    def copy_index(self, src_index: str, dst_index: str, **kwargs: Any) -> WriteResult:
        return self._call("copy_index", src_index, dst_index, **kwargs)

    def get_logs(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("get_logs", **kwargs)

    def wait_task(self, index: str, task_id: int | str, **kwargs: Any) -> dict[str, Any]:
        """Block until a task is published."""
        return self._call("wait_task", index, task_id, **kwargs)

    def wait(self, response: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        """Block until the task of a write response is published."""
        return self._call("wait", response, **kwargs)

    def push_events(self, events: list[dict[str, Any]], **kwargs: Any) -> dict[str, Any]:
        return self._call("push_events", events, **kwargs)
