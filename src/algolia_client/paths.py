"""REST API paths. Path segments taken from user input are URL-encoded."""

from __future__ import annotations

from urllib.parse import quote, urlencode


def _seg(value: object) -> str:
    return quote(str(value), safe="")


def indexes() -> str:
    return "/1/indexes"


def index(name: str) -> str:
    return f"/1/indexes/{_seg(name)}"


def search(name: str) -> str:
    return f"{index(name)}/query"


def search_facet(name: str, facet: str) -> str:
    return f"{index(name)}/facets/{_seg(facet)}/query"


def browse(name: str) -> str:
    return f"{index(name)}/browse"


def multiple_queries(strategy: str | None = None) -> str:
    path = "/1/indexes/*/queries"
    if strategy == "stop_if_enough_matches":
        path += "?strategy=stopIfEnoughMatches"
    return path


def obj(name: str, object_id: str) -> str:
    return f"{index(name)}/{_seg(object_id)}"


def partial_object(name: str, object_id: str, upsert: bool = True) -> str:
    path = f"{obj(name, object_id)}/partial"
    if not upsert:
        path += "?createIfNotExists=false"
    return path


def batch(name: str) -> str:
    return f"{index(name)}/batch"


def delete_by(name: str) -> str:
    return f"{index(name)}/deleteByQuery"


def clear(name: str) -> str:
    return f"{index(name)}/clear"


def settings(name: str) -> str:
    return f"{index(name)}/settings"


def operation(name: str) -> str:
    return f"{index(name)}/operation"


def task(name: str, task_id: int | str) -> str:
    return f"{index(name)}/task/{_seg(task_id)}"


def logs(
    index_name: str | None = None,
    length: int | None = None,
    offset: int | None = None,
    type: str | None = None,
) -> str:
    params = {
        key: value
        for key, value in (("indexName", index_name), ("length", length), ("offset", offset), ("type", type))
        if value is not None
    }
    return f"/1/logs?{urlencode(params)}" if params else "/1/logs"


def events() -> str:
    return "/1/events"
