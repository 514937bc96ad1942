"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

import algolia_client.client.client as client_module
from algolia_client.cli import main
from algolia_client.exceptions import HTTPError


class FakeClient:
    calls: list[tuple[str, tuple, dict]] = []
    error: Exception | None = None

    def __init__(self, *, settings: Any) -> None:
        self.settings = settings

    def _record(self, name: str, *args: Any, **kwargs: Any) -> dict[str, Any]:
        if FakeClient.error is not None:
            raise FakeClient.error
        FakeClient.calls.append((name, args, kwargs))
        return {"command": name}

    def list_indexes(self) -> dict[str, Any]:
        return self._record("list_indexes")

    def search(self, index: str, query: str, **params: Any) -> dict[str, Any]:
        return self._record("search", index, query, **params)

    def wait_task(self, index: str, task_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._record("wait_task", index, task_id, **kwargs)


@pytest.fixture(autouse=True)
def fake_client(monkeypatch: pytest.MonkeyPatch):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    FakeClient.calls = []
    FakeClient.error = None
    monkeypatch.setattr(client_module, "AlgoliaClient", FakeClient)
    monkeypatch.setenv("ALGOLIA_APPLICATION_ID", "cliapp")
    monkeypatch.setenv("ALGOLIA_API_KEY", "cli-key")
    yield FakeClient
    root.handlers[:] = handlers
    root.setLevel(level)


class TestMain:
    def test_search(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["search", "products", "apple", "--hits-per-page", "5"])

        assert FakeClient.calls == [("search", ("products", "apple"), {"hitsPerPage": 5})]
        assert json.loads(capsys.readouterr().out) == {"command": "search"}

    def test_wait_task(self) -> None:
        main(["wait-task", "products", "42", "--poll-interval", "0.5"])

        assert FakeClient.calls == [("wait_task", ("products", "42"), {"poll_interval": 0.5})]

    def test_missing_config_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", "/nonexistent/algolia.yaml", "list-indexes"])

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_client_error_exits_nonzero(self, capsys: pytest.CaptureFixture[str]) -> None:
        FakeClient.error = HTTPError(403, {"message": "Invalid Application-ID or API key"})

        with pytest.raises(SystemExit) as exc_info:
            main(["list-indexes"])

        assert exc_info.value.code == 1
        assert "Invalid Application-ID or API key" in capsys.readouterr().err
