"""Tests for credential attachment."""

from __future__ import annotations

import pytest

from algolia_client.config.settings import Credentials
from algolia_client.dispatch.credentials import attach_credentials, masked_headers
from algolia_client.exceptions import ConfigurationError
from algolia_client.models.request import Method, Request


def _request(headers: tuple[tuple[str, str], ...] = ()) -> Request:
    return Request(method=Method.GET, path="/foo", headers=headers)


class TestAttachCredentials:
    def test_with_no_headers_to_start(self) -> None:
        req = attach_credentials(_request(), Credentials(api_key="abc", application_id="def"))
        assert req.headers == (
            ("X-Algolia-API-Key", "abc"),
            ("X-Algolia-Application-Id", "def"),
        )

    def test_adds_to_the_headers_already_present(self) -> None:
        original = _request((("Content-Type", "application/json"),))
        req = attach_credentials(original, Credentials(api_key="abc", application_id="def"))
        assert req.headers == (
            ("Content-Type", "application/json"),
            ("X-Algolia-API-Key", "abc"),
            ("X-Algolia-Application-Id", "def"),
        )
        # The submitted request is left untouched.
        assert original.headers == (("Content-Type", "application/json"),)

    def test_path_and_body_unchanged(self) -> None:
        original = Request(method=Method.POST, path="/1/indexes/foo", body={"a": [1, 2]})
        req = attach_credentials(original, Credentials(api_key="abc", application_id="def"))
        assert req.path == original.path
        assert req.body == original.body

    def test_raises_if_api_key_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="API key"):
            attach_credentials(_request(), Credentials(application_id="def"))

    def test_raises_if_application_id_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="application ID"):
            attach_credentials(_request(), Credentials(api_key="abc"))

    def test_empty_strings_count_as_missing(self) -> None:
        with pytest.raises(ConfigurationError):
            attach_credentials(_request(), Credentials(api_key="", application_id="def"))


class TestMaskedHeaders:
    def test_masks_api_key_only(self) -> None:
        masked = masked_headers((("X-Algolia-API-Key", "supersecretkey"), ("X-Algolia-Application-Id", "def")))
        assert masked == [("X-Algolia-API-Key", "supe..."), ("X-Algolia-Application-Id", "def")]

    def test_short_key_fully_masked(self) -> None:
        assert masked_headers((("x-algolia-api-key", "abc"),)) == [("x-algolia-api-key", "***")]
