"""Tests for mrel.repository.http module."""

from __future__ import annotations

import base64

from mrel.core.result import Err, Ok
from mrel.repository.http import HttpClient, MockHttpClient, RealHttpClient, basic_auth_header


class TestBasicAuthHeader:
    def test_encodes_credentials(self) -> None:
        header = basic_auth_header("bot", "s3cret")
        assert header.startswith("Basic ")
        assert base64.b64decode(header.removeprefix("Basic ")) == b"bot:s3cret"

    def test_missing_password(self) -> None:
        header = basic_auth_header("bot", None)
        assert base64.b64decode(header.removeprefix("Basic ")) == b"bot:"


class TestMockHttpClient:
    def test_unknown_url_is_404(self) -> None:
        client = MockHttpClient()
        assert client.head("https://repo.example/x.pom") == Ok(404)

    def test_set_status(self) -> None:
        client = MockHttpClient()
        client.set_status("https://repo.example/x.pom", 200)
        assert client.head("https://repo.example/x.pom") == Ok(200)

    def test_set_error_matches_prefix(self) -> None:
        client = MockHttpClient()
        client.set_error("https://down.example/", "connection refused")
        result = client.head("https://down.example/com/x.pom")
        assert isinstance(result, Err)
        assert result.error.message == "connection refused"
        assert result.error.url == "https://down.example/com/x.pom"

    def test_records_calls(self) -> None:
        client = MockHttpClient()
        client.head("https://a", auth=("u", "p"))
        client.head("https://b")
        assert client.calls == [("https://a", ("u", "p")), ("https://b", None)]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)
        assert isinstance(RealHttpClient(), HttpClient)


class TestRealHttpClient:
    def test_invalid_url_is_err(self) -> None:
        result = RealHttpClient(timeout=1.0).head("not a url")
        assert isinstance(result, Err)

    def test_unreachable_host_is_err(self) -> None:
        result = RealHttpClient(timeout=1.0).head("http://127.0.0.1:9/x.pom")
        assert isinstance(result, Err)
