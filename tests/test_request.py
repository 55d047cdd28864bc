"""Tests for larder.http.request — building requests from ASGI scopes."""

from larder.http.request import Request


def _scope(**overrides) -> dict:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/static/app.js",
        "headers": [],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


class TestFromASGI:
    def test_basic_fields(self) -> None:
        request = Request.from_asgi(_scope())
        assert request.method == "GET"
        assert request.path == "/static/app.js"
        assert request.http_version == "1.1"
        assert request.server == ("testserver", 80)
        assert request.client == ("127.0.0.1", 5000)
        assert request.path_params == {}

    def test_headers_case_insensitive(self) -> None:
        request = Request.from_asgi(_scope(headers=[(b"if-none-match", b'"x"')]))
        assert request.headers.get("If-None-Match") == '"x"'

    def test_repeated_headers_kept_in_order(self) -> None:
        headers = [(b"cookie", b"a=1; b=2"), (b"cookie", b"c=3")]
        request = Request.from_asgi(_scope(headers=headers))
        assert request.headers.get_list("Cookie") == ["a=1; b=2", "c=3"]

    def test_path_params(self) -> None:
        request = Request.from_asgi(_scope(), path_params={"path": "app.js"})
        assert request.path_params == {"path": "app.js"}


class TestWithPathParams:
    def test_merges(self) -> None:
        request = Request.from_asgi(_scope(), path_params={"a": "1"})
        updated = request.with_path_params(path="x.css")
        assert updated.path_params == {"a": "1", "path": "x.css"}
        assert request.path_params == {"a": "1"}
