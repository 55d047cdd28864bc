"""Tests for larder.http.response — immutable .with_*() transformations."""

import pytest

from larder.http.response import Response, StreamingResponse


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.body_bytes == b""

    def test_with_methods_return_new_instances(self) -> None:
        original = Response("x")
        changed = original.with_status(201).with_header("ETag", '"a"')
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.headers == (("ETag", '"a"'),)

    def test_with_headers_mapping_and_pairs(self) -> None:
        response = Response().with_headers({"A": "1"}).with_headers((("B", "2"),))
        assert response.headers == (("A", "1"), ("B", "2"))

    def test_header_lookup_is_case_insensitive(self) -> None:
        response = Response().with_header("Content-Length", "5")
        assert response.header("content-length") == "5"
        assert response.header("etag") is None

    def test_cookies(self) -> None:
        response = Response().with_cookie("a", "1").with_cookie("b", "2", max_age=0)
        assert [c.name for c in response.cookies] == ["a", "b"]
        assert response.cookies[1].max_age == 0

    def test_text_and_bytes(self) -> None:
        assert Response(b"caf\xc3\xa9").text == "café"
        assert Response("café").body_bytes == b"caf\xc3\xa9"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 404  # type: ignore[misc]


class TestStreamingResponse:
    def test_chainable(self) -> None:
        response = (
            StreamingResponse(iter([b"a"]))
            .with_status(206)
            .with_content_type("text/plain")
            .with_headers({"X-A": "1"})
            .with_header("X-B", "2")
        )
        assert response.status == 206
        assert response.content_type == "text/plain"
        assert response.header("x-b") == "2"
        assert response.headers == (("X-A", "1"), ("X-B", "2"))
