"""Tests for larder.http.headers — immutable, case-insensitive Headers."""

import pytest

from larder._internal.multimap import MultiValueMapping
from larder.http.headers import Headers


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = Headers([("If-None-Match", '"abc"')])
        assert h["if-none-match"] == '"abc"'
        assert h["IF-NONE-MATCH"] == '"abc"'

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            Headers([("Accept", "*/*")])["If-Modified-Since"]

    def test_contains(self) -> None:
        h = Headers([("Accept", "*/*")])
        assert "Accept" in h
        assert "x-missing" not in h

    def test_iter_yields_unique_lowercase_keys(self) -> None:
        h = Headers([("Cookie", "a=1"), ("Accept", "*/*"), ("Cookie", "b=2")])
        assert list(h) == ["cookie", "accept"]
        assert len(h) == 2

    def test_get_returns_first(self) -> None:
        h = Headers([("Cookie", "a=1"), ("Cookie", "b=2")])
        assert h.get("cookie") == "a=1"
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        h = Headers([("Cookie", "a=1"), ("Cookie", "b=2")])
        assert h.get_list("Cookie") == ["a=1", "b=2"]
        assert h.get_list("X-Missing") == []

    def test_from_asgi_decodes_latin1(self) -> None:
        h = Headers.from_asgi([(b"X-Name", b"caf\xe9")])
        assert h["x-name"] == "café"

    def test_empty_headers(self) -> None:
        h = Headers()
        assert len(h) == 0
        assert list(h) == []

    def test_satisfies_multivalue_mapping(self) -> None:
        assert isinstance(Headers([("A", "1")]), MultiValueMapping)
