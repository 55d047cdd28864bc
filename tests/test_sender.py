"""Tests for larder.server.sender response emission rules."""

from collections.abc import AsyncIterator

from larder.http.response import Response, StreamingResponse
from larder.server.sender import send_response, send_streaming_response


class Recorder:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)

    @property
    def headers(self) -> dict[bytes, bytes]:
        return dict(self.messages[0]["headers"])

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages[1:])


async def _chunks(*parts: bytes) -> AsyncIterator[bytes]:
    for part in parts:
        yield part


class TestSendResponse:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        send = Recorder()
        await send_response(Response("unexpected-body").with_status(204), send)

        assert send.messages[0]["type"] == "http.response.start"
        assert send.headers[b"content-length"] == b"0"
        assert send.messages[1]["body"] == b""

    async def test_304_keeps_validators(self) -> None:
        send = Recorder()
        response = Response(body=b"", status=304, content_type="", headers=(("ETag", '"x"'),))
        await send_response(response, send)

        assert send.headers[b"etag"] == b'"x"'
        assert b"content-type" not in send.headers
        assert send.body == b""

    async def test_200_preserves_body(self) -> None:
        send = Recorder()
        await send_response(Response("ok"), send)

        assert send.headers[b"content-length"] == b"2"
        assert send.body == b"ok"

    async def test_declared_content_length_kept_for_head(self) -> None:
        send = Recorder()
        response = Response(body=b"", headers=(("Content-Length", "1234"),))
        await send_response(response, send, head=True)

        assert send.headers[b"content-length"] == b"1234"
        assert list(send.headers).count(b"content-length") == 1
        assert send.body == b""

    async def test_sendfile_gets_no_computed_length(self) -> None:
        send = Recorder()
        response = Response(body=b"", headers=(("X-Sendfile", "/srv/app.js"),))
        await send_response(response, send)

        assert b"content-length" not in send.headers
        assert send.headers[b"x-sendfile"] == b"/srv/app.js"

    async def test_cookies_become_set_cookie_headers(self) -> None:
        send = Recorder()
        await send_response(Response("ok").with_cookie("session", "abc"), send)

        assert send.headers[b"set-cookie"].startswith(b"session=abc")


class TestSendStreamingResponse:
    async def test_chunked_without_length(self) -> None:
        send = Recorder()
        await send_streaming_response(StreamingResponse(_chunks(b"a", b"", b"b")), send)

        assert send.headers[b"transfer-encoding"] == b"chunked"
        assert [m["body"] for m in send.messages[1:]] == [b"a", b"b", b""]
        assert send.messages[-1]["more_body"] is False

    async def test_declared_length_not_chunked(self) -> None:
        send = Recorder()
        response = StreamingResponse(_chunks(b"abc"), headers=(("Content-Length", "3"),))
        await send_streaming_response(response, send)

        assert b"transfer-encoding" not in send.headers
        assert send.body == b"abc"

    async def test_sync_iterator(self) -> None:
        send = Recorder()
        await send_streaming_response(StreamingResponse(iter([b"x", b"y"])), send)
        assert send.body == b"xy"

    async def test_head_skips_chunks(self) -> None:
        pulled: list[bytes] = []

        async def tracked() -> AsyncIterator[bytes]:
            pulled.append(b"x")
            yield b"x"

        send = Recorder()
        await send_streaming_response(StreamingResponse(tracked()), send, head=True)

        assert pulled == []
        assert send.body == b""

    async def test_error_mid_stream_closes(self, caplog) -> None:
        async def failing() -> AsyncIterator[bytes]:
            yield b"partial"
            raise OSError("disk went away")

        send = Recorder()
        await send_streaming_response(StreamingResponse(failing()), send)

        assert send.body == b"partial"
        assert send.messages[-1]["more_body"] is False
        assert "error while streaming" in caplog.text
