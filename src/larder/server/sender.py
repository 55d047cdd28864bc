"""ASGI response sending — translates larder Response types to ASGI messages.

Handles both single-body responses and streamed responses. A declared
``Content-Length`` is always kept as-is, so ``HEAD`` and ``304``
responses advertise the real size while sending no body. An
``X-Sendfile`` response gets no computed length either.
"""

import logging
from collections.abc import AsyncIterator

from larder._internal.asgi import Send
from larder.http.response import Response, StreamingResponse

logger = logging.getLogger("larder.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(
    content_type: str, headers: tuple[tuple[str, str], ...]
) -> tuple[list[tuple[bytes, bytes]], bool]:
    """Encode headers; also report whether the body length is already settled.

    It is settled by a declared ``Content-Length``, or by ``X-Sendfile``,
    which leaves the entity to the host server.
    """
    raw: list[tuple[bytes, bytes]] = []
    if content_type:
        raw.append((b"content-type", content_type.encode("latin-1")))
    declared_length = False
    for name, value in headers:
        lowered = name.lower()
        declared_length = declared_length or lowered in ("content-length", "x-sendfile")
        raw.append((lowered.encode("latin-1"), value.encode("latin-1")))
    return raw, declared_length


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a larder Response into ASGI send() calls.

    With *head* set the body is dropped but the headers are unchanged.
    """
    raw_headers, declared_length = _raw_headers(response.content_type, response.headers)
    raw_headers.extend(
        (b"set-cookie", cookie.to_header_value().encode("latin-1")) for cookie in response.cookies
    )

    body = response.body_bytes if _body_allowed(response.status) else b""

    if not declared_length:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )


async def send_streaming_response(
    response: StreamingResponse,
    send: Send,
    *,
    head: bool = False,
) -> None:
    """Send a streamed response.

    Without a declared ``Content-Length`` the body goes out with chunked
    transfer encoding. Each chunk is an ASGI body message with
    ``more_body=True``; an empty message closes the stream. With *head*
    set the chunks are never pulled.
    """
    raw_headers, declared_length = _raw_headers(response.content_type, response.headers)
    if not declared_length:
        raw_headers.append((b"transfer-encoding", b"chunked"))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )

    if not head and _body_allowed(response.status):
        try:
            if isinstance(response.chunks, AsyncIterator):
                async for chunk in response.chunks:
                    if chunk:
                        await send({"type": "http.response.body", "body": chunk, "more_body": True})
            else:
                for chunk in response.chunks:
                    if chunk:
                        await send({"type": "http.response.body", "body": chunk, "more_body": True})
        except Exception:
            # Headers are already out; all that is left is to end the stream
            logger.exception("error while streaming %d response body", response.status)

    await send(
        {
            "type": "http.response.body",
            "body": b"",
            "more_body": False,
        }
    )
