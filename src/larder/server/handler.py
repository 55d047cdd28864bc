"""ASGI handler — translates ASGI scope/messages to larder types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through the middleware chain, and
sends the Response back through ASGI send().
"""

from collections.abc import Callable
from typing import Any

from larder._internal.asgi import Receive, Scope, Send
from larder.errors import HTTPError
from larder.http.request import Request
from larder.http.response import StreamingResponse
from larder.middleware.protocol import AnyResponse, Next
from larder.server.errors import handle_http_error, handle_internal_error
from larder.server.sender import send_response, send_streaming_response


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    middleware: tuple[Callable[..., Any], ...],
    endpoint: Next,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    # Wrap middleware around the endpoint, outermost first
    handler: Next = endpoint
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> AnyResponse:
            return await _mw(req, _next)

        handler = make_next

    try:
        response = await handler(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    head = request.method == "HEAD"
    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, head=head)
    else:
        await send_response(response, send, head=head)
