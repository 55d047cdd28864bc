"""Error handling pipeline for larder requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging

from larder.errors import HTTPError
from larder.http.request import Request
from larder.http.response import Response

logger = logging.getLogger("larder.server")


def handle_http_error(exc: HTTPError, request: Request, debug: bool) -> Response:
    """Map an HTTPError to a plain-text Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status, content_type="text/plain; charset=utf-8")
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    body = f"Internal Server Error: {exc!r}" if debug else "Internal Server Error"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
