"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> AnyResponse: ...

No base class required. The pipeline checks the shape, not the lineage.

The ``next`` callable may return ``Response`` or ``StreamingResponse``.
Both share the ``.with_header()`` / ``.with_status()`` chainable API, so
middleware can modify them uniformly.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from larder.http.request import Request
from larder.http.response import Response, StreamingResponse

# Any response type the pipeline can produce
AnyResponse: TypeAlias = Response | StreamingResponse

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Protocol for larder middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> AnyResponse:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class StaticFiles:
            async def __call__(self, request: Request, next: Next) -> AnyResponse:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...
