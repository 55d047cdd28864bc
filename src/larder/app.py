"""The ASGI application that hosts a middleware pipeline.

There is no router: requests run through the middleware in the order
they were added, and whatever falls through reaches the endpoint, which
answers ``404`` unless one is supplied.
"""

import threading

from larder._internal.asgi import Receive, Scope, Send
from larder.config import AppConfig
from larder.errors import NotFound
from larder.http.request import Request
from larder.middleware.protocol import AnyResponse, Middleware, Next
from larder.server.handler import handle_request


async def not_found(request: Request) -> AnyResponse:
    """Default endpoint: nothing in the pipeline handled the request."""
    raise NotFound(f"{request.method} {request.path}")


class App:
    """A middleware pipeline exposed as an ASGI 3.0 application.

    Mutable during setup (``add_middleware``). Frozen when the first
    request arrives; adding middleware afterwards raises ``RuntimeError``.

    Usage::

        app = App()
        app.add_middleware(StaticFiles("./public", prefix="/"))
    """

    __slots__ = (
        "_endpoint",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "config",
    )

    def __init__(self, config: AppConfig | None = None, *, endpoint: Next | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._endpoint: Next = endpoint or not_found
        self._middleware_list: list[Middleware] = []
        self._middleware: tuple[Middleware, ...] = ()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline."""
        if self._frozen:
            msg = "Cannot add middleware after the app has started serving requests."
            raise RuntimeError(msg)
        self._middleware_list.append(middleware)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            middleware=self._middleware,
            endpoint=self._endpoint,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._ensure_frozen()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._middleware = tuple(self._middleware_list)
            self._frozen = True
