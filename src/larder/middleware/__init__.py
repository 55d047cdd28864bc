"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    StaticFiles -- Serve files from a directory
    BundleFiles -- Serve blobs from a read-only resource bundle
"""

from larder.middleware.protocol import AnyResponse, Middleware, Next
from larder.middleware.static import (
    BundleFiles,
    StaticFiles,
    StaticServer,
    serve_from_bundle,
    serve_from_directory,
)

__all__ = [
    "AnyResponse",
    "BundleFiles",
    "Middleware",
    "Next",
    "StaticFiles",
    "StaticServer",
    "serve_from_bundle",
    "serve_from_directory",
]
