"""Immutable HTTP request.

Frozen metadata only. The middleware in this package never reads a
request body, so the ASGI ``receive`` channel is not carried.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from larder.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` is the shared context a router fills in; the static
    middleware reads the routed sub-path from its ``"path"`` key when
    present.
    """

    method: str
    path: str
    headers: Headers
    path_params: Mapping[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    def with_path_params(self, **params: str) -> Request:
        """Return a copy with *params* merged into ``path_params``."""
        return replace(self, path_params={**self.path_params, **params})

    @classmethod
    def from_asgi(
        cls,
        scope: Mapping[str, Any],
        path_params: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope."""
        headers = Headers.from_asgi(scope.get("headers", ()))
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            path_params=dict(path_params or {}),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
