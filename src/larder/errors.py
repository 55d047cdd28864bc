"""Larder exception hierarchy.

Shared across the static middleware, the signing helpers, and the ASGI
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class LarderError(Exception):
    """Base for all larder-specific errors."""


class ConfigurationError(LarderError):
    """Raised when a middleware or codec is constructed with invalid arguments.

    Typically raised at startup: a missing root directory, a malformed
    bundle prefix, or an unknown hash algorithm.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(LarderError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware when a request must fail rather than fall
    through. The ASGI handler catches these and answers with the status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing in the pipeline produced a response."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — the resource exists but cannot be read."""

    def __init__(self, detail: str = "You cannot access this resource.") -> None:
        super().__init__(status=403, detail=detail)
