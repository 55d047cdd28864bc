"""Cookie records, parsing, lookup, and SetCookie serialization.

Consolidates the read side (``Cookie`` records extracted from ``Cookie``
and ``Set-Cookie`` headers) and the write side (``SetCookie``, attached
to a Response) in one module.

Records come out in header order, left to right. When a name occurs more
than once, ``lookup`` returns the last occurrence::

    cookies = cookies_from_request(request)
    session = lookup(cookies, "session")
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from larder.http.request import Request
    from larder.http.response import Response


@dataclass(frozen=True, slots=True)
class Cookie:
    """A parsed cookie: a name/value pair plus pass-through attributes.

    Attributes are carried as parsed and never interpreted here.
    """

    name: str
    value: str
    path: str | None = None
    domain: str | None = None
    max_age: int | None = None
    expires: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: str | None = None

    def with_value(self, value: str) -> Cookie:
        """Return a new record with *value*, keeping every attribute."""
        return replace(self, value=value)


CookieParser: TypeAlias = Callable[[str], Cookie | None]


def parse_cookie(text: str) -> Cookie | None:
    """Parse one ``Set-Cookie`` style string into a ``Cookie``.

    The first ``;``-separated item is the name/value pair, the rest are
    attributes (names are case-insensitive, unknown ones are ignored).
    Returns ``None`` when the text has no ``=`` in its first item or an
    empty name.
    """
    if not text:
        return None
    first, *attributes = text.split(";")
    name, sep, value = first.partition("=")
    name = name.strip()
    if not sep or not name:
        return None

    path: str | None = None
    domain: str | None = None
    max_age: int | None = None
    expires: str | None = None
    secure = False
    httponly = False
    samesite: str | None = None

    for item in attributes:
        key, _, attr_value = item.partition("=")
        key = key.strip().lower()
        attr_value = attr_value.strip()
        if key == "path":
            path = attr_value
        elif key == "domain":
            domain = attr_value
        elif key == "max-age":
            try:
                max_age = int(attr_value)
            except ValueError:
                continue
        elif key == "expires":
            expires = attr_value
        elif key == "secure":
            secure = True
        elif key == "httponly":
            httponly = True
        elif key == "samesite":
            samesite = attr_value

    return Cookie(
        name=name,
        value=value.strip(),
        path=path,
        domain=domain,
        max_age=max_age,
        expires=expires,
        secure=secure,
        httponly=httponly,
        samesite=samesite,
    )


def cookies_from_header_list(
    values: Iterable[str | None],
    parser: CookieParser = parse_cookie,
) -> list[Cookie]:
    """Run *parser* over each raw entry, keeping the order of *values*.

    Empty entries and entries the parser rejects are skipped.
    """
    cookies: list[Cookie] = []
    for raw in values:
        if not raw:
            continue
        cookie = parser(raw)
        if cookie is not None:
            cookies.append(cookie)
    return cookies


def cookies_from_request(request: Request) -> list[Cookie]:
    """Extract every cookie sent in the request's ``Cookie`` headers."""
    cookies: list[Cookie] = []
    for header in request.headers.get_list("cookie"):
        cookies.extend(_split_request_header(header))
    return cookies


def cookies_from_response(response: Response) -> list[Cookie]:
    """Extract every cookie set by the response.

    Explicit ``Set-Cookie`` headers come first, then the response's
    ``SetCookie`` directives. Values are not split on ``,`` because
    ``Expires`` dates contain commas.
    """
    raw = [value for name, value in response.headers if name.lower() == "set-cookie"]
    raw.extend(cookie.to_header_value() for cookie in response.cookies)
    return cookies_from_header_list(raw)


def lookup(cookies: Sequence[Cookie], name: str) -> Cookie | None:
    """Return the last cookie named *name* (case-sensitive), or ``None``."""
    found: Cookie | None = None
    for cookie in cookies:
        if cookie.name == name:
            found = cookie
    return found


def _split_request_header(header: str) -> list[Cookie]:
    """Split a ``Cookie`` header value into attribute-less records."""
    if not header:
        return []
    pairs = [pair for chunk in header.split(",") for pair in chunk.split(";")]
    return cookies_from_header_list(pairs, _parse_pair)


def _parse_pair(pair: str) -> Cookie | None:
    name, sep, value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    return Cookie(name=name, value=value.strip())


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive attached to a Response."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={self.value}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)
