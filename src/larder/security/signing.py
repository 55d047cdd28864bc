"""Signed cookie values — chained HMAC.

A signed value is ``checksum + value`` where::

    checksum = HMAC(key, HMAC(key, value) + name)

Both HMACs are rendered as lowercase hex, so the checksum has a fixed
length of twice the digest size. Binding the cookie name into the outer
HMAC stops a valid value from being replayed under another cookie name.
The inner HMAC is not an optimisation: signatures are only compatible
with other implementations when the two steps are kept exactly.

Usage::

    from larder.http.cookies import Cookie
    from larder.security.signing import sign, verify

    cookie = Cookie("session", "user-42")
    signed = cookie.with_value(sign(cookie, "sha512", b"super-secret"))

    ok, value = verify(signed, "sha512", b"super-secret")
    assert ok and value == "user-42"
"""

import hmac

from larder.errors import ConfigurationError
from larder.http.cookies import Cookie


def _as_key(key: bytes | str) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else key


def _hmac_hex(algorithm: str, key: bytes, message: str) -> str:
    try:
        mac = hmac.new(key, message.encode("utf-8"), algorithm)
    except ValueError as exc:
        msg = f"Unsupported hash algorithm for cookie signing: {algorithm!r}"
        raise ConfigurationError(msg) from exc
    return mac.hexdigest()


def _checksum(name: str, value: str, algorithm: str, key: bytes) -> str:
    inner = _hmac_hex(algorithm, key, value)
    return _hmac_hex(algorithm, key, inner + name)


def checksum_length(algorithm: str) -> int:
    """Length in characters of the checksum prefix for *algorithm*."""
    try:
        return hmac.new(b"", digestmod=algorithm).digest_size * 2
    except ValueError as exc:
        msg = f"Unsupported hash algorithm for cookie signing: {algorithm!r}"
        raise ConfigurationError(msg) from exc


def sign(cookie: Cookie, algorithm: str, key: bytes | str) -> str:
    """Return the signed value for *cookie*, ready to be reassigned to it."""
    return _checksum(cookie.name, cookie.value, algorithm, _as_key(key)) + cookie.value


def sign_cookie(cookie: Cookie, algorithm: str, key: bytes | str) -> Cookie:
    """Return a copy of *cookie* whose value is signed."""
    return cookie.with_value(sign(cookie, algorithm, key))


def verify(cookie: Cookie, algorithm: str, key: bytes | str) -> tuple[bool, str | None]:
    """Verify a value produced by ``sign``.

    Returns ``(True, value)`` with the original value when the signature
    matches *cookie*'s name and *key*, ``(False, None)`` otherwise.
    Values shorter than the checksum are rejected before any comparison.
    """
    length = checksum_length(algorithm)
    if len(cookie.value) < length:
        return False, None

    claimed_checksum = cookie.value[:length]
    claimed_value = cookie.value[length:]
    checksum = _checksum(cookie.name, claimed_value, algorithm, _as_key(key))

    if len(checksum) != length:
        msg = f"HMAC-{algorithm} produced {len(checksum)} characters, expected {length}"
        raise AssertionError(msg)

    if hmac.compare_digest(claimed_checksum.encode("utf-8"), checksum.encode("ascii")):
        return True, claimed_value
    return False, None
