"""Security utilities — tamper-evident cookie values.

Sign a cookie before sending it, verify it when it comes back::

    from larder.security import sign, verify

    response = response.with_cookie("session", sign(cookie, "sha256", secret))

    cookie = lookup(cookies_from_request(request), "session")
    if cookie is not None:
        ok, value = verify(cookie, "sha256", secret)
"""

from larder.security.signing import checksum_length, sign, sign_cookie, verify

__all__ = [
    "checksum_length",
    "sign",
    "sign_cookie",
    "verify",
]
