"""Larder — static resources and signed cookies for ASGI middleware pipelines.

Serve a directory with conditional GET support::

    from larder import App, ServeOptions, StaticFiles

    app = App()
    app.add_middleware(StaticFiles(
        "./public",
        prefix="/static",
        options=ServeOptions(enable_etag=True, public_cache_control=True),
    ))

Serve assets embedded in a package::

    from larder import BundleFiles
    from larder.static.bundles import PackageBundle

    app.add_middleware(BundleFiles(PackageBundle("myapp"), "/assets/", mount="/assets"))

Sign and verify cookie values::

    from larder import Cookie, sign, verify

    signed = sign(Cookie("session", "user-42"), "sha256", b"secret")
    ok, value = verify(Cookie("session", signed), "sha256", b"secret")
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "AnyResponse",
    "App",
    "AppConfig",
    "BundleFiles",
    "ConfigurationError",
    "Cookie",
    "Forbidden",
    "HTTPError",
    "LarderError",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "ServeOptions",
    "StaticFiles",
    "StreamingResponse",
    "cookies_from_request",
    "cookies_from_response",
    "lookup",
    "serve_from_bundle",
    "serve_from_directory",
    "sign",
    "verify",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import larder`` fast while providing a clean top-level API.
    """
    if name == "App":
        from larder.app import App

        return App

    if name in ("AppConfig", "ServeOptions"):
        from larder import config as _config

        return getattr(_config, name)

    if name == "Request":
        from larder.http.request import Request

        return Request

    if name in ("Response", "StreamingResponse"):
        from larder.http import response as _resp

        return getattr(_resp, name)

    if name in ("Cookie", "cookies_from_request", "cookies_from_response", "lookup"):
        from larder.http import cookies as _cookies

        return getattr(_cookies, name)

    if name in ("sign", "verify"):
        from larder.security import signing as _signing

        return getattr(_signing, name)

    if name in ("AnyResponse", "Middleware", "Next"):
        from larder.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("BundleFiles", "StaticFiles", "serve_from_bundle", "serve_from_directory"):
        from larder.middleware import static as _static

        return getattr(_static, name)

    if name in ("ConfigurationError", "Forbidden", "HTTPError", "LarderError", "NotFound"):
        from larder import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
