"""Static resource middleware.

Serves files from a directory (``StaticFiles``) or blobs from an
embedded, read-only bundle (``BundleFiles``). Both share one pipeline:

1. Extract the sub-path (a router's ``path`` param, or the request path
   with the mount prefix stripped). Non-matching paths fall through.
2. Open the resource. Missing resources fall through to the next
   handler; unreadable ones fall through or raise ``Forbidden``.
3. Negotiate ETag / Last-Modified; a match answers ``304`` with no body.
4. Guess the content type and set ``Content-Length``.
5. Hand off through ``X-Sendfile``, answer ``HEAD`` with headers only,
   or stream the body.

Only ``GET`` and ``HEAD`` are served.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from larder.config import ServeOptions
from larder.errors import Forbidden
from larder.http.request import Request
from larder.http.response import Response, StreamingResponse
from larder.middleware.protocol import AnyResponse, Next
from larder.static.bundles import ResourceBundle
from larder.static.negotiation import negotiate
from larder.static.outcome import DELEGATE, Fail, Handled, Outcome
from larder.static.sniff import guess_content_type
from larder.static.sources import BundleSource, FileSystemSource, ResourceSource

logger = logging.getLogger("larder.static")


class StaticServer:
    """Serve resources from any ``ResourceSource``.

    ``StaticFiles`` and ``BundleFiles`` are the two ready-made variants;
    subclass or instantiate this directly for a custom source.
    """

    __slots__ = ("_headers", "_mount", "_options", "_source")

    def __init__(
        self,
        source: ResourceSource,
        *,
        mount: str = "/",
        options: ServeOptions | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._source = source
        self._options = options or ServeOptions()
        self._headers: tuple[tuple[str, str], ...] = tuple((headers or {}).items())

        # Normalize mount: ensure leading slash, strip trailing.
        # Root mount "/" normalizes to "" (every path is a candidate).
        stripped = "/" + mount.strip("/")
        self._mount = stripped if stripped != "/" else ""

    @property
    def options(self) -> ServeOptions:
        return self._options

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Serve a static resource or fall through."""
        outcome = await self.resolve(request)
        match outcome:
            case Handled(response):
                return response
            case Fail(error):
                raise error
            case _:
                return await next(request)

    async def resolve(self, request: Request) -> Outcome:
        """Decide how *request* is answered, without calling the pipeline."""
        if request.method not in ("GET", "HEAD"):
            return DELEGATE

        subpath = self._subpath(request)
        if subpath is None:
            return DELEGATE

        try:
            resource = await self._source.open(subpath)
        except PermissionError:
            if self._options.forbid_on_missing_rights:
                return Fail(Forbidden())
            logger.debug("unreadable static resource %r, falling through", subpath)
            return DELEGATE
        except OSError:
            return DELEGATE

        metadata = resource.metadata
        negotiation = negotiate(request.headers, metadata, self._options)
        if negotiation.not_modified:
            resource.close()
            return Handled(
                Response(body=b"", status=304, content_type="", headers=negotiation.headers)
            )

        content_type, uncertain = guess_content_type(metadata.name, resource.prefix)
        if uncertain:
            logger.warning("could not infer content type of %r with certainty", subpath)

        headers = [*negotiation.headers, *self._headers]
        encoded = any(name.lower() == "content-encoding" for name, _ in headers)
        if not encoded and metadata.size is not None:
            headers.append(("Content-Length", str(metadata.size)))

        local_path = resource.local_path
        if self._options.use_sendfile and local_path is not None:
            # The host server sends the file; Content-Length stays the file's size
            resource.close()
            headers.append(("X-Sendfile", str(local_path)))
            return Handled(Response(body=b"", content_type=content_type, headers=tuple(headers)))

        if request.method == "HEAD":
            resource.close()
            return Handled(Response(body=b"", content_type=content_type, headers=tuple(headers)))

        return Handled(
            StreamingResponse(
                chunks=resource.iter_bytes(),
                content_type=content_type,
                headers=tuple(headers),
            )
        )

    def _subpath(self, request: Request) -> str | None:
        routed = request.path_params.get("path")
        if routed is not None:
            return routed

        path = request.path
        if not self._mount:
            return path.lstrip("/")
        if path != self._mount and not path.startswith(self._mount + "/"):
            return None
        return path[len(self._mount) :].lstrip("/")


class StaticFiles(StaticServer):
    """Middleware that serves static files from a directory.

    ETags come from the file's modification time and size, Last-Modified
    from its modification time. With ``use_sendfile`` the response carries
    the absolute path in ``X-Sendfile``, the file's ``Content-Length`` and
    no body; the host server must honor the header.

    Usage::

        app.add_middleware(StaticFiles(
            directory="./static",
            prefix="/static",
            options=ServeOptions(enable_etag=True, public_cache_control=True),
        ))
    """

    __slots__ = ()

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/static",
        *,
        options: ServeOptions | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            FileSystemSource(directory),
            mount=prefix,
            options=options,
            headers=headers,
        )


class BundleFiles(StaticServer):
    """Middleware that serves blobs from a read-only resource bundle.

    *prefix* is where resources live inside the bundle (begins and ends
    with ``/``); *mount* is the URL prefix the middleware answers under.
    Any lookup failure falls through. ETags are SHA-1 digests memoized per
    path; Last-Modified, ``forbid_on_missing_rights`` and ``use_sendfile``
    do not apply.

    Usage::

        app.add_middleware(BundleFiles(
            PackageBundle("myapp"),
            prefix="/assets/",
            mount="/static",
            options=ServeOptions(enable_etag=True),
        ))
    """

    __slots__ = ()

    def __init__(
        self,
        bundle: ResourceBundle,
        prefix: str = "/",
        *,
        mount: str = "/",
        options: ServeOptions | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        options = options or ServeOptions()
        super().__init__(
            BundleSource(bundle, prefix, compute_etag=options.enable_etag),
            mount=mount,
            options=options,
            headers=headers,
        )

    @property
    def source(self) -> BundleSource:
        return self._source  # type: ignore[return-value]


def serve_from_directory(
    root: str | Path,
    options: ServeOptions | None = None,
    *,
    prefix: str = "/static",
) -> StaticFiles:
    """Build a ``StaticFiles`` middleware rooted at *root*."""
    return StaticFiles(root, prefix, options=options)


def serve_from_bundle(
    bundle: ResourceBundle,
    prefix: str = "/",
    options: ServeOptions | None = None,
    *,
    mount: str = "/",
) -> BundleFiles:
    """Build a ``BundleFiles`` middleware over *bundle* under *prefix*."""
    return BundleFiles(bundle, prefix, mount=mount, options=options)
