"""Tests for serving embedded resource bundles."""

import pytest

from larder.app import App
from larder.config import ServeOptions
from larder.errors import ConfigurationError
from larder.middleware.static import BundleFiles, StaticServer, serve_from_bundle
from larder.static.bundles import MemoryBundle
from larder.static.cache import ETagCache, sha1_etag
from larder.static.sources import BundleSource
from larder.testing import TestClient

CSS = b"body { margin: 0; }"


@pytest.fixture
def bundle() -> MemoryBundle:
    return MemoryBundle(
        {
            "/assets/site.css": CSS,
            "/assets/logo": b"\x89PNG\r\n\x1a\n....",
            "/private/key.txt": b"not mounted",
        }
    )


def _app(bundle: MemoryBundle, **options) -> App:
    app = App()
    app.add_middleware(
        BundleFiles(bundle, "/assets/", mount="/static", options=ServeOptions(**options))
    )
    return app


class TestBundleServing:
    async def test_serves_blob(self, bundle) -> None:
        async with TestClient(_app(bundle)) as client:
            response = await client.get("/static/site.css")
            assert response.status == 200
            assert response.content_type == "text/css"
            assert response.body == CSS
            assert response.header("content-length") == str(len(CSS))

    async def test_signature_sniffed(self, bundle) -> None:
        async with TestClient(_app(bundle)) as client:
            response = await client.get("/static/logo")
            assert response.content_type == "image/png"

    async def test_missing_falls_through(self, bundle) -> None:
        async with TestClient(_app(bundle)) as client:
            assert (await client.get("/static/nope.css")).status == 404

    async def test_outside_prefix_is_not_served(self, bundle) -> None:
        async with TestClient(_app(bundle)) as client:
            assert (await client.get("/static/../private/key.txt")).status == 404

    async def test_head(self, bundle) -> None:
        async with TestClient(_app(bundle)) as client:
            response = await client.head("/static/site.css")
            assert response.body == b""
            assert response.header("content-length") == str(len(CSS))

    async def test_no_last_modified_or_sendfile(self, bundle) -> None:
        app = _app(bundle, enable_last_modified=True, use_sendfile=True)
        async with TestClient(app) as client:
            response = await client.get("/static/site.css")
            assert response.body == CSS
            assert response.header("last-modified") is None
            assert response.header("x-sendfile") is None


class TestBundleETag:
    async def test_etag_is_sha1(self, bundle) -> None:
        async with TestClient(_app(bundle, enable_etag=True)) as client:
            response = await client.get("/static/site.css")
            assert response.header("etag") == sha1_etag(CSS)

    async def test_etag_computed_once(self, bundle) -> None:
        calls: list[bytes] = []

        def digest(data: bytes) -> str:
            calls.append(data)
            return sha1_etag(data)

        source = BundleSource(bundle, "/assets/", etag_cache=ETagCache(digest))
        app = App()
        app.add_middleware(
            StaticServer(source, mount="/static", options=ServeOptions(enable_etag=True))
        )

        async with TestClient(app) as client:
            first = await client.get("/static/site.css")
            second = await client.get("/static/site.css")

        assert first.header("etag") == second.header("etag")
        assert calls == [CSS]

    async def test_not_modified(self, bundle) -> None:
        async with TestClient(_app(bundle, enable_etag=True)) as client:
            response = await client.get(
                "/static/site.css", headers={"If-None-Match": sha1_etag(CSS)}
            )
            assert response.status == 304
            assert response.body == b""

    async def test_cache_filled_per_path(self, bundle) -> None:
        middleware = BundleFiles(
            bundle, "/assets/", mount="/static", options=ServeOptions(enable_etag=True)
        )
        app = App()
        app.add_middleware(middleware)
        async with TestClient(app) as client:
            await client.get("/static/site.css")
            await client.get("/static/site.css")
            await client.get("/static/logo")
        assert len(middleware.source.etag_cache) == 2
        assert "/assets/site.css" in middleware.source.etag_cache

    async def test_etag_disabled_skips_digest(self, bundle) -> None:
        middleware = BundleFiles(bundle, "/assets/", mount="/static")
        app = App()
        app.add_middleware(middleware)
        async with TestClient(app) as client:
            response = await client.get("/static/site.css")
        assert response.header("etag") is None
        assert len(middleware.source.etag_cache) == 0


class TestConstruction:
    def test_prefix_validated(self, bundle) -> None:
        with pytest.raises(ConfigurationError):
            BundleFiles(bundle, "assets")

    def test_serve_from_bundle(self, bundle) -> None:
        middleware = serve_from_bundle(bundle, "/assets/", mount="/static")
        assert isinstance(middleware, BundleFiles)
