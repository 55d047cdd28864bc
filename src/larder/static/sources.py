"""Where static bytes come from.

A source opens a path and returns a ``Resource``: its metadata, its
first bytes (for content-type guessing), an async byte iterator for the
body, and a local filesystem path when one exists.

Failures are reported with the builtin ``OSError`` family so the
middleware can treat every source the same way:

- ``PermissionError`` — the resource exists but cannot be read
- any other ``OSError`` (``FileNotFoundError``, ``IsADirectoryError``, ...)
  — there is nothing to serve
"""

import os
import stat
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol

import anyio

from larder.errors import ConfigurationError
from larder.static.bundles import ResourceBundle
from larder.static.cache import ETagCache
from larder.static.sniff import SNIFF_LENGTH

# Read size when streaming a file body
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ResourceMetadata:
    """Identity and size of one resource, gathered fresh per request.

    ``etag`` is the quoted entity-tag exactly as sent in ``ETag``.
    ``last_modified`` is POSIX seconds.
    """

    name: str
    etag: str | None = None
    last_modified: float | None = None
    size: int | None = None


class Resource(Protocol):
    """An opened resource, ready to be served."""

    @property
    def metadata(self) -> ResourceMetadata: ...

    @property
    def prefix(self) -> bytes: ...

    @property
    def local_path(self) -> Path | None: ...

    def iter_bytes(self) -> AsyncIterator[bytes]: ...

    def close(self) -> None:
        """Release the resource when its body will not be streamed."""


class ResourceSource(Protocol):
    """Opens resources by path relative to the source's root."""

    async def open(self, path: str) -> Resource: ...


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileResource:
    """A regular file, held open from the moment it was stat'ed.

    The body is streamed from the same handle the metadata came from, so
    a file replaced on disk in between is never served under the old
    ``ETag`` or ``Content-Length``.
    """

    path: Path
    metadata: ResourceMetadata
    prefix: bytes
    file: BinaryIO

    @property
    def local_path(self) -> Path:
        return self.path

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        # The handle is positioned just past the sniffed prefix
        async with anyio.wrap_file(self.file) as fh:
            if self.prefix:
                yield self.prefix
            while chunk := await fh.read(CHUNK_SIZE):
                yield chunk

    def close(self) -> None:
        self.file.close()


def file_etag(st: os.stat_result) -> str:
    """Quoted ETag derived from a file's modification time and size."""
    return f'"{st.st_mtime_ns:x}-{st.st_size:x}"'


class FileSystemSource:
    """Resources read from a directory tree.

    Symlinks are resolved and the final path must stay inside the root;
    anything that escapes is reported as not found.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        resolved = Path(root).resolve()
        if not resolved.is_dir():
            msg = f"Static root {str(root)!r} is not a directory."
            raise ConfigurationError(msg)
        self._root = resolved

    @property
    def root(self) -> Path:
        return self._root

    async def open(self, path: str) -> FileResource:
        return await anyio.to_thread.run_sync(self._open_sync, path)

    def _open_sync(self, path: str) -> FileResource:
        # The OS cannot name a file with an embedded NUL
        if "\x00" in path:
            raise FileNotFoundError(path)
        relative = path.lstrip("/")
        file_path = (self._root / relative).resolve() if relative else self._root
        if not file_path.is_relative_to(self._root):
            raise FileNotFoundError(path)

        # Opening (not just stat'ing) surfaces unreadable files here
        fh = file_path.open("rb")
        try:
            st = os.fstat(fh.fileno())
            if not stat.S_ISREG(st.st_mode):
                raise FileNotFoundError(path)
            prefix = fh.read(SNIFF_LENGTH)
        except BaseException:
            fh.close()
            raise

        return FileResource(
            path=file_path,
            metadata=ResourceMetadata(
                name=file_path.name,
                etag=file_etag(st),
                last_modified=st.st_mtime,
                size=st.st_size,
            ),
            prefix=prefix,
            file=fh,
        )


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BundleResource:
    data: bytes
    metadata: ResourceMetadata

    @property
    def prefix(self) -> bytes:
        return self.data[:SNIFF_LENGTH]

    @property
    def local_path(self) -> None:
        return None

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        yield self.data

    def close(self) -> None:
        pass


class BundleSource:
    """Resources looked up in an immutable ``ResourceBundle``.

    Bundles carry no modification time, so the ETag is the SHA-1 of the
    content. It is computed the first time a path is served and kept in
    ``etag_cache`` for the lifetime of the source. Lookups run in a worker
    thread: a bundle may read from disk or a zip archive.
    """

    __slots__ = ("_bundle", "_compute_etag", "_prefix", "etag_cache")

    def __init__(
        self,
        bundle: ResourceBundle,
        prefix: str = "/",
        *,
        compute_etag: bool = True,
        etag_cache: ETagCache | None = None,
    ) -> None:
        if not (prefix.startswith("/") and prefix.endswith("/")):
            msg = f"Bundle prefix must begin and end with '/', got {prefix!r}."
            raise ConfigurationError(msg)
        self._bundle = bundle
        self._prefix = prefix
        self._compute_etag = compute_etag
        self.etag_cache = etag_cache if etag_cache is not None else ETagCache()

    async def open(self, path: str) -> BundleResource:
        bundle_path = self._prefix + path.lstrip("/")
        try:
            data = await anyio.to_thread.run_sync(self._bundle.lookup_data, bundle_path)
        except Exception as exc:
            raise FileNotFoundError(bundle_path) from exc

        etag = self.etag_cache.get_or_compute(bundle_path, data) if self._compute_etag else None
        return BundleResource(
            data=data,
            metadata=ResourceMetadata(
                name=bundle_path.rsplit("/", 1)[-1],
                etag=etag,
                size=len(data),
            ),
        )
