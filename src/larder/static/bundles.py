"""Read-only resource bundles.

A bundle is a collection of named byte blobs shipped with the
application. Paths are absolute within the bundle (``/css/site.css``)
and the content never changes while the process runs.

Any object with a ``lookup_data(path) -> bytes`` method is a bundle;
it raises when the path cannot be read. Two implementations ship here:

- ``MemoryBundle`` — blobs held in a mapping (generated or embedded assets)
- ``PackageBundle`` — data files of an installed Python package
"""

from collections.abc import Iterator, Mapping
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ResourceBundle(Protocol):
    """Anything that can look up immutable blobs by bundle path."""

    def lookup_data(self, path: str) -> bytes: ...


class MemoryBundle:
    """A bundle backed by an in-memory mapping of path → bytes.

    Keys are normalized to begin with ``/``::

        bundle = MemoryBundle({"/app.js": b"console.log('hi');"})
    """

    __slots__ = ("_blobs",)

    def __init__(self, blobs: Mapping[str, bytes]) -> None:
        self._blobs: dict[str, bytes] = {
            "/" + path.lstrip("/"): bytes(data) for path, data in blobs.items()
        }

    def lookup_data(self, path: str) -> bytes:
        """Return the blob at *path*; ``KeyError`` if absent."""
        return self._blobs[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._blobs)

    def __len__(self) -> int:
        return len(self._blobs)


class PackageBundle:
    """A bundle over the data files of an importable package.

    ``/`` maps to the package root, so ``PackageBundle("myapp")`` serves
    ``myapp/static/app.css`` as ``/static/app.css``. Works for packages
    installed from wheels and zip files alike (``importlib.resources``).
    """

    __slots__ = ("_package", "_root")

    def __init__(self, package: str) -> None:
        self._package = package
        self._root: Traversable = resources.files(package)

    def lookup_data(self, path: str) -> bytes:
        """Return the bytes at *path*; ``FileNotFoundError`` if absent."""
        parts = [part for part in path.split("/") if part]
        if not parts or any(part in (".", "..") for part in parts):
            raise FileNotFoundError(f"{self._package}:{path}")
        node = self._root.joinpath(*parts)
        if not node.is_file():
            raise FileNotFoundError(f"{self._package}:{path}")
        return node.read_bytes()

    def __repr__(self) -> str:
        return f"PackageBundle({self._package!r})"
