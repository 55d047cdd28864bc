"""Case-insensitive request headers.

Names are lowercased and values decoded from latin-1 once, when the
request is built. Lookups after that compare plain strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable request headers.

    ``headers[name]`` is the first value received for *name*;
    ``get_list`` returns every value in arrival order (``Cookie`` may be
    sent more than once). Satisfies ``MultiValueMapping``.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            (name.lower(), value) for name, value in pairs
        )

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> Headers:
        """Decode the raw byte pairs of an ASGI scope."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    def __getitem__(self, key: str) -> str:
        lowered = key.lower()
        for name, value in self._pairs:
            if name == lowered:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* in the order they were received."""
        lowered = key.lower()
        return [value for name, value in self._pairs if name == lowered]
