"""Item cache keyed by canonical resource identity."""

from __future__ import annotations

from typing import Iterator

from .protocols import ResponseLike


class ItemCache:
    """Unbounded memoization of fetched responses.

    One entry per identity; storing again overwrites. Nothing is ever evicted
    unless removed explicitly.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ResponseLike] = {}

    def store(self, key: str, value: ResponseLike) -> None:
        """Add or replace the response cached under ``key``."""
        self._entries[key] = value

    def retrieve(self, key: str | None) -> ResponseLike | None:
        """Return the cached response, or None if not cached."""
        if key is None:
            return None
        return self._entries.get(key)

    def is_cached(self, key: str | None) -> bool:
        return key is not None and key in self._entries

    def remove(self, key: str) -> None:
        """Drop ``key`` from the cache. Missing keys are ignored."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
