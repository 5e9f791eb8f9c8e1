"""Explicit, instance-owned memoization for expensive engine results."""

import logging
from collections import OrderedDict
from typing import Callable, Hashable, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class ResultCache:
    """
    Bounded LRU cache keyed by explicit tuples.

    When a ``version`` is passed to ``get_or_compute`` the cache is tied to
    that shoe version: the first lookup with a newer version drops every
    entry computed for the old one. Each engine owns its own caches so
    separate shoes never see each other's results.
    """

    def __init__(self, maxsize: int = 1024) -> None:
        """
        Initialize an empty cache.

        Args:
            maxsize: Maximum number of entries kept before evicting the
                least recently used one
        """
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._maxsize = maxsize
        self._entries: OrderedDict[Hashable, object] = OrderedDict()
        self._version: int | None = None
        self.hits = 0
        self.misses = 0

    def get_or_compute(
        self,
        key: Hashable,
        compute: Callable[[], T],
        version: int | None = None,
    ) -> T:
        """
        Return the cached value for ``key``, computing it on a miss.

        Args:
            key: Hashable cache key
            compute: Zero-argument callable producing the value
            version: Shoe version the value depends on, if any

        Returns:
            The cached or freshly computed value
        """
        if version is not None and version != self._version:
            if self._entries:
                log.debug("Shoe version %s -> %s, dropping %d entries",
                          self._version, version, len(self._entries))
            self._entries.clear()
            self._version = version

        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]  # type: ignore[return-value]

        self.misses += 1
        log.debug("Cache miss for %r", key)
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self._maxsize:
            self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        """Drop every entry and reset the statistics."""
        self._entries.clear()
        self._version = None
        self.hits = 0
        self.misses = 0

    @property
    def version(self) -> int | None:
        """Return the shoe version the entries belong to."""
        return self._version

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
