"""In-memory TTL cache for parsed CMS content."""

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from ..types import CMSContent


@dataclass
class CacheEntry:
    data: CMSContent
    timestamp: float
    expires: float


class ContentCache:
    """Size- and time-bounded cache keyed by section file path.

    Entries are stored and returned as copies and expire ``ttl`` seconds after
    they were set. When the cache is full, the entry inserted first is evicted
    to make room.
    """

    def __init__(
        self,
        ttl: float = 300,
        max_size: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.ttl = ttl
        self.max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def set(self, key: str, data: CMSContent) -> None:
        if key not in self._entries and len(self._entries) >= self.max_size:
            oldest_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted oldest CMS cache entry {oldest_key}")

        now = self._clock()
        # Overwrite keeps the original insertion position.
        self._entries[key] = CacheEntry(data=dict(data), timestamp=now, expires=now + self.ttl)

    def get(self, key: str) -> CMSContent | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires:
            del self._entries[key]
            logger.debug(f"CMS cache expired for {key}")
            return None

        return dict(entry.data)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expires]
        for key in expired:
            del self._entries[key]
        return len(expired)
