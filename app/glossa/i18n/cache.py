"""Bounded LRU cache for translation lookups.

Entries are keyed by (locale, key ordinal, content kind). Recency is kept
in an OrderedDict, so get, put and eviction are O(1). All structural
changes happen under one narrow lock.
"""

import threading
from collections import OrderedDict
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

import psutil

from glossa.i18n.content import Content, ContentKind
from glossa.i18n.exceptions import InvalidCacheSizeError
from glossa.i18n.keys import TranslationKey
from glossa.i18n.locales import LocaleSource
from glossa.logging import get_module_logger

logger = get_module_logger()

DEFAULT_CACHE_SIZE = 1000
MIN_AUTOMATIC_CACHE_SIZE = 100
MAX_AUTOMATIC_CACHE_SIZE = 50_000


class CacheSizeMode(str, Enum):
    """How the translation cache capacity is chosen."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"
    DEFAULT = "default"


def calculate_automatic_cache_size() -> int:
    """Derive a cache capacity from available memory.

    Takes 10% of the currently available memory expressed in KiB and
    clamps it to [MIN_AUTOMATIC_CACHE_SIZE, MAX_AUTOMATIC_CACHE_SIZE].

    Returns:
        Recommended capacity in entries.
    """
    available = psutil.virtual_memory().available
    size = int(available * 0.1 / 1024)
    return min(max(size, MIN_AUTOMATIC_CACHE_SIZE), MAX_AUTOMATIC_CACHE_SIZE)


def validate_cache_size(size: int) -> int:
    """Return ``size`` if strictly positive.

    Raises:
        InvalidCacheSizeError: If size <= 0.
    """
    if size <= 0:
        raise InvalidCacheSizeError(f"Cache size must be greater than zero, but was: {size}")
    return size


class CacheKey(NamedTuple):
    """Exact identity of a cache entry."""

    localization: str
    ordinal: int
    kind: ContentKind

    @classmethod
    def of(cls, locale_source: LocaleSource, key: TranslationKey, kind: ContentKind) -> "CacheKey":
        return cls(locale_source.localization, key.ordinal, ContentKind(kind))


class LRUCache:
    """Thread-safe least-recently-used cache of translation content.

    The entry least recently read or written is evicted first. ``clear()``
    advances ``generation``; a ``get`` carrying an older generation misses
    and a ``put`` carrying one is dropped, so content from before a
    translation swap is neither served nor stored after it.

    Attributes:
        capacity: Maximum number of entries.
        generation: Counter advanced by every clear().
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_SIZE):
        """Initialize the cache.

        Args:
            capacity: Maximum number of entries (must be > 0).

        Raises:
            InvalidCacheSizeError: If capacity <= 0.
        """
        self._capacity = validate_cache_size(capacity)
        self._entries: "OrderedDict[CacheKey, Content]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._generation = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def hit_count(self) -> int:
        return self._hits

    @property
    def miss_count(self) -> int:
        return self._misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a percentage, 0.0 before any lookup."""
        hits, misses = self._hits, self._misses
        total = hits + misses
        if total == 0:
            return 0.0
        return hits / total * 100

    def get(
        self,
        locale_source: LocaleSource,
        key: TranslationKey,
        kind: ContentKind,
        generation: Optional[int] = None,
    ) -> Optional[Content]:
        """Return cached content and mark it most recently used.

        Records a hit or a miss. A stale ``generation`` is always a miss.
        """
        cache_key = CacheKey.of(locale_source, key, kind)
        with self._lock:
            if generation is not None and generation != self._generation:
                self._misses += 1
                return None
            content = self._entries.get(cache_key)
            if content is None:
                self._misses += 1
                return None
            self._entries.move_to_end(cache_key)
            self._hits += 1
            return content

    def put(
        self,
        locale_source: LocaleSource,
        key: TranslationKey,
        content: Content,
        generation: Optional[int] = None,
    ) -> bool:
        """Insert or overwrite an entry and evict down to capacity.

        Args:
            locale_source: Locale of the content.
            key: Translation key of the content.
            content: Text or Message; its kind is part of the cache key.
            generation: Generation observed before the content was read.
                A stale value drops the write.

        Returns:
            True if the entry was stored.
        """
        cache_key = CacheKey.of(locale_source, key, content.kind)
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.debug(
                    "stale_cache_write_dropped",
                    locale=locale_source.localization,
                    key=str(key),
                )
                return False
            self._entries[cache_key] = content
            self._entries.move_to_end(cache_key)
            self._evict_locked()
            return True

    def set_capacity(self, capacity: int) -> None:
        """Change capacity, evicting LRU entries immediately when shrinking.

        Raises:
            InvalidCacheSizeError: If capacity <= 0.
        """
        validate_cache_size(capacity)
        with self._lock:
            old_capacity = self._capacity
            self._capacity = capacity
            evicted = self._evict_locked()
        logger.info(
            "translation_cache_resized",
            old_capacity=old_capacity,
            new_capacity=capacity,
            evicted=evicted,
        )

    def _evict_locked(self) -> int:
        evicted = 0
        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)
            evicted += 1
        return evicted

    def clear(self) -> None:
        """Drop all entries, zero the counters and advance the generation."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._generation += 1

    def statistics(self) -> str:
        """Human-readable summary of the cache state."""
        with self._lock:
            hits, misses, size = self._hits, self._misses, len(self._entries)
            capacity = self._capacity
        total = hits + misses
        if total == 0:
            return f"Cache: 0 hits, 0 misses, size: {size}/{capacity}"
        hit_rate = hits / total * 100
        return (
            f"Cache: {hits} hits, {misses} misses, hit rate: {hit_rate:.2f}%, "
            f"size: {size}/{capacity}"
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dict with hits, misses, hit_rate, size and capacity.
        """
        with self._lock:
            hits, misses, size = self._hits, self._misses, len(self._entries)
            capacity = self._capacity
        total = hits + misses
        return {
            "hits": hits,
            "misses": misses,
            "hit_rate": hits / total * 100 if total else 0.0,
            "size": size,
            "capacity": capacity,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self._entries
