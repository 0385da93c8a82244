"""Cache Manager Core Module.

This module contains the main CacheManager class implementation: a TTL,
entry-count and memory bounded store with least-recently-accessed eviction
and a periodic expiry sweep.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from ..scheduler import PeriodicTask
from .cache_entry import CacheEntry, estimate_size
from .cache_stats import CacheStats

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60.0  # seconds


class CacheManager:
    """Bounded in-memory cache keyed by query shape.

    Capacity is enforced at ``set`` time only, and by evicting a single
    entry per call, so memory usage may drift above ``max_memory_bytes``
    when large values arrive in bursts. Expired entries are dropped lazily
    on ``get`` and in bulk by the periodic sweep.
    """

    def __init__(
        self,
        max_size: int = 100,
        max_memory_bytes: int = 50 * 1024 * 1024,
        cleanup_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_size = max_size
        self.max_memory_bytes = max_memory_bytes
        self.cleanup_interval = cleanup_interval
        self._clock = clock

        self._cache: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._stats = CacheStats()
        self._cleanup_task = PeriodicTask("cache-cleanup", cleanup_interval, self.cleanup_expired)

        logger.info(
            f"CacheManager initialized with max_size={max_size}, "
            f"max_memory={max_memory_bytes / 1024 / 1024:.2f}MB"
        )

    async def start(self) -> None:
        """Start the periodic expiry sweep."""
        self._cleanup_task.start()
        logger.info("缓存管理器已启动")

    async def stop(self) -> None:
        await self._cleanup_task.stop()
        logger.info("缓存管理器已停止")

    @staticmethod
    def generate_key(prefix: str, *params: Any) -> str:
        """Compose ``prefix:p1:p2``; params must not contain ':' themselves."""
        return f"{prefix}:{':'.join(str(p) for p in params)}"

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._stats.misses += 1
                return None

            now = self._clock()
            if entry.is_expired(now):
                del self._cache[key]
                self._stats.misses += 1
                return None

            entry.touch(now)
            self._stats.hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: float = DEFAULT_TTL) -> None:
        """Store ``value`` for ``ttl`` seconds."""
        size = estimate_size(value)
        with self._lock:
            if self._should_evict():
                self._evict_lru()

            now = self._clock()
            self._cache[key] = CacheEntry(
                value=value,
                expires_at=now + ttl,
                last_accessed=now,
                size=size,
            )
            self._stats.sets += 1
            logger.debug(f"Cached key={key}, size={size}, ttl={ttl}")

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._cache:
                return False
            del self._cache[key]
            self._stats.deletes += 1
            return True

    def clear(self) -> None:
        """Drop every entry; counters are kept."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
        logger.info(f"缓存已清空: {count} 个键")

    def cleanup_expired(self) -> int:
        """Remove all expired entries regardless of access recency."""
        with self._lock:
            now = self._clock()
            expired_keys = [key for key, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._cache[key]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")
        return len(expired_keys)

    def get_memory_usage(self) -> int:
        """Sum of estimated entry sizes in bytes."""
        with self._lock:
            return sum(entry.size for entry in self._cache.values())

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return key in self._cache

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return self._stats.snapshot(
                size=len(self._cache),
                max_size=self.max_size,
                memory_usage=self.get_memory_usage(),
                max_memory=self.max_memory_bytes,
            )

    def _should_evict(self) -> bool:
        return len(self._cache) >= self.max_size or self.get_memory_usage() > self.max_memory_bytes

    def _evict_lru(self) -> None:
        if not self._cache:
            return
        # min() keeps the first key on ties, i.e. the earliest inserted
        oldest_key = min(self._cache, key=lambda k: self._cache[k].last_accessed)
        del self._cache[oldest_key]
        logger.debug(f"Evicted key={oldest_key}")
