"""Cache Statistics Module.

Counters kept by the cache manager and the snapshot shape returned by
``CacheManager.stats()``.
"""

from dataclasses import dataclass
from typing import Any, Dict


def format_mb(size_bytes: float) -> str:
    return f"{size_bytes / 1024 / 1024:.2f}MB"


@dataclass
class CacheStats:
    """Cache operation counters."""
    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0

    def calculate_hit_rate(self) -> float:
        """Hit rate as a percentage."""
        total = self.hits + self.misses
        return self.hits / total * 100 if total > 0 else 0.0

    def format_hit_rate(self) -> str:
        total = self.hits + self.misses
        if total == 0:
            return "0%"
        return f"{self.calculate_hit_rate():.2f}%"

    def snapshot(
        self,
        size: int,
        max_size: int,
        memory_usage: int,
        max_memory: int,
    ) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "deletes": self.deletes,
            "hitRate": self.format_hit_rate(),
            "size": size,
            "maxSize": max_size,
            "memoryUsage": format_mb(memory_usage),
            "maxMemory": format_mb(max_memory),
        }
