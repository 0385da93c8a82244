"""Cache Manager Module.

TTL, capacity and memory bounded cache protecting vnstat from redundant
invocations.
"""

from .cache_stats import CacheStats
from .cache_entry import CacheEntry, estimate_size
from .cache_manager_core import CacheManager, DEFAULT_TTL

__all__ = [
    "CacheStats",
    "CacheEntry",
    "CacheManager",
    "DEFAULT_TTL",
    "estimate_size",
]
