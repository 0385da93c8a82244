"""Cache Entry Module.

This module defines the cache entry data structure and size estimation.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Estimate for numbers, booleans and None
PRIMITIVE_SIZE = 8
# Used when a value cannot be serialized
FALLBACK_SIZE = 8


def estimate_size(value: Any) -> int:
    """Estimate the byte size of a cached value.

    Text is measured as UTF-8, containers by the UTF-8 length of their JSON
    serialization, scalars get a fixed size. Serialization failures fall
    back to a constant instead of raising.
    """
    if isinstance(value, str):
        return len(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray)):
        return len(value)
    if value is None or isinstance(value, (bool, int, float)):
        return PRIMITIVE_SIZE
    try:
        return len(json.dumps(value, ensure_ascii=False).encode("utf-8"))
    except (TypeError, ValueError) as e:
        logger.debug(f"Size estimation failed, using fallback: {e}")
        return FALLBACK_SIZE


@dataclass
class CacheEntry:
    """Cache entry with metadata."""
    value: Any
    expires_at: float
    last_accessed: float
    size: int = 0

    def is_expired(self, now: float) -> bool:
        """Expired only strictly after ``expires_at``."""
        return now > self.expires_at

    def touch(self, now: float) -> None:
        self.last_accessed = now
