"""
Bounded in-memory cache for per-patient analyses.

A caller-owned LRU with a fixed capacity. The analyzer never creates one on
its own; pass an instance to SurveyAnalyzer to memoise analyze_patient().
"""

from collections import OrderedDict
from typing import Any, Hashable, Optional

from loguru import logger

from survey_analyzer.core.exceptions import ConfigurationError


class BoundedCache:
    """
    Least-recently-used cache with a fixed capacity.

    Example:
        >>> cache = BoundedCache(capacity=2)
        >>> cache.set("a", 1); cache.set("b", 2); cache.set("c", 3)
        >>> "a" in cache
        False
    """

    def __init__(self, capacity: int = 128):
        if capacity <= 0:
            raise ConfigurationError(
                "Cache capacity must be positive", context={"capacity": capacity}
            )
        self.capacity = capacity
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value (refreshing its recency) or None."""
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        return None

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.capacity:
            self._entries.popitem(last=False)
            logger.debug(f"Cache evicted entry (capacity={self.capacity})")

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> dict:
        return {
            "size": len(self._entries),
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
        }

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
