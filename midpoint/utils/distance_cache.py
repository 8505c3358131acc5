"""
Road Distance Cache

Keeps answered road values in memory so that recomputing after every
list change does not query the distance service for pairs it has
already answered. Nothing is written to disk.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from ..contracts.schemas import Point

PairKey = Tuple[Tuple[float, float], Tuple[float, float], str]


class DistanceCache:
    """In-memory cache of road values per (origin, destination, metric)."""

    def __init__(self, max_age_seconds: float = 3600, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            max_age_seconds: Entries older than this are treated as missing.
                Zero or less disables expiry.
            clock: Time source, injectable for tests.
        """
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self.cache: Dict[PairKey, Tuple[float, float]] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(origin: Point, destination: Point, metric: str) -> PairKey:
        return (origin.coordinates, destination.coordinates, metric)

    def get(self, origin: Point, destination: Point, metric: str) -> Optional[float]:
        """
        Get cached value if present and not expired.

        Returns:
            Cached value (possibly infinite for unreachable pairs) or None
        """
        key = self._key(origin, destination, metric)
        entry = self.cache.get(key)
        if entry is None:
            self.misses += 1
            return None
        value, stored_at = entry
        if self.max_age_seconds > 0 and self._clock() - stored_at >= self.max_age_seconds:
            del self.cache[key]
            self.misses += 1
            return None
        self.hits += 1
        return value

    def set(self, origin: Point, destination: Point, metric: str, value: float):
        now = self._clock()
        self._evict_expired(now)
        self.cache[self._key(origin, destination, metric)] = (value, now)

    def _evict_expired(self, now: float):
        """Drop entries past max age, including pairs nobody asks for again."""
        if self.max_age_seconds <= 0:
            return
        expired = [k for k, (_, stored_at) in self.cache.items() if now - stored_at >= self.max_age_seconds]
        for key in expired:
            del self.cache[key]

    def clear(self):
        self.cache = {}

    def get_stats(self) -> dict:
        return {
            'total_entries': len(self.cache),
            'hits': self.hits,
            'misses': self.misses,
        }
