"""
Cache Module - Bounded memo of analysis results keyed by fingerprint.

The cache never decides correctness: a miss recomputes the same result a
hit would have returned. Eviction is delegated to a policy object so FIFO
and LRU can be swapped without touching the cache.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

from .result import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100


class EvictionPolicy(ABC):
    """Tracks key order and picks the next key to evict."""
    name: str = "base"

    @abstractmethod
    def record_insert(self, key: str) -> None:
        """Called when a new key is stored."""

    @abstractmethod
    def record_access(self, key: str) -> None:
        """Called on every cache hit."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Forget a key."""

    @abstractmethod
    def victim(self) -> Optional[str]:
        """Key to evict next, or None when empty."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Keys in eviction order (next victim first)."""

    @abstractmethod
    def clear(self) -> None:
        pass


class FIFOEviction(EvictionPolicy):
    """
    Evicts the oldest-inserted key. Reads do not change the order.

    Keys are kept in a deque ring; re-storing an existing key keeps its
    original position.
    """
    name = "fifo"

    def __init__(self):
        self._order: Deque[str] = deque()

    def record_insert(self, key: str) -> None:
        self._order.append(key)

    def record_access(self, key: str) -> None:
        pass

    def remove(self, key: str) -> None:
        try:
            self._order.remove(key)
        except ValueError:
            pass

    def victim(self) -> Optional[str]:
        return self._order[0] if self._order else None

    def keys(self) -> List[str]:
        return list(self._order)

    def clear(self) -> None:
        self._order.clear()


class LRUEviction(EvictionPolicy):
    """Evicts the least recently used key. Reads promote a key to newest."""
    name = "lru"

    def __init__(self):
        self._order: "OrderedDict[str, None]" = OrderedDict()

    def record_insert(self, key: str) -> None:
        self._order[key] = None

    def record_access(self, key: str) -> None:
        if key in self._order:
            self._order.move_to_end(key)

    def remove(self, key: str) -> None:
        self._order.pop(key, None)

    def victim(self) -> Optional[str]:
        return next(iter(self._order), None)

    def keys(self) -> List[str]:
        return list(self._order)

    def clear(self) -> None:
        self._order.clear()


_POLICIES = {
    FIFOEviction.name: FIFOEviction,
    LRUEviction.name: LRUEviction,
}


def create_eviction_policy(name: str) -> EvictionPolicy:
    """
    Create an eviction policy by name.

    Raises:
        ValueError: If policy name not found
    """
    if name not in _POLICIES:
        available = ", ".join(_POLICIES.keys())
        raise ValueError(f"Unknown eviction policy: {name}. Available: {available}")
    return _POLICIES[name]()


@dataclass(frozen=True)
class CacheEntry:
    """
    Stored analysis.

    Attributes:
        fingerprint: Key the entry was stored under
        result: Cached analysis result
        sequence: Insertion counter
    """
    fingerprint: str
    result: AnalysisResult
    sequence: int


class AnalysisCache:
    """
    Thread-safe bounded cache of AnalysisResult values.

    Results are immutable, so lookups hand out the shared value. When the
    cache grows past capacity the policy's victims are removed until it
    holds exactly capacity entries.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY,
                 policy: Optional[EvictionPolicy] = None):
        """
        Initialize cache.

        Args:
            capacity: Maximum number of entries (>= 1)
            policy: Eviction policy (FIFO if omitted)
        """
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.policy = policy or FIFOEviction()
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._sequence = itertools.count()
        self.hits = 0
        self.misses = 0

    def get(self, fingerprint: str) -> Optional[AnalysisResult]:
        """
        Look up a result.

        Entries that fail validation are dropped and reported as a miss.

        Returns:
            Cached result or None
        """
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is None:
                self.misses += 1
                return None

            if (not isinstance(entry, CacheEntry)
                    or entry.fingerprint != fingerprint
                    or not isinstance(entry.result, AnalysisResult)):
                logger.warning(f"Dropping corrupt cache entry for {fingerprint}")
                self._entries.pop(fingerprint, None)
                self.policy.remove(fingerprint)
                self.misses += 1
                return None

            self.hits += 1
            self.policy.record_access(fingerprint)
            return entry.result

    def put(self, fingerprint: str, result: AnalysisResult) -> None:
        """
        Store a result. An existing entry for the key is overwritten.

        Args:
            fingerprint: Cache key
            result: Result to store
        """
        with self._lock:
            if fingerprint not in self._entries:
                self.policy.record_insert(fingerprint)
            self._entries[fingerprint] = CacheEntry(
                fingerprint=fingerprint,
                result=result,
                sequence=next(self._sequence),
            )
            self._evict_overflow()

    def _evict_overflow(self) -> None:
        while len(self._entries) > self.capacity:
            victim = self.policy.victim()
            if victim is None:
                break
            self.policy.remove(victim)
            self._entries.pop(victim, None)
            logger.debug(f"Evicted cache entry {victim}")

    def keys(self) -> List[str]:
        """Stored keys in eviction order (next victim first)."""
        with self._lock:
            return self.policy.keys()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.policy.clear()

    def stats(self) -> dict:
        """Return cache statistics."""
        with self._lock:
            lookups = self.hits + self.misses
            return {
                "size": len(self._entries),
                "capacity": self.capacity,
                "policy": self.policy.name,
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": self.hits / lookups if lookups > 0 else 0,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._entries
