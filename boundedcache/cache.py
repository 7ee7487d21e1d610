"""Thread-safe bounded cache with LRU eviction and lazy TTL expiration."""

import logging
import math
import threading
import time
from collections.abc import Callable, Hashable
from datetime import timedelta
from typing import Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict

from boundedcache.config import CacheSettings, get_settings
from boundedcache.errors import InvalidCapacityError, InvalidTTLError
from boundedcache.ordered_index import Entry, OrderedIndex

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

KT_contra = TypeVar("KT_contra", bound=Hashable, contravariant=True)
VT = TypeVar("VT")

TTL = float | timedelta


@runtime_checkable
class Cache(Protocol[KT_contra, VT]):
    """The get/put/size contract every cache in this package honours."""

    def get(self, key: KT_contra) -> tuple[VT | None, bool]: ...

    def put(self, key: KT_contra, value: VT, ttl: TTL | None = None) -> None: ...

    def size(self) -> int: ...


# ── Statistics ───────────────────────────────────────────────────────────────


class CacheMetrics:
    """Tracks hit/miss/eviction/expiration counts. Mutated under the cache lock."""

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.expirations = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.expirations = 0


class CacheStats(BaseModel):
    """Point-in-time snapshot of a cache's population and counters."""

    model_config = ConfigDict(frozen=True)

    name: str
    capacity: int
    size: int
    hits: int
    misses: int
    evictions: int
    expirations: int
    hit_rate: float


# ── Cache ────────────────────────────────────────────────────────────────────


def _ttl_seconds(ttl: TTL) -> float:
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


def _put_lifetime(ttl: TTL) -> float:
    # NaN would compare false against every clock reading and never expire.
    seconds = _ttl_seconds(ttl)
    return 0.0 if math.isnan(seconds) else seconds


class _CacheState(Generic[K, V]):
    """The key map and recency index, only ever touched together under the lock."""

    __slots__ = ("entries", "index", "metrics")

    def __init__(self) -> None:
        self.entries: dict[K, Entry[K, V]] = {}
        self.index: OrderedIndex[K, V] = OrderedIndex()
        self.metrics = CacheMetrics()

    def discard(self, entry: Entry[K, V]) -> None:
        """Drop *entry* from both the map and the index."""
        self.index.remove(entry)
        del self.entries[entry.key]


class BoundedCache(Generic[K, V]):
    """Capacity-bounded key/value cache with LRU eviction and per-entry TTL.

    Expiration is lazy: an expired entry is only removed when a ``get`` finds
    it, so ``size()`` may count entries that are already stale. Every public
    method holds the same exclusive lock for its whole duration, since even
    ``get`` reorders or shrinks the cache.

    Args:
        capacity: Maximum number of entries. Must be an ``int`` >= 1.
        default_ttl: Lifetime used when ``put`` gets no ``ttl``, in seconds or
            as a ``timedelta``. Must be >= 0.
        clock: Monotonic time source in seconds. Tests inject a fake one.
        name: Label used in log lines and stats.

    Raises:
        InvalidCapacityError: If *capacity* is not a positive integer.
        InvalidTTLError: If *default_ttl* is negative, NaN or not a number.
    """

    def __init__(
        self,
        capacity: int,
        default_ttl: TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidCapacityError(f"Capacity must be a positive integer, got {capacity!r}")
        try:
            ttl_seconds = _ttl_seconds(default_ttl)
        except (TypeError, ValueError) as exc:
            raise InvalidTTLError(f"Default TTL must be a number of seconds, got {default_ttl!r}") from exc
        if math.isnan(ttl_seconds):
            raise InvalidTTLError("Default TTL must not be NaN")
        if ttl_seconds < 0:
            raise InvalidTTLError(f"Default TTL must be >= 0, got {ttl_seconds}")

        self._capacity = capacity
        self._default_ttl = ttl_seconds
        self._clock = clock
        self._name = name
        self._lock = threading.Lock()
        self._state: _CacheState[K, V] = _CacheState()

        logger.info(
            "Cache '%s' created (capacity=%d, default_ttl=%.3fs)",
            name,
            capacity,
            ttl_seconds,
        )

    @classmethod
    def from_settings(
        cls,
        settings: CacheSettings | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> "BoundedCache[K, V]":
        """Build a cache from :class:`CacheSettings` (the env-backed singleton by default)."""
        settings = settings or get_settings()
        return cls(
            settings.capacity,
            settings.default_ttl_seconds,
            clock=clock,
            name=settings.name,
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_ttl(self) -> float:
        """Default lifetime in seconds."""
        return self._default_ttl

    @property
    def name(self) -> str:
        return self._name

    def get(self, key: K) -> tuple[V | None, bool]:
        """Look up *key*, promoting it to most-recently-used on a hit.

        An entry whose expiry time has been reached is removed here and
        reported as missing.

        Returns:
            ``(value, True)`` on a hit, ``(None, False)`` otherwise.
        """
        with self._lock:
            state = self._state
            entry = state.entries.get(key)
            if entry is None:
                state.metrics.misses += 1
                return None, False

            if entry.is_expired(self._clock()):
                state.discard(entry)
                state.metrics.expirations += 1
                state.metrics.misses += 1
                logger.debug("Cache '%s' expired key %r on access", self._name, key)
                return None, False

            state.index.move_to_front(entry)
            state.metrics.hits += 1
            return entry.value, True

    def put(self, key: K, value: V, ttl: TTL | None = None) -> None:
        """Store *value* under *key* as the most-recently-used entry.

        Re-putting an existing key replaces its value and restarts its TTL.
        Inserting a new key into a full cache evicts the least-recently-used
        entry. A *ttl* of zero or less, or NaN, stores an already expired entry.
        """
        lifetime = self._default_ttl if ttl is None else _put_lifetime(ttl)

        with self._lock:
            state = self._state
            expires_at = self._clock() + lifetime

            entry = state.entries.get(key)
            if entry is not None:
                entry.value = value
                entry.expires_at = expires_at
                state.index.move_to_front(entry)
                return

            entry = Entry(key, value, expires_at)
            state.entries[key] = entry
            state.index.push_front(entry)

            if len(state.index) > self._capacity:
                evicted = state.index.pop_back()
                if evicted is not None:
                    del state.entries[evicted.key]
                    state.metrics.evictions += 1
                    logger.debug("Cache '%s' evicted key %r", self._name, evicted.key)

    def size(self) -> int:
        """Number of entries held, including expired ones not yet reaped."""
        with self._lock:
            return len(self._state.index)

    def invalidate(self, key: K) -> bool:
        """Remove *key*. Returns True if the key was held (fresh or not)."""
        with self._lock:
            entry = self._state.entries.get(key)
            if entry is None:
                return False
            self._state.discard(entry)
            logger.debug("Cache '%s' invalidated key %r", self._name, key)
            return True

    def clear(self) -> None:
        """Remove all entries. Counters are kept."""
        with self._lock:
            dropped = len(self._state.index)
            self._state.index.clear()
            self._state.entries.clear()
        logger.debug("Cache '%s' cleared %d entries", self._name, dropped)

    def keys(self) -> list[K]:
        """Snapshot of held keys from most- to least-recently used.

        Neither promotes nor reaps, so unreaped expired keys are included.
        """
        with self._lock:
            return [entry.key for entry in self._state.index]

    def stats(self) -> CacheStats:
        with self._lock:
            metrics = self._state.metrics
            return CacheStats(
                name=self._name,
                capacity=self._capacity,
                size=len(self._state.index),
                hits=metrics.hits,
                misses=metrics.misses,
                evictions=metrics.evictions,
                expirations=metrics.expirations,
                hit_rate=metrics.hit_rate,
            )

    def reset_stats(self) -> None:
        """Zero the hit/miss/eviction/expiration counters."""
        with self._lock:
            self._state.metrics.reset()

    def __contains__(self, key: object) -> bool:
        # Freshness check only: no promotion, no reaping, no metrics.
        with self._lock:
            entry = self._state.entries.get(key)  # type: ignore[call-overload]
            return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"BoundedCache(name={self._name!r}, capacity={self._capacity}, default_ttl={self._default_ttl})"
