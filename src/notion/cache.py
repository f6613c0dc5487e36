"""In-memory TTL cache for Notion collection fetches."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default lifetime of a cached value in seconds
DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the monotonic time at which it expires."""

    value: Any
    expires_at: float


class TTLCache:
    """Keyed read-through cache with a fixed time-to-live.

    The lock guards the entry store only. The producer runs outside it, so two
    callers missing the same key at once may both produce a value; the last
    one stored wins.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise the cache.

        :param ttl_seconds: Seconds a stored value stays fresh.
        :param clock: Source of the current time, in seconds.
        """
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def cached(self, key: str, producer: Callable[[], T]) -> T:
        """Get a cached value, or call the producer to populate it.

        Exceptions from the producer propagate and nothing is stored.

        :param key: Cache key.
        :param producer: Callable returning a fresh value on a miss.
        :returns: The cached or freshly produced value.
        """
        now = self._clock()
        with self._lock:
            entry = self._store.get(key)

        if entry is not None and entry.expires_at > now:
            logger.debug(f"Cache hit: key={key}")
            return entry.value

        logger.debug(f"Cache miss: key={key}")
        value = producer()

        with self._lock:
            self._store[key] = CacheEntry(value=value, expires_at=now + self._ttl_seconds)
        return value

    def invalidate(self, key: str | None = None) -> None:
        """Invalidate one entry, or the whole cache when no key is given.

        :param key: Cache key to evict. Unknown keys are ignored.
        """
        with self._lock:
            if key is None:
                self._store.clear()
            else:
                self._store.pop(key, None)

        logger.debug(f"Cache invalidated: key={key or '*'}")
