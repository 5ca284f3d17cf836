"""In-process implementation of ResponseStore.

Entries live in a plain dict guarded by a lock and expire a fixed time after
insertion, whether or not they are read. Expiry is enforced lazily on ``get``
and eagerly by ``purge_expired``, which the API lifespan calls on a timer.
Nothing is persisted; the store is empty after a restart.
"""

import logging
import threading
import time
from collections.abc import Callable

from code_mentor.config import settings
from code_mentor.entities import CacheEntryEntity

logger = logging.getLogger(__name__)


class MemoryResponseStore:
    """TTL-bounded dict of idempotency key -> mentor text.

    This class satisfies the ResponseStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        store = MemoryResponseStore.create(ttl=60)
        store.set(key, "Check the empty-array case.")
        store.get(key)  # "Check the empty-array case." for the next 60s
        ```
    """

    def __init__(
        self,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            ttl: Entry lifetime in seconds. Defaults to settings.
            clock: Monotonic time source, replaceable in tests.
        """
        self._ttl = settings.cache_ttl if ttl is None else ttl
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "MemoryResponseStore":
        """Factory method to create MemoryResponseStore with defaults.

        Args:
            ttl: Entry lifetime in seconds. If None, uses settings.
            clock: Time source. Defaults to time.monotonic.

        Returns:
            Configured MemoryResponseStore
        """
        return cls(ttl=ttl, clock=clock)

    def get(self, key: str) -> str | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(now, self._ttl):
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: str) -> None:
        entry = CacheEntryEntity(key=key, value=value, inserted_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def purge_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if not entry.is_fresh(now, self._ttl)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
