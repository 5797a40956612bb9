"""
TTL Cache

Memoizes the result of an async producer under a string key for a fixed
time-to-live. Entries are stored as JSON documents of the form

    {"storedAt": <epoch milliseconds>, "value": <payload>}

and are never deleted: a stale entry is simply overwritten the next time
its key is computed.

There is no locking. Two callers racing on the same key may both run the
producer and the last write wins.
"""

import json
import math
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

import config
from utils.logging_config import get_logger
from .stores import KeyValueStore, MemoryStore

logger = get_logger('TTLCache')

T = TypeVar('T')

Producer = Callable[[], Awaitable[T]]


@dataclass(frozen=True)
class CacheEntry:
    stored_at: int  # epoch milliseconds
    value: Any

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        return now_ms - self.stored_at <= ttl_ms

    def dumps(self) -> str:
        return json.dumps({'storedAt': self.stored_at, 'value': self.value})

    @classmethod
    def loads(cls, data: str) -> 'CacheEntry':
        """
        Parse a stored entry.

        Raises:
            ValueError: If the document is not valid JSON or has the wrong shape
        """
        item = json.loads(data)
        if not isinstance(item, dict) or 'value' not in item:
            raise ValueError("Cache entry must be an object with a 'value' key")
        stored_at = item.get('storedAt')
        if isinstance(stored_at, bool) or not isinstance(stored_at, (int, float)):
            raise ValueError("Cache entry has no numeric 'storedAt'")
        if not math.isfinite(stored_at):
            raise ValueError(f"Cache entry has a non-finite 'storedAt': {stored_at}")
        return cls(stored_at=int(stored_at), value=item['value'])


class TTLCache:
    """
    Time-bounded memoization over a key/value store.

    Args:
        store: Where serialized entries live (MemoryStore if omitted)
        ttl_seconds: Entry lifetime, defaults to config.CACHE_TTL_SECONDS
        clock: Returns the current time in seconds, time.time by default

    Usage:
        cache = TTLCache(SqliteStore())
        value = await cache.get_or_compute('key', fetch_value)
    """

    def __init__(self, store: Optional[KeyValueStore] = None, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.time):
        self.store = store if store is not None else MemoryStore()
        self.ttl_seconds = config.CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.clock = clock

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def lookup(self, key: str, validate: Optional[Callable[[Any], Any]] = None) -> Optional[CacheEntry]:
        """
        Return the fresh entry for key, or None on a miss, a stale or a corrupt entry.

        validate, when given, is called with the cached value and raises
        ValueError if the value has the wrong shape.
        """
        try:
            data = self.store.get(key)
        except Exception as e:
            logger.warning(f"Cache store read failed for '{key}': {e}")
            return None
        if data is None:
            return None

        try:
            entry = CacheEntry.loads(data)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(f"Ignoring unreadable cache entry for '{key}': {e}")
            return None

        if not entry.is_fresh(self._now_ms(), int(self.ttl_seconds * 1000)):
            logger.debug(f"Cache entry for '{key}' is stale")
            return None

        if validate is not None:
            try:
                validate(entry.value)
            except ValueError as e:
                logger.warning(f"Ignoring malformed cache value for '{key}': {e}")
                return None
        return entry

    def put(self, key: str, value: Any) -> None:
        """Store value under key, stamped with the current time."""
        self.store.set(key, CacheEntry(stored_at=self._now_ms(), value=value).dumps())

    async def get_or_compute(self, key: str, producer: Producer,
                             validate: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        Return the cached value for key, computing and storing it when needed.

        The producer is only awaited on a miss. A None result is returned
        to the caller but not stored, so failed computations are retried.
        A cached value rejected by validate is recomputed.
        """
        entry = self.lookup(key, validate)
        if entry is not None:
            logger.debug(f"Cache hit for '{key}'")
            return entry.value

        value = await producer()

        if value is not None:
            try:
                self.put(key, value)
                logger.debug(f"Cached '{key}'")
            except Exception as e:
                # The computed value is still good, only reuse is lost
                logger.warning(f"Cache store write failed for '{key}': {e}")
        return value
