"""
Key/value stores backing the TTL cache.

Values are opaque strings; the cache owns their serialization.
"""

import threading
from typing import Dict, Optional, Protocol

from database import get_db_connection, initialize_database


class KeyValueStore(Protocol):
    """Minimal string store the TTL cache is written against."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, data: str) -> None:
        ...


class MemoryStore:
    """Process-local store, lost when the process exits."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, data: str) -> None:
        with self._lock:
            self._data[key] = data

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class SqliteStore:
    """
    Persistent store in a single SQLite table.

    Survives process restarts, so results computed by one invocation of the
    CLI or server are reused by the next until they go stale.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path
        initialize_database(db_path)

    def get(self, key: str) -> Optional[str]:
        with get_db_connection(self.db_path) as conn:
            row = conn.execute(
                "SELECT data FROM cache_entries WHERE key = ?", (key,)
            ).fetchone()
        return row['data'] if row else None

    def set(self, key: str, data: str) -> None:
        with get_db_connection(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO cache_entries (key, data) VALUES (?, ?)",
                (key, data)
            )
            conn.commit()
