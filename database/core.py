# database/core.py
import sqlite3
from typing import Optional

import config

from utils.logging_config import get_logger

logger = get_logger('Database')


def get_db_connection(db_path: Optional[str] = None):
    """Create a database connection with optimized performance settings."""
    if db_path is None:
        db_path = config.CACHE_DATABASE_PATH

    # Set timeout to 30 seconds to wait for locks instead of failing immediately
    conn = sqlite3.connect(db_path, check_same_thread=False, timeout=30.0)

    # WAL mode for better concurrency
    conn.execute("PRAGMA journal_mode = WAL")

    # Faster synchronization (safe with WAL mode)
    conn.execute("PRAGMA synchronous = NORMAL")

    # Negative value means KB
    cache_size_kb = -1 * config.DB_CACHE_SIZE_MB * 1024
    conn.execute(f"PRAGMA cache_size = {cache_size_kb}")

    # Enable row factory for dict-like access
    conn.row_factory = sqlite3.Row
    return conn


def initialize_database(db_path: Optional[str] = None):
    """Create the database and tables if they don't exist."""
    with get_db_connection(db_path) as conn:
        cur = conn.cursor()

        # Serialized cache entries, one JSON document per key
        cur.execute("""
        CREATE TABLE IF NOT EXISTS cache_entries (
            key TEXT PRIMARY KEY,
            data TEXT NOT NULL
        )
        """)

        conn.commit()

    logger.debug(f"Cache database ready at {db_path or config.CACHE_DATABASE_PATH}")
