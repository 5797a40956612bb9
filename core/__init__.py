"""
Core Module

This module contains the result cache and the stores behind it.
"""

from .stores import KeyValueStore, MemoryStore, SqliteStore
from .ttl_cache import CacheEntry, TTLCache

__all__ = [
    'KeyValueStore',
    'MemoryStore',
    'SqliteStore',
    'CacheEntry',
    'TTLCache',
]
