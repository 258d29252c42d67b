"""
Memory store implementations for Memora.

Available backends:
- SQLiteMemoryStore: Local single-file storage via aiosqlite
"""

from memora.core.memory_store.base import MemoryStore
from memora.core.memory_store.sqlite_store import SQLiteMemoryStore

__all__ = [
    "MemoryStore",
    "SQLiteMemoryStore",
]
