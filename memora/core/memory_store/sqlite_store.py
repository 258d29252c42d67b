"""
SQLite memory store implementation using aiosqlite.
"""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from memora.core.memory_store.base import MemoryStore
from memora.models.memory import Location, MemoryRecord
from memora.utils.exceptions import MemoryStoreError, NotFoundError
from memora.utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = (
    "id, user_id, title, content, memory_date, mood, tags, photos, audio_url, "
    "location, collaborators, created_at, updated_at"
)


class SQLiteMemoryStore(MemoryStore):
    """
    SQLite-based memory store.

    Features:
    - Fast local storage
    - JSON columns for tags, photos, collaborators and location
    - Index on (user_id, memory_date) for timeline reads
    """

    def __init__(self, db_path: str = "data/memora.db"):
        """
        Initialize SQLite memory store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None

        # Ensure directory exists
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        """Establish connection to SQLite."""
        if self.connection is None:
            self.connection = await aiosqlite.connect(self.db_path)
            await self.connection.execute("PRAGMA journal_mode = WAL")
            await self.connection.commit()

    async def initialize(self) -> None:
        """Initialize database schema."""
        await self.connect()

        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS memories (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                title TEXT DEFAULT '',
                content TEXT DEFAULT '',
                memory_date TEXT,
                mood TEXT,
                tags TEXT DEFAULT '[]',
                photos TEXT DEFAULT '[]',
                audio_url TEXT DEFAULT '',
                location TEXT,
                collaborators TEXT DEFAULT '[]',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )

        await self.connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_memories_user_date ON memories(user_id, memory_date)"
        )

        await self.connection.commit()
        logger.info(f"SQLite memory store ready at {self.db_path}")

    # ═══════════════════════════════════════════════════════════
    # MEMORY OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def add_memory(self, record: MemoryRecord) -> MemoryRecord:
        """Insert or replace a memory."""
        await self.connect()

        try:
            await self.connection.execute(
                f"INSERT OR REPLACE INTO memories ({COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                self._record_to_row(record),
            )
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error(f"Failed to store memory {record.id}: {e}")
            raise MemoryStoreError(f"Failed to store memory: {e}", {"memory_id": record.id}) from e

        return record

    async def get_memory(self, memory_id: str) -> MemoryRecord | None:
        """Retrieve a memory by ID."""
        await self.connect()

        cursor = await self.connection.execute(
            f"SELECT {COLUMNS} FROM memories WHERE id = ?", (memory_id,)
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return self._row_to_record(row)

    async def update_memory(self, record: MemoryRecord) -> MemoryRecord:
        """Replace an existing memory, bumping updated_at."""
        existing = await self.get_memory(record.id)
        if existing is None:
            raise NotFoundError(f"Memory not found: {record.id}", {"memory_id": record.id})

        updated = record.model_copy(
            update={"created_at": existing.created_at, "updated_at": datetime.now()}
        )
        return await self.add_memory(updated)

    async def delete_memory(self, memory_id: str) -> bool:
        """Delete a memory."""
        await self.connect()

        cursor = await self.connection.execute("DELETE FROM memories WHERE id = ?", (memory_id,))
        await self.connection.commit()

        return cursor.rowcount > 0

    async def list_memories(
        self, user_id: str, ascending: bool = True, limit: int = 200, offset: int = 0
    ) -> list[MemoryRecord]:
        """List a user's memories ordered by memory date."""
        await self.connect()

        direction = "ASC" if ascending else "DESC"
        try:
            cursor = await self.connection.execute(
                f"SELECT {COLUMNS} FROM memories WHERE user_id = ? "
                f"ORDER BY memory_date {direction}, created_at {direction} LIMIT ? OFFSET ?",
                (user_id, limit, offset),
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error(f"Failed to list memories for {user_id}: {e}")
            raise MemoryStoreError(f"Failed to list memories: {e}", {"user_id": user_id}) from e

        return [self._row_to_record(row) for row in rows]

    async def count_memories(self, user_id: str) -> int:
        """Count a user's memories."""
        await self.connect()

        cursor = await self.connection.execute(
            "SELECT COUNT(*) FROM memories WHERE user_id = ?", (user_id,)
        )
        row = await cursor.fetchone()
        return row[0]

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None

    # ═══════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════

    def _record_to_row(self, record: MemoryRecord) -> tuple:
        """Convert MemoryRecord to a database row."""
        return (
            record.id,
            record.user_id,
            record.title,
            record.content,
            record.memory_date.isoformat() if record.memory_date else None,
            record.mood.value if record.mood else None,
            json.dumps(record.tags),
            json.dumps(record.photos),
            record.audio_url,
            record.location.model_dump_json() if record.location else None,
            json.dumps(record.collaborators),
            record.created_at.isoformat(),
            record.updated_at.isoformat(),
        )

    def _row_to_record(self, row: tuple) -> MemoryRecord:
        """Convert database row to MemoryRecord."""
        return MemoryRecord(
            id=row[0],
            user_id=row[1],
            title=row[2] or "",
            content=row[3] or "",
            memory_date=row[4],
            mood=row[5],
            tags=json.loads(row[6]) if row[6] else [],
            photos=json.loads(row[7]) if row[7] else [],
            audio_url=row[8] or "",
            location=Location.model_validate_json(row[9]) if row[9] else None,
            collaborators=json.loads(row[10]) if row[10] else [],
            created_at=datetime.fromisoformat(row[11]),
            updated_at=datetime.fromisoformat(row[12]),
        )
