"""
Base interface for memory storage.

The network view only reads through list_memories; the remaining CRUD
operations back the HTTP API.
"""

from abc import ABC, abstractmethod

from memora.models.memory import MemoryRecord


class MemoryStore(ABC):
    """Abstract base class for memory store implementations."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store (create tables/schema)."""
        pass

    @abstractmethod
    async def add_memory(self, record: MemoryRecord) -> MemoryRecord:
        """
        Persist a new memory.

        Args:
            record: Memory to store

        Returns:
            The stored memory
        """
        pass

    @abstractmethod
    async def get_memory(self, memory_id: str) -> MemoryRecord | None:
        """
        Retrieve a memory by ID.

        Args:
            memory_id: Memory identifier

        Returns:
            MemoryRecord or None if not found
        """
        pass

    @abstractmethod
    async def update_memory(self, record: MemoryRecord) -> MemoryRecord:
        """
        Replace an existing memory.

        Args:
            record: Updated memory

        Returns:
            The stored memory

        Raises:
            NotFoundError: If the memory doesn't exist
        """
        pass

    @abstractmethod
    async def delete_memory(self, memory_id: str) -> bool:
        """
        Delete a memory.

        Args:
            memory_id: Memory identifier

        Returns:
            True if a memory was deleted
        """
        pass

    @abstractmethod
    async def list_memories(
        self, user_id: str, ascending: bool = True, limit: int = 200, offset: int = 0
    ) -> list[MemoryRecord]:
        """
        List a user's memories sorted by memory date.

        Args:
            user_id: Owner user ID
            ascending: Oldest first when True
            limit: Maximum results
            offset: Number of leading results to skip

        Returns:
            Memories ordered by memory_date (ties broken by created_at)
        """
        pass

    @abstractmethod
    async def count_memories(self, user_id: str) -> int:
        """Total number of memories owned by a user."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the store connection."""
        pass
