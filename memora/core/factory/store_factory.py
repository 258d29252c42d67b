"""
Factory for creating memory store backends.
"""

from memora.config import Config
from memora.core.memory_store.base import MemoryStore
from memora.core.memory_store.sqlite_store import SQLiteMemoryStore
from memora.utils.exceptions import ConfigurationError


class MemoryStoreFactory:
    """Factory for creating memory store backends from configuration."""

    @staticmethod
    def create(config: Config) -> MemoryStore:
        """
        Create memory store from configuration.

        Args:
            config: Main configuration object

        Returns:
            Memory store instance

        Raises:
            ConfigurationError: If backend is not supported
        """
        if config.store.backend == "sqlite":
            return SQLiteMemoryStore(db_path=config.store.db_path)
        else:
            raise ConfigurationError(
                f"Unsupported memory store backend: {config.store.backend}",
                {"backend": config.store.backend},
            )
