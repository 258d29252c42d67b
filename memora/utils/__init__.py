"""Utility modules for Memora."""

from memora.utils.exceptions import (
    ConfigurationError,
    MemoraError,
    MemoryStoreError,
    NotFoundError,
    RendererError,
    StoreError,
    ValidationError,
)
from memora.utils.id_generator import (
    generate_edge_id,
    generate_memory_id,
    generate_session_id,
)
from memora.utils.logger import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    # ID Generators
    "generate_memory_id",
    "generate_session_id",
    "generate_edge_id",
    # Exceptions
    "MemoraError",
    "StoreError",
    "MemoryStoreError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "RendererError",
]
