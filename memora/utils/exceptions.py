"""
Custom exception hierarchy for Memora.

Provides structured error types for the memory store, the network view
and configuration loading. All exceptions inherit from MemoraError.
"""


class MemoraError(Exception):
    """
    Base exception for all Memora errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize Memora error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(MemoraError):
    """
    Base exception for store operations.
    Used for errors related to data storage operations.
    """

    pass


class MemoryStoreError(StoreError):
    """
    Memory store operation errors.
    Raised when the memory database cannot be read or written.
    """

    pass


class ValidationError(MemoraError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class NotFoundError(MemoraError):
    """
    Resource not found errors.
    Raised when a requested memory or network session doesn't exist.
    """

    pass


class ConfigurationError(MemoraError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class RendererError(MemoraError):
    """
    Graph renderer errors.
    Raised when a renderer cannot be constructed or is used after teardown.
    """

    pass
