"""
Factory modules for creating Memora components.

Provides factories for the memory store and graph renderers.
"""

from memora.core.factory.renderer_factory import RendererFactory
from memora.core.factory.store_factory import MemoryStoreFactory

__all__ = [
    "MemoryStoreFactory",
    "RendererFactory",
]
