"""
Graph renderer implementations for Memora.

Available renderers:
- VisNetworkRenderer: vis-network DataSet payloads for the browser client
"""

from memora.core.renderer.base import (
    CANVAS_CLICK,
    NODE_CLICK,
    NODE_HOVER,
    RENDERER_EVENTS,
    STABILIZED,
    GraphRenderer,
)
from memora.core.renderer.vis_network import VisNetworkRenderer, hex_to_rgba

__all__ = [
    "GraphRenderer",
    "VisNetworkRenderer",
    "hex_to_rgba",
    "RENDERER_EVENTS",
    "NODE_CLICK",
    "NODE_HOVER",
    "CANVAS_CLICK",
    "STABILIZED",
]
