"""
Base interface for graph renderers.

The network view depends on a renderer only through this narrow surface:
push a whole graph, fit the view, tear down, and receive interaction
events. Layout and physics belong to the renderer.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from memora.config import RenderOptions
from memora.models.graph import Graph
from memora.utils.exceptions import RendererError
from memora.utils.logger import get_logger

logger = get_logger(__name__)

NODE_CLICK = "node_click"
NODE_HOVER = "node_hover"
CANVAS_CLICK = "canvas_click"
STABILIZED = "stabilized"

RENDERER_EVENTS = (NODE_CLICK, NODE_HOVER, CANVAS_CLICK, STABILIZED)


class GraphRenderer(ABC):
    """Abstract base class for force-directed graph renderers."""

    def __init__(self):
        self._handlers: dict[str, list[Callable[..., Any]]] = {
            event: [] for event in RENDERER_EVENTS
        }
        self._destroyed = False

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @abstractmethod
    def set_graph(self, graph: Graph, options: RenderOptions) -> None:
        """
        Replace the rendered graph wholesale.

        Args:
            graph: Freshly built graph
            options: Caller-configured layout/interaction options
        """
        pass

    @abstractmethod
    def fit(self) -> None:
        """Frame the whole graph in the viewport."""
        pass

    def _teardown(self) -> None:
        """Release renderer-specific resources (timers, physics loops)."""
        pass

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """
        Register an interaction callback.

        Args:
            event: One of RENDERER_EVENTS
            callback: Called with the event payload

        Raises:
            RendererError: If the event is unknown or the renderer is destroyed
        """
        self._ensure_alive()
        if event not in self._handlers:
            raise RendererError(f"Unknown renderer event: {event}", {"event": event})
        self._handlers[event].append(callback)

    def emit(self, event: str, *args: Any) -> None:
        """
        Deliver an interaction event to registered callbacks.

        Events arriving after teardown are dropped.
        """
        if self._destroyed:
            logger.debug(f"Dropping {event} event for destroyed renderer")
            return
        if event not in self._handlers:
            raise RendererError(f"Unknown renderer event: {event}", {"event": event})
        for callback in list(self._handlers[event]):
            callback(*args)

    def destroy(self) -> None:
        """Halt the renderer and detach every callback. Safe to call twice."""
        if self._destroyed:
            return
        self._teardown()
        for handlers in self._handlers.values():
            handlers.clear()
        self._destroyed = True

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise RendererError("Renderer has been destroyed")
