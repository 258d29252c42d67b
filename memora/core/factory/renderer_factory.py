"""
Factory for creating graph renderers.
"""

from collections.abc import Callable

from memora.config import Config
from memora.core.renderer.base import GraphRenderer
from memora.core.renderer.vis_network import VisNetworkRenderer


class RendererFactory:
    """Factory producing renderer constructors for network views."""

    @staticmethod
    def vis_network(config: Config, container_id: str) -> Callable[[], GraphRenderer]:
        """
        Build a zero-argument constructor for vis-network renderers.

        The network view calls it on every rebuild, after tearing the
        previous renderer down.

        Args:
            config: Main configuration object
            container_id: DOM id of the canvas element

        Returns:
            Callable creating a fresh VisNetworkRenderer
        """

        def create() -> GraphRenderer:
            return VisNetworkRenderer(
                container_id=container_id,
                highlight_color=config.graph.highlight_color,
            )

        return create
