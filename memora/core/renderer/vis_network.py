"""
vis-network renderer.

Translates a built Graph into the DataSet/option payloads consumed by the
vis-network Network in the browser. The browser owns layout convergence;
this side holds the current payload and relays interaction events back to
the network view.
"""

from typing import Any

from memora.config import RenderOptions
from memora.core.renderer.base import GraphRenderer
from memora.models.graph import DayNode, EdgeStyle, Graph, GraphEdge, MonthNode, YearNode
from memora.utils.exceptions import RendererError
from memora.utils.logger import get_logger

logger = get_logger(__name__)

CHRONOLOGICAL_EDGE_COLOR = "#B6AE9F"
SAME_DAY_EDGE_COLOR = "#D4A59A"
SHADOW_COLOR = "58, 53, 48"

FONTS = {
    "day": {"size": 11, "color": "#5C554D", "face": "Inter, sans-serif"},
    "month": {"size": 13, "color": "#3A3530", "face": "Inter, sans-serif", "bold": {"mod": "bold"}},
    "year": {
        "size": 16,
        "color": "#3A3530",
        "face": '"Playfair Display", serif',
        "bold": {"mod": "bold"},
    },
}


def hex_to_rgba(hex_color: str, alpha: float) -> str:
    """
    Convert "#RRGGBB" to an rgba() string.

    Args:
        hex_color: Six-digit hex color
        alpha: Opacity between 0 and 1

    Returns:
        "rgba(r, g, b, alpha)"
    """
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB color, got {hex_color!r}")
    red, green, blue = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({red}, {green}, {blue}, {round(alpha, 3)})"


class VisNetworkRenderer(GraphRenderer):
    """
    Renderer bound to one browser container.

    Features:
    - circularImage nodes for photo-backed memories
    - highlight/hover color variants
    - shadow and border only on emphasized nodes
    - dashed same-day edges
    """

    def __init__(self, container_id: str, highlight_color: str = "#FBF3D1"):
        """
        Initialize vis-network renderer.

        Args:
            container_id: DOM id of the mounted canvas element
            highlight_color: Background used on hover/selection

        Raises:
            RendererError: If no container is mounted
        """
        if not container_id:
            raise RendererError("Cannot create renderer: container is not mounted")

        super().__init__()
        self.container_id = container_id
        self.highlight_color = highlight_color
        self.nodes: list[dict[str, Any]] = []
        self.edges: list[dict[str, Any]] = []
        self.options: dict[str, Any] = {}
        self.resolution: str | None = None
        self.fit_requests = 0
        self._media_base_url = ""

    def set_graph(self, graph: Graph, options: RenderOptions) -> None:
        """Replace the DataSets with the given graph."""
        self._ensure_alive()
        self._media_base_url = options.media_base_url.rstrip("/")
        self.nodes = [self._node_payload(node) for node in graph.nodes]
        self.edges = [self._edge_payload(edge) for edge in graph.edges]
        self.options = self._options_payload(options)
        self.resolution = graph.resolution.value
        logger.debug(
            f"Renderer {self.container_id}: {len(self.nodes)} nodes, {len(self.edges)} edges"
        )

    def fit(self) -> None:
        self._ensure_alive()
        self.fit_requests += 1

    def payload(self) -> dict[str, Any]:
        """
        Full payload for the browser client.

        Raises:
            RendererError: If the renderer has been destroyed
        """
        self._ensure_alive()
        return {
            "container": self.container_id,
            "resolution": self.resolution,
            "nodes": self.nodes,
            "edges": self.edges,
            "options": self.options,
            "fit_requests": self.fit_requests,
        }

    def _teardown(self) -> None:
        self.nodes = []
        self.edges = []
        self.options = {}

    # ═══════════════════════════════════════════════════════════
    # PAYLOAD BUILDERS
    # ═══════════════════════════════════════════════════════════

    def _node_payload(self, node: DayNode | MonthNode | YearNode) -> dict[str, Any]:
        emphasis = node.emphasis
        payload: dict[str, Any] = {
            "id": node.id,
            "label": node.label,
            "title": node.title,
            "shape": "dot",
            "size": node.size,
            "opacity": emphasis.opacity,
            "borderWidth": emphasis.border_width,
            "color": {
                "background": node.color,
                "border": node.border_color,
                "highlight": {"background": self.highlight_color, "border": node.border_color},
                "hover": {"background": self.highlight_color, "border": node.border_color},
            },
            "font": dict(FONTS[node.kind]),
            "shadow": self._shadow(node.kind, emphasis.shadow),
            "matchesFilter": emphasis.matches_filter,
            "kind": node.kind,
        }

        if isinstance(node, DayNode):
            payload["borderWidthSelected"] = 4
            payload["memoryId"] = node.backing_record_id
            if node.image:
                payload["shape"] = "circularImage"
                payload["image"] = f"{self._media_base_url}{node.image}"
        else:
            payload["memberCount"] = node.member_count

        return payload

    def _shadow(self, kind: str, enabled: bool) -> dict[str, Any]:
        if not enabled:
            return {"enabled": False}
        if kind == "day":
            return {
                "enabled": True,
                "color": f"rgba({SHADOW_COLOR}, 0.1)",
                "size": 8,
                "x": 0,
                "y": 3,
            }
        if kind == "month":
            return {"enabled": True, "color": f"rgba({SHADOW_COLOR}, 0.12)", "size": 12}
        return {"enabled": True, "color": f"rgba({SHADOW_COLOR}, 0.15)", "size": 16}

    def _edge_payload(self, edge: GraphEdge) -> dict[str, Any]:
        base = SAME_DAY_EDGE_COLOR if edge.style == EdgeStyle.SAME_DAY else CHRONOLOGICAL_EDGE_COLOR
        payload: dict[str, Any] = {
            "id": edge.id,
            "from": edge.source,
            "to": edge.target,
            "style": edge.style.value,
            "emphasized": edge.emphasized,
            "color": {
                "color": hex_to_rgba(base, edge.opacity),
                "highlight": hex_to_rgba(base, min(edge.opacity * 2, 1.0)),
            },
            "width": edge.width,
            "dashes": edge.dashed,
        }
        if not edge.dashed:
            payload["smooth"] = {"type": "continuous", "roundness": 0.3}
        return payload

    def _options_payload(self, options: RenderOptions) -> dict[str, Any]:
        physics = options.physics
        return {
            "nodes": {"shape": "dot", "font": {"multi": "md"}},
            "edges": {"smooth": {"type": "continuous", "roundness": 0.3}},
            "physics": {
                "enabled": physics.enabled,
                "solver": physics.solver,
                physics.solver: {
                    "gravitationalConstant": physics.gravitational_constant,
                    "centralGravity": physics.central_gravity,
                    "springLength": physics.spring_length,
                    "springConstant": physics.spring_constant,
                    "damping": physics.damping,
                },
                "stabilization": {"iterations": physics.stabilization_iterations, "fit": True},
            },
            "interaction": {
                "hover": options.hover,
                "tooltipDelay": options.tooltip_delay,
                "zoomView": options.zoom_view,
                "dragView": options.drag_view,
                "navigationButtons": False,
            },
            "layout": {"improvedLayout": True},
            "fit": {
                "animation": {
                    "duration": options.fit_animation_ms,
                    "easingFunction": "easeInOutQuad",
                }
            },
        }
