"""
Network view - owns the navigation state and the live renderer of one
mounted memory network.

Every load, resolution change, filter change or record-set change
triggers a full rebuild: the previous renderer is torn down first, a fresh
one is constructed, and the newly built graph is pushed to it wholesale.
"""

from collections.abc import Callable
from datetime import datetime

from memora.config import RenderOptions
from memora.core.graph.builder import GraphBuilder
from memora.core.graph.navigation import NavigationState, Transition
from memora.core.memory_store.base import MemoryStore
from memora.core.renderer.base import (
    CANVAS_CLICK,
    NODE_CLICK,
    NODE_HOVER,
    STABILIZED,
    GraphRenderer,
)
from memora.models.graph import ActiveFilter, DayNode, Graph, Resolution
from memora.models.memory import MemoryRecord
from memora.models.view import AvailableFilters, DetailPanel, TooltipPayload
from memora.utils.exceptions import MemoraError, RendererError
from memora.utils.logger import get_logger

logger = get_logger(__name__)


def chronological_order(records: list[MemoryRecord]) -> list[MemoryRecord]:
    """
    Sort records ascending by memory date (stable; undated records last).

    Args:
        records: Records in any order

    Returns:
        New list sorted by memory_date
    """
    return sorted(
        records,
        key=lambda record: (record.memory_date is None, record.memory_date or datetime.min),
    )


class NetworkView:
    """
    One mounted memory network.

    Lifecycle:
    - mount(): create a fresh NavigationState (Day, no filter)
    - load()/set_records(): feed records, rebuild
    - renderer events drive drill-down, selection, tooltips and fitting
    - unmount(): tear the renderer down and discard all state
    """

    def __init__(
        self,
        renderer_factory: Callable[[], GraphRenderer],
        builder: GraphBuilder | None = None,
        options: RenderOptions | None = None,
    ):
        """
        Initialize network view.

        Args:
            renderer_factory: Creates a new renderer; called once per rebuild
            builder: Graph builder (defaults to GraphBuilder())
            options: Renderer options handed through on every rebuild
        """
        self.renderer_factory = renderer_factory
        self.builder = builder or GraphBuilder()
        self.options = options or RenderOptions()

        self.state: NavigationState | None = None
        self.user_id: str | None = None
        self.records: list[MemoryRecord] = []
        self.available_filters = AvailableFilters()
        self.renderer: GraphRenderer | None = None
        self.graph: Graph | None = None
        self.tooltip: TooltipPayload | None = None
        self.interactive = False
        self.last_error: RendererError | None = None

    # ═══════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════

    @property
    def is_mounted(self) -> bool:
        return self.state is not None

    def mount(self) -> "NetworkView":
        """Acquire a fresh navigation state."""
        self.state = NavigationState()
        self.records = []
        self.available_filters = AvailableFilters()
        logger.debug("Network view mounted")
        return self

    def unmount(self) -> None:
        """Tear down the renderer and discard all view state."""
        self._teardown_renderer()
        self.state = None
        self.records = []
        self.available_filters = AvailableFilters()
        self.graph = None
        self.tooltip = None
        logger.debug("Network view unmounted")

    def __enter__(self) -> "NetworkView":
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # ═══════════════════════════════════════════════════════════
    # INPUTS
    # ═══════════════════════════════════════════════════════════

    async def load(self, store: MemoryStore, user_id: str, limit: int = 200) -> Graph | None:
        """
        Fetch a user's memories once and build the initial graph.

        Args:
            store: Memory store to read from
            user_id: Owner whose memories are drawn
            limit: Maximum memories fetched

        Returns:
            The built graph, or None if the renderer could not be created
        """
        records = await store.list_memories(user_id, ascending=True, limit=limit)
        self.user_id = user_id
        logger.info(f"Loaded {len(records)} memories for {user_id}")
        return self.set_records(records)

    def set_records(self, records: list[MemoryRecord]) -> Graph | None:
        """
        Replace the record set (initial load, or after create/edit/delete).

        Recomputes the available filters and keeps the selection only if the
        selected memory still exists.
        """
        state = self._require_state()
        self.records = chronological_order(records)
        self.available_filters = AvailableFilters.from_records(self.records)

        if state.selected_record is not None:
            by_id = {record.id: record for record in self.records}
            state.selected_record = by_id.get(state.selected_record.id)

        return self.rebuild()

    def set_resolution(self, resolution: Resolution) -> Graph | None:
        """Zoom control: jump to any resolution (clears the selection)."""
        self._require_state().set_resolution(resolution)
        return self.rebuild()

    def drill_up(self) -> Graph | None:
        """Zoom control: one level coarser."""
        self._require_state().drill_up()
        return self.rebuild()

    def set_filter(self, active_filter: ActiveFilter) -> Graph | None:
        """Replace the active filter and rebuild."""
        self._require_state().set_filter(active_filter)
        return self.rebuild()

    def clear_filter(self) -> Graph | None:
        self._require_state().clear_filter()
        return self.rebuild()

    # ═══════════════════════════════════════════════════════════
    # REBUILD
    # ═══════════════════════════════════════════════════════════

    def rebuild(self) -> Graph | None:
        """
        Rebuild the graph from scratch.

        The previous renderer is destroyed before the new one is created so
        that no stale physics simulation keeps running.

        Returns:
            The new graph, or None if renderer construction failed
        """
        state = self._require_state()
        self._teardown_renderer()
        self.tooltip = None

        graph = self.builder.build(self.records, state.resolution, state.active_filter)

        try:
            renderer = self.renderer_factory()
        except RendererError as e:
            logger.error(f"Renderer construction failed: {e.message}")
            self.last_error = e
            self.graph = None
            return None

        try:
            renderer.set_graph(graph, self.options)
        except RendererError as e:
            logger.error(f"Renderer rejected graph: {e.message}")
            renderer.destroy()
            self.last_error = e
            self.graph = None
            return None

        renderer.on(NODE_CLICK, self._handle_node_click)
        renderer.on(NODE_HOVER, self._handle_node_hover)
        renderer.on(CANVAS_CLICK, self._handle_canvas_click)
        renderer.on(STABILIZED, self._handle_stabilized)

        self.renderer = renderer
        self.graph = graph
        self.interactive = True
        self.last_error = None

        logger.info(
            f"Rebuilt {state.resolution.value} network: "
            f"{len(graph.nodes)} nodes, {len(graph.edges)} edges"
        )
        return graph

    def _teardown_renderer(self) -> None:
        if self.renderer is not None:
            self.renderer.destroy()
            self.renderer = None
        self.interactive = False

    # ═══════════════════════════════════════════════════════════
    # RENDERER EVENTS
    # ═══════════════════════════════════════════════════════════

    def dispatch(self, event: str, *args) -> None:
        """
        Feed an interaction event through the live renderer.

        Raises:
            RendererError: If there is no interactive renderer
        """
        if self.renderer is None or not self.interactive:
            raise RendererError("Network view is not interactive", {"event": event})
        self.renderer.emit(event, *args)

    def _handle_node_click(self, node_id: str) -> None:
        state = self._require_state()
        node = self.graph.node(node_id) if self.graph else None
        if node is None:
            logger.warning(f"Click on unknown node {node_id}")
            return

        transition: Transition = state.on_node_click(node)
        if transition.rebuild_required:
            self.rebuild()

    def _handle_canvas_click(self) -> None:
        self._require_state().on_canvas_click()

    def _handle_node_hover(self, node_id: str | None) -> None:
        state = self._require_state()
        if node_id is None or state.resolution != Resolution.DAY or self.graph is None:
            self.tooltip = None
            return

        node = self.graph.node(node_id)
        if isinstance(node, DayNode):
            self.tooltip = TooltipPayload.from_record(node.record)
        else:
            self.tooltip = None

    def _handle_stabilized(self) -> None:
        if self.renderer is not None:
            self.renderer.fit()

    # ═══════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════

    @property
    def resolution(self) -> Resolution:
        return self._require_state().resolution

    @property
    def active_filter(self) -> ActiveFilter:
        return self._require_state().active_filter

    @property
    def selected_record(self) -> MemoryRecord | None:
        return self._require_state().selected_record

    def detail_panel(self) -> DetailPanel | None:
        """Detail panel contents for the selected memory, if any."""
        record = self.selected_record
        return DetailPanel.from_record(record) if record is not None else None

    def _require_state(self) -> NavigationState:
        if self.state is None:
            raise MemoraError("Network view is not mounted")
        return self.state
