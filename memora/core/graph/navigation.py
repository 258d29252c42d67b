"""
Navigation state machine for the memory network.

States are the three resolutions (Year -> Month -> Day, coarse to fine).
A node click narrows by exactly one level, or at Day selects the clicked
record; zoom controls jump to any level directly. The active filter
survives every resolution change.
"""

from pydantic import BaseModel

from memora.models.graph import ActiveFilter, DayNode, MonthNode, Resolution, YearNode
from memora.models.memory import MemoryRecord
from memora.utils.logger import get_logger

logger = get_logger(__name__)


class Transition(BaseModel):
    """Outcome of one navigation event."""

    previous: Resolution
    current: Resolution
    selected: MemoryRecord | None = None

    @property
    def rebuild_required(self) -> bool:
        """A resolution change means the graph must be rebuilt."""
        return self.previous != self.current


class NavigationState:
    """
    Mutable per-view navigation state.

    Owned by exactly one network view: created on mount, discarded on
    unmount. Never shared or held at module level.
    """

    def __init__(
        self,
        resolution: Resolution = Resolution.DAY,
        active_filter: ActiveFilter | None = None,
    ):
        self.resolution = resolution
        self.active_filter = active_filter or ActiveFilter.none()
        self.selected_record: MemoryRecord | None = None

    def on_node_click(self, node: DayNode | MonthNode | YearNode) -> Transition:
        """
        Handle a click on a node.

        Args:
            node: The clicked node from the current graph

        Returns:
            Transition describing the state change
        """
        previous = self.resolution

        if isinstance(node, DayNode):
            if self.resolution == Resolution.DAY:
                self.selected_record = node.record
                logger.debug(f"Selected memory {node.record.id}")
            return Transition(
                previous=previous, current=self.resolution, selected=self.selected_record
            )

        if self.resolution == Resolution.DAY:
            # A stale coarse node cannot drill past the finest level
            return Transition(
                previous=previous, current=self.resolution, selected=self.selected_record
            )

        self.resolution = self.resolution.finer()
        self.selected_record = None
        logger.debug(f"Drilled down {previous.value} -> {self.resolution.value} via {node.id}")
        return Transition(previous=previous, current=self.resolution)

    def on_canvas_click(self) -> Transition:
        """Click on empty canvas: close the detail panel."""
        self.selected_record = None
        return Transition(previous=self.resolution, current=self.resolution)

    def set_resolution(self, resolution: Resolution) -> Transition:
        """
        Zoom control: jump directly to any resolution.

        Always clears the selected record, even when the level is unchanged.
        """
        previous = self.resolution
        self.resolution = Resolution(resolution)
        self.selected_record = None
        logger.debug(f"Resolution set {previous.value} -> {self.resolution.value}")
        return Transition(previous=previous, current=self.resolution)

    def drill_up(self) -> Transition:
        """Zoom control: move one level coarser (Year stays Year)."""
        return self.set_resolution(self.resolution.coarser())

    def set_filter(self, active_filter: ActiveFilter) -> None:
        """Replace the active filter; filters never compose."""
        self.active_filter = active_filter

    def clear_filter(self) -> None:
        self.active_filter = ActiveFilter.none()

    def reset(self) -> None:
        """Return to the initial state (Day, no filter, nothing selected)."""
        self.resolution = Resolution.DAY
        self.active_filter = ActiveFilter.none()
        self.selected_record = None
