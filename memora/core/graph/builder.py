"""
Graph builder - turns an ordered list of memory records into the node/edge
description drawn by the network view.

The build is a pure function of (records, resolution, filter): every call
discards nothing and reuses nothing, so identical inputs always produce an
identical graph in identical order.
"""

from memora.config import GraphStyleConfig
from memora.core.graph.aggregation import AggregationGroup, dated_records, group_records
from memora.models.graph import (
    ActiveFilter,
    DayNode,
    EdgeStyle,
    Graph,
    GraphEdge,
    MonthNode,
    NodeEmphasis,
    Resolution,
    YearNode,
)
from memora.models.memory import MemoryRecord, format_long_date, format_short_date
from memora.utils.id_generator import generate_edge_id
from memora.utils.logger import get_logger

logger = get_logger(__name__)


class GraphBuilder:
    """
    Builds day, month and year graphs with filter-driven emphasis.

    Encoding:
    - Day nodes: mood color, larger when photo-backed
    - Month/Year nodes: neutral color, size base + min(count * per_item, cap)
    - Chronological edges between consecutive nodes
    - Same-day edges (dashed, day resolution only) chaining records that
      share a calendar date
    - Nodes failing the active filter are dimmed; edges touching a dimmed
      node are thinned and faded
    """

    def __init__(self, style: GraphStyleConfig | None = None):
        """
        Initialize graph builder.

        Args:
            style: Visual encoding constants (defaults to GraphStyleConfig())
        """
        self.style = style or GraphStyleConfig()

    def build(
        self,
        records: list[MemoryRecord],
        resolution: Resolution,
        active_filter: ActiveFilter | None = None,
    ) -> Graph:
        """
        Build the graph for one resolution.

        Args:
            records: Full record list, sorted ascending by memory_date. Not
                pre-filtered: the filter only affects emphasis.
            resolution: Resolution to draw at
            active_filter: Filter deciding emphasis (defaults to none)

        Returns:
            Graph with nodes in chronological order and derived edges
        """
        active_filter = active_filter or ActiveFilter.none()

        if resolution == Resolution.DAY:
            nodes, edges = self._build_day(records, active_filter)
        else:
            nodes, edges = self._build_grouped(records, resolution, active_filter)

        logger.debug(
            f"Built {resolution.value} graph: {len(nodes)} nodes, {len(edges)} edges, "
            f"filter={active_filter.kind.value}:{active_filter.value}"
        )

        return Graph(resolution=resolution, filter=active_filter, nodes=nodes, edges=edges)

    # ═══════════════════════════════════════════════════════════
    # DAY RESOLUTION
    # ═══════════════════════════════════════════════════════════

    def _build_day(
        self, records: list[MemoryRecord], active_filter: ActiveFilter
    ) -> tuple[list[DayNode], list[GraphEdge]]:
        records = dated_records(records)
        nodes = [self._day_node(record, active_filter) for record in records]
        matches = {node.id: node.matches_filter for node in nodes}

        edges = [
            self._edge(
                EdgeStyle.CHRONOLOGICAL,
                prev.id,
                node.id,
                matches,
                width=self.style.day_edge_width,
                opacity=self.style.day_edge_opacity,
            )
            for prev, node in zip(nodes, nodes[1:])
        ]

        # Chain, not clique: each same-day record links only to the next one
        same_day: dict = {}
        for record in records:
            same_day.setdefault(record.memory_day, []).append(record.id)

        for ids in same_day.values():
            for source, target in zip(ids, ids[1:]):
                edges.append(
                    self._edge(
                        EdgeStyle.SAME_DAY,
                        source,
                        target,
                        matches,
                        width=self.style.same_day_edge_width,
                        opacity=self.style.same_day_edge_opacity,
                    )
                )

        return nodes, edges

    def _day_node(self, record: MemoryRecord, active_filter: ActiveFilter) -> DayNode:
        color = self.mood_color(record)
        date_text = format_long_date(record.memory_date)

        title = f"{record.title or 'Memory'}\n{date_text}"
        if record.mood:
            title += f"\nMood: {record.mood.value}"

        return DayNode(
            id=record.id,
            label=record.title or format_short_date(record.memory_date),
            title=title,
            size=self.style.photo_node_size if record.has_photos else self.style.text_node_size,
            color=color,
            border_color=color,
            emphasis=self._emphasis(
                active_filter.matches(record),
                border_width=self.style.day_border_width,
                dimmed_opacity=self.style.dimmed_opacity_day,
            ),
            record=record,
            image=record.photos[0] if record.has_photos else None,
        )

    def mood_color(self, record: MemoryRecord) -> str:
        """Fill color of a day node, falling back to neutral when mood is absent."""
        if record.mood is None:
            return self.style.neutral_color
        return self.style.mood_colors.get(record.mood.value, self.style.neutral_color)

    # ═══════════════════════════════════════════════════════════
    # MONTH / YEAR RESOLUTION
    # ═══════════════════════════════════════════════════════════

    def _build_grouped(
        self, records: list[MemoryRecord], resolution: Resolution, active_filter: ActiveFilter
    ) -> tuple[list[MonthNode | YearNode], list[GraphEdge]]:
        groups = group_records(records, resolution)
        nodes = [self._group_node(group, active_filter) for group in groups]
        matches = {node.id: node.matches_filter for node in nodes}

        if resolution == Resolution.MONTH:
            width, opacity = self.style.month_edge_width, self.style.month_edge_opacity
        else:
            width, opacity = self.style.year_edge_width, self.style.year_edge_opacity

        edges = [
            self._edge(EdgeStyle.CHRONOLOGICAL, prev.id, node.id, matches, width, opacity)
            for prev, node in zip(nodes, nodes[1:])
        ]
        return nodes, edges

    def _group_node(
        self, group: AggregationGroup, active_filter: ActiveFilter
    ) -> MonthNode | YearNode:
        count = group.size
        matched = active_filter.matches_any(group.records)

        if group.resolution == Resolution.MONTH:
            return MonthNode(
                id=group.key,
                label=f"{group.label}\n({count})",
                title=f"{group.label}\n{count} memories",
                size=self.group_size(Resolution.MONTH, count),
                color=self.style.neutral_color,
                border_color=self.style.month_border_color,
                emphasis=self._emphasis(
                    matched,
                    border_width=self.style.month_border_width,
                    dimmed_opacity=self.style.dimmed_opacity_coarse,
                ),
                member_count=count,
                member_ids=group.member_ids,
            )

        return YearNode(
            id=group.key,
            label=f"{group.label}\n({count} memories)",
            title=f"{group.label}\n{count} memories",
            size=self.group_size(Resolution.YEAR, count),
            color=self.style.neutral_color,
            border_color=self.style.year_border_color,
            emphasis=self._emphasis(
                matched,
                border_width=self.style.year_border_width,
                dimmed_opacity=self.style.dimmed_opacity_coarse,
            ),
            member_count=count,
            member_ids=group.member_ids,
        )

    def group_size(self, resolution: Resolution, count: int) -> float:
        """
        Saturating size of a month or year node.

        Args:
            resolution: MONTH or YEAR
            count: Number of member records

        Returns:
            base + min(count * per_item, cap)
        """
        if resolution == Resolution.MONTH:
            base = self.style.month_base_size
            per_item = self.style.month_size_per_item
            cap = self.style.month_size_cap
        else:
            base = self.style.year_base_size
            per_item = self.style.year_size_per_item
            cap = self.style.year_size_cap
        return base + min(count * per_item, cap)

    # ═══════════════════════════════════════════════════════════
    # EMPHASIS HELPERS
    # ═══════════════════════════════════════════════════════════

    def _emphasis(self, matched: bool, border_width: float, dimmed_opacity: float) -> NodeEmphasis:
        if matched:
            return NodeEmphasis(
                matches_filter=True, opacity=1.0, border_width=border_width, shadow=True
            )
        return NodeEmphasis(
            matches_filter=False,
            opacity=dimmed_opacity,
            border_width=self.style.dimmed_border_width,
            shadow=False,
        )

    def _edge(
        self,
        style: EdgeStyle,
        source: str,
        target: str,
        matches: dict[str, bool],
        width: float,
        opacity: float,
    ) -> GraphEdge:
        emphasized = matches[source] and matches[target]
        if not emphasized:
            width *= self.style.dimmed_edge_width_factor
            opacity *= self.style.dimmed_edge_opacity_factor

        return GraphEdge(
            id=generate_edge_id(style.value, source, target),
            source=source,
            target=target,
            style=style,
            emphasized=emphasized,
            opacity=opacity,
            width=width,
            dashed=style == EdgeStyle.SAME_DAY,
        )


def build_graph(
    records: list[MemoryRecord],
    resolution: Resolution,
    active_filter: ActiveFilter | None = None,
) -> Graph:
    """Build a graph with the default visual encoding."""
    return GraphBuilder().build(records, resolution, active_filter)
