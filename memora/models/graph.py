"""
Graph models for the memory network view.

Nodes are a tagged union (DayNode | MonthNode | YearNode) sharing a common
size/color/emphasis surface. Edges are derived from the node sequence and
are never persisted.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from memora.models.memory import MemoryRecord


class Resolution(str, Enum):
    """Aggregation granularity, ordered coarse to fine."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"

    @property
    def rank(self) -> int:
        """Position in the coarse-to fine order (year=0, day=2)."""
        return _RESOLUTION_ORDER.index(self)

    def finer(self) -> "Resolution":
        """Next finer resolution; DAY stays DAY."""
        return _RESOLUTION_ORDER[min(self.rank + 1, len(_RESOLUTION_ORDER) - 1)]

    def coarser(self) -> "Resolution":
        """Next coarser resolution; YEAR stays YEAR."""
        return _RESOLUTION_ORDER[max(self.rank - 1, 0)]


_RESOLUTION_ORDER = [Resolution.YEAR, Resolution.MONTH, Resolution.DAY]


class FilterKind(str, Enum):
    """Kinds of filter the network view supports."""

    NONE = "none"
    MOOD = "mood"
    TAG = "tag"


class ActiveFilter(BaseModel):
    """
    The single filter currently applied to the network.

    Filtering never removes nodes; it only decides which ones are emphasized.
    Selecting a new filter replaces the previous one.
    """

    model_config = ConfigDict(frozen=True)

    kind: FilterKind = FilterKind.NONE
    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _normalize_value(cls, value: Any) -> str | None:
        if value is None:
            return None
        value = str(value).strip().lower()
        return value or None

    @model_validator(mode="after")
    def _check_value(self) -> "ActiveFilter":
        if self.kind == FilterKind.NONE:
            if self.value is not None:
                raise ValueError("A 'none' filter cannot carry a value")
        elif self.value is None:
            raise ValueError(f"A '{self.kind.value}' filter requires a value")
        return self

    @classmethod
    def none(cls) -> "ActiveFilter":
        return cls()

    @classmethod
    def mood(cls, value: str) -> "ActiveFilter":
        return cls(kind=FilterKind.MOOD, value=value)

    @classmethod
    def tag(cls, value: str) -> "ActiveFilter":
        return cls(kind=FilterKind.TAG, value=value)

    @property
    def is_none(self) -> bool:
        return self.kind == FilterKind.NONE

    def matches(self, record: MemoryRecord) -> bool:
        """
        Check whether a single record satisfies the filter.

        Args:
            record: Memory record to test

        Returns:
            True for the "none" filter, otherwise True iff the record's mood
            (mood filter) or tag set (tag filter) contains the value
        """
        if self.kind == FilterKind.NONE:
            return True
        if self.kind == FilterKind.MOOD:
            return record.mood is not None and record.mood.value == self.value
        return self.value in record.tags

    def matches_any(self, records: list[MemoryRecord]) -> bool:
        """True iff the filter is "none" or any record matches individually."""
        if self.kind == FilterKind.NONE:
            return True
        return any(self.matches(record) for record in records)


class EdgeStyle(str, Enum):
    """Visual kind of a graph edge."""

    CHRONOLOGICAL = "chronological"
    SAME_DAY = "same_day"


class NodeEmphasis(BaseModel):
    """Filter-derived visual emphasis of a node."""

    matches_filter: bool = True
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    border_width: float = Field(default=2.0, ge=0.0)
    shadow: bool = True


class BaseGraphNode(BaseModel):
    """Common surface shared by every node variant."""

    id: str
    label: str
    title: str = Field(default="", description="Hover text")
    size: float
    color: str
    border_color: str
    emphasis: NodeEmphasis = Field(default_factory=NodeEmphasis)

    @property
    def matches_filter(self) -> bool:
        return self.emphasis.matches_filter


class DayNode(BaseGraphNode):
    """A single memory record drawn as one node."""

    kind: Literal["day"] = "day"
    record: MemoryRecord
    image: str | None = None

    @property
    def backing_record_id(self) -> str:
        return self.record.id


class MonthNode(BaseGraphNode):
    """All records of one calendar month collapsed into one node."""

    kind: Literal["month"] = "month"
    member_count: int = Field(..., ge=1)
    member_ids: list[str] = Field(default_factory=list)


class YearNode(BaseGraphNode):
    """All records of one calendar year collapsed into one node."""

    kind: Literal["year"] = "year"
    member_count: int = Field(..., ge=1)
    member_ids: list[str] = Field(default_factory=list)


GraphNode = Annotated[DayNode | MonthNode | YearNode, Field(discriminator="kind")]


class GraphEdge(BaseModel):
    """A derived connection between two nodes."""

    id: str
    source: str
    target: str
    style: EdgeStyle = EdgeStyle.CHRONOLOGICAL
    emphasized: bool = True
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    width: float = Field(default=1.0, ge=0.0)
    dashed: bool = False


class Graph(BaseModel):
    """A complete node/edge description ready to hand to a renderer."""

    resolution: Resolution
    filter: ActiveFilter = Field(default_factory=ActiveFilter)
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, node_id: str) -> DayNode | MonthNode | YearNode | None:
        """Look up a node by ID."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def matching_node_ids(self) -> list[str]:
        """IDs of nodes rendered at full emphasis."""
        return [node.id for node in self.nodes if node.matches_filter]

    def edges_of_style(self, style: EdgeStyle) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.style == style]
