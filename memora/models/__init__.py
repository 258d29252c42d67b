"""
Data models for Memora.

Core models:
- MemoryRecord, Mood, Location: journal entries as delivered by the store
- Resolution, ActiveFilter, FilterKind: what the network view draws and emphasizes
- DayNode, MonthNode, YearNode, GraphEdge, Graph: the built graph
- TooltipPayload, DetailPanel, AvailableFilters: view payloads
"""

from memora.models.graph import (
    ActiveFilter,
    BaseGraphNode,
    DayNode,
    EdgeStyle,
    FilterKind,
    Graph,
    GraphEdge,
    GraphNode,
    MonthNode,
    NodeEmphasis,
    Resolution,
    YearNode,
)
from memora.models.memory import (
    Location,
    MemoryRecord,
    Mood,
    format_long_date,
    format_short_date,
    parse_memory_date,
)
from memora.models.view import AvailableFilters, DetailPanel, TooltipPayload

__all__ = [
    # Memory models
    "MemoryRecord",
    "Mood",
    "Location",
    "parse_memory_date",
    "format_long_date",
    "format_short_date",
    # Graph models
    "Resolution",
    "FilterKind",
    "ActiveFilter",
    "EdgeStyle",
    "NodeEmphasis",
    "BaseGraphNode",
    "DayNode",
    "MonthNode",
    "YearNode",
    "GraphNode",
    "GraphEdge",
    "Graph",
    # View payloads
    "TooltipPayload",
    "DetailPanel",
    "AvailableFilters",
]
