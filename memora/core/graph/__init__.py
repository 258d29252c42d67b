"""Aggregation, graph building and navigation for the memory network."""

from .aggregation import AggregationGroup, dated_records, group_key, group_records
from .builder import GraphBuilder, build_graph
from .navigation import NavigationState, Transition

__all__ = [
    "AggregationGroup",
    "group_key",
    "group_records",
    "dated_records",
    "GraphBuilder",
    "build_graph",
    "NavigationState",
    "Transition",
]
