"""
Services for Memora.

High-level services:
- NetworkView: Owns navigation state and renderer lifecycle for one mounted network
- TimelineService: Year/month grouped timeline of a user's memories
"""

from memora.services.network_view import NetworkView, chronological_order
from memora.services.timeline import TimelineService, group_timeline

__all__ = [
    "NetworkView",
    "chronological_order",
    "TimelineService",
    "group_timeline",
]
