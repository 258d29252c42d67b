"""
ID generation utilities for Memora.

Provides consistent ID generation:
- Memories: mem_xxx
- Network view sessions: view_xxx
- Edges: <style>:<source>-><target>
"""

from uuid import uuid4


def generate_memory_id() -> str:
    """
    Generate unique Memory ID.

    Returns:
        ID in format "mem_xxx" where xxx is 12 hex characters
    """
    return f"mem_{uuid4().hex[:12]}"


def generate_session_id() -> str:
    """
    Generate unique network view session ID.

    Returns:
        ID in format "view_xxx" where xxx is 12 hex characters
    """
    return f"view_{uuid4().hex[:12]}"


def generate_edge_id(style: str, source: str, target: str) -> str:
    """
    Generate a deterministic edge ID.

    Edges are rebuilt from scratch on every graph build, so the ID is derived
    from its endpoints rather than random.

    Args:
        style: Edge style value (e.g. "chronological")
        source: Source node ID
        target: Target node ID

    Returns:
        ID in format "style:source->target"
    """
    return f"{style}:{source}->{target}"
