"""
Grouped timeline - a user's memories nested by year then month.
"""

from typing import Any

from memora.core.graph.aggregation import dated_records, group_records
from memora.core.memory_store.base import MemoryStore
from memora.models.graph import Resolution
from memora.models.memory import MemoryRecord
from memora.utils.logger import get_logger

logger = get_logger(__name__)


class TimelineService:
    """Builds the year -> month -> memories timeline used by the dashboard."""

    def __init__(self, memory_store: MemoryStore, list_limit: int = 200):
        """
        Initialize timeline service.

        Args:
            memory_store: Store to read memories from
            list_limit: Maximum memories fetched per request
        """
        self.memory_store = memory_store
        self.list_limit = list_limit

    async def grouped(self, user_id: str) -> dict[str, Any]:
        """
        Fetch and group a user's memories.

        Args:
            user_id: Owner user ID

        Returns:
            {"grouped": {...}, "total": n}
        """
        records = await self.memory_store.list_memories(
            user_id, ascending=True, limit=self.list_limit
        )
        return group_timeline(records)


def group_timeline(records: list[MemoryRecord]) -> dict[str, Any]:
    """
    Nest dated records by year then month.

    Returns:
        {"grouped": {"2024": {"year": 2024, "months": {"2024-01": {"month": 1,
        "memories": [...]}}}}, "total": n}
    """
    records = dated_records(records)
    grouped: dict[str, Any] = {}

    for year_group in group_records(records, Resolution.YEAR):
        months = {}
        for month_group in group_records(year_group.records, Resolution.MONTH):
            months[month_group.key] = {
                "month": month_group.first_date.month,
                "label": month_group.label,
                "memories": [record.model_dump(mode="json") for record in month_group.records],
            }
        grouped[year_group.key] = {"year": year_group.first_date.year, "months": months}

    logger.debug(f"Grouped {len(records)} memories into {len(grouped)} years")
    return {"grouped": grouped, "total": len(records)}
