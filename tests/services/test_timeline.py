"""Tests for the grouped timeline."""

from datetime import datetime

import pytest

from memora.core.memory_store import SQLiteMemoryStore
from memora.services import TimelineService, group_timeline


class TestGroupTimeline:
    """Tests for nesting memories by year and month."""

    def test_grouping(self, sample_records):
        result = group_timeline(sample_records)

        assert result["total"] == 5
        assert list(result["grouped"]) == ["2024"]

        year = result["grouped"]["2024"]
        assert year["year"] == 2024
        assert list(year["months"]) == ["2024-01", "2024-02", "2024-03"]

        january = year["months"]["2024-01"]
        assert january["month"] == 1
        assert january["label"] == "January 2024"
        assert [memory["id"] for memory in january["memories"]] == ["A", "B", "C"]

    def test_multiple_years(self, make_memory):
        records = [
            make_memory("a", datetime(2023, 12, 31)),
            make_memory("b", datetime(2024, 1, 1)),
        ]

        result = group_timeline(records)

        assert list(result["grouped"]) == ["2023", "2024"]
        assert list(result["grouped"]["2023"]["months"]) == ["2023-12"]

    def test_undated_excluded(self, make_memory):
        records = [make_memory("a", datetime(2024, 1, 1)), make_memory("b", "bogus")]

        result = group_timeline(records)

        assert result["total"] == 1

    def test_empty(self):
        assert group_timeline([]) == {"grouped": {}, "total": 0}


class TestTimelineService:
    """Tests for the store-backed timeline service."""

    @pytest.mark.asyncio
    async def test_grouped(self, tmp_path, sample_records):
        store = SQLiteMemoryStore(db_path=str(tmp_path / "timeline.db"))
        await store.initialize()
        for record in sample_records:
            await store.add_memory(record)

        service = TimelineService(store, list_limit=50)
        result = await service.grouped("user_001")
        await store.close()

        assert result["total"] == 5
        assert len(result["grouped"]["2024"]["months"]) == 3
