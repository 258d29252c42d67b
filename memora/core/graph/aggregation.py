"""
Resolution-dependent grouping of memory records.

At day resolution every record is its own group; at month and year
resolution records sharing a calendar month or year are collapsed. Groups
partition the dated records exactly and are emitted in ascending
chronological key order.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from memora.models.graph import Resolution
from memora.models.memory import MemoryRecord
from memora.utils.logger import get_logger

logger = get_logger(__name__)


class AggregationGroup(BaseModel):
    """Records collapsed into one node at a given resolution."""

    key: str
    resolution: Resolution
    records: list[MemoryRecord] = Field(default_factory=list)
    first_date: datetime

    @property
    def size(self) -> int:
        return len(self.records)

    @property
    def member_ids(self) -> list[str]:
        return [record.id for record in self.records]

    @property
    def label(self) -> str:
        """Human-readable group name ("January 2024", "2024" or the record title)."""
        if self.resolution == Resolution.YEAR:
            return self.key
        if self.resolution == Resolution.MONTH:
            return f"{self.first_date.strftime('%B')} {self.first_date.year}"
        return self.records[0].title if self.records else self.key


def group_key(record: MemoryRecord, resolution: Resolution) -> str:
    """
    Compute the grouping key of a dated record.

    Args:
        record: Memory record with a memory_date
        resolution: Target resolution

    Returns:
        The record ID (day), "YYYY-MM" (month) or "YYYY" (year). Zero-padded
        keys sort lexically in chronological order.
    """
    if resolution == Resolution.DAY:
        return record.id

    memory_date = record.memory_date
    if resolution == Resolution.MONTH:
        return f"{memory_date.year:04d}-{memory_date.month:02d}"
    return f"{memory_date.year:04d}"


def dated_records(records: list[MemoryRecord]) -> list[MemoryRecord]:
    """
    Drop records without a usable memory date.

    One malformed record must not blank the whole graph, so such records are
    logged and treated as absent.
    """
    dated = []
    for record in records:
        if record.is_dated:
            dated.append(record)
        else:
            logger.warning(f"Skipping memory {record.id}: missing or unparseable memory date")
    return dated


def group_records(records: list[MemoryRecord], resolution: Resolution) -> list[AggregationGroup]:
    """
    Partition records into aggregation groups.

    Args:
        records: Memory records, assumed sorted ascending by memory_date
        resolution: Target resolution

    Returns:
        Groups in ascending key order. At day resolution, one group per
        dated record in input order.
    """
    records = dated_records(records)

    if resolution == Resolution.DAY:
        return [
            AggregationGroup(
                key=record.id,
                resolution=resolution,
                records=[record],
                first_date=record.memory_date,
            )
            for record in records
        ]

    groups: dict[str, AggregationGroup] = {}
    for record in records:
        key = group_key(record, resolution)
        group = groups.get(key)
        if group is None:
            groups[key] = AggregationGroup(
                key=key,
                resolution=resolution,
                records=[record],
                first_date=record.memory_date,
            )
        else:
            group.records.append(record)
            if record.memory_date < group.first_date:
                group.first_date = record.memory_date

    return [groups[key] for key in sorted(groups)]
