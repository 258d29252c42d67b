"""
Payloads surfaced by the network view: hover tooltip, detail panel and
the filter selector's available options.
"""

from pydantic import BaseModel, Field

from memora.models.memory import MemoryRecord, format_long_date

PREVIEW_LENGTH = 200


class TooltipPayload(BaseModel):
    """Transient hover information for a day-level node."""

    title: str
    date: str
    mood: str | None = None

    @classmethod
    def from_record(cls, record: MemoryRecord) -> "TooltipPayload":
        return cls(
            title=record.title or "Memory",
            date=format_long_date(record.memory_date) if record.memory_date else "",
            mood=record.mood.value if record.mood else None,
        )


class DetailPanel(BaseModel):
    """Contents of the side panel opened for the selected record."""

    memory_id: str
    title: str
    date: str
    photo: str | None = None
    preview: str = ""

    @classmethod
    def from_record(cls, record: MemoryRecord) -> "DetailPanel":
        preview = record.content[:PREVIEW_LENGTH]
        if len(record.content) > PREVIEW_LENGTH:
            preview += "..."

        return cls(
            memory_id=record.id,
            title=record.title or "Untitled Memory",
            date=format_long_date(record.memory_date) if record.memory_date else "",
            photo=record.photos[0] if record.photos else None,
            preview=preview,
        )


class AvailableFilters(BaseModel):
    """Moods and tags present in the current record set."""

    moods: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[MemoryRecord]) -> "AvailableFilters":
        moods = {record.mood.value for record in records if record.mood is not None}
        tags = {tag for record in records for tag in record.tags}
        return cls(moods=sorted(moods), tags=sorted(tags))
