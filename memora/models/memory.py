"""
Memory record model - the journal entries the network view draws.
"""

from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from memora.utils.logger import get_logger

logger = get_logger(__name__)


class Mood(str, Enum):
    """Fixed set of moods a memory can be tagged with."""

    HAPPY = "happy"
    NOSTALGIC = "nostalgic"
    PEACEFUL = "peaceful"
    EXCITED = "excited"
    GRATEFUL = "grateful"
    REFLECTIVE = "reflective"
    BITTERSWEET = "bittersweet"
    ADVENTUROUS = "adventurous"


class Location(BaseModel):
    """Optional geolocation attached to a memory."""

    lat: float | None = Field(default=None, ge=-90.0, le=90.0)
    lng: float | None = Field(default=None, ge=-180.0, le=180.0)

    @property
    def is_set(self) -> bool:
        return self.lat is not None and self.lng is not None


def parse_memory_date(value: Any) -> datetime | None:
    """
    Parse a memory date into a naive UTC datetime.

    Timezone-aware values are converted to UTC first so that calendar keys
    (day, month, year) are computed consistently across records.

    Args:
        value: datetime, date or ISO-8601 string

    Returns:
        Parsed datetime, or None if the value is missing or unparseable
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


class MemoryRecord(BaseModel):
    """
    One journal entry as delivered by the memory store.

    Accepts both snake_case field names and the camelCase keys used by the
    store's JSON documents (memoryDate, audioUrl, _id, ...).

    A record whose memory_date is missing or unparseable is still
    constructible; it is reported as not dated and the graph builder skips it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Core identity
    id: str = Field(..., validation_alias=AliasChoices("id", "_id"), description="Memory ID")
    user_id: str = Field(
        default="", validation_alias=AliasChoices("user_id", "userId", "user"), description="Owner"
    )

    # Content
    title: str = Field(default="", max_length=200)
    content: str = Field(default="", max_length=5000)
    memory_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("memory_date", "memoryDate"),
        description="Date of the remembered event",
    )
    mood: Mood | None = None
    tags: list[str] = Field(default_factory=list)

    # Media
    photos: list[str] = Field(default_factory=list)
    audio_url: str = Field(default="", validation_alias=AliasChoices("audio_url", "audioUrl"))

    # Sharing and place
    location: Location | None = None
    collaborators: list[str] = Field(default_factory=list)

    # Timestamps
    created_at: datetime = Field(
        default_factory=datetime.now, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, validation_alias=AliasChoices("updated_at", "updatedAt")
    )

    @field_validator("memory_date", mode="before")
    @classmethod
    def _coerce_memory_date(cls, value: Any) -> datetime | None:
        parsed = parse_memory_date(value)
        if parsed is None and value not in (None, ""):
            logger.warning(f"Unparseable memory date {value!r}; record will be treated as undated")
        return parsed

    @field_validator("mood", mode="before")
    @classmethod
    def _coerce_mood(cls, value: Any) -> Any:
        if value is None or isinstance(value, Mood):
            return value
        value = str(value).strip().lower()
        if not value:
            return None
        if value not in Mood._value2member_map_:
            logger.warning(f"Unknown mood {value!r} dropped")
            return None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")

        tags: list[str] = []
        for tag in value:
            normalized = str(tag).strip().lower()
            if normalized and normalized not in tags:
                tags.append(normalized)
        return tags

    @field_validator("photos", "collaborators", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def has_photos(self) -> bool:
        return len(self.photos) > 0

    @property
    def is_text_only(self) -> bool:
        return not self.has_photos

    @property
    def is_dated(self) -> bool:
        return self.memory_date is not None

    @property
    def memory_day(self) -> date | None:
        """Calendar day of the remembered event."""
        if self.memory_date is None:
            return None
        return self.memory_date.date()


def format_long_date(value: datetime) -> str:
    """Format a date as "January 3, 2024"."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_short_date(value: datetime) -> str:
    """Format a date as "Jan 3"."""
    return f"{value.strftime('%b')} {value.day}"
