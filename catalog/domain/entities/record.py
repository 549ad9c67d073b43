from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..value_objects.enums import RecordStatus
from ..value_objects.ids import MeetingId


class CatalogRecord(BaseModel):
    """Fields shared by every listed catalog entity."""

    id: int = Field(..., description="Unique identifier assigned by storage")
    meeting_id: MeetingId = Field(..., description="Meeting the entity belongs to")
    name: str = Field(..., description="Display name")
    number: int = Field(..., description="Number within the meeting")
    visible: bool = Field(..., description="Whether the entity is visible")
    advertised_start_time: datetime = Field(..., description="Advertised start in UTC")
    status: RecordStatus = Field(..., description="OPEN until the advertised start passes")

    model_config = ConfigDict(frozen=True)

    @field_validator("advertised_start_time")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("advertised_start_time must be timezone-aware")
        return v.astimezone(timezone.utc)
