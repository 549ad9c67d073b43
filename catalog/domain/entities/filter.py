from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.ids import INT64_MAX, INT64_MIN, MeetingId

BoundedMeetingId = Annotated[MeetingId, Field(ge=INT64_MIN, le=INT64_MAX)]


class ListFilter(BaseModel):
    """Criteria narrowing and ordering a list query.

    Every field is optional; the defaults place no constraint and use the
    default ordering (``advertised_start_time`` descending). Meeting ids must
    fit a signed 64-bit integer.

    >>> ListFilter(meeting_ids=[1, 2], visible_only=True).meeting_ids
    (1, 2)
    """

    meeting_ids: tuple[BoundedMeetingId, ...] = Field(
        default=(), description="Only return entities at these meetings"
    )
    visible_only: bool = Field(default=False, description="Only return visible entities")
    sort_by: str = Field(default="", description="Column to order by")
    order: str = Field(default="", description="ASC/ASCENDING, anything else is descending")

    model_config = ConfigDict(frozen=True)
