from __future__ import annotations

from pydantic import Field

from ..value_objects.ids import EventId
from .record import CatalogRecord


class Event(CatalogRecord):
    """A single sporting event."""

    id: EventId = Field(..., description="Unique event identifier")
