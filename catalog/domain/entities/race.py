from __future__ import annotations

from pydantic import Field

from ..value_objects.ids import RaceId
from .record import CatalogRecord


class Race(CatalogRecord):
    """A single race at a racing meeting."""

    id: RaceId = Field(..., description="Unique race identifier")
