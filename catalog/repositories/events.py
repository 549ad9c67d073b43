from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from catalog.domain.entities import Event, ListFilter


class EventsRepo(ABC):
    """Abstract repository interface for sporting :class:`Event` entities."""

    @abstractmethod
    def init(self) -> None:
        """Prepare the repository, seeding it on first use."""

    @abstractmethod
    def list(self, flt: Optional[ListFilter] = None) -> list[Event]:
        """List events matching ``flt``; see :meth:`RacesRepo.list`."""
