from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from catalog.domain.entities import ListFilter, Race


class RacesRepo(ABC):
    """Abstract repository interface for :class:`Race` entities."""

    @abstractmethod
    def init(self) -> None:
        """Prepare the repository, seeding it on first use.

        Safe to call repeatedly and concurrently; the seed runs at most once.

        :raises SeedError: if seeding failed (on this or an earlier call).
        """

    @abstractmethod
    def list(self, flt: Optional[ListFilter] = None) -> list[Race]:
        """
        List races matching ``flt``.

        Example:
            >>> repo.list(ListFilter(meeting_ids=[5], sort_by="number", order="asc"))
            [Race(id=12, meeting_id=5, ...), Race(id=3, meeting_id=5, ...)]

        :param flt: Filter to apply, ``None`` for every race in storage order.
        :return: Races with their status derived at call time.
        :raises InvalidFilter: if ``flt.sort_by`` is not a sortable column.
        :raises StorageError: if the query or a row decode fails.
        """
