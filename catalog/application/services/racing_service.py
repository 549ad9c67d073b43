from __future__ import annotations

import logging

from catalog.repositories.races import RacesRepo
from catalog.schemas import ListRacesRequest, ListRacesResponse

logger = logging.getLogger(__name__)


class RacingService:
    """Serves race listings straight from a :class:`RacesRepo`."""

    def __init__(self, races_repo: RacesRepo) -> None:
        self._repo = races_repo

    def list_races(self, request: ListRacesRequest) -> ListRacesResponse:
        races = self._repo.list(request.filter)
        logger.debug("Listed races", extra={"count": len(races)})
        return ListRacesResponse(races=races)
