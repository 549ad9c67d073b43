from __future__ import annotations

import logging

from catalog.repositories.events import EventsRepo
from catalog.schemas import ListEventsRequest, ListEventsResponse

logger = logging.getLogger(__name__)


class SportsService:
    """Serves sporting event listings straight from an :class:`EventsRepo`."""

    def __init__(self, events_repo: EventsRepo) -> None:
        self._repo = events_repo

    def list_events(self, request: ListEventsRequest) -> ListEventsResponse:
        events = self._repo.list(request.filter)
        logger.debug("Listed events", extra={"count": len(events)})
        return ListEventsResponse(events=events)
