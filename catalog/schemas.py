"""Wire messages exchanged by the RPC apps and the gateway."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from catalog.domain.entities import Event, ListFilter, Race


class ListRacesRequest(BaseModel):
    filter: Optional[ListFilter] = Field(default=None, description="Omit to list every race")


class ListRacesResponse(BaseModel):
    races: list[Race] = Field(default_factory=list)


class ListEventsRequest(BaseModel):
    filter: Optional[ListFilter] = Field(default=None, description="Omit to list every event")


class ListEventsResponse(BaseModel):
    events: list[Event] = Field(default_factory=list)


class ErrorBody(BaseModel):
    code: str
    message: str
