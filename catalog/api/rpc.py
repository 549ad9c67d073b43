"""Native RPC endpoints of the racing and sports catalog services.

Each service is its own FastAPI application exposing a single list method at
``/<package>.<Service>/<Method>``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Request

from catalog.application.services import RacingService, SportsService
from catalog.schemas import (
    ListEventsRequest,
    ListEventsResponse,
    ListRacesRequest,
    ListRacesResponse,
)

from .errors import register_error_handlers

RACING_LIST_PATH = "/racing.Racing/ListRaces"
SPORTS_LIST_PATH = "/sports.Events/ListEvents"


def healthcheck() -> dict[str, str]:
    """Basic readiness check consumed by infrastructure monitors."""

    return {"status": "ok"}


def _racing_service(request: Request) -> RacingService:
    return request.app.state.racing_service


def _sports_service(request: Request) -> SportsService:
    return request.app.state.sports_service


def create_racing_app(service: RacingService) -> FastAPI:
    app = FastAPI(title="Racing", version="0.1.0")
    app.state.racing_service = service
    register_error_handlers(app)
    app.add_api_route("/healthz", healthcheck, methods=["GET"], tags=["system"])

    @app.post(RACING_LIST_PATH, response_model=ListRacesResponse, tags=["racing"])
    def list_races(
        body: Optional[ListRacesRequest] = None,
        svc: RacingService = Depends(_racing_service),
    ) -> ListRacesResponse:
        return svc.list_races(body or ListRacesRequest())

    return app


def create_sports_app(service: SportsService) -> FastAPI:
    app = FastAPI(title="Sports", version="0.1.0")
    app.state.sports_service = service
    register_error_handlers(app)
    app.add_api_route("/healthz", healthcheck, methods=["GET"], tags=["system"])

    @app.post(SPORTS_LIST_PATH, response_model=ListEventsResponse, tags=["sports"])
    def list_events(
        body: Optional[ListEventsRequest] = None,
        svc: SportsService = Depends(_sports_service),
    ) -> ListEventsResponse:
        return svc.list_events(body or ListEventsRequest())

    return app
