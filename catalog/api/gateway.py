"""Public HTTP/JSON gateway in front of the racing and sports services."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Awaitable, Callable, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from catalog.infrastructure.catalog_client import CatalogClient, UpstreamError
from catalog.schemas import (
    ListEventsRequest,
    ListEventsResponse,
    ListRacesRequest,
    ListRacesResponse,
)

from .errors import error_response
from .rpc import RACING_LIST_PATH, SPORTS_LIST_PATH, healthcheck

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _racing_client(request: Request) -> CatalogClient:
    return request.app.state.racing_client


def _sports_client(request: Request) -> CatalogClient:
    return request.app.state.sports_client


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


def _forward(client: CatalogClient, path: str, body: Any, request_id: str) -> Any:
    return client.call(path, body.model_dump(mode="json"), request_id=request_id or None)


def _upstream_error(exc: UpstreamError) -> JSONResponse:
    if exc.status_code is None:
        return error_response(503, "UNAVAILABLE", str(exc))
    payload = exc.payload or {}
    if 400 <= exc.status_code < 600 and {"code", "message"} <= set(payload):
        return JSONResponse(status_code=exc.status_code, content=dict(payload))
    return error_response(502, "BAD_GATEWAY", str(exc))


def create_gateway(racing_client: CatalogClient, sports_client: CatalogClient) -> FastAPI:
    app = FastAPI(title="Catalog API", version="0.1.0")
    app.state.racing_client = racing_client
    app.state.sports_client = sports_client
    app.add_api_route("/healthz", healthcheck, methods=["GET"], tags=["system"])

    @app.middleware("http")
    async def _assign_request_id(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Handled request",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "status": response.status_code,
            },
        )
        return response

    @app.exception_handler(UpstreamError)
    async def _on_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        return _upstream_error(exc)

    @app.post("/v1/list-races", response_model=ListRacesResponse, tags=["racing"])
    def list_races(
        body: Optional[ListRacesRequest] = None,
        client: CatalogClient = Depends(_racing_client),
        request_id: str = Depends(_request_id),
    ) -> ListRacesResponse:
        data = _forward(client, RACING_LIST_PATH, body or ListRacesRequest(), request_id)
        try:
            return ListRacesResponse.model_validate(data)
        except ValidationError as exc:
            raise UpstreamError("racing service returned a malformed response", 502) from exc

    @app.post("/v1/list-events", response_model=ListEventsResponse, tags=["sports"])
    def list_events(
        body: Optional[ListEventsRequest] = None,
        client: CatalogClient = Depends(_sports_client),
        request_id: str = Depends(_request_id),
    ) -> ListEventsResponse:
        data = _forward(client, SPORTS_LIST_PATH, body or ListEventsRequest(), request_id)
        try:
            return ListEventsResponse.model_validate(data)
        except ValidationError as exc:
            raise UpstreamError("sports service returned a malformed response", 502) from exc

    return app
