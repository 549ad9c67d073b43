"""Maps catalog errors onto JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from catalog.domain.errors import InvalidFilter, SeedError, StorageError
from catalog.schemas import ErrorBody

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorBody(code=code, message=message).model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidFilter)
    async def _invalid_filter(request: Request, exc: InvalidFilter) -> JSONResponse:
        logger.info("Rejected filter", extra={"path": request.url.path, "error": str(exc)})
        return error_response(400, "INVALID_ARGUMENT", str(exc))

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure", extra={"path": request.url.path, "error": str(exc)})
        return error_response(500, "INTERNAL", str(exc))

    @app.exception_handler(SeedError)
    async def _seed_error(request: Request, exc: SeedError) -> JSONResponse:
        logger.error("Repository not initialized", extra={"path": request.url.path})
        return error_response(503, "UNAVAILABLE", str(exc))
