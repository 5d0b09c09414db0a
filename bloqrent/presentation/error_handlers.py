"""
Application-wide error handlers.

Domain errors are mapped to HTTP in each route. The handlers here cover what
never reaches a route: malformed requests (400) and unexpected failures (500,
no internals exposed).
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_500 = 500


def register_error_handlers(app: FastAPI) -> None:
    """Register the request validation and catch-all handlers on the application."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Request validation failed: %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=HTTP_400,
            content={"error": "Validation failed", "detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s %s: %s", request.method, request.url.path, type(exc).__name__)
        return JSONResponse(status_code=HTTP_500, content={"error": "Internal server error"})
