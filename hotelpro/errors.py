import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HotelProError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(HotelProError):
    status_code = 400


class NotFound(HotelProError):
    status_code = 404


class Conflict(HotelProError):
    # Duplicates are reported as plain bad requests to API clients
    status_code = 400


class Unauthorized(HotelProError):
    status_code = 401


def _error_body(message: str, details: Any = None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body


async def hotelpro_error_handler(request: Request, exc: HotelProError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body("Validation error", exc.errors()))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))
