"""
Exception handlers for the JSON API.

Client errors (missing/invalid URL) are returned with their specific
message. Everything else becomes a 500 with a generic message; details go
to the log only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shortlink_app.exceptions import (
    CodeExhaustionError,
    ShortLinkError,
    StoreError,
)

logger = logging.getLogger("shortlink.api")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def shortlink_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    if isinstance(exc, CodeExhaustionError):
        logger.error("%s %s: %s", request.method, request.url.path, exc)
    elif isinstance(exc, StoreError):
        logger.error("%s %s: storage error: %s", request.method, request.url.path, exc, exc_info=exc)
    elif exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return _error_response(exc.status_code, exc.public_message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error in %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShortLinkError, shortlink_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
