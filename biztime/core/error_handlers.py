"""
Global exception handlers.

All failures leave the API as {"error": {"message", "status"}}:
    - BizTimeError        → its own message and status
    - HTTPException       → unmatched routes (404), wrong methods (405)
    - RequestValidationError → 400 with the offending fields
    - SQLAlchemyError     → 500, constraint details stay in the log
    - Exception           → 500, never leaks internals
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from biztime.core.errors import BizTimeError, error_body

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(BizTimeError)
    async def biztime_error_handler(request: Request, exc: BizTimeError):
        level = logging.WARNING if exc.status < 500 else logging.ERROR
        logger.log(level, "%s %s → %s: %s", request.method, request.url.path, exc.status, exc.message)
        return JSONResponse(status_code=exc.status, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(_describe_validation_errors(exc), status.HTTP_400_BAD_REQUEST),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        if isinstance(exc, IntegrityError):
            message = "Database integrity error"
        else:
            message = "Database error"
        logger.error(
            "%s on %s %s: %s", message, request.method, request.url.path, getattr(exc, "orig", exc),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(message, status.HTTP_500_INTERNAL_SERVER_ERROR),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR),
        )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    details = []
    for e in exc.errors():
        # drop the "body"/"path" prefix from the location
        loc = [str(part) for part in e.get("loc", ())[1:]] or [str(part) for part in e.get("loc", ())]
        details.append(f"{'.'.join(loc)}: {e.get('msg')}")
    return "Invalid request data: " + "; ".join(details)
