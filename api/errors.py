"""
Exception handlers

Map the domain error taxonomy onto HTTP responses:

    NotFoundError                          -> 404 {"error": ...}
    ValidationError, request body errors   -> 422 {"errors": [...]}
    IllegalTransitionError,
    InvalidOperationError, other errors    -> 500 {"error": "Internal server error"}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from models.errors import (
    IllegalTransitionError,
    InvalidOperationError,
    NotFoundError,
    TripwiseError,
    ValidationError,
)
from serializers.errors import ErrorSerializer

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorSerializer.render_error(str(exc))
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorSerializer.render_field_errors(exc.errors)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorSerializer.render_request_errors(exc.errors())
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"[API] {request.method} {request.url.path} failed: {exc!r}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorSerializer.render_error(INTERNAL_ERROR)
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorSerializer.render_error(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IllegalTransitionError, internal_error_handler)
    app.add_exception_handler(InvalidOperationError, internal_error_handler)
    app.add_exception_handler(TripwiseError, internal_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
