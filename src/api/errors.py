"""Exception handlers rendering every failure as a JSON error envelope."""

from typing import List

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from record_store.exceptions import (
    DatasetNotFoundError,
    RecordNotFoundError,
    RecordStoreError,
    ValidationError,
)
from utils.logging import logger

STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DatasetNotFoundError, status.HTTP_404_NOT_FOUND),
    (RecordNotFoundError, status.HTTP_404_NOT_FOUND),
)

HTTP_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"]


def status_for(error: RecordStoreError) -> int:
    """HTTP status for a record store error; anything unmapped is a server error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message}, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors())
    logger.warning(f"Invalid request to {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error handling {request.method} {request.url.path}: {str(exc)}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def unsupported_methods(allowed: List[str]) -> List[str]:
    """Every standard HTTP method a route does not serve, for its 405 catch-all."""
    return [method for method in HTTP_METHODS if method not in allowed]


def method_not_allowed(request: Request, allowed: List[str]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail=f"Method {request.method} Not Allowed",
        headers={"Allow": ", ".join(allowed)},
    )
