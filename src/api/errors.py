"""Centralized error handlers.

Maps domain errors to HTTP responses. No stack traces or driver details
reach the client. Every error body has the shape ``{"code", "detail"}``.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.model.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
}

# 401 would otherwise read UNAUTHORIZED, which already means "not your task"
CODE_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHENTICATED",
}


def _error_response(status_code: int, code: str, detail, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "detail": detail},
        headers=headers,
    )


def http_error_code(status_code: int) -> str:
    """Stable machine-readable code for a framework-raised HTTP status."""
    if status_code in CODE_BY_STATUS:
        return CODE_BY_STATUS[status_code]
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "HTTP_ERROR"


def register_error_handlers(app: FastAPI) -> None:
    """Register domain, HTTP and fallback error handlers on the application."""

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        status_code = STATUS_BY_KIND[exc.kind]
        logger.info("Domain error", extra={
            "path": request.url.path,
            "kind": exc.kind.value,
            "statusCode": status_code,
        })
        return _error_response(status_code, exc.kind.value, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(
            exc.status_code,
            http_error_code(exc.status_code),
            exc.detail,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            422,
            "REQUEST_VALIDATION_ERROR",
            jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "Internal server error",
        )
