"""
API Errors and Exception Handlers

Every failure is turned into an ``{"error": ..., "details": ...}`` body;
nothing propagates out of a request.
"""
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.corretaje.db.errors import StorageError
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Error with an HTTP status and a client-facing message."""

    status_code = 500

    def __init__(self, error: str, details: Any = None, **extra: Any):
        self.error = error
        self.details = details
        self.extra = extra
        super().__init__(error)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class BadRequestError(ApiError):
    """Client input error (missing field, invalid value, malformed id)."""
    status_code = 400


class NotFoundError(ApiError):
    """No record with the requested identifier."""
    status_code = 404


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to field/message pairs."""
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg"),
        }
        for error in errors
    ]


def available_endpoints(app: FastAPI) -> List[str]:
    """Method and path of every public route, for 404 responses."""
    endpoints = []
    for route in app.routes:
        if not isinstance(route, APIRoute) or not route.include_in_schema:
            continue
        for method in sorted(route.methods):
            endpoints.append(f"{method} {route.path}")
    return endpoints


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("api_error", path=request.url.path, error=exc.error, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={
            "error": "Parámetros inválidos",
            "details": format_validation_errors(exc.errors()),
        },
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        "storage_error",
        method=request.method,
        path=request.url.path,
        operation=exc.operation,
        error=exc.detail,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={"error": f"Error al {exc.operation}", "details": exc.detail},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Resource lookups raise NotFoundError, so a plain 404/405 here is a
    # request for a route that does not exist
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Ruta no encontrada",
                "availableEndpoints": available_endpoints(request.app),
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
