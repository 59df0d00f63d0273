"""Error translator: the one place that turns failures into HTTP responses.

build_error_response() holds the decision; the FastAPI handlers registered
by register_error_handlers() only log and wrap its result.
"""

import logging
from typing import Any, Dict, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import BodyParseError, CatalogError

logger = logging.getLogger(__name__)

SERVER_ERROR_BODY = {
    "error": "ServerError",
    "message": "Something went wrong on the server",
}


def build_error_response(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """Map a failure to (status, body), checking the branches in order."""
    if isinstance(exc, CatalogError):
        return exc.status_code, exc.to_response()
    if isinstance(exc, BodyParseError):
        return status.HTTP_400_BAD_REQUEST, {
            "error": "ValidationError",
            "message": "Invalid JSON format",
        }
    return status.HTTP_500_INTERNAL_SERVER_ERROR, dict(SERVER_ERROR_BODY)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, _translate)
    app.add_exception_handler(BodyParseError, _translate)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)


async def _translate(request: Request, exc: Exception):
    logger.error(
        f"Error: {exc}",
        extra={"path": request.url.path, "error_kind": type(exc).__name__},
    )
    status_code, body = build_error_response(exc)
    return JSONResponse(status_code=status_code, content=body)


async def _request_validation_error(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(loc) for loc in e["loc"]) for e in exc.errors())
    logger.warning(f"Error: invalid request on {request.url.path}: {fields}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "ValidationError", "message": f"Invalid request: {fields}"},
    )


async def _http_error(request: Request, exc: StarletteHTTPException):
    logger.error(f"Error: {exc.detail}", extra={"path": request.url.path})
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = {"error": "NotFoundError", "message": "Route not found"}
    else:
        body = {"error": "HTTPError", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def _unhandled_error(request: Request, exc: Exception):
    logger.error(f"Error: {exc}", exc_info=True, extra={"path": request.url.path})
    status_code, body = build_error_response(exc)
    return JSONResponse(status_code=status_code, content=body)
