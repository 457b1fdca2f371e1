"""
handlers/errors.py
------------------
Translation of failures into `{"error": <message>}` responses.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.logger import get_logger

logger = get_logger(__name__)


def not_found(message: str) -> HTTPException:
    return HTTPException(status_code=404, detail=message)


def server_error(message: str, exc: BaseException) -> HTTPException:
    """
    Log the underlying failure and build a 500 that only carries `message`.
    """
    logger.error(f"{message}: {exc}")
    return HTTPException(status_code=500, detail=message)


def _error_body(message) -> dict:
    return {"error": message if isinstance(message, str) else str(message)}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {where}: {msg}" if where else f"Invalid request: {msg}"


def register_error_handlers(app: FastAPI) -> None:
    """Make every error response, including the framework's own, an error object."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=_error_body(_validation_message(exc)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))
