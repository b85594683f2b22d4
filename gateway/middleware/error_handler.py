# gateway/middleware/error_handler.py
# Renders every failure as {"error": {"code", "message", ...}}

import traceback
import logging
from typing import Callable
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from gateway.exceptions import AppError
from gateway.utils.logger import log_exception

logger = logging.getLogger(__name__)


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    details: dict = None,
    request_id: str = None
) -> JSONResponse:
    content = {"error": {"code": error_code, "message": message}}
    if details:
        content["error"]["details"] = details
    if request_id:
        content["error"]["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence: unhandled exceptions become a 500 envelope.

    The traceback is included in the response only in debug mode.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID", str(id(request)))
        try:
            return await call_next(request)
        except Exception as e:
            details = None
            if self.debug:
                details = {"type": type(e).__name__, "traceback": traceback.format_exc()}

            log_exception(e, context=f"Unhandled error on {request.url.path}")
            logger.error(
                f"Unhandled exception: {type(e).__name__}: {e}",
                extra={"request_id": request_id, "path": request.url.path},
            )
            return create_error_response(
                error_code="INTERNAL_ERROR",
                message="An internal error occurred. Please try again later.",
                status_code=500,
                details=details,
                request_id=request_id
            )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for errors raised on purpose by routes and dependencies."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning(
            f"AppError: {exc.error_code} - {exc.message}",
            extra={"path": request.url.path}
        )
        return create_error_response(exc.error_code, exc.message, exc.status_code, exc.details)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return create_error_response("HTTP_ERROR", str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return create_error_response(
            "VALIDATION_ERROR", "Request validation failed", 422, {"errors": errors}
        )
