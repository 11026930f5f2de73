"""
Application exceptions and their HTTP rendering
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreNotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, slug: str):
        super().__init__("Store not found", {"slug": slug})


class InternalServerError(AppError):
    def __init__(self, context: Optional[Dict[str, Any]] = None):
        # Internals never leak to the client
        super().__init__("Internal server error", context)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
