"""Map domain failures to HTTP responses.

Protean's handlers cover ``ValidationError`` (400) and
``ObjectNotFoundError`` (404). Ownership failures become 403, and anything
else is logged and returned as an opaque 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import PermissionDeniedError

logger = structlog.get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
        logger.info(
            "Permission denied",
            method=request.method,
            path=request.url.path,
            messages=exc.messages,
        )
        return JSONResponse(status_code=403, content={"error": exc.messages})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error while processing request",
            method=request.method,
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
