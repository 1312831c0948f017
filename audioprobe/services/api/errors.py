# audioprobe/services/api/errors.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from audioprobe.common.logging import get_logger
from audioprobe.services.api.responses import error_response

logger = get_logger()


def install_error_handlers(app: FastAPI) -> None:
    """Route framework-level failures through the same JSON error envelope as the analyze endpoint."""

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        msgs = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
        )
        return error_response(f"Invalid request: {msgs}", HTTPStatus.BAD_REQUEST)

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response("Internal server error.", HTTPStatus.INTERNAL_SERVER_ERROR)
