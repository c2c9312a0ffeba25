from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from svc_uploads.exceptions import SvcUploadsError

logger = logging.getLogger(__name__)


def error_response(*, status: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"success": False, "error": message, "code": code},
    )


def response_for(exc: SvcUploadsError) -> JSONResponse:
    return error_response(status=exc.status_code, message=exc.message, code=exc.code)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SvcUploadsError)
    async def _svc_uploads_error(request: Request, exc: SvcUploadsError):
        if exc.status_code >= 500:
            logger.error(
                "%s on %s (%d): %s",
                type(exc).__name__,
                request.url.path,
                exc.status_code,
                exc.message,
                extra={"path": request.url.path, "status_code": exc.status_code},
            )
        else:
            logger.debug(
                "%s on %s (%d): %s",
                type(exc).__name__,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return response_for(exc)
