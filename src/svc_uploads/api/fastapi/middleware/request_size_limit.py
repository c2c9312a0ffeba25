from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from svc_uploads.api.fastapi.middleware.errors.handlers import response_for
from svc_uploads.exceptions import FileTooLarge


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies by declared Content-Length before they are read."""

    def __init__(self, app, max_bytes: int = 5 * 1024 * 1024 + 64 * 1024, limit_hint: int | None = None):
        super().__init__(app)
        self.max_bytes = max_bytes
        # the file limit reported back to the client
        self.limit_hint = limit_hint

    async def dispatch(self, request, call_next):
        length = request.headers.get("content-length")
        try:
            size = int(length) if length is not None else None
        except ValueError:
            size = None
        if size is not None and size > self.max_bytes:
            return response_for(FileTooLarge(self.limit_hint))
        return await call_next(request)
