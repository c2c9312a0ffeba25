from __future__ import annotations

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from svc_uploads.api.fastapi.dependencies.auth import BearerTokenGate
from svc_uploads.api.fastapi.middleware.errors.handlers import response_for
from svc_uploads.exceptions import AuthFailure


class UploadAuthMiddleware:
    """
    Checks the bearer token on upload requests before any of the body is read.
    Sits outside the size guard so an unauthenticated caller always gets 401.
    """

    def __init__(self, app: ASGIApp, gate: BearerTokenGate, prefix: str = "/upload/") -> None:
        self.app = app
        self.gate = gate
        self.prefix = prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope.get("type") != "http"
            or scope.get("method") != "POST"
            or not scope.get("path", "").startswith(self.prefix)
        ):
            await self.app(scope, receive, send)
            return

        try:
            self.gate.check(Headers(scope=scope).get("authorization"))
        except AuthFailure as exc:
            await response_for(exc)(scope, receive, send)
            return
        await self.app(scope, receive, send)
