from __future__ import annotations

import hmac

from fastapi import Request
from pydantic import SecretStr

from svc_uploads.exceptions import AuthFailure


class BearerTokenGate:
    """Accept only ``Authorization: Bearer <secret>`` for one shared secret.

    The secret is fixed when the gate is built. With no secret every request
    is rejected.
    """

    def __init__(self, secret: SecretStr | str | None):
        if isinstance(secret, SecretStr):
            secret = secret.get_secret_value()
        self._expected = f"Bearer {secret}".encode() if secret else None

    def check(self, authorization: str | None) -> None:
        if self._expected is None or authorization is None:
            raise AuthFailure()
        if not hmac.compare_digest(authorization.encode(), self._expected):
            raise AuthFailure()

    async def __call__(self, request: Request) -> None:
        self.check(request.headers.get("authorization"))


async def require_upload_token(request: Request) -> None:
    gate: BearerTokenGate = request.app.state.token_gate
    await gate(request)


__all__ = ["BearerTokenGate", "require_upload_token"]
