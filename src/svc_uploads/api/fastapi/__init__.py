from __future__ import annotations

import logging
from collections import defaultdict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from svc_uploads.api.fastapi.dependencies.auth import BearerTokenGate
from svc_uploads.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from svc_uploads.api.fastapi.middleware.errors.handlers import register_error_handlers
from svc_uploads.api.fastapi.middleware.request_size_limit import RequestSizeLimitMiddleware
from svc_uploads.api.fastapi.middleware.upload_auth import UploadAuthMiddleware
from svc_uploads.api.fastapi.routers import register_all_routers
from svc_uploads.app.core.env import get_env, pick
from svc_uploads.app.settings import AppSettings, UploadSettings, get_app_settings, get_upload_settings
from svc_uploads.storage.local import LocalStorage
from svc_uploads.uploads.service import UploadService

logger = logging.getLogger(__name__)


def _gen_operation_id_factory():
    used: dict[str, int] = defaultdict(int)

    def _gen(route: APIRoute) -> str:
        base = route.name or getattr(route.endpoint, "__name__", "op")
        candidate = base
        if used[candidate]:
            method = next(iter(route.methods or ["GET"])).lower()
            candidate = f"{base}_{method}"
            if used[candidate]:
                candidate = f"{candidate}_{used[candidate] + 1}"
        used[candidate] += 1
        return candidate

    return _gen


def create_app(
        settings: UploadSettings | None = None,
        app_config: AppSettings | None = None,
) -> FastAPI:
    """Build the upload service: storage, auth gate, middleware and routes."""
    settings = settings or get_upload_settings()
    app_settings = app_config or get_app_settings()

    app = FastAPI(
        title=app_settings.name,
        version=app_settings.version,
        generate_unique_id_function=_gen_operation_id_factory(),
        docs_url=pick(prod=None, nonprod="/docs"),
        redoc_url=pick(prod=None, nonprod="/redoc"),
    )

    storage = LocalStorage(settings.storage_root)
    app.state.settings = settings
    app.state.storage = storage
    app.state.token_gate = BearerTokenGate(settings.api_secret_token)
    app.state.upload_service = UploadService(
        storage,
        allowed_types=settings.allowed_types,
        max_bytes=settings.max_upload_bytes,
    )
    if settings.api_secret_token is None:
        logger.warning("API_SECRET_TOKEN is not set; every upload will be rejected")

    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_request_bytes,
        limit_hint=settings.max_upload_bytes,
    )
    # added after the size guard so it runs first
    app.add_middleware(UploadAuthMiddleware, gate=app.state.token_gate)

    # CORS
    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handling
    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    register_all_routers(app)

    logger.info(
        f"{app_settings.version} version of {app_settings.name} initialized "
        f"[env: {get_env()}, storage: {settings.storage_root}]"
    )
    return app


__all__ = ["create_app"]
