from __future__ import annotations

from typing import Optional

import typer

from svc_uploads.app.core.logging import setup_logging
from svc_uploads.app.settings import get_upload_settings


def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address; defaults to UPLOADS_HOST."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port; defaults to UPLOADS_PORT (3369)."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes (development only)."),
):
    """Run the upload service with uvicorn."""
    import uvicorn  # lazy: backup-only invocations don't need the server

    settings = get_upload_settings()
    setup_logging()
    uvicorn.run(
        "svc_uploads.api.fastapi:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,  # keep the dictConfig from setup_logging
    )


def register(app_root: typer.Typer) -> None:
    app_root.command("serve")(serve)
