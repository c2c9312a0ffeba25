from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from starlette.types import Receive, Scope, Send

from svc_uploads.api.fastapi.dependencies.services import get_settings, get_storage
from svc_uploads.app.settings import UploadSettings
from svc_uploads.backup.archive import build_archive, remove_archive
from svc_uploads.storage.local import LocalStorage

logger = logging.getLogger(__name__)

router = APIRouter()
ROUTER_TAG = "Backup"

ARCHIVE_NAME = "backup.zip"


class TransientFileResponse(FileResponse):
    """FileResponse that deletes its file once sending ends, successfully or not."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            remove_archive(self.path)
            logger.debug("Removed transient archive %s", self.path)


@router.get("/backup")
async def download_backup(
    settings: UploadSettings = Depends(get_settings),
    storage: LocalStorage = Depends(get_storage),
) -> TransientFileResponse:
    """Download every stored file as one zip archive.

    Example:
        ```bash
        curl http://localhost:3369/backup -o backup.zip
        ```
    """
    destination = settings.backup_path
    await build_archive(storage, destination)
    return TransientFileResponse(destination, filename=ARCHIVE_NAME, media_type="application/zip")
