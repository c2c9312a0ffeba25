from __future__ import annotations

import logging
from datetime import datetime
from typing import AsyncIterator, Callable, Iterable

from fastapi import UploadFile

from svc_uploads.exceptions import FileTooLarge, InvalidFileType, MissingFile
from svc_uploads.storage.local import CHUNK_SIZE, LocalStorage, StoredFile
from svc_uploads.storage.paths import TenantKey, extension_of

logger = logging.getLogger(__name__)


def is_allowed_type(filename: str, content_type: str | None, allowed: Iterable[str]) -> bool:
    """Both the extension and the content type must name an allowed type.

    The extension must match exactly (case-insensitive). The content type only
    has to contain an allowed token, so ``image/svg+xml`` and
    ``application/pdf`` pass.
    """
    allowed = {t.lower() for t in allowed}
    extension = extension_of(filename).lower().lstrip(".")
    mime = (content_type or "").lower()
    return extension in allowed and any(token in mime for token in allowed)


async def iter_upload(upload: UploadFile, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    while chunk := await upload.read(chunk_size):
        yield chunk


class UploadService:
    def __init__(
        self,
        storage: LocalStorage,
        *,
        allowed_types: Iterable[str],
        max_bytes: int,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.allowed_types = tuple(allowed_types)
        self.max_bytes = max_bytes
        self.clock = clock

    def validate(self, tenant: TenantKey, upload: UploadFile | None) -> UploadFile:
        if upload is None:
            raise MissingFile()
        tenant.require()
        filename = upload.filename or ""
        if not is_allowed_type(filename, upload.content_type, self.allowed_types):
            raise InvalidFileType()
        # size is known once the multipart parser has spooled the part
        if upload.size is not None and upload.size > self.max_bytes:
            raise FileTooLarge(self.max_bytes)
        return upload

    async def store(self, tenant: TenantKey, upload: UploadFile | None) -> StoredFile:
        try:
            upload = self.validate(tenant, upload)
        except (InvalidFileType, FileTooLarge) as exc:
            logger.info("Rejected upload for %s: %s", tenant, exc.message, extra={"tenant": str(tenant)})
            raise

        await upload.seek(0)
        stored = await self.storage.save(
            tenant,
            upload.filename or "",
            iter_upload(upload),
            today=self.clock().date(),
            max_bytes=self.max_bytes,
        )
        logger.info(
            "Stored upload %s (%d bytes)",
            stored.url,
            stored.size,
            extra={"tenant": str(tenant), "path": stored.url, "size": stored.size},
        )
        return stored
