from __future__ import annotations

import errno
import logging
import os
import stat as stat_mod
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import AsyncIterator, Iterator

import aiofiles
import aiofiles.os

from starlette.concurrency import run_in_threadpool

from svc_uploads.exceptions import FileTooLarge, InternalFailure, InvalidParameter, NotFound
from svc_uploads.storage.paths import (
    TenantKey,
    ensure_directory,
    generate_filename,
    public_url,
    tenant_directory,
)

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

_MISSING_ERRNOS = {errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG}


@dataclass(frozen=True)
class StoredFile:
    path: Path
    name: str
    url: str
    size: int


class LocalStorage:
    """Filesystem-backed storage rooted at a single directory.

    Holds no index of what exists; every lookup goes back to the disk.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    @property
    def resolved_root(self) -> Path:
        return self.root.resolve()

    async def save(
        self,
        tenant: TenantKey,
        original_name: str,
        chunks: AsyncIterator[bytes],
        *,
        today: date,
        max_bytes: int,
    ) -> StoredFile:
        directory = tenant_directory(self.root, tenant, today)
        if not await run_in_threadpool(self._is_inside_root, directory):
            raise InvalidParameter()
        await ensure_directory(directory)
        name = generate_filename(original_name)
        target = directory / name
        size = await self._write(target, chunks, max_bytes)
        return StoredFile(path=target, name=name, url=public_url(tenant, today, name), size=size)

    async def _write(self, target: Path, chunks: AsyncIterator[bytes], max_bytes: int) -> int:
        written = 0
        try:
            async with aiofiles.open(target, "xb") as out:
                async for chunk in chunks:
                    written += len(chunk)
                    if written > max_bytes:
                        raise FileTooLarge(max_bytes)
                    await out.write(chunk)
        except BaseException:
            await self._discard(target)
            raise
        return written

    async def _discard(self, target: Path) -> None:
        try:
            await aiofiles.os.remove(target)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove partial upload %s", target, exc_info=True)

    def _is_inside_root(self, path: Path) -> bool:
        root = self.resolved_root
        candidate = Path(path).resolve()
        return candidate == root or root in candidate.parents

    def resolve(self, relative: str) -> Path:
        """Map a public sub-path to a disk path inside the storage root."""
        try:
            candidate = (self.resolved_root / relative.lstrip("/")).resolve()
        except ValueError as exc:
            # embedded NUL and similar unrepresentable paths
            raise NotFound() from exc
        if not self._is_inside_root(candidate):
            raise NotFound()
        return candidate

    async def open_file(self, relative: str) -> Path:
        """Resolve ``relative`` and make sure it names a regular file."""
        path = await run_in_threadpool(self.resolve, relative)
        try:
            st = await aiofiles.os.stat(path)
        except ValueError as exc:
            raise NotFound() from exc
        except OSError as exc:
            if exc.errno in _MISSING_ERRNOS:
                raise NotFound() from exc
            logger.error("Error checking %s", path, exc_info=True)
            raise InternalFailure("Error accessing the file.") from exc
        if not stat_mod.S_ISREG(st.st_mode):
            raise NotFound()
        return path

    def iter_files(self) -> Iterator[tuple[Path, str]]:
        """Yield ``(disk_path, archive_name)`` for every file under the root."""
        if not self.root.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                yield path, path.relative_to(self.root).as_posix()
