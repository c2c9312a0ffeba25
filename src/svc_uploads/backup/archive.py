from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from svc_uploads.exceptions import InternalFailure
from svc_uploads.storage.local import LocalStorage

logger = logging.getLogger(__name__)

COMPRESSION = zipfile.ZIP_DEFLATED
COMPRESS_LEVEL = 9


def write_archive(storage: LocalStorage, destination: Path) -> int:
    """
    Zip every file under the storage root into ``destination``.

    Entry names are relative to the storage root. A missing root yields an
    empty archive. On failure the partial archive is removed and
    ``InternalFailure`` is raised. Returns the number of files written.
    """
    destination = Path(destination)
    count = 0
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        # strict_timestamps=False clamps pre-1980 mtimes instead of failing
        with zipfile.ZipFile(
            destination,
            "w",
            compression=COMPRESSION,
            compresslevel=COMPRESS_LEVEL,
            strict_timestamps=False,
        ) as zf:
            for path, arcname in storage.iter_files():
                zf.write(path, arcname)
                count += 1
    except Exception as exc:
        logger.error("Error creating backup at %s", destination, exc_info=True)
        remove_archive(destination)
        raise InternalFailure("Error creating backup.") from exc
    logger.info("Backup archive %s created with %d files", destination, count)
    return count


async def build_archive(storage: LocalStorage, destination: Path) -> int:
    # zipfile is blocking; keep it off the event loop
    return await run_in_threadpool(write_archive, storage, destination)


def remove_archive(path: Path) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("Could not remove transient archive %s", path, exc_info=True)
