"""Storage path convention for tenant uploads.

Every stored file lives at::

    {root}/{company}/{entity}/{entity_id}/{YYYY}/{MM}/{millis}-{random}{ext}

and is published as the same relative path under ``/uploads/``. Two uploads
for the same tenant in the same calendar month share a directory; names inside
it are kept apart by the timestamp and random suffix, not by a collision check.
"""

from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path, PurePosixPath

import aiofiles.os

from svc_uploads.exceptions import InvalidParameter, MissingParameter

PUBLIC_PREFIX = "/uploads"

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def is_safe_segment(value: str) -> bool:
    return value not in (".", "..") and not any(ch in value for ch in _FORBIDDEN_CHARS)


@dataclass(frozen=True)
class TenantKey:
    company_name: str
    entity: str
    entity_id: str

    @property
    def parts(self) -> tuple[str, str, str]:
        return (self.company_name, self.entity, self.entity_id)

    def missing(self) -> list[str]:
        names = ("companyName", "entity", "entityId")
        return [name for name, value in zip(names, self.parts) if not value or not value.strip()]

    def unsafe(self) -> list[str]:
        # each component must stay a single directory level
        names = ("companyName", "entity", "entityId")
        return [name for name, value in zip(names, self.parts) if not is_safe_segment(value)]

    def require(self) -> "TenantKey":
        missing = self.missing()
        if missing:
            raise MissingParameter(missing)
        unsafe = self.unsafe()
        if unsafe:
            raise InvalidParameter(unsafe)
        return self

    def __str__(self) -> str:
        return "/".join(self.parts)


def month_parts(today: date) -> tuple[str, str]:
    return f"{today.year:04d}", f"{today.month:02d}"


def relative_directory(tenant: TenantKey, today: date) -> PurePosixPath:
    year, month = month_parts(today)
    return PurePosixPath(*tenant.parts, year, month)


def tenant_directory(root: Path, tenant: TenantKey, today: date) -> Path:
    """Disk directory for ``tenant`` uploads made in ``today``'s month."""
    return Path(root).joinpath(*relative_directory(tenant, today).parts)


async def ensure_directory(path: Path) -> Path:
    # exist_ok keeps concurrent first uploads for a tenant from racing
    await aiofiles.os.makedirs(path, exist_ok=True)
    return path


def generate_filename(original_name: str, now: float | None = None) -> str:
    """``{epoch_millis}-{random}{ext}``, keeping the original extension as given."""
    millis = int((time.time() if now is None else now) * 1000)
    suffix = round(random.random() * 1e9)
    return f"{millis}-{suffix}{extension_of(original_name)}"


def extension_of(filename: str) -> str:
    # os.path.splitext treats dotfiles (".png") as extensionless
    return os.path.splitext(PurePosixPath(filename or "").name)[1]


def public_url(tenant: TenantKey, today: date, filename: str) -> str:
    return f"{PUBLIC_PREFIX}/{relative_directory(tenant, today)}/{filename}"
