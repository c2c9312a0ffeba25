"""Shared constants and helpers for svc-uploads tests."""

from __future__ import annotations

import io
from pathlib import Path

from fastapi import UploadFile
from starlette.datastructures import Headers

SECRET = "test-secret-token"
AUTH_HEADERS = {"Authorization": f"Bearer {SECRET}"}

# Smallest valid PNG: signature + IHDR + IDAT + IEND
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d00000000"
    "49454e44ae426082"
)


def stored_files(root: Path) -> list[Path]:
    """Every regular file currently under ``root``."""
    if not root.exists():
        return []
    return sorted(p for p in root.rglob("*") if p.is_file())


def image_part(name: str = "logo.png", data: bytes = PNG_BYTES, content_type: str = "image/png"):
    return {"image": (name, data, content_type)}


def make_upload(
    name: str = "logo.png",
    data: bytes = PNG_BYTES,
    content_type: str | None = "image/png",
    *,
    declare_size: bool = True,
) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(
        file=io.BytesIO(data),
        filename=name,
        size=len(data) if declare_size else None,
        headers=headers,
    )
