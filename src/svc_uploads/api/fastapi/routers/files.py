from __future__ import annotations

import mimetypes

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from svc_uploads.api.fastapi.dependencies.services import get_storage
from svc_uploads.storage.local import LocalStorage

# not in every platform's mime table
mimetypes.add_type("image/jpeg", ".jfif")
mimetypes.add_type("image/webp", ".webp")

router = APIRouter()
ROUTER_TAG = "Files"


@router.get("/uploads/{file_path:path}")
async def serve_upload(
    file_path: str,
    storage: LocalStorage = Depends(get_storage),
) -> FileResponse:
    """Stream a stored file back by its public path.

    Example:
        ```bash
        curl http://localhost:3369/uploads/acme/products/42/2024/05/1715600000000-123456789.png -o logo.png
        ```
    """
    path = await storage.open_file(file_path)
    return FileResponse(path)
