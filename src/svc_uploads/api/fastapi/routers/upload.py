from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from svc_uploads.api.fastapi.dependencies.auth import require_upload_token
from svc_uploads.api.fastapi.dependencies.services import get_upload_service
from svc_uploads.storage.paths import TenantKey
from svc_uploads.uploads.service import UploadService

router = APIRouter()
ROUTER_TAG = "Uploads"


class UploadResponse(BaseModel):
    """Response from a successful upload."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Upload completed successfully!"
    image_url: str = Field(..., serialization_alias="imageUrl")


@router.post(
    "/upload/{company_name}/{entity}/{entity_id}",
    response_model=UploadResponse,
    dependencies=[Depends(require_upload_token)],
)
async def upload_image(
    company_name: str,
    entity: str,
    entity_id: str,
    image: UploadFile | None = File(None),
    service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Store one image or document for a tenant.

    Example:
        ```bash
        curl -X POST http://localhost:3369/upload/acme/products/42 \\
          -H "Authorization: Bearer $API_SECRET_TOKEN" \\
          -F "image=@logo.png"
        ```
    """
    tenant = TenantKey(company_name=company_name, entity=entity, entity_id=entity_id)
    stored = await service.store(tenant, image)
    return UploadResponse(image_url=stored.url)
