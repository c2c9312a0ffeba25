from __future__ import annotations

from fastapi import Request

from svc_uploads.app.settings import UploadSettings
from svc_uploads.storage.local import LocalStorage
from svc_uploads.uploads.service import UploadService


def get_settings(request: Request) -> UploadSettings:
    return request.app.state.settings


def get_storage(request: Request) -> LocalStorage:
    return request.app.state.storage


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
