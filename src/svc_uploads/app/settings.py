from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_TYPES: tuple[str, ...] = ("png", "jpg", "jpeg", "svg", "webp", "pdf", "jfif")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "File Upload Service"
    version: str = "0.1.0"

    model_config = SettingsConfigDict(
        env_prefix="APP_",  # APP_NAME, APP_VERSION
        env_file=".env",
        extra="ignore",
    )


class UploadSettings(BaseSettings):
    # Shared secret for the upload route; read as API_SECRET_TOKEN
    api_secret_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("API_SECRET_TOKEN", "UPLOADS_API_SECRET_TOKEN", "api_secret_token"),
    )

    storage_root: Path = Path("uploads")
    backup_path: Path | None = None

    max_upload_bytes: int = MAX_UPLOAD_BYTES
    # slack for multipart boundaries and headers on top of the file itself
    request_overhead_bytes: int = 64 * 1024
    allowed_types: tuple[str, ...] = DEFAULT_ALLOWED_TYPES

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    host: str = "0.0.0.0"
    port: int = 3369

    model_config = SettingsConfigDict(
        env_prefix="UPLOADS_",  # UPLOADS_STORAGE_ROOT, UPLOADS_PORT, ...
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _default_backup_path(self) -> "UploadSettings":
        # The archive must live outside the tree it archives
        if self.backup_path is None:
            self.backup_path = self.storage_root.parent / "backup.zip"
        return self

    @property
    def max_request_bytes(self) -> int:
        return self.max_upload_bytes + self.request_overhead_bytes


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)


@lru_cache
def get_upload_settings() -> UploadSettings:
    return UploadSettings()
