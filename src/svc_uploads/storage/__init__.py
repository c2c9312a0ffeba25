from .local import LocalStorage, StoredFile
from .paths import (
    PUBLIC_PREFIX,
    TenantKey,
    ensure_directory,
    generate_filename,
    public_url,
    tenant_directory,
)

__all__ = [
    "LocalStorage",
    "StoredFile",
    "TenantKey",
    "PUBLIC_PREFIX",
    "ensure_directory",
    "generate_filename",
    "public_url",
    "tenant_directory",
]
