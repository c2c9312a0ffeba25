from .service import UploadService, is_allowed_type

__all__ = ["UploadService", "is_allowed_type"]
