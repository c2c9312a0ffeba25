from __future__ import annotations


class SvcUploadsError(Exception):
    """Base error for svc-uploads. Each subclass maps to one HTTP status."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Unexpected error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthFailure(SvcUploadsError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Invalid or missing token."


class ValidationFailure(SvcUploadsError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request."


class MissingFile(ValidationFailure):
    code = "MISSING_FILE"
    default_message = "No image was uploaded."


class MissingParameter(ValidationFailure):
    code = "MISSING_PARAMETER"
    default_message = "Missing parameter."

    def __init__(self, names: list[str] | None = None):
        self.names = list(names or [])
        message = self.default_message
        if self.names:
            message = f"Missing parameter: {', '.join(self.names)}."
        super().__init__(message)


class InvalidParameter(ValidationFailure):
    code = "INVALID_PARAMETER"
    default_message = "Invalid parameter."

    def __init__(self, names: list[str] | None = None):
        self.names = list(names or [])
        message = self.default_message
        if self.names:
            message = f"Invalid parameter: {', '.join(self.names)}."
        super().__init__(message)


class InvalidFileType(ValidationFailure):
    code = "INVALID_FILE_TYPE"
    default_message = "Invalid file type."


class FileTooLarge(ValidationFailure):
    code = "FILE_TOO_LARGE"
    default_message = "File too large."

    def __init__(self, limit: int | None = None):
        self.limit = limit
        message = self.default_message
        if limit is not None:
            message = f"File too large (limit {limit} bytes)."
        super().__init__(message)


class NotFound(SvcUploadsError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "File not found."


class InternalFailure(SvcUploadsError):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal error."


__all__ = [
    "SvcUploadsError",
    "AuthFailure",
    "ValidationFailure",
    "MissingFile",
    "MissingParameter",
    "InvalidParameter",
    "InvalidFileType",
    "FileTooLarge",
    "NotFound",
    "InternalFailure",
]
