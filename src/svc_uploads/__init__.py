from . import api, app

from .exceptions import (
    AuthFailure,
    FileTooLarge,
    InternalFailure,
    InvalidFileType,
    MissingFile,
    MissingParameter,
    NotFound,
    SvcUploadsError,
    ValidationFailure,
)

__all__ = [
    # Modules
    "app",
    "api",
    # Exceptions
    "SvcUploadsError",
    "AuthFailure",
    "ValidationFailure",
    "MissingFile",
    "MissingParameter",
    "InvalidFileType",
    "FileTooLarge",
    "NotFound",
    "InternalFailure",
]
