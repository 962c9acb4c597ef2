"""Error hierarchy: everything the facade and its collaborators raise on purpose."""
from __future__ import annotations

from typing import Any


class FacetError(Exception):
    """Base error: code + HTTP status, so callers can turn it into a response."""

    def __init__(self, message: str, code: str, http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict[str, Any]:
        """Standard error envelope: {"error": {"code": ..., "message": ...}}."""
        return {"error": {"code": self.code, "message": self.message}}


class NotFoundException(FacetError):
    """Parameter, uploaded file or target directory is absent."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message, "NOT_FOUND", 404)


class InvalidFileTypeException(FacetError):
    """Uploaded file content type is not in the allowed list."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"file type {content_type!r} is not allowed", "INVALID_FILE_TYPE", 415)
        self.content_type = content_type


class ValidationConfigError(FacetError):
    """Validation rule table has the wrong shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "VALIDATION_CONFIG", 500)


class BadRequestException(FacetError):
    """Request body cannot be parsed as its declared form content type."""

    def __init__(self, message: str = "malformed request body") -> None:
        super().__init__(message, "BAD_REQUEST", 400)
