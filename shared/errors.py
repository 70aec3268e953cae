"""
Shared error handling for the Fetch Cache services.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class FetchCacheException(Exception):
    """Base exception for Fetch Cache components."""

    status_code: int = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(FetchCacheException):
    """Validation-related errors."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class UpstreamFailure(FetchCacheException):
    """A retrieval operation behind a cache failed."""

    status_code = 502

    def __init__(self, source: str, message: str = "Upstream fetch failed", details: Optional[Dict[str, Any]] = None):
        self.source = source
        super().__init__("UPSTREAM_FAILURE", f"{source}: {message}", details)
