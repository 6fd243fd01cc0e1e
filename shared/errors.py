"""
Shared error handling for the pickup catalog client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error payload format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class CatalogError(Exception):
    """Base exception for the catalog client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error payload."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class FetchError(CatalogError):
    """Catalog download or decoding failed."""

    def __init__(
        self,
        url: str,
        message: str = "Catalog fetch failed",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.url = url
        self.status_code = status_code
        merged = {"url": url}
        if status_code is not None:
            merged["status_code"] = status_code
        merged.update(details or {})
        super().__init__("FETCH_ERROR", message, merged)


class ConfigurationError(CatalogError):
    """Invalid client configuration."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
