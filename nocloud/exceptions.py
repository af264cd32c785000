"""Custom exception hierarchy for the NoCloud client."""

from __future__ import annotations

from typing import Any


class NoCloudError(Exception):
    """Base exception for all NoCloud-specific errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(NoCloudError):
    """Raised when configuration is invalid or missing."""
    pass


class NoCloudAPIError(NoCloudError):
    """Raised when a NoCloud API call fails.

    ``status`` mirrors an HTTP status code, either the one returned by the
    server or the one the failure maps to client-side.
    """

    def __init__(self, message: str, status: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.status = status


class UnsupportedBodyTypeError(NoCloudAPIError):
    """Raised when an upload body is not a Blob, a byte buffer or a string."""

    def __init__(self, body_type: str) -> None:
        super().__init__("Unsupported body type", 400, {"body_type": body_type})


class NoCloudResourceIsNotFound(NoCloudError):
    """Raised when the signing capability is not installed on the server."""

    def __init__(self, status: int | None = None) -> None:
        super().__init__("nocloud is not available on the server", {"status": status})
        self.status = status


class Base64DecodeError(NoCloudError, ValueError):
    """Raised when a detected base64 payload cannot be decoded."""
    pass


__all__ = [
    "NoCloudError",
    "ConfigurationError",
    "NoCloudAPIError",
    "UnsupportedBodyTypeError",
    "NoCloudResourceIsNotFound",
    "Base64DecodeError",
]
