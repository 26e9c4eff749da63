"""
Exceptions raised by the Zencoder client.

Exception hierarchy:
    ZencoderError (base)
    ├── ConfigurationError
    ├── TransportError
    ├── ServiceError
    └── DecodeError
"""

from typing import Any, Dict, Optional


class ZencoderError(Exception):
    """
    Base exception for all client errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class ConfigurationError(ZencoderError):
    """Raised when the client is missing or given invalid configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


class TransportError(ZencoderError):
    """
    Raised when the request could not be delivered.

    Covers DNS failures, refused connections and connect timeouts.
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if original_error:
            error_details["original_error"] = str(original_error)
            error_details["original_error_type"] = type(original_error).__name__

        super().__init__(message, "TRANSPORT_ERROR", error_details)
        self.original_error = original_error


class ServiceError(ZencoderError):
    """Raised when the service answers with an HTTP status of 400 or above."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Zencoder API returned HTTP {status_code}: {body}",
            "SERVICE_ERROR",
            {"status_code": status_code, "body": body}
        )


class DecodeError(ZencoderError):
    """Raised when a successful response body cannot be decoded."""

    def __init__(self, message: str, body: str, content_type: str):
        self.body = body
        self.content_type = content_type
        super().__init__(
            message,
            "DECODE_ERROR",
            {"content_type": content_type, "body": body[:500]}
        )
