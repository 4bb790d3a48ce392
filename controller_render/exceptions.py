"""Custom exceptions for controller rendering with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    RENDER_ERROR = "RENDER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Lookup errors
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # Content negotiation errors
    NOT_ACCEPTABLE = "NOT_ACCEPTABLE"

    # Usage errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


class RenderException(Exception):
    """Base exception for rendering errors with HTTP status code support.

    All custom exceptions should inherit from this class so the web layer
    can map them to structured error responses.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RENDER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize render exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class TemplateNotFoundException(RenderException):
    """No template or layout exists at a required path."""

    def __init__(self, message: str, paths: list[str] | None = None, details: dict[str, Any] | None = None):
        details = dict(details or {})
        details["paths"] = list(paths or [])
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            status_code=500,
            details=details,
        )

    @property
    def paths(self) -> list[str]:
        """Paths that were tried."""
        return self.details["paths"]


class NotAcceptableException(RenderException):
    """The negotiated content type cannot be produced."""

    def __init__(
        self,
        message: str = "Not acceptable",
        content_type: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        details["content_type"] = content_type
        super().__init__(
            message,
            code=ErrorCode.NOT_ACCEPTABLE,
            status_code=406,
            details=details,
        )


class InvalidArgumentException(RenderException, ValueError):
    """A rendering helper was called incorrectly."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.INVALID_ARGUMENT,
            status_code=500,
            details=details,
        )


class ConfigurationException(RenderException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
