"""
Errors

Standard error taxonomy for httpc.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across httpc."""

    # Option application
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"

    # Request construction & transport
    REQUEST_CONSTRUCTION_ERROR = "REQUEST_CONSTRUCTION_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CANCELLED = "CANCELLED"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"

    # Response handling
    HTTP_STATUS_ERROR = "HTTP_STATUS_ERROR"
    DECODE_ERROR = "DECODE_ERROR"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class HttpcError(BaseModel):
    """
    Error model for structured error communication.

    Used when an error has to be reported as data (CLI JSON output, logs)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.TRANSPORT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HttpcException":
        """Convert this error model to a raised exception."""
        return HttpcException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HttpcException(Exception):
    """
    Base exception for all httpc errors.

    Carries structured error information and can be converted to an
    HttpcError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HTTPC_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HttpcError:
        """Convert this exception to an HttpcError model."""
        return HttpcError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class SerializationException(HttpcException):
    """Raised when a request body cannot be serialized."""

    def __init__(
        self,
        message: str,
        format: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if format:
            full_details["format"] = format
        super().__init__(
            message=message,
            code=ErrorCodes.SERIALIZATION_ERROR,
            details=full_details,
            retryable=False,
        )


class RequestConstructionException(HttpcException):
    """Raised when the method or URL cannot form a request."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if method is not None:
            full_details["method"] = method
        if url is not None:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=ErrorCodes.REQUEST_CONSTRUCTION_ERROR,
            details=full_details,
            retryable=False,
        )


class TransportException(HttpcException):
    """Raised when the request could not be carried out by the transport."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.TRANSPORT_ERROR,
        retryable: bool = True,
    ) -> None:
        full_details = details or {}
        if url is not None:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=retryable,
        )


class CancelledException(TransportException):
    """Raised when the calling context was cancelled."""

    def __init__(
        self,
        message: str = "context canceled",
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            url=url,
            details=details,
            code=ErrorCodes.CANCELLED,
            retryable=False,
        )


class DeadlineExceededException(TransportException):
    """Raised when the calling context's deadline passed."""

    def __init__(
        self,
        message: str = "context deadline exceeded",
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            url=url,
            details=details,
            code=ErrorCodes.DEADLINE_EXCEEDED,
            retryable=True,
        )


class StatusException(HttpcException):
    """
    Raised when a response does not carry status 200.

    The message is the status line, e.g. "404 Not Found".
    """

    def __init__(
        self,
        status_code: int,
        reason: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.status = status_text(status_code, reason)
        full_details = details or {}
        full_details["status_code"] = status_code
        if url is not None:
            full_details["url"] = url
        super().__init__(
            message=self.status,
            code=ErrorCodes.HTTP_STATUS_ERROR,
            details=full_details,
            retryable=status_code >= 500,
        )


class DecodeException(HttpcException):
    """Raised when a response body cannot be decoded."""

    def __init__(
        self,
        message: str,
        format: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if format:
            full_details["format"] = format
        super().__init__(
            message=message,
            code=ErrorCodes.DECODE_ERROR,
            details=full_details,
            retryable=False,
        )


class ConfigException(HttpcException):
    """Raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )


def status_text(status_code: int, reason: str | None = None) -> str:
    """Format a status line such as "404 Not Found"."""
    if not reason:
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = ""
    return f"{status_code} {reason}".rstrip()
