"""
Cognito IDP Error Model

This module provides the error handling framework for the Cognito IDP client,
covering transport failures, error replies from the service, malformed page
responses and rejected operation options.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Client error codes."""

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Network errors (200-299)
    NETWORK_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    THROTTLED = 203
    SERVICE_UNAVAILABLE = 204

    # Service errors (300-399)
    SERVICE_ERROR = 300
    NOT_AUTHORIZED = 301
    RESOURCE_NOT_FOUND = 302
    INVALID_PARAMETER = 303

    # Client-side contract errors (400-499)
    PROTOCOL_VIOLATION = 400
    INVALID_OPTIONS = 401
    NOT_PAGINATED = 402


class CognitoIdpError(Exception):
    """
    Base class for all Cognito IDP client errors.

    Carries a message, an error code, free-form details and the underlying
    exception, if any.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class TransportError(CognitoIdpError):
    """Failures raised while talking to the service endpoint."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class ConnectionFailedError(TransportError):
    """Connection failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.CONNECTION_FAILED


class RequestTimeoutError(TransportError):
    """Request timeouts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class ServiceError(CognitoIdpError):
    """
    Error reply returned by the service.

    ``error_type`` is the exception name from the ``__type`` field of the
    reply (for example ``UserNotFoundException``), ``status`` the HTTP status.
    """

    def __init__(self, message: str, error_type: str = "", status: Optional[int] = None,
                 code: ErrorCode = ErrorCode.SERVICE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)
        self.error_type = error_type
        self.status = status

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.error_type:
            result["type"] = self.error_type
        if self.status is not None:
            result["status"] = self.status
        return result


class AuthenticationError(ServiceError):
    """Credentials, tokens or user state rejected by the service."""

    def __init__(self, message: str, error_type: str = "", status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, error_type, status, ErrorCode.NOT_AUTHORIZED, details, cause)


class ResourceNotFoundError(ServiceError):
    """User, pool or other resource does not exist."""

    def __init__(self, message: str, error_type: str = "", status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, error_type, status, ErrorCode.RESOURCE_NOT_FOUND, details, cause)


class ThrottlingError(ServiceError):
    """Request rate or quota exceeded."""

    def __init__(self, message: str, error_type: str = "", status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, error_type, status, ErrorCode.THROTTLED, details, cause)


class InvalidParameterError(ServiceError):
    """Request rejected because of a bad parameter value."""

    def __init__(self, message: str, error_type: str = "", status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, error_type, status, ErrorCode.INVALID_PARAMETER, details, cause)


class ProtocolViolation(CognitoIdpError):
    """A page response did not have the shape the operation promises."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.PROTOCOL_VIOLATION, details, cause)


class OptionsError(CognitoIdpError):
    """Unknown or invalid operation options."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_OPTIONS, details, cause)


_ERROR_TYPES = {
    "NotAuthorizedException": AuthenticationError,
    "UserNotConfirmedException": AuthenticationError,
    "PasswordResetRequiredException": AuthenticationError,
    "ResourceNotFoundException": ResourceNotFoundError,
    "UserNotFoundException": ResourceNotFoundError,
    "TooManyRequestsException": ThrottlingError,
    "LimitExceededException": ThrottlingError,
    "ThrottlingException": ThrottlingError,
    "InvalidParameterException": InvalidParameterError,
    "InvalidPasswordException": InvalidParameterError,
    "UsernameExistsException": InvalidParameterError,
    "CodeMismatchException": InvalidParameterError,
    "ExpiredCodeException": InvalidParameterError,
}


def error_from_response(status: Optional[int], body: Any) -> ServiceError:
    """
    Create an appropriate error from a service error reply.

    Args:
        status: HTTP status code of the reply
        body: Decoded JSON body, normally ``{"__type": ..., "message": ...}``

    Returns:
        ServiceError subclass matching the reported exception type
    """
    unavailable = status is not None and status >= 500
    if not isinstance(body, dict):
        code = ErrorCode.SERVICE_UNAVAILABLE if unavailable else ErrorCode.SERVICE_ERROR
        return ServiceError(str(body) if body else "Unknown error", status=status, code=code)

    # "__type" may be namespaced: "com.amazonaws...#UserNotFoundException"
    error_type = str(body.get("__type", "")).rsplit("#", 1)[-1]
    message = body.get("message") or body.get("Message") or error_type or "Unknown error"
    details = {k: v for k, v in body.items() if k not in ("__type", "message", "Message")}

    error_cls = _ERROR_TYPES.get(error_type)
    if error_cls is not None:
        return error_cls(message, error_type, status, details)

    code = ErrorCode.SERVICE_UNAVAILABLE if unavailable else ErrorCode.SERVICE_ERROR
    return ServiceError(message, error_type, status, code, details)


class ErrorHandler:
    """
    Utility class for handling and categorizing errors.
    """

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if an error is retryable.

        Args:
            error: Exception to check

        Returns:
            True if the error should be retried
        """
        if isinstance(error, TransportError):
            return True
        if isinstance(error, ThrottlingError):
            return True
        if isinstance(error, ServiceError):
            return error.status is not None and error.status >= 500
        return False


__all__ = [
    "ErrorCode",
    "CognitoIdpError",
    "TransportError",
    "ConnectionFailedError",
    "RequestTimeoutError",
    "ServiceError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "ThrottlingError",
    "InvalidParameterError",
    "ProtocolViolation",
    "OptionsError",
    "error_from_response",
    "ErrorHandler",
]
