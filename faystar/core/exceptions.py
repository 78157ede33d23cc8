from fastapi import status
from typing import Any, Dict, Optional, Union

import httpx


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class. The API layer turns
    them into error envelopes.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "SYSTEM_ERROR",
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the error fields of a service envelope."""
        payload: Dict[str, Any] = {
            "success": False,
            "error": self.detail,
            "errorType": self.code,
        }
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["details"] = self.context
        return payload


class ValidationException(APIException):
    """Exception raised when request data fails validation."""

    def __init__(
        self,
        detail: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context: Dict[str, Any] = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code="VALIDATION_ERROR",
            message="Invalid request parameters. Please check your input.",
            context=merged_context
        )
        self.field = field


class NotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Union[str, int],
        detail: Optional[str] = None
    ):
        if detail is None:
            detail = f"{resource_type} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code="NOT_FOUND",
            context={"resourceType": resource_type, "resourceId": str(resource_id)}
        )


class ConflictError(APIException):
    """Exception raised when a resource already exists."""

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            code="CONFLICT"
        )


class AuthenticationError(APIException):
    """Exception raised when inbound authentication fails."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            code="AUTHENTICATION_ERROR"
        )


class ProviderCallError(Exception):
    """
    Raised by the transport client when a provider call fails.

    Carries either the final HTTP response (status code and body) or the
    transport-level exception that prevented one, plus the attempt count.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        cause: Optional[Exception] = None,
        attempts: int = 1
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.cause = cause
        self.attempts = attempts

    @property
    def retryable(self) -> bool:
        """Network failures and 5xx responses may be retried."""
        if self.status_code is None:
            return isinstance(self.cause, httpx.TransportError)
        return self.status_code >= 500


class ProviderDisabledError(Exception):
    """Raised when an operation is attempted on a client disabled by its credential guard."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider} client is disabled: {reason}")
        self.provider = provider
        self.reason = reason
