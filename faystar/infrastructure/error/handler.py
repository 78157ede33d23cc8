"""
Error handling module for provider integrations.
Maps provider failures onto a closed set of error kinds and logs them.
"""
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import BaseModel, ConfigDict
from fastapi import status

from faystar.core.exceptions import ProviderCallError, ProviderDisabledError


class ErrorKind(str, Enum):
    """Closed set of classifications for provider failures."""
    MISSING_API_KEY = "MISSING_API_KEY"
    INVALID_API_KEY = "INVALID_API_KEY"
    ACCESS_DENIED = "ACCESS_DENIED"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    RATE_LIMITED = "RATE_LIMITED"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SERVICE_DISABLED = "SERVICE_DISABLED"
    API_ERROR = "API_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


USER_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.INVALID_API_KEY: "The provider API key is invalid. Please contact support.",
    ErrorKind.MISSING_API_KEY: "The provider API key is not configured. Please contact support.",
    ErrorKind.PAYMENT_REQUIRED: "The provider account has insufficient credits. Please check your billing.",
    ErrorKind.RATE_LIMITED: "Too many requests. Please wait and try again later.",
    ErrorKind.ACCESS_DENIED: "Access to the provider service is denied. Please contact support.",
    ErrorKind.TIMEOUT: "The request is taking too long. Please try again.",
    ErrorKind.NETWORK_ERROR: "Network connection to the provider failed. Please try again later.",
    ErrorKind.SERVER_ERROR: "The provider service is temporarily unavailable. Please try again later.",
    ErrorKind.BAD_REQUEST: "Invalid request parameters. Please check your input.",
    ErrorKind.VALIDATION_ERROR: "Invalid request parameters. Please check your input.",
    ErrorKind.SERVICE_DISABLED: "This service is currently disabled. Please contact support.",
    ErrorKind.API_ERROR: "An unexpected error occurred. Please try again.",
    ErrorKind.UNKNOWN_ERROR: "An unexpected error occurred. Please try again.",
}

RETURN_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_API_KEY: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.MISSING_API_KEY: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.PAYMENT_REQUIRED: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.TIMEOUT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.NETWORK_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.SERVER_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVICE_DISABLED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.API_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNKNOWN_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Provider HTTP status -> kind. Any 5xx not listed maps to SERVER_ERROR.
DEFAULT_STATUS_TABLE: Mapping[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.INVALID_API_KEY,
    402: ErrorKind.PAYMENT_REQUIRED,
    403: ErrorKind.ACCESS_DENIED,
    429: ErrorKind.RATE_LIMITED,
}

_SEVERITY: Dict[ErrorKind, ErrorSeverity] = {
    ErrorKind.INVALID_API_KEY: ErrorSeverity.HIGH,
    ErrorKind.MISSING_API_KEY: ErrorSeverity.HIGH,
    ErrorKind.ACCESS_DENIED: ErrorSeverity.HIGH,
    ErrorKind.PAYMENT_REQUIRED: ErrorSeverity.HIGH,
    ErrorKind.SERVER_ERROR: ErrorSeverity.HIGH,
    ErrorKind.UNKNOWN_ERROR: ErrorSeverity.HIGH,
    ErrorKind.API_ERROR: ErrorSeverity.HIGH,
    ErrorKind.BAD_REQUEST: ErrorSeverity.LOW,
    ErrorKind.VALIDATION_ERROR: ErrorSeverity.LOW,
}


class ErrorClassification(BaseModel):
    """Normalized description of a provider failure."""
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    user_message: str
    http_status: int
    details: Any = None


class ErrorClassifier:
    """
    Pure mapping from provider status codes and transport errors to
    :class:`ErrorClassification` values.
    """

    def __init__(self, status_table: Optional[Mapping[int, ErrorKind]] = None):
        self.status_table = dict(status_table if status_table is not None else DEFAULT_STATUS_TABLE)

    @staticmethod
    def for_kind(kind: ErrorKind, details: Any = None) -> ErrorClassification:
        """Build the classification for a known kind."""
        return ErrorClassification(
            kind=kind,
            user_message=USER_MESSAGES[kind],
            http_status=RETURN_STATUS[kind],
            details=details,
        )

    def classify_status(self, status_code: int, details: Any = None) -> ErrorClassification:
        """Classify a provider HTTP status code."""
        kind = self.status_table.get(status_code)
        if kind is None:
            kind = ErrorKind.SERVER_ERROR if status_code >= 500 else ErrorKind.API_ERROR
        return self.for_kind(kind, details)

    def classify_transport_error(self, error: BaseException) -> ErrorClassification:
        """Classify an exception raised before any HTTP response arrived."""
        if isinstance(error, httpx.TimeoutException):
            return self.for_kind(ErrorKind.TIMEOUT, type(error).__name__)
        if isinstance(error, httpx.TransportError):
            return self.for_kind(ErrorKind.NETWORK_ERROR, type(error).__name__)
        return self.for_kind(ErrorKind.UNKNOWN_ERROR, str(error))

    def classify(self, error: BaseException) -> ErrorClassification:
        """Classify any failure raised while calling a provider."""
        if isinstance(error, ProviderDisabledError):
            return self.for_kind(
                ErrorKind.SERVICE_DISABLED,
                {"provider": error.provider, "reason": error.reason},
            )
        if isinstance(error, ProviderCallError):
            if error.status_code is not None:
                return self.classify_status(error.status_code, _error_details(error.body))
            if error.cause is not None:
                return self.classify_transport_error(error.cause)
        return self.classify_transport_error(error)

    def classify_credential(self, credential: Optional[str], min_length: int) -> Optional[ErrorClassification]:
        """Return the credential problem, or None if the credential looks usable."""
        if not credential:
            return self.for_kind(ErrorKind.MISSING_API_KEY)
        if not isinstance(credential, str) or len(credential) < min_length:
            return self.for_kind(ErrorKind.INVALID_API_KEY)
        return None


def _error_details(body: Any) -> Any:
    """Pull the interesting part out of a provider error body."""
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if key in body:
                return body[key]
        return body
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")[:500] or None
    return body


class ErrorHandler:
    """
    Central error processing: classification plus logging at a severity
    chosen from the error kind.
    """

    def __init__(self, logger: logging.Logger, classifier: Optional[ErrorClassifier] = None):
        """
        Initialize the error handler.

        Args:
            logger: Logger instance for error logging
            classifier: Classifier used for incoming failures
        """
        self.logger = logger
        self.classifier = classifier or ErrorClassifier()

    def handle_error(
        self,
        exception: BaseException,
        source: str,
        context: Optional[Dict[str, Any]] = None,
        classifier: Optional[ErrorClassifier] = None,
    ) -> ErrorClassification:
        """
        Classify and log a provider failure.

        Args:
            exception: The exception that occurred
            source: Source identifier (e.g., "elevenlabs", "fal")
            context: Additional context about the error
            classifier: Classifier to use instead of the default, e.g. one built
                from a provider's own status table

        Returns:
            ErrorClassification: The normalized failure
        """
        classification = (classifier or self.classifier).classify(exception)
        self.log_error(classification, source, context, attempts=getattr(exception, "attempts", 1))
        return classification

    def log_error(
        self,
        classification: ErrorClassification,
        source: str,
        context: Optional[Dict[str, Any]] = None,
        attempts: int = 1,
    ) -> None:
        """Log a classification at the appropriate level."""
        log_data = {
            "error_kind": classification.kind.value,
            "source": source,
            "http_status": classification.http_status,
            "attempts": attempts,
        }
        if context:
            log_data["context"] = context

        severity = _SEVERITY.get(classification.kind, ErrorSeverity.MEDIUM)
        message = f"{source} call failed: {classification.kind.value}"
        if severity == ErrorSeverity.HIGH:
            self.logger.error(message, extra=log_data)
        elif severity == ErrorSeverity.MEDIUM:
            self.logger.warning(message, extra=log_data)
        else:
            self.logger.info(message, extra=log_data)
