from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from faystar.core.exceptions import APIException, ValidationException
from faystar.core.logging import get_logger
from faystar.domain.schemas.envelope import ServiceEnvelope
from faystar.infrastructure.error.handler import USER_MESSAGES, ErrorKind

# Initialize logger
logger = get_logger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "AUTHENTICATION_ERROR",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _error_response(status_code: int, error: str, code: str, message=None, details=None) -> JSONResponse:
    envelope = ServiceEnvelope(
        success=False,
        error=error,
        error_type=code,
        message=message,
        details=details,
    )
    return JSONResponse(status_code=status_code, content=envelope.to_dict())


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Error envelope
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"API Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.code,
            "request_path": request.url.path,
        }
    )
    payload = exc.to_dict()
    return _error_response(
        exc.status_code,
        payload["error"],
        payload["errorType"],
        payload.get("message"),
        payload.get("details"),
    )


async def handle_validation_exception(request: Request, exc: ValidationException) -> JSONResponse:
    """
    Handle validation errors raised by request normalizers.
    """
    logger.warning(
        f"Validation error: {exc.detail}",
        extra={"field": exc.field, "request_path": request.url.path}
    )
    return _error_response(exc.status_code, exc.detail, exc.code, exc.message, exc.context or None)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle malformed request bodies rejected by FastAPI before reaching a route.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning("Request validation failed", extra={"request_path": request.url.path, "errors": errors})
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        ErrorKind.VALIDATION_ERROR.value,
        USER_MESSAGES[ErrorKind.VALIDATION_ERROR],
        errors,
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Render framework HTTP errors, notably unknown routes, as envelopes.
    """
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = f"Route {request.method} {request.url.path} not found"
    else:
        error = str(exc.detail)
    return _error_response(exc.status_code, error, code)


def make_unhandled_exception_handler(debug: bool):
    async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={"request_path": request.url.path, "method": request.method},
            exc_info=True,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "SYSTEM_ERROR",
            str(exc) if debug else "An unexpected error occurred while processing your request",
        )

    return handle_unhandled_exception


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
        debug: Expose unhandled exception messages to callers
    """
    app.add_exception_handler(ValidationException, handle_validation_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, make_unhandled_exception_handler(debug))
