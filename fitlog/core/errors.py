"""
Fitlog API - error taxonomy and exception handlers.

Every failure leaves the API in the same envelope:
``{"success": false, "error": {"code": ..., "message": ...}}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class FitlogError(Exception):
    """
    Base exception for failures surfaced to API callers.

    Attributes:
        code: Machine-readable error kind.
        message: Human-readable error message.
        status_code: HTTP status code for the error.
    """

    code = "INTERNAL_SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(message)


class UnauthorizedError(FitlogError):
    """Raised when no caller identity can be resolved from the request."""

    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "You must be signed in to perform this action."):
        super().__init__(message)


class NotFoundError(FitlogError):
    """
    Raised when a referenced record is missing or owned by another user.

    Both cases use this error so callers cannot probe for other users' ids.
    """

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found."):
        super().__init__(message)


class InvalidInputError(FitlogError):
    """Raised when supplied fields violate a shape or value constraint."""

    code = "BAD_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid input."):
        super().__init__(message)


def error_response(exc: FitlogError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {"code": exc.code, "message": exc.message},
        },
    )


def _describe_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid input."


async def fitlog_error_handler(request: Request, exc: FitlogError) -> JSONResponse:
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_errors(exc.errors())
    logger.debug(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(InvalidInputError(message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(FitlogError("Internal server error."))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FitlogError, fitlog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
