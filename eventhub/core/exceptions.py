"""Application error types and the FastAPI handlers that render them."""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi.errors import RateLimitExceeded

from eventhub.constants.constants import ErrorCode

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that are reported to the client as a structured payload."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        status_code: Optional[int] = None,
        data: Any = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.status_code = status_code or self.status_code
        self.data = data
        super().__init__(self.message)


class ValidationFailedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.VALIDATION_ERROR
    message = "Validation error"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCode.USER_ALREADY_EXISTS
    message = "User already exists"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.NOT_FOUND
    message = "Not found"


class InvalidOtpError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.INVALID_OTP
    message = "Invalid OTP. Please try again."


class InvalidTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.INVALID_TOKEN
    message = "Invalid token"


def error_payload(message: str, error_code: ErrorCode, data: Any = None, errors: Any = None) -> dict:
    payload = {
        "success": False,
        "message": message,
        "errorCode": error_code.value,
        "data": data,
    }
    if errors is not None:
        payload["errors"] = errors
    return payload


def _field_errors(errors) -> list:
    """Flatten pydantic error dicts into {field, message} pairs."""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"field": ".".join(loc), "message": err.get("msg")})
    return details


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code.value} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code.value} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_payload(exc.message, exc.error_code, exc.data)),
    )


async def validation_exception_handler(request: Request, exc: Exception):
    errors = exc.errors()
    logger.error(f"Validation Error: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            error_payload("Validation error", ErrorCode.VALIDATION_ERROR, errors=_field_errors(errors))
        ),
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_payload(f"Rate limit exceeded: {exc.detail}", ErrorCode.RATE_LIMITED),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload("Internal Server Error", ErrorCode.INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
