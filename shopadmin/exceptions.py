"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ShopAdminException(Exception):
    """Base exception for all admin back-office errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(ShopAdminException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", 404)


class ValidationException(ShopAdminException):
    """Validation error exception with field-level errors."""

    def __init__(self, errors: list[dict] | str):
        if isinstance(errors, str):
            errors = [{"field": "general", "message": errors}]
        super().__init__("Validation failed", 422)
        self.errors = errors


class ServiceError(Exception):
    """A call to the settings or template service was rejected.

    Raised on the console side for any non-successful response or transport
    failure. ``message`` is the human-readable text to show the user.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def create_exception_handlers():
    """Create the JSON exception handlers for the API."""

    async def shopadmin_exception_handler(request: Request, exc: ShopAdminException):
        """Handle custom exceptions."""
        logger.warning(f"ShopAdminException on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

        content = {
            "status": "error",
            "message": exc.message,
        }
        if hasattr(exc, "errors"):
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content)

    async def validation_exception_handler(request: Request, exc: ValidationException):
        """Handle validation exceptions with field-level errors."""
        logger.warning(f"ValidationException on {request.method} {request.url.path}: {exc.errors}")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "message": exc.message,
                "errors": exc.errors,
            },
        )

    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Render request body and parameter errors in the response envelope."""
        errors = validation_errors_from_pydantic(exc)
        logger.warning(f"Invalid request on {request.method} {request.url.path}: {errors}")

        return JSONResponse(
            status_code=422,
            content={
                "status": "error",
                "message": "Validation failed",
                "errors": errors,
            },
        )

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "An unexpected error occurred",
            },
        )

    return {
        ShopAdminException: shopadmin_exception_handler,
        ValidationException: validation_exception_handler,
        RequestValidationError: request_validation_handler,
        Exception: generic_exception_handler,
    }


def validation_errors_from_pydantic(exc) -> list[dict]:
    """Convert a pydantic ``ValidationError`` into field-level error dicts."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "general"
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return errors
