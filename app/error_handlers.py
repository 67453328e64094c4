"""
Global exception handlers
Maps application exceptions to consistent JSON error bodies
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .shared.exceptions import (
    DomainException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


async def validation_exception_handler(request: Request, exc: ValidationException):
    logger.warning(f"⚠️ Validation failed for {request.url.path}: {exc.errors}")
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "errors": exc.errors},
    )


async def domain_exception_handler(request: Request, exc: DomainException):
    logger.warning(f"⚠️ Business rule violation on {request.url.path}: {exc}")
    return _error_response(400, "A business rule violation occurred", str(exc))


async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    logger.warning(f"⚠️ Unauthorized access to {request.url.path}: {exc}")
    return _error_response(401, "Access denied", str(exc))


async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"⚠️ Invalid input for {request.url.path}: {exc}")
    return _error_response(400, "Invalid input provided", str(exc))


async def not_found_exception_handler(request: Request, exc: NotFoundException):
    logger.info(f"Resource not found on {request.url.path}: {exc}")
    return _error_response(404, "Resource not found", str(exc))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(500, "An internal server error occurred", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers; more specific exception types are matched first"""
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(UnauthorizedException, unauthorized_exception_handler)
    app.add_exception_handler(NotFoundException, not_found_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
