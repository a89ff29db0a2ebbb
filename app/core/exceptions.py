"""
Service-layer exceptions and their FastAPI handlers.

Services raise these instead of HTTPException so they stay usable
outside a request (scripts, tests). The handlers translate them
into JSON error responses.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.schemas.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


# ============================================================
# 404 - missing records
# ============================================================

class NotFoundError(ServiceException):
    status_code = 404


class JobNotFoundError(NotFoundError):
    pass


class StudentNotFoundError(NotFoundError):
    pass


class ProfileNotFoundError(NotFoundError):
    pass


class ApplicationNotFoundError(NotFoundError):
    pass


class ResumeNotFoundError(NotFoundError):
    pass


# ============================================================
# 403 / 409
# ============================================================

class PermissionDeniedError(ServiceException):
    """Raised when the caller does not own the record it is touching."""
    status_code = 403


class ConflictError(ServiceException):
    status_code = 409


class AlreadyShortlistedError(ConflictError):
    pass


class AlreadyAppliedError(ConflictError):
    pass


class EmailAlreadyRegisteredError(ConflictError):
    pass


async def service_exception_handler(request: Request, exc: ServiceException) -> JSONResponse:
    """Translate a service exception into a JSON error body."""
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc), type=exc.__class__.__name__).model_dump()
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceException, service_exception_handler)
