"""
Error taxonomy shared by the service layer.

Services raise these exceptions; API endpoints translate them into
``HTTPException`` responses with :func:`to_http_exception`.  All of
them derive from ``ValueError`` so callers that only care about
"the operation was rejected" can keep catching ``ValueError``.

Request bodies and parameters that fail schema validation are answered
by :func:`request_validation_handler` with the same 400 status as
:class:`ValidationFailure`.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class JobBoardError(ValueError):
    """Base class for business-rule failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(JobBoardError):
    """An entity id does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(JobBoardError):
    """The actor lacks rights over an existing entity."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(JobBoardError):
    """Duplicate e-mail at registration or duplicate application."""

    status_code = status.HTTP_409_CONFLICT


class ValidationFailure(JobBoardError):
    """Payload passed schema validation but breaks a business constraint."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(JobBoardError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


def to_http_exception(exc: JobBoardError) -> HTTPException:
    """Map a service error onto the HTTP response FastAPI should send."""
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=exc.status_code, detail=exc.message, headers=headers)


def _describe_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer schema validation failures with 400 and a readable ``detail``.

    Malformed e-mails, short passwords, unknown account types and a
    missing application status all end up here.
    """
    detail = "; ".join(_describe_validation_error(error) for error in exc.errors())
    logger.info("Rejected %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})
