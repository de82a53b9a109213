"""
Application endpoints for API v1.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from job_board_api.app.core.errors import JobBoardError, to_http_exception
from job_board_api.app.core.security import Actor, get_current_user, require_kind
from job_board_api.app.schemas.application import ApplicationRead, ApplicationStatusUpdate
from job_board_api.app.services.application_service import ApplicationService


router = APIRouter()


@router.get("", response_model=List[ApplicationRead])
async def list_applications(
    job_id: Optional[int] = Query(None, alias="jobId"),
    current_user: Actor = Depends(get_current_user),
) -> List[ApplicationRead]:
    """List the applications visible to the caller.

    Companies see applications to their own jobs (``jobId`` narrows the
    list to one of them); candidates see the applications they sent.
    """
    try:
        return await ApplicationService.list_applications(current_user, job_id)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.get("/{application_id}", response_model=ApplicationRead)
async def get_application(
    application_id: int,
    current_user: Actor = Depends(get_current_user),
) -> ApplicationRead:
    try:
        return await ApplicationService.get_application(current_user, application_id)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.put("/{application_id}/status", response_model=ApplicationRead)
async def update_application_status(
    application_id: int,
    body: ApplicationStatusUpdate,
    current_user: Actor = Depends(require_kind("company")),
) -> ApplicationRead:
    """Set an application's status.

    Allowed values: pending, reviewed, interviewed, rejected, accepted.
    Only the company that owns the job may change it.
    """
    try:
        return await ApplicationService.update_status(current_user, application_id, body.status)
    except JobBoardError as e:
        raise to_http_exception(e) from e
