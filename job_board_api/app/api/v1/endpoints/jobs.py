"""
Job endpoints for API v1.

Listing and detail are public.  Posting, editing and deleting jobs
require a company account, and editing or deleting additionally
requires owning the job.  Applying to a job lives here too because
the job id is part of the path.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from job_board_api.app.core.config import settings
from job_board_api.app.core.errors import JobBoardError, to_http_exception
from job_board_api.app.core.security import Actor, require_kind
from job_board_api.app.schemas.application import ApplicationCreate, ApplicationRead
from job_board_api.app.schemas.job import JobCreate, JobRead, JobUpdate
from job_board_api.app.services.application_service import ApplicationService
from job_board_api.app.services.job_service import JobService


router = APIRouter()


def _split_tags(tags: Optional[str]) -> Optional[List[str]]:
    if not tags:
        return None
    return [tag.strip() for tag in tags.split(",") if tag.strip()] or None


@router.get("", response_model=List[JobRead])
async def list_jobs(
    search: Optional[str] = Query(None, description="Substring of title, company or description"),
    location: Optional[str] = Query(None),
    type: Optional[str] = Query(None, description="Exact employment type, e.g. Full-time"),
    tags: Optional[str] = Query(None, description="Comma-separated; any tag may match"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
) -> List[JobRead]:
    """List active jobs, newest first.

    - **search** — case-insensitive match on title, company or description.
    - **location** — case-insensitive substring of the job location.
    - **type** — exact employment type.
    - **tags** — comma-separated list; a job matches if it has any of them.
    - **limit**, **offset** — pagination.
    """
    return await JobService.list_public_jobs(
        search=search,
        location=location,
        job_type=type,
        tags=_split_tags(tags),
        limit=limit,
        offset=offset,
    )


@router.get("/mine", response_model=List[JobRead])
async def list_my_jobs(current_user: Actor = Depends(require_kind("company"))) -> List[JobRead]:
    """Every job the calling company posted, including inactive ones."""
    try:
        return await JobService.list_own_jobs(current_user)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.get("/{job_id}", response_model=JobRead)
async def get_job(job_id: int) -> JobRead:
    """Job detail.  Each request counts as one view of the job."""
    try:
        return await JobService.get_job(job_id)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
async def create_job(
    job: JobCreate,
    current_user: Actor = Depends(require_kind("company")),
) -> JobRead:
    """Post a job owned by the calling company."""
    try:
        return await JobService.create_job(current_user, job)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.put("/{job_id}", response_model=JobRead)
async def update_job(
    job_id: int,
    updates: JobUpdate,
    current_user: Actor = Depends(require_kind("company")),
) -> JobRead:
    """Partially update a job.  404 if it does not exist, 403 if not owned."""
    try:
        return await JobService.update_job(current_user, job_id, updates)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: int,
    current_user: Actor = Depends(require_kind("company")),
) -> None:
    """Delete a job.  Its applications are kept."""
    try:
        await JobService.delete_job(current_user, job_id)
    except JobBoardError as e:
        raise to_http_exception(e) from e
    return None


@router.post("/{job_id}/apply", response_model=ApplicationRead, status_code=status.HTTP_201_CREATED)
async def apply_for_job(
    job_id: int,
    application: ApplicationCreate,
    current_user: Actor = Depends(require_kind("candidate")),
) -> ApplicationRead:
    """Apply to an active job.  A second application to the same job is a 409."""
    try:
        return await ApplicationService.apply(current_user, job_id, application)
    except JobBoardError as e:
        raise to_http_exception(e) from e
