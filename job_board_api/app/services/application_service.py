"""
Business logic for job applications.

Candidates apply to active jobs (once per job) and see their own
applications.  Companies see the applications sent to their jobs and
move them between statuses.  Any status may follow any other; there
is no terminal state.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailure
from ..core.security import Actor
from ..core.store import APPLICATION_STATUSES, get_store
from ..schemas.application import ApplicationCreate, ApplicationRead
from .authorization import can_view_application, ensure_account


logger = logging.getLogger(__name__)


def to_application_read(record: Dict[str, Any]) -> ApplicationRead:
    return ApplicationRead.model_validate(record)


class ApplicationService:
    """Service for submitting, listing and reviewing applications."""

    @classmethod
    async def apply(cls, actor: Actor, job_id: int, data: ApplicationCreate) -> ApplicationRead:
        """Submit the candidate actor's application to ``job_id``.

        The job must exist and be active.  A second application by the
        same candidate to the same job raises ``ConflictError`` and
        leaves the first one untouched.
        """
        ensure_account(actor, "candidate")
        store = get_store()
        job = store.peek_job(job_id)
        if job is None or not job["is_active"]:
            raise NotFoundError("Job not found or not active")
        with store.applications.lock:
            if store.get_applications(job_id=job_id, user_id=actor.id):
                logger.info("User %s already applied to job %s", actor.id, job_id)
                raise ConflictError("You have already applied for this job")
            record = data.model_dump()
            record.update(job_id=job_id, user_id=actor.id)
            application = store.create_application(record)
        logger.info("User %s applied to job %s (application %s)", actor.id, job_id, application["id"])
        return to_application_read(application)

    @classmethod
    async def list_applications(cls, actor: Actor, job_id: Optional[int] = None) -> List[ApplicationRead]:
        """Applications visible to ``actor``, newest first.

        Companies get the applications for their own jobs, optionally
        narrowed to one of them (asking for a job they do not own is
        forbidden).  Candidates get the applications they submitted.
        """
        store = get_store()
        if actor.is_company:
            own_job_ids = {job["id"] for job in store.get_jobs_by_user(actor.id)}
            if job_id is not None:
                if job_id not in own_job_ids:
                    logger.warning("User %s may not view applications for job %s", actor.id, job_id)
                    raise ForbiddenError("You do not have permission to view these applications")
                applications = store.get_applications(job_id=job_id)
            else:
                applications = [
                    application
                    for application in store.get_applications()
                    if application["job_id"] in own_job_ids
                ]
        else:
            applications = store.get_applications(user_id=actor.id)
        return [to_application_read(application) for application in applications]

    @classmethod
    async def get_application(cls, actor: Actor, application_id: int) -> ApplicationRead:
        store = get_store()
        application = store.get_application(application_id)
        if application is None:
            raise NotFoundError("Application not found")
        if not can_view_application(actor, application, store.peek_job(application["job_id"])):
            raise ForbiddenError("You do not have permission to view this application")
        return to_application_read(application)

    @classmethod
    async def update_status(cls, actor: Actor, application_id: int, status: Optional[str]) -> ApplicationRead:
        """Move an application to ``status``.

        The value is validated before anything is looked up.  Only the
        company owning the application's job may change it; if that job
        has been deleted nobody may.
        """
        if status not in APPLICATION_STATUSES:
            raise ValidationFailure("Invalid status value")
        ensure_account(actor, "company")
        store = get_store()
        application = store.get_application(application_id)
        if application is None:
            raise NotFoundError("Application not found")
        job = store.peek_job(application["job_id"])
        if job is None or job["user_id"] != actor.id:
            logger.warning("User %s may not update application %s", actor.id, application_id)
            raise ForbiddenError("You do not have permission to update this application")
        updated = store.update_application_status(application_id, status)
        if updated is None:
            raise NotFoundError("Application not found")
        logger.info(
            "User %s moved application %s from %s to %s",
            actor.id,
            application_id,
            application["status"],
            status,
        )
        return to_application_read(updated)
