"""
Business logic for job postings.

Anyone may browse active jobs and open a job's detail page (which
counts as a view).  Only company accounts may post jobs, and only the
posting company may change or remove one.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import NotFoundError
from ..core.security import Actor
from ..core.store import JobFilters, get_store
from ..schemas.job import JobCreate, JobRead, JobUpdate
from .authorization import ensure_account, ensure_job_owner


logger = logging.getLogger(__name__)


def to_job_read(record: Dict[str, Any]) -> JobRead:
    return JobRead.model_validate(record)


class JobService:
    """Service for listing, viewing and managing jobs."""

    @classmethod
    async def list_public_jobs(
        cls,
        search: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
        tags: Optional[List[str]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[JobRead]:
        """Active jobs matching the filters, newest first.

        ``limit`` and ``offset`` page through the result; the inactive
        jobs of any company are never listed here.
        """
        filters = JobFilters(
            search=search,
            location=location,
            type=job_type,
            tags=tags or None,
            is_active=True,
        )
        jobs = get_store().get_jobs(filters)
        end = None if limit is None else offset + limit
        logger.debug("Listing %d active jobs", len(jobs))
        return [to_job_read(job) for job in jobs[offset:end]]

    @classmethod
    async def get_job(cls, job_id: int) -> JobRead:
        """Job detail.  Counts one view even when the id is unknown."""
        job = get_store().get_job_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found")
        return to_job_read(job)

    @classmethod
    async def list_own_jobs(cls, actor: Actor) -> List[JobRead]:
        """Every job the company actor posted, active or not."""
        ensure_account(actor, "company")
        return [to_job_read(job) for job in get_store().get_jobs_by_user(actor.id)]

    @classmethod
    async def create_job(cls, actor: Actor, data: JobCreate) -> JobRead:
        ensure_account(actor, "company")
        record = data.model_dump()
        record["user_id"] = actor.id
        job = get_store().create_job(record)
        logger.info("User %s posted job %s '%s'", actor.id, job["id"], job["title"])
        return to_job_read(job)

    @classmethod
    async def update_job(cls, actor: Actor, job_id: int, updates: JobUpdate) -> JobRead:
        """Apply a partial update to a job owned by ``actor``."""
        ensure_account(actor, "company")
        store = get_store()
        ensure_job_owner(actor, store.peek_job(job_id), "update")
        changes = updates.to_changes()
        job = store.update_job(job_id, changes)
        if job is None:
            raise NotFoundError("Job not found")
        logger.info("User %s updated job %s fields %s", actor.id, job_id, sorted(changes))
        return to_job_read(job)

    @classmethod
    async def delete_job(cls, actor: Actor, job_id: int) -> None:
        ensure_account(actor, "company")
        store = get_store()
        ensure_job_owner(actor, store.peek_job(job_id), "delete")
        if not store.delete_job(job_id):
            raise NotFoundError("Job not found")
        logger.info("User %s deleted job %s", actor.id, job_id)
