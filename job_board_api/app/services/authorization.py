"""
Authorization rules shared by the services.

Every gate runs before the store is mutated.  Gates raise the typed
errors from ``core.errors``; existence is always checked before
ownership, so a missing record is reported as ``NotFoundError`` and a
record owned by somebody else as ``ForbiddenError``.
"""

import logging
from typing import Any, Dict, Optional

from ..core.errors import ForbiddenError, NotFoundError, UnauthenticatedError
from ..core.security import KIND_REQUIRED_MESSAGES, Actor
from ..core.store import get_store


logger = logging.getLogger(__name__)


def ensure_account(actor: Actor, kind: str) -> Dict[str, Any]:
    """Re-validate the token's claims against the stored account.

    Returns the current user record.  A user that no longer exists is
    treated as unauthenticated; an account whose kind differs from
    ``kind`` is forbidden, whatever the token claims.
    """
    user = get_store().get_user_by_id(actor.id)
    if user is None:
        raise UnauthenticatedError("User no longer exists")
    if actor.kind != kind or user["type"] != kind:
        logger.warning("User %s denied: %s account required", actor.id, kind)
        raise ForbiddenError(KIND_REQUIRED_MESSAGES[kind])
    return user


def ensure_job_owner(actor: Actor, job: Optional[Dict[str, Any]], action: str) -> Dict[str, Any]:
    """Return ``job`` if it exists and belongs to ``actor``."""
    if job is None:
        raise NotFoundError("Job not found")
    if job["user_id"] != actor.id:
        logger.warning("User %s may not %s job %s", actor.id, action, job["id"])
        raise ForbiddenError(f"You do not have permission to {action} this job")
    return job


def can_view_application(actor: Actor, application: Dict[str, Any], job: Optional[Dict[str, Any]]) -> bool:
    """Applicants see their own applications; companies those on their jobs."""
    if actor.is_candidate:
        return application["user_id"] == actor.id
    if actor.is_company:
        return job is not None and job["user_id"] == actor.id
    return False
