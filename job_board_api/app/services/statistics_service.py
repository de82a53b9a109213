"""
Service layer for dashboard statistics.

Statistics are derived on demand from the entity store and scoped to
the requesting user through ``STATS_SCOPES``:

* no user: every job, every application, all views;
* company: the jobs it owns, the applications sent to them and the
  views on them;
* candidate: every job and all views, but only the applications the
  candidate submitted.

The candidate scope mixes platform-wide job numbers with personal
application numbers.  That is how the dashboard has always reported
it and it is kept as is.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.store import EntityStore, get_store
from ..schemas.stats import StatsRead


logger = logging.getLogger(__name__)

Scope = Tuple[List[Dict[str, Any]], List[Dict[str, Any]], int]


def _global_scope(store: EntityStore, user_id: Optional[int]) -> Scope:
    jobs = store.get_jobs()
    applications = store.get_applications()
    views = sum(store.view_counts.values())
    return jobs, applications, views


def _company_scope(store: EntityStore, user_id: Optional[int]) -> Scope:
    jobs = store.get_jobs_by_user(user_id)
    job_ids = {job["id"] for job in jobs}
    applications = [app for app in store.get_applications() if app["job_id"] in job_ids]
    views = sum(store.get_view_count(job_id) for job_id in job_ids)
    return jobs, applications, views


def _candidate_scope(store: EntityStore, user_id: Optional[int]) -> Scope:
    jobs = store.get_jobs()
    applications = store.get_applications(user_id=user_id)
    views = sum(store.view_counts.values())
    return jobs, applications, views


STATS_SCOPES: Dict[str, Callable[[EntityStore, Optional[int]], Scope]] = {
    "company": _company_scope,
    "candidate": _candidate_scope,
}


class StatisticsService:
    """Service providing dashboard metrics."""

    @classmethod
    async def get_stats(cls, user_id: Optional[int] = None) -> StatsRead:
        """Return job, application and view totals for ``user_id``.

        A user id that does not resolve to a company account is scoped
        like a candidate.
        """
        store = get_store()
        if user_id is None:
            scope = _global_scope
        else:
            user = store.get_user_by_id(user_id)
            kind = user["type"] if user is not None else "candidate"
            scope = STATS_SCOPES.get(kind, _candidate_scope)
        jobs, applications, views = scope(store, user_id)
        stats = StatsRead(
            total_jobs=len(jobs),
            active_jobs=sum(1 for job in jobs if job["is_active"]),
            total_applications=len(applications),
            view_count=views,
        )
        logger.debug("Stats for user %s: %s", user_id, stats)
        return stats
