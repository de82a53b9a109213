"""
Entity store for users, jobs, applications and job view counters.

Data is held in collections behind the small :class:`Collection`
interface (``get``/``put``/``delete``/``scan``).  The default backing is
:class:`InMemoryCollection`; swapping in a persistent engine only
requires another ``Collection`` implementation, the ``EntityStore``
itself does not change.

Records are plain dictionaries keyed by snake_case field names, the
same shape a database row would have.  The store never raises for a
missing id: lookups return ``None`` and deletes return ``False``.
Authorization is not the store's concern; services check rights before
calling any mutating method.

Each collection owns a lock.  Id assignment, inserts, merges and view
counter increments happen while holding the lock of the collection
they touch, which keeps ids unique and counters exact when the API is
served from several threads.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional


logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]

APPLICATION_STATUSES = ("pending", "reviewed", "interviewed", "rejected", "accepted")


class Collection(ABC):
    """Capability interface over one keyed collection of records."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.lock = threading.RLock()

    @abstractmethod
    def allocate_id(self) -> int:
        """Return the next id; ids are monotonic and never reused."""
        raise NotImplementedError

    @abstractmethod
    def get(self, record_id: int) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def put(self, record_id: int, record: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def values(self) -> Iterator[Any]:
        raise NotImplementedError

    def scan(self, predicate: Optional[Predicate] = None) -> List[Any]:
        """Return every record for which ``predicate`` is true."""
        with self.lock:
            return [value for value in self.values() if predicate is None or predicate(value)]

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError


class InMemoryCollection(Collection):
    """Dictionary-backed collection living for the process lifetime."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._items: Dict[int, Any] = {}
        self._ids = itertools.count(1)

    def allocate_id(self) -> int:
        with self.lock:
            return next(self._ids)

    def get(self, record_id: int) -> Optional[Any]:
        return self._items.get(record_id)

    def put(self, record_id: int, record: Any) -> None:
        with self.lock:
            self._items[record_id] = record

    def delete(self, record_id: int) -> bool:
        with self.lock:
            return self._items.pop(record_id, None) is not None

    def values(self) -> Iterator[Any]:
        return iter(list(self._items.values()))

    def clear(self) -> None:
        with self.lock:
            self._items.clear()
            self._ids = itertools.count(1)


@dataclass
class JobFilters:
    """Criteria for :meth:`EntityStore.get_jobs`; ``None`` means "any".

    All given criteria must hold.  ``tags`` matches when the job shares
    at least one tag with the filter.
    """

    search: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    tags: Optional[List[str]] = None
    user_id: Optional[int] = None
    is_active: Optional[bool] = None

    def matches(self, job: Record) -> bool:
        if self.search:
            needle = self.search.lower()
            haystacks = (job["title"], job["company"], job["description"])
            if not any(needle in text.lower() for text in haystacks):
                return False
        if self.location and self.location.lower() not in job["location"].lower():
            return False
        if self.type and job["type"] != self.type:
            return False
        if self.tags:
            job_tags = job.get("tags") or []
            if not any(tag in job_tags for tag in self.tags):
                return False
        if self.user_id is not None and job["user_id"] != self.user_id:
            return False
        if self.is_active is not None and job["is_active"] != self.is_active:
            return False
        return True


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _newest_first(records: List[Record]) -> List[Record]:
    # Ties on created_at fall back to id so the order is deterministic.
    return sorted(records, key=lambda r: (r["created_at"], r["id"]), reverse=True)


class EntityStore:
    """Users, jobs, applications and per-job view counters.

    Every read hands out a copy of the stored record, so the only way
    to change stored state is through the store's own methods.
    """

    def __init__(self, collection_factory: Callable[[str], Collection] = InMemoryCollection) -> None:
        self.users = collection_factory("users")
        self.jobs = collection_factory("jobs")
        self.applications = collection_factory("applications")
        self.view_counts = collection_factory("view_counts")

    def reset(self) -> None:
        """Drop all records and restart id counters."""
        for collection in (self.users, self.jobs, self.applications, self.view_counts):
            collection.clear()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_user(self, data: Record) -> Record:
        """Insert a user.  E-mail uniqueness is the caller's job."""
        with self.users.lock:
            user_id = self.users.allocate_id()
            user = {**copy.deepcopy(data), "id": user_id}
            self.users.put(user_id, user)
        logger.debug("Stored user %s", user_id)
        return copy.deepcopy(user)

    def get_user_by_id(self, user_id: int) -> Optional[Record]:
        return copy.deepcopy(self.users.get(user_id))

    def get_user_by_email(self, email: str) -> Optional[Record]:
        wanted = email.lower()
        matches = self.users.scan(lambda user: user["email"].lower() == wanted)
        return copy.deepcopy(matches[0]) if matches else None

    def update_user(self, user_id: int, data: Record) -> Optional[Record]:
        with self.users.lock:
            user = self.users.get(user_id)
            if user is None:
                return None
            updated = {**user, **copy.deepcopy(data), "id": user_id}
            self.users.put(user_id, updated)
        return copy.deepcopy(updated)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------
    def create_job(self, data: Record) -> Record:
        """Insert a job, stamping ``created_at`` and defaulting ``is_active``."""
        with self.jobs.lock:
            job_id = self.jobs.allocate_id()
            job = copy.deepcopy(data)
            if job.get("is_active") is None:
                job["is_active"] = True
            job["id"] = job_id
            job["created_at"] = _utcnow()
            self.jobs.put(job_id, job)
        with self.view_counts.lock:
            self.view_counts.put(job_id, 0)
        logger.debug("Stored job %s", job_id)
        return copy.deepcopy(job)

    def get_jobs(self, filters: Optional[JobFilters] = None) -> List[Record]:
        """Return jobs matching every given filter, newest first."""
        filters = filters or JobFilters()
        return copy.deepcopy(_newest_first(self.jobs.scan(filters.matches)))

    def peek_job(self, job_id: int) -> Optional[Record]:
        """Read a job without counting it as a view."""
        return copy.deepcopy(self.jobs.get(job_id))

    def record_view(self, job_id: int) -> int:
        """Increment the view counter of ``job_id`` and return the new value."""
        with self.view_counts.lock:
            count = (self.view_counts.get(job_id) or 0) + 1
            self.view_counts.put(job_id, count)
        return count

    def get_job_by_id(self, job_id: int) -> Optional[Record]:
        """Detail read: counts one view, then returns the job (or ``None``)."""
        self.record_view(job_id)
        return self.peek_job(job_id)

    def get_view_count(self, job_id: int) -> int:
        return self.view_counts.get(job_id) or 0

    def get_jobs_by_user(self, user_id: int) -> List[Record]:
        return self.get_jobs(JobFilters(user_id=user_id))

    def update_job(self, job_id: int, data: Record) -> Optional[Record]:
        """Merge ``data`` into a job; ``id`` and ``created_at`` never change."""
        with self.jobs.lock:
            job = self.jobs.get(job_id)
            if job is None:
                return None
            updated = {**job, **copy.deepcopy(data)}
            updated["id"] = job["id"]
            updated["created_at"] = job["created_at"]
            self.jobs.put(job_id, updated)
        return copy.deepcopy(updated)

    def delete_job(self, job_id: int) -> bool:
        # Applications against the job are left in place.
        return self.jobs.delete(job_id)

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------
    def create_application(self, data: Record) -> Record:
        """Insert an application; status always starts as ``pending``."""
        with self.applications.lock:
            application_id = self.applications.allocate_id()
            application = copy.deepcopy(data)
            application["id"] = application_id
            application["created_at"] = _utcnow()
            application["status"] = "pending"
            self.applications.put(application_id, application)
        logger.debug("Stored application %s", application_id)
        return copy.deepcopy(application)

    def get_application(self, application_id: int) -> Optional[Record]:
        return copy.deepcopy(self.applications.get(application_id))

    def get_applications(self, job_id: Optional[int] = None, user_id: Optional[int] = None) -> List[Record]:
        """Applications filtered by job and/or applicant, newest first."""

        def matches(application: Record) -> bool:
            if job_id is not None and application["job_id"] != job_id:
                return False
            if user_id is not None and application["user_id"] != user_id:
                return False
            return True

        return copy.deepcopy(_newest_first(self.applications.scan(matches)))

    def update_application_status(self, application_id: int, status: str) -> Optional[Record]:
        """Set the status field only.  The value is not validated here."""
        with self.applications.lock:
            application = self.applications.get(application_id)
            if application is None:
                return None
            updated = {**application, "status": status}
            self.applications.put(application_id, updated)
        return copy.deepcopy(updated)


# Process-wide store used by the services.  Tests reset or replace it.
store = EntityStore()


def get_store() -> EntityStore:
    """Return the process-wide entity store."""
    return store
