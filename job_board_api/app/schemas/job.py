"""
Pydantic models for job postings.

``JobBase`` holds the fields shared by requests and responses,
``JobCreate`` and ``JobUpdate`` are the request bodies and ``JobRead``
is what the API returns.  JSON uses camelCase names (``companyLogo``,
``isActive``, ``createdAt``, ``userId``); Python code uses snake_case.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# Fields every stored job must have; an update cannot null them.
_REQUIRED_JOB_FIELDS = ("title", "company", "location", "type", "description", "requirements", "is_active")


class JobBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Senior Python Engineer"])
    company: str = Field(..., min_length=1, examples=["Acme Corp"])
    company_logo: Optional[str] = Field(None, alias="companyLogo")
    location: str = Field(..., min_length=1, examples=["Remote"])
    # Free-form: Full-time, Part-time, Contract, ...
    type: str = Field(..., min_length=1, examples=["Full-time"])
    salary: Optional[str] = Field(None, examples=["$120k - $150k"])
    description: str = Field(..., min_length=1)
    requirements: str = Field(..., min_length=1)
    tags: Optional[List[str]] = Field(None, examples=[["python", "fastapi"]])

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class JobCreate(JobBase):
    """Schema for posting a job.  The owner is always the caller."""

    is_active: Optional[bool] = Field(None, alias="isActive")


class JobUpdate(BaseModel):
    """Schema for updating a job.

    All fields are optional; only the fields present in the request
    are changed.  The id, owner and creation time cannot be set.
    """

    title: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    company_logo: Optional[str] = Field(None, alias="companyLogo")
    location: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    salary: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = Field(None, alias="isActive")
    tags: Optional[List[str]] = None

    model_config = {
        "populate_by_name": True,
    }

    def to_changes(self) -> dict:
        """Return the explicitly supplied fields keyed by snake_case name.

        ``null`` clears optional fields (salary, logo, tags) but is
        dropped for fields every job must have.
        """
        changes = self.model_dump(exclude_unset=True)
        for field in _REQUIRED_JOB_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]
        return changes


class JobRead(JobBase):
    """Schema for reading a job from the API."""

    id: int
    user_id: int = Field(..., alias="userId")
    is_active: bool = Field(..., alias="isActive")
    created_at: datetime = Field(..., alias="createdAt")
