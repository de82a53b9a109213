"""
Pydantic models for job applications.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


ApplicationStatus = Literal["pending", "reviewed", "interviewed", "rejected", "accepted"]


class ApplicationCreate(BaseModel):
    """Body of ``POST /jobs/{id}/apply``.

    The job comes from the path and the applicant from the token, so
    neither is accepted here.  Any ``status`` in the payload is ignored.
    """

    resume: str = Field(..., min_length=1)
    cover_letter: Optional[str] = Field(None, alias="coverLetter")

    model_config = {
        "populate_by_name": True,
    }


class ApplicationStatusUpdate(BaseModel):
    # Checked against the allowed statuses by the service; a missing or
    # unknown value is reported as "Invalid status value".
    status: Optional[str] = Field(None, examples=["reviewed"])


class ApplicationRead(BaseModel):
    id: int
    job_id: int = Field(..., alias="jobId")
    user_id: int = Field(..., alias="userId")
    resume: str
    cover_letter: Optional[str] = Field(None, alias="coverLetter")
    status: ApplicationStatus
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }
