"""
Pydantic model for dashboard statistics.
"""

from pydantic import BaseModel, Field


class StatsRead(BaseModel):
    total_jobs: int = Field(..., alias="totalJobs")
    active_jobs: int = Field(..., alias="activeJobs")
    total_applications: int = Field(..., alias="totalApplications")
    view_count: int = Field(..., alias="viewCount")

    model_config = {
        "populate_by_name": True,
    }
