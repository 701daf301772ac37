from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from chat_jobs.job_store import JobStatus


class JobCreate(BaseModel):
    # left untyped so that non-string messages reach the service's own validation
    message: Any = None
    # free-form tag; any JSON value is accepted
    type: Any = "chat"


class JobCreated(BaseModel):
    job_id: str = Field(alias="jobId")
    status: JobStatus
    message: str = "Job created successfully"

    class Config:
        populate_by_name = True


class JobView(BaseModel):
    job_id: str = Field(alias="jobId")
    status: JobStatus
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    result: str | None = None

    class Config:
        populate_by_name = True


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class JobSummary(BaseModel):
    id: str
    status: JobStatus
    created_at: datetime = Field(alias="createdAt")
    message: str

    class Config:
        populate_by_name = True


class JobListing(BaseModel):
    jobs: list[JobSummary]
    total: int


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
    environment: str
