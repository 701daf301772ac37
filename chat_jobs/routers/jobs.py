"""Chat job endpoints: submit a message, poll its job, list all jobs."""
from typing import Optional

from fastapi import APIRouter, Depends, Request

from chat_jobs.schemas import JobCreate, JobCreated, JobListing, JobView
from chat_jobs.services.jobs import JobService

router = APIRouter()


def get_job_service(request: Request) -> JobService:
    return request.app.state.job_service


@router.post("", response_model=JobCreated, status_code=201)
def create_job(
    payload: Optional[JobCreate] = None,
    service: JobService = Depends(get_job_service),
):
    payload = payload or JobCreate()
    tag = "chat" if payload.type is None else str(payload.type)
    job = service.create_job(payload.message, type=tag)
    return JobCreated(job_id=job.id, status=job.status)


@router.get("", response_model=JobListing)
def list_jobs(service: JobService = Depends(get_job_service)):
    return service.list_jobs()


@router.get("/{job_id}", response_model=JobView, response_model_exclude_none=True)
def get_job(job_id: str, service: JobService = Depends(get_job_service)):
    return service.get_job(job_id)
