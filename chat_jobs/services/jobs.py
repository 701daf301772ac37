"""Public job operations: create, fetch and list."""
import logging
from typing import Any

from chat_jobs.errors import InvalidMessage, JobNotFound, MessageTooLong
from chat_jobs.job_store import Job, JobStore
from chat_jobs.schemas import JobListing, JobSummary, JobView
from chat_jobs.services.pipeline import JobPipeline

logger = logging.getLogger(__name__)


def _preview(message: str, limit: int) -> str:
    if len(message) > limit:
        return message[:limit] + "..."
    return message


class JobService:
    def __init__(
        self,
        store: JobStore,
        pipeline: JobPipeline,
        max_message_length: int = 1000,
        preview_length: int = 100,
    ) -> None:
        self.store = store
        self.pipeline = pipeline
        self.max_message_length = max_message_length
        self.preview_length = preview_length

    def validate_message(self, message: Any) -> str:
        """Return the trimmed message or raise InvalidMessage / MessageTooLong.

        The length limit applies to the text as submitted, before trimming.
        """
        if not isinstance(message, str) or not message.strip():
            raise InvalidMessage()
        # length is counted in code points, so astral characters count once
        if len(message) > self.max_message_length:
            raise MessageTooLong(self.max_message_length)
        return message.strip()

    def create_job(self, message: Any, type: str = "chat") -> Job:
        text = self.validate_message(message)
        job = self.store.insert(Job(message=text, type=type))
        # the record is committed before the pipeline can see the id
        self.pipeline.start(job.id)
        logger.info('Job created %s - "%s..."', job.id, text[:50])
        return job

    def get_job(self, job_id: str) -> JobView:
        job, result = self.store.get_with_result(job_id)
        if job is None:
            raise JobNotFound(job_id)
        return JobView(
            job_id=job.id,
            status=job.status,
            created_at=job.created_at,
            updated_at=job.updated_at,
            result=result,
        )

    def list_jobs(self) -> JobListing:
        summaries = [
            JobSummary(
                id=job.id,
                status=job.status,
                created_at=job.created_at,
                message=_preview(job.message, self.preview_length),
            )
            for job in self.store.snapshot()
        ]
        return JobListing(jobs=summaries, total=len(summaries))
