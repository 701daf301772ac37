"""Thread-safe in-process store for chat jobs and their results."""
import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum


class JobStatus(str, Enum):
    CREATED = "created"
    PROCESSING = "processing"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Job:
    message: str
    type: str = "chat"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: JobStatus = JobStatus.CREATED
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at


class JobStore:
    """Jobs and results keyed by job id.

    Results live in their own map and are written together with the terminal
    status, so a result is visible iff the job is completed or failed.
    Readers receive copies; the live records never leave the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._jobs: dict[str, Job] = {}
        self._results: dict[str, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def __contains__(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._jobs

    def insert(self, job: Job) -> Job:
        with self._lock:
            if job.id in self._jobs:
                raise KeyError(f"Duplicate job id {job.id}")
            self._jobs[job.id] = job
            return replace(job)

    def get(self, job_id: str) -> Job | None:
        with self._lock:
            job = self._jobs.get(job_id)
            return replace(job) if job is not None else None

    def get_with_result(self, job_id: str) -> tuple[Job | None, str | None]:
        """A job copy and its result, read under one lock acquisition."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None, None
            return replace(job), self._results.get(job_id)

    def set_status(self, job_id: str, status: JobStatus) -> bool:
        """Move a job to a non-terminal status. Returns False if the job is gone."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return False
            job.status = status
            job.updated_at = utcnow()
            return True

    def finish(self, job_id: str, status: JobStatus, result: str) -> bool:
        """Store the result and terminal status atomically."""
        if not status.is_terminal:
            raise ValueError(f"{status.value} is not a terminal status")
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return False
            self._results[job_id] = result
            job.status = status
            job.updated_at = utcnow()
            return True

    def snapshot(self) -> list[Job]:
        """Copies of every job in insertion order."""
        with self._lock:
            return [replace(job) for job in self._jobs.values()]

    def purge_older_than(self, max_age_seconds: float, now: datetime | None = None) -> list[str]:
        """Remove jobs (and results) older than max_age_seconds, whatever their status."""
        now = now or utcnow()
        with self._lock:
            to_delete = [
                jid for jid, job in self._jobs.items()
                if (now - job.created_at).total_seconds() > max_age_seconds
            ]
            for jid in to_delete:
                del self._jobs[jid]
                self._results.pop(jid, None)
        return to_delete
