"""Background pipeline driving a chat job from created to a terminal status."""
import logging
import random
import threading
import time
from typing import Callable

from chat_jobs.job_store import JobStatus, JobStore
from chat_jobs.services import responder

logger = logging.getLogger(__name__)

FAILURE_REPLY = "Sorry, I encountered an error processing your request. Please try again."


class JobPipeline:
    def __init__(
        self,
        store: JobStore,
        generate: Callable[[str], str] = responder.generate,
        intake_delay_ms: tuple[float, float] = (1000, 2000),
        analysis_delay_ms: tuple[float, float] = (2000, 4000),
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.generate = generate
        self.intake_delay_ms = intake_delay_ms
        self.analysis_delay_ms = analysis_delay_ms
        self.sleep = sleep
        self.rng = rng or random.Random()

    def _pause(self, bounds_ms: tuple[float, float]) -> None:
        low, high = bounds_ms
        if high <= 0:
            return
        self.sleep(self.rng.uniform(low, high) / 1000.0)

    def _advance(self, job_id: str, status: JobStatus) -> None:
        if not self.store.set_status(job_id, status):
            # evicted mid-run; later writes are dropped by the store
            logger.warning("Job %s disappeared before reaching %s", job_id, status.value)

    def start(self, job_id: str) -> threading.Thread:
        thread = threading.Thread(
            target=self.run, args=(job_id,), name=f"job-{job_id[:8]}", daemon=True
        )
        thread.start()
        return thread

    def run(self, job_id: str) -> None:
        job = self.store.get(job_id)
        if job is None:
            return

        try:
            self._advance(job_id, JobStatus.PROCESSING)
            self._pause(self.intake_delay_ms)

            self._advance(job_id, JobStatus.ANALYZING)
            self._pause(self.analysis_delay_ms)

            reply = self.generate(job.message)
            if self.store.finish(job_id, JobStatus.COMPLETED, reply):
                logger.info("Job completed %s", job_id)
        except Exception:
            logger.exception("Job failed %s", job_id)
            self.store.finish(job_id, JobStatus.FAILED, FAILURE_REPLY)
