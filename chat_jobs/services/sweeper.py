"""Periodic eviction of old jobs.

Jobs are evicted by age alone. A job still in flight when it crosses the
retention threshold is removed too; the pipeline's later writes for that id
are dropped by the store rather than recreating the record.
"""
import logging
import threading
from datetime import datetime

from chat_jobs.job_store import JobStore

logger = logging.getLogger(__name__)


class JobSweeper:
    def __init__(
        self,
        store: JobStore,
        retention_seconds: float = 30 * 60,
        interval_seconds: float = 5 * 60,
    ) -> None:
        self.store = store
        self.retention_seconds = retention_seconds
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sweep(self, now: datetime | None = None) -> list[str]:
        evicted = self.store.purge_older_than(self.retention_seconds, now=now)
        for job_id in evicted:
            logger.info("Removed old job %s", job_id)
        return evicted

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            try:
                self.sweep()
            except Exception:
                logger.exception("Job sweep failed")

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="job-sweeper", daemon=True)
        self._thread.start()
        logger.info(
            "Job sweeper started (every %ss, retention %ss)",
            self.interval_seconds, self.retention_seconds,
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info("Job sweeper stopped")
