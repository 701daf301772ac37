import pytest
from fastapi.testclient import TestClient

from chat_jobs.config import Settings
from chat_jobs.job_store import JobStore
from chat_jobs.main import create_app
from chat_jobs.services.jobs import JobService
from chat_jobs.services.pipeline import JobPipeline


class ManualPipeline(JobPipeline):
    """Records started ids instead of spawning threads; tests call run() themselves."""

    def __init__(self, store, **kwargs):
        kwargs.setdefault("intake_delay_ms", (0, 0))
        kwargs.setdefault("analysis_delay_ms", (0, 0))
        super().__init__(store, **kwargs)
        self.started: list[str] = []

    def start(self, job_id):
        self.started.append(job_id)

    def run_all(self):
        for job_id in self.started:
            self.run(job_id)


@pytest.fixture
def store():
    return JobStore()


@pytest.fixture
def manual_pipeline(store):
    return ManualPipeline(store)


@pytest.fixture
def service(store, manual_pipeline):
    return JobService(store, manual_pipeline)


@pytest.fixture
def test_settings():
    return Settings(
        environment="test",
        intake_delay_ms=(0, 0),
        analysis_delay_ms=(0, 0),
        _env_file=None,
    )


@pytest.fixture
def manual_client(test_settings, manual_pipeline):
    app = create_app(test_settings, pipeline=manual_pipeline)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(test_settings):
    """Client backed by a real threaded pipeline with zero delays."""
    app = create_app(test_settings)
    with TestClient(app) as client:
        yield client
