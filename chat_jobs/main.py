import logging
from contextlib import asynccontextmanager
from time import monotonic

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from chat_jobs.config import Settings, settings
from chat_jobs.errors import install_exception_handlers
from chat_jobs.job_store import JobStore, utcnow
from chat_jobs.routers import jobs
from chat_jobs.schemas import HealthResponse
from chat_jobs.services.jobs import JobService
from chat_jobs.services.pipeline import JobPipeline
from chat_jobs.services.sweeper import JobSweeper

logger = logging.getLogger(__name__)

_STARTED_AT = monotonic()


def create_app(config: Settings = settings, pipeline: JobPipeline | None = None) -> FastAPI:
    """Build the API with its own job store, pipeline, service and sweeper."""
    store = pipeline.store if pipeline is not None else JobStore()
    pipeline = pipeline or JobPipeline(
        store,
        intake_delay_ms=config.intake_delay_ms,
        analysis_delay_ms=config.analysis_delay_ms,
    )
    sweeper = JobSweeper(
        store,
        retention_seconds=config.job_retention_seconds,
        interval_seconds=config.cleanup_interval_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (%s)", config.app_name, config.environment)
        sweeper.start()
        yield
        sweeper.stop()
        logger.info("Shut down %s", config.app_name)

    app = FastAPI(title=f"{config.app_name} API", version="0.1.0", lifespan=lifespan)
    app.state.settings = config
    app.state.job_store = store
    app.state.job_service = JobService(
        store,
        pipeline,
        max_message_length=config.max_message_length,
        preview_length=config.list_preview_length,
    )
    app.state.job_sweeper = sweeper

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    install_exception_handlers(app)

    app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            timestamp=utcnow(),
            uptime=monotonic() - _STARTED_AT,
            environment=config.environment,
        )

    return app


def main() -> None:
    """Serve the API; `uvicorn --factory chat_jobs.main:create_app` works too."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    logger.info("%s listening on http://%s:%s", settings.app_name, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
