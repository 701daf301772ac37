"""Error taxonomy and the FastAPI handlers that render it."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ChatJobsError(Exception):
    """Base error. `error` is the machine-readable tag returned to clients."""

    error = "Internal server error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Something went wrong"):
        self.message = message
        super().__init__(message)

    def to_content(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class InvalidMessage(ChatJobsError):
    error = "Invalid message"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Message is required and must be a non-empty string"):
        super().__init__(message)


class MessageTooLong(ChatJobsError):
    error = "Message too long"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, max_length: int = 1000):
        super().__init__(f"Message must be less than {max_length} characters")


class JobNotFound(ChatJobsError):
    error = "Job not found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job with ID {job_id} does not exist")


class MalformedRequest(ChatJobsError):
    error = "Malformed request"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Request body could not be parsed"):
        super().__init__(message)


class InternalFailure(ChatJobsError):
    pass


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ChatJobsError)
    async def chat_jobs_error_handler(request: Request, exc: ChatJobsError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Malformed request to %s %s: %s", request.method, request.url.path, exc.errors())
        err = MalformedRequest()
        return JSONResponse(status_code=err.status_code, content=err.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # unmatched paths and methods both count as unknown routes
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": "Not found",
                    "message": f"Route {request.method} {request.url.path} not found",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        err = InternalFailure()
        return JSONResponse(status_code=err.status_code, content=err.to_content())
