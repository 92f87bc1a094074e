"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fotografia.api.admin import router as admin_router
from fotografia.api.auth import router as auth_router
from fotografia.api.submissions import router as submissions_router
from fotografia.app_logging import configure_logging
from fotografia.config import parse_allowed_origins
from fotografia.containers import AppContainer
from fotografia.errors import (
    NotFound,
    PersistenceError,
    SubmissionError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fotograf-IA")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(admin_router)
    app.include_router(auth_router)
    app.include_router(submissions_router)

    @app.exception_handler(SubmissionError)
    async def submission_error_handler(
        request: Request, exc: SubmissionError
    ) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error": exc.message},
            )
        content: dict[str, object] = {"error": _format_error(container, exc)}
        if isinstance(exc, ValidationError) and exc.fields:
            content["fields"] = exc.fields
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if errors and all(error["loc"][0] == "path" for error in errors):
            # Malformed identifiers cannot match any row.
            not_found = NotFound("Submission not found")
            return await submission_error_handler(request, not_found)
        return await request_validation_exception_handler(request, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _format_error(container: AppContainer, exc: SubmissionError) -> str:
    """Return a user-facing error message with local debug info."""
    cause = exc.__cause__
    if (
        isinstance(exc, PersistenceError)
        and cause is not None
        and container.settings.environment == "local"
    ):
        detail = f"{type(cause).__name__}: {cause}".strip()
        return f"{exc.message} (debug: {detail})"
    return exc.message
