"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from inbox_triage.agent.pipeline import TriagePipeline
from inbox_triage.api.routes import limiter, router
from inbox_triage.config import Settings, configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, pipeline: TriagePipeline | None = None) -> FastAPI:
    """
    Create the API application.

    Args:
        settings: Application settings; loaded from the environment if omitted.
        pipeline: Pipeline to serve; built from settings at startup if omitted.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Debug mode: {settings.debug}")
        logger.info(f"Using OpenAI model: {settings.openai_model}")
        if app.state.pipeline is None:
            app.state.pipeline = TriagePipeline.from_settings(settings)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="LLM-driven triage of unread Gmail",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.pipeline = pipeline
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(router)
    return app


def main() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = Settings()
    configure_logging(settings.debug)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
