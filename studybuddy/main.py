"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, studybuddy.api, studybuddy.observability, studybuddy.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studybuddy.api import api_router
from studybuddy.api.deps.dependencies import get_service_cache
from studybuddy.boundary.db.connection import create_all_tables, get_async_engine
from studybuddy.configs import get_settings
from studybuddy.core.chat.chat_prompt import register_chat_prompt
from studybuddy.observability.logger import configure_logging
from studybuddy.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, creates tables when enabled, builds the LLM
    gateway once, and disposes the engine pool on shutdown.
    """
    settings = get_settings()

    # Startup
    configure_logging(settings.log_level)
    logger.info(
        "Application startup: logging configured",
        extra={"environment": settings.environment},
    )

    try:
        if settings.database.create_tables:
            await create_all_tables()
            logger.info("Database tables ensured")

        cache = get_service_cache()
        if not cache.gateway.is_configured:
            logger.warning("No LLM provider configured; chat turns will return the connection fallback")

        if settings.chat.use_prompt_registry:
            register_chat_prompt(
                model_id=settings.llm.azure_deployment,
                temperature=settings.llm.temperature,
                max_tokens=settings.llm.max_tokens,
                labels=[settings.chat.prompt_label] if settings.chat.prompt_label else None,
            )

        logger.info("Application startup complete")
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    # Shutdown
    get_service_cache().clear()
    await get_async_engine().dispose()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="StudyBuddy API",
        description="Study assistant chat that creates quizzes, study plans and notes",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Added first = innermost; correlation id is bound before request logging runs
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "studybuddy.main:app",
        host="localhost",
        port=8082,
        reload=get_settings().debug,
    )
