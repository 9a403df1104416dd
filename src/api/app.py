"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8080

    # Or use the convenience function
    from api.app import create_app
    app = create_app()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from core.logging import configure_logging, get_logger
from core.middleware import RequestTracingMiddleware
from services.session_manager import get_session_manager


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Startup configures logging and reports whether the vision model
    credential is present; analysis requests fail fast without it.
    """
    settings = get_settings()

    configure_logging(
        json_logs=settings.is_production,
        log_level="DEBUG" if settings.debug else "INFO",
    )

    logger.info(
        "Starting size advisor API",
        environment=settings.environment,
        port=settings.port,
        analysis_model=settings.analysis_model,
    )
    if not settings.has_api_key:
        logger.warning("No API key configured; analysis requests will be rejected")

    yield

    logger.info("Shutting down size advisor API", **get_session_manager().get_stats())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title="Size Advisor API",
        description="""
        Clothing size recommendation from a photo, height and weight.

        ## Flow

        1. `POST /api/sessions` - start a session (language, default charts)
        2. `PUT /api/sessions/{id}/active-chart` - choose the size chart
        3. `POST /api/sessions/{id}/analyze` - upload photo + measurements
        4. `GET /api/sessions/{id}/charts/active/table` - table with matching rows

        ## Chart Editor

        - `/api/sessions/{id}/editor/*` - edit, add and delete size charts

        ## Health Checks

        - `/health`, `/health/detailed`, `/ready`, `/live`
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (order matters - first added = outermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (adds X-Request-ID, logs timing)
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router, tags=["Health"])

    from api.routes.sessions import router as sessions_router
    app.include_router(sessions_router)

    from api.routes.editor import router as editor_router
    app.include_router(editor_router)

    from api.routes.analysis import router as analysis_router
    app.include_router(analysis_router)

    return app


# Create default app instance for uvicorn
# Usage: uvicorn api.app:app
app = create_app()


def main() -> None:
    """Run the API with uvicorn (console script: size-advisor-api)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("api.app:app", host=settings.host, port=settings.port, reload=settings.is_development)
