"""
Main FastAPI application entry point.
Configures logging, exception handlers, middleware, and routers.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from toggles.api.dependencies import get_feature_flag_service, get_flag_store
from toggles.api.routers import cache_router, flags_router, health_router
from toggles.config import get_settings
from toggles.config.logging import configure_logging
from toggles.core.exceptions import AppException
from toggles.core.telemetry import setup_telemetry


# =============================================================================
# Lifespan (Startup/Shutdown)
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger = logging.getLogger(__name__)
    settings = get_settings()

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Flags loaded: {len(get_flag_store())}")
    logger.info(
        f"Evaluation cache enabled: {settings.EVALUATION_CACHE_ENABLED} "
        f"(ttl={settings.EVALUATION_CACHE_TTL_SEC}s)"
    )
    if not get_feature_flag_service().has_expiration_gate:
        logger.warning(
            "EXPIRED_FLAG_POLICY not set: expired flags are evaluated as if unexpired"
        )

    yield

    logger.info("Shutting down application")


# =============================================================================
# Exception Handlers
# =============================================================================


async def app_exception_handler(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    """Handle custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions (e.g. flag store failures) - return generic error."""
    logger = logging.getLogger(__name__)
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            }
        },
    )


# =============================================================================
# Application Factory
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    configure_logging(debug=settings.DEBUG, level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
        Toggles Feature Flag API

        Evaluates boolean feature flags for a user context.

        ## Features
        - Rule precedence: everyone override, users, groups, roles, percentage rollout
        - Deterministic MurmurHash3 bucketing for rollouts
        - Pluggable handling of expired flags
        - TTL cache for evaluation results
        - Observability: JSON logs, Prometheus, OpenTelemetry
        """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(flags_router)
    app.include_router(cache_router)

    setup_telemetry(app)

    return app


app = create_app()


# =============================================================================
# Development Entry Point
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "toggles.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
