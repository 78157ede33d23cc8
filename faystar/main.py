from contextlib import asynccontextmanager
from typing import Callable, Optional
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from faystar.api.error_handlers import register_exception_handlers
from faystar.core.config import Settings, get_settings, load_env_file
from faystar.core.logging import configure_logging, get_logger, set_correlation_id
from faystar.services.container import ServiceContainer, build_container


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; the cached environment settings when omitted
        container: Pre-built services; built from settings at startup when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting up {settings.PROJECT_NAME}", extra={"environment": settings.ENVIRONMENT})
        if settings.uses_default_jwt_secret and settings.ENVIRONMENT != "development":
            logger.warning(
                "JWT_SECRET is still the default value; set it before serving real traffic",
                extra={"environment": settings.ENVIRONMENT},
            )
        if getattr(app.state, "container", None) is None:
            app.state.container = build_container(settings)
        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.PROJECT_NAME}")
            await app.state.container.aclose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container
    app.state.started_at = time.monotonic()

    configure_middleware(app, settings)
    register_exception_handlers(app, debug=settings.DEBUG)
    register_routers(app, settings)

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )
        return response


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Import routers here to avoid circular imports
    from faystar.api.routes.ai import ai_router
    from faystar.api.routes.audio import audio_router
    from faystar.api.routes.auth import auth_router
    from faystar.api.routes.health import health_router
    from faystar.api.routes.video import video_router

    prefix = settings.API_PREFIX

    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["Auth"])
    app.include_router(ai_router, prefix=f"{prefix}/ai", tags=["AI"])
    app.include_router(video_router, prefix=f"{prefix}/video", tags=["Video"])
    app.include_router(audio_router, prefix=f"{prefix}/audio", tags=["Audio"])

    if settings.ENABLE_TEST_ROUTES:
        from faystar.api.routes.test import test_router

        logger.warning("Unauthenticated test routes are enabled")
        app.include_router(test_router, prefix=f"{prefix}/test", tags=["Test"])


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("faystar.main:app", host="0.0.0.0", port=8000, reload=True)
