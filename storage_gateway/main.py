"""
FastAPI application entry point for the storage gateway.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storage_gateway import __version__
from storage_gateway.api import api_router
from storage_gateway.api.errors import setup_error_handlers
from storage_gateway.context import AppContext, build_context
from storage_gateway.infra.config.logging_config import get_logger, setup_logging
from storage_gateway.infra.config.settings import get_settings
from storage_gateway.infra.middleware.request_context import RequestContextMiddleware

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    context: AppContext = app.state.context
    logger.info(
        "app.startup",
        app_name=context.settings.app_name,
        environment=context.settings.environment,
        production=context.settings.production,
        users=len(context.credentials),
        session_backend=context.settings.session_backend,
        bucket=context.storage.bucket,
    )

    yield

    close = getattr(context.sessions, "close", None)
    if close is not None:
        await close()
    logger.info("app.shutdown", app_name=context.settings.app_name)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if context is None:
        settings = get_settings()
        setup_logging(settings)
        context = build_context(settings)
    settings = context.settings

    app = FastAPI(
        title=settings.app_name,
        description="Cookie-authenticated CRUD over an S3-compatible bucket",
        version=__version__,
        debug=settings.debug,
        docs_url=None if settings.production else "/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.context = context

    cors_origins = settings.get_cors_origins()
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_middleware(RequestContextMiddleware, api_prefix="/api")
    setup_error_handlers(app)

    @app.get("/health", include_in_schema=False)
    async def health_check():
        return {"status": "healthy", "service": settings.app_name, "version": __version__}

    app.include_router(api_router, prefix="/api")

    # static frontend last so it never shadows the API
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


def run() -> None:
    import uvicorn

    app = create_app()
    settings = app.state.context.settings
    logger.info("app.listen", host=settings.host, port=settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
