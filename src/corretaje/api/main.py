"""
FastAPI Main Application

Real-estate listings and contact inquiries REST API.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config.settings import Settings, settings as default_settings
from src.corretaje.api.dependencies import get_settings, get_store
from src.corretaje.api.errors import register_exception_handlers
from src.corretaje.api.schemas import HealthCheck
from src.corretaje.api.routers import consultas, propiedades, stats
from src.corretaje.db.store import SqlStore, Store, build_store
from src.corretaje.models.base import utc_now
from src.corretaje.utils.logger import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Application settings (defaults to the environment)
        store: Storage backend; built from settings when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        current = app.state.store
        if isinstance(current, SqlStore) and settings.database_create_tables:
            try:
                current.create_tables()
            except Exception as e:
                # Startup continues; requests will report the backend error
                logger.error("database_table_creation_failed", error=str(e), error_type=type(e).__name__)
        logger.info(
            "api_started",
            port=settings.port,
            storage=current.backend,
            version=settings.app_version,
        )
        yield
        current.close()
        logger.info("api_stopped")

    app = FastAPI(
        title="Corretaje Listings API",
        description="REST API for property listings and contact inquiries",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)

    # Configure CORS for the public site
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = bind_request_context(
            request.method,
            request.url.path,
            request.headers.get(REQUEST_ID_HEADER),
        )
        try:
            logger.info("request_received")
            response = await call_next(request)
            logger.debug("request_completed", status_code=response.status_code)
        finally:
            clear_request_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    register_exception_handlers(app)

    # Include routers
    app.include_router(propiedades.router)
    app.include_router(consultas.router)
    app.include_router(stats.router)

    uploads = Path(settings.uploads_dir)
    if uploads.is_dir():
        app.mount("/uploads", StaticFiles(directory=uploads), name="uploads")
    else:
        logger.info("uploads_dir_missing", path=str(uploads))

    @app.get("/health", response_model=HealthCheck, tags=["health"])
    def health_check(
        store: Store = Depends(get_store),
        app_settings: Settings = Depends(get_settings),
    ):
        """
        Health check endpoint.

        Always answers 200; the database field reports backend status.
        """
        return HealthCheck(
            status="OK",
            version=app_settings.app_version,
            database=store.health(),
            storage=store.backend,
            timestamp=utc_now(),
        )

    @app.get("/", tags=["root"])
    def root(app_settings: Settings = Depends(get_settings)):
        """
        Root endpoint.

        Returns:
            API information
        """
        return {
            "name": "Corretaje Listings API",
            "version": app_settings.app_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.corretaje.api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
    )
