"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrousers.config import get_settings
from agrousers.infrastructure.database.connection import dispose_engine, get_engine
from agrousers.interfaces.api.v1.router import v1_router
from agrousers.interfaces.exception_handlers import setup_exception_handlers
from agrousers.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_engine()  # Initialize connection pool
    logger.info("Engine ready")
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="User registration, login and password management API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(v1_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.app_version}

    return app
