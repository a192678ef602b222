import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinicdesk.config import get_settings
from clinicdesk.infrastructure.database import engine, initialize_database
from clinicdesk.interfaces.api.routes import register_routes

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the main FastAPI application."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)

    app = FastAPI(title="ClinicDesk", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
