"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.config import Config
from server.middleware import REQUEST_ID_HEADER, PreflightMiddleware, RequestIDMiddleware
from server.routes import guide, health
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("FastAPI server starting up")

    for problem in Config().validate():
        logger.warning(f"Configuration: {problem}")

    yield

    logger.info("FastAPI server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="SG Life Guide API",
        description="Grounded, streaming answers about life in Singapore",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    # Browser clients read the preference signals from response headers
    exposed = [*guide.SIGNAL_HEADERS, REQUEST_ID_HEADER]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=exposed,
    )
    # Added last so it wraps CORSMiddleware
    app.add_middleware(PreflightMiddleware, expose_headers=exposed)

    app.include_router(health.router)
    app.include_router(guide.router)

    return app
