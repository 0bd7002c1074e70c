"""Main FastAPI application."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routers import crud, download
from config import settings
from utils.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Make sure the uploads directory exists so the locator has somewhere to look
    uploads = Path(settings.uploads_dir)
    uploads.mkdir(parents=True, exist_ok=True)
    logger.info(f"Serving datasets from {uploads.resolve()}")
    yield


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(title=settings.api_title, version=settings.api_version, description=settings.api_description, lifespan=lifespan)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allows all origins
        allow_credentials=True,
        allow_methods=["*"],  # Allows all methods
        allow_headers=["*"],  # Allows all headers
    )

    register_exception_handlers(app)

    # Add routers
    app.include_router(crud.router, prefix=settings.api_prefix)
    app.include_router(download.router, prefix=settings.api_prefix)

    return app


app = create_app()
