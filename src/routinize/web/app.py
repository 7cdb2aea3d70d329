"""FastAPI application for the routinize JSON API."""

import logging
from contextlib import asynccontextmanager

import aiosqlite
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..db.engine import init_db, seed_exercises
from ..errors import NotFoundError, StorageError, ValidationError
from .routers import (
    avatar,
    corporate,
    dashboard,
    database,
    exercises,
    habits,
    profile,
    routines,
    wellness,
    workout_logs,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    await init_db()
    await seed_exercises()
    logger.info("API ready")
    yield


def _error(status_code: int, message: str, details: list | None = None) -> JSONResponse:
    content: dict = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title,
        description="Fitness and wellness tracker API",
        version=settings.api_version,
        lifespan=lifespan,
    )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(422, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
            for err in exc.errors()
        ]
        return _error(422, "Request validation failed", details)

    @app.exception_handler(StorageError)
    async def storage_handler(request: Request, exc: StorageError):
        return _error(503, exc.message)

    @app.exception_handler(aiosqlite.Error)
    async def database_handler(request: Request, exc: aiosqlite.Error):
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        return _error(503, "Storage unavailable")

    app.include_router(profile.router)
    app.include_router(database.router)
    app.include_router(exercises.router)
    app.include_router(routines.router)
    app.include_router(workout_logs.router)
    app.include_router(habits.router)
    app.include_router(wellness.router)
    app.include_router(dashboard.router)
    app.include_router(corporate.router)
    app.include_router(avatar.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.api_version}

    return app
