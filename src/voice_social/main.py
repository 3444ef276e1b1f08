"""Main entry point for the Voice Social application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from voice_social.api.v1 import (
    leaderboard_router,
    notifications_router,
    users_router,
    voices_router,
)
from voice_social.core.errors import StorageError, VoiceSocialError
from voice_social.core.settings import settings
from voice_social.db.session import Database
from voice_social.services.audio_storage import build_audio_storage
from voice_social.services.welcome import WelcomeNotifier

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Voice recordings with likes, comments, views and a points leaderboard",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(voices_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(notifications_router, prefix=settings.api_prefix)
app.include_router(leaderboard_router, prefix=settings.api_prefix)


@app.exception_handler(VoiceSocialError)
async def handle_domain_error(request: Request, exc: VoiceSocialError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = StorageError("Database operation failed")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.on_event("startup")
async def on_startup() -> None:
    database = Database(settings.effective_database_url, echo=settings.sql_debug)
    database.create_tables()
    app.state.database = database
    app.state.audio_storage = build_audio_storage(settings)
    app.state.welcome_notifier = WelcomeNotifier.from_settings(settings)
    logger.info(
        "%s %s started (%s audio storage)",
        settings.app_name,
        settings.app_version,
        app.state.audio_storage.name,
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    database: Database | None = getattr(app.state, "database", None)
    if database is not None:
        database.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("voice_social.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
