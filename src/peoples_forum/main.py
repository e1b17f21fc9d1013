# src/peoples_forum/main.py
"""ASGI application for the People's Forum backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from peoples_forum.api.v1 import (
    admin_router,
    announcements_router,
    auth_router,
    comments_router,
    moderation_router,
    posts_router,
    tags_router,
    users_router,
)
from peoples_forum.core.errors import ForumError, Unauthorized
from peoples_forum.core.logging import configure_logging
from peoples_forum.core.settings import settings

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)

app = FastAPI(
    title="People's Forum API",
    description="Posts, votes, comments, moderation and announcements for a community forum",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(GZipMiddleware)

for router in (
    auth_router,
    users_router,
    posts_router,
    tags_router,
    comments_router,
    moderation_router,
    announcements_router,
    admin_router,
):
    app.include_router(router, prefix=API_PREFIX)


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    """Render a domain failure as a stable status code and reason."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.reason)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "reason": exc.reason},
        headers=headers,
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe; does not touch the database."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Service banner."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "message": "peoples-forum server is running",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("peoples_forum.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
