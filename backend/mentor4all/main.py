"""
Mentor4All - FastAPI Main Application
"""

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from redis.exceptions import RedisError
from rq import Worker
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentor4all.api.v1 import auth
from mentor4all.core.config import settings
from mentor4all.core.db import get_db
from mentor4all.core.queue import _get_redis_connection
from mentor4all.routers import (
    availability,
    dashboard,
    group_sessions,
    mentors,
    profiles,
    scheduled,
    sessions,
)

app = FastAPI(
    title="Mentor4All API",
    description="Mentorship marketplace: availability, booking and dashboards",
    version="0.1.0",
)

app.include_router(auth.router, prefix="/api/v1")
app.include_router(profiles.router, prefix="/api/v1")
app.include_router(mentors.router, prefix="/api/v1")
app.include_router(availability.router, prefix="/api/v1")
app.include_router(sessions.router, prefix="/api/v1")
app.include_router(dashboard.router, prefix="/api/v1")
app.include_router(group_sessions.router, prefix="/api/v1")
app.include_router(scheduled.router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded avatars, addressed through PUBLIC_STORAGE_URL
app.mount("/storage", StaticFiles(directory=settings.STORAGE_ROOT, check_dir=False), name="storage")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Mentor4All API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "ok"}


@app.get("/health/db")
def health_db(db: Session = Depends(get_db)):
    """Database health check endpoint"""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "error",
                "database": "unavailable",
                "error": str(exc),
            },
        ) from exc

    return {"status": "ok", "db": "ok"}


@app.get("/health/redis")
def health_redis():
    """Redis health check endpoint (used for async queue mode)."""
    try:
        redis_connection = _get_redis_connection()
        redis_connection.ping()
    except RedisError as exc:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "error",
                "redis": "unavailable",
                "error": str(exc),
            },
        ) from exc

    return {"status": "ok", "redis": "ok"}


@app.get("/health/worker")
def health_worker():
    """Worker health check endpoint (only meaningful when ASYNC_QUEUE_ENABLED=true)."""
    if not settings.ASYNC_QUEUE_ENABLED:
        return {"status": "skipped", "async_enabled": False}

    try:
        redis_connection = _get_redis_connection()
        redis_connection.ping()
        workers = Worker.all(connection=redis_connection)
    except RedisError as exc:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "error",
                "redis": "unavailable",
                "error": str(exc),
            },
        ) from exc

    active_workers = [
        worker.name
        for worker in workers
        if any(queue.name == settings.RQ_QUEUE_NAME for queue in worker.queues)
    ]

    if not active_workers:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "error",
                "worker": "unavailable",
                "queue": settings.RQ_QUEUE_NAME,
                "workers": 0,
            },
        )

    return {
        "status": "ok",
        "async_enabled": True,
        "queue": settings.RQ_QUEUE_NAME,
        "workers": len(active_workers),
    }
