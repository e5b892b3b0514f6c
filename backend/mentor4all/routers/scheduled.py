"""Endpoints triggered by an external cron service.

Callers authenticate with the ``X-Cron-Secret`` header.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentor4all.core.config import settings
from mentor4all.core.db import get_db
from mentor4all.core.queue import enqueue_session_reminder_scan, is_async_queue_enabled
from mentor4all.services.reminder_service import reminder_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scheduled", tags=["scheduled"])


def verify_cron_secret(x_cron_secret: Optional[str] = Header(None)):
    if x_cron_secret != settings.CRON_SECRET:
        raise HTTPException(status_code=403, detail="Invalid cron secret")
    return True


@router.post("/session-reminders")
def send_session_reminders(
    db: Session = Depends(get_db),
    _verified: bool = Depends(verify_cron_secret),
):
    """Log a reminder for every scheduled session starting within the reminder window.

    Example scheduler config:
    - Schedule: 0 * * * * (hourly)
    - Target: POST https://api.example.com/api/v1/scheduled/session-reminders
    - Headers: X-Cron-Secret: <your-secret>
    """
    if is_async_queue_enabled():
        try:
            job_id = enqueue_session_reminder_scan()
        except RedisError as exc:
            logger.exception("Could not enqueue session reminder scan")
            return JSONResponse(status_code=500, content={"error": str(exc)})
        return {"success": True, "message": "Session reminder scan queued", "job_id": job_id}

    try:
        count = reminder_service.scan_upcoming_sessions(db)
    except SQLAlchemyError as exc:
        logger.exception("Error in session reminder scan")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return {"success": True, "message": f"Processed {count} upcoming sessions", "count": count}
