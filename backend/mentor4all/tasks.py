from __future__ import annotations

import logging

from mentor4all.core.db import SessionLocal
from mentor4all.services.reminder_service import reminder_service

logger = logging.getLogger(__name__)


def session_reminder_job() -> int:
    db = SessionLocal()
    try:
        return reminder_service.scan_upcoming_sessions(db)
    except Exception:  # noqa: BLE001
        db.rollback()
        logger.exception("Session reminder scan failed")
        raise
    finally:
        db.close()
