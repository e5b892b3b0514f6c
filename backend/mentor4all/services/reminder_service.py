import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from mentor4all.core.config import settings
from mentor4all.models.profile import Profile
from mentor4all.models.session import MentorshipSession, SessionStatus
from mentor4all.models.user import User

logger = logging.getLogger(__name__)


class ReminderService:
    def upcoming_sessions(
        self, db: Session, now: datetime, window_hours: int
    ) -> list[MentorshipSession]:
        return (
            db.query(MentorshipSession)
            .filter(
                MentorshipSession.date_time >= now,
                MentorshipSession.date_time < now + timedelta(hours=window_hours),
                MentorshipSession.status == SessionStatus.SCHEDULED.value,
            )
            .order_by(MentorshipSession.date_time)
            .all()
        )

    def scan_upcoming_sessions(
        self,
        db: Session,
        now: datetime | None = None,
        window_hours: int | None = None,
    ) -> int:
        """Log one would-be reminder per scheduled session in the window. Returns the count."""
        now = now or datetime.utcnow()
        window_hours = window_hours or settings.REMINDER_WINDOW_HOURS
        sessions = self.upcoming_sessions(db, now, window_hours)
        logger.info("Found %d upcoming sessions for reminder emails", len(sessions))

        for booking in sessions:
            mentee = db.get(Profile, booking.mentee_id)
            mentor = db.get(Profile, booking.mentor_id)
            mentee_user = db.get(User, booking.mentee_id)
            logger.info(
                "Would send reminder for session %r to %s <%s> with %s at %s",
                booking.title,
                mentee.full_name if mentee else booking.mentee_id,
                mentee_user.email if mentee_user else "unknown",
                mentor.full_name if mentor else booking.mentor_id,
                booking.date_time.isoformat(),
            )
        return len(sessions)


# Singleton instance
reminder_service = ReminderService()
