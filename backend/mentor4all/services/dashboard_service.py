import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from mentor4all.models.session import MentorshipSession


def _to_float(value: float | Decimal | None) -> float:
    if value is None:
        return 0.0
    return float(value)


def is_upcoming(booking: MentorshipSession, now: datetime) -> bool:
    # A session starting exactly now still counts as upcoming
    return booking.date_time >= now


def partition(
    sessions: Iterable[MentorshipSession], now: datetime
) -> tuple[list[MentorshipSession], list[MentorshipSession]]:
    upcoming: list[MentorshipSession] = []
    past: list[MentorshipSession] = []
    for booking in sessions:
        (upcoming if is_upcoming(booking, now) else past).append(booking)
    upcoming.sort(key=lambda s: s.date_time)
    past.sort(key=lambda s: s.date_time, reverse=True)
    return upcoming, past


def total_hours(sessions: Iterable[MentorshipSession]) -> float:
    return sum((s.duration or 0) for s in sessions) / 60


def total_price(sessions: Iterable[MentorshipSession]) -> float:
    return round(sum(_to_float(s.price) for s in sessions), 2)


def distinct_mentees(sessions: Iterable[MentorshipSession]) -> int:
    return len({s.mentee_id for s in sessions})


@dataclass
class SessionLists:
    upcoming: list[MentorshipSession]
    past: list[MentorshipSession]


class DashboardService:
    """Read-only aggregates over a user's sessions, recomputed per request."""

    def fetch_sessions(
        self,
        db: Session,
        *,
        mentor_id: uuid.UUID | None = None,
        mentee_id: uuid.UUID | None = None,
        now: datetime | None = None,
    ) -> SessionLists:
        """One boundary query per list: upcoming ascending, past descending."""
        now = now or datetime.utcnow()
        base = db.query(MentorshipSession)
        if mentor_id is not None:
            base = base.filter(MentorshipSession.mentor_id == mentor_id)
        if mentee_id is not None:
            base = base.filter(MentorshipSession.mentee_id == mentee_id)

        upcoming = (
            base.filter(MentorshipSession.date_time >= now)
            .order_by(MentorshipSession.date_time.asc())
            .all()
        )
        past = (
            base.filter(MentorshipSession.date_time < now)
            .order_by(MentorshipSession.date_time.desc())
            .all()
        )
        return SessionLists(upcoming=upcoming, past=past)

    def mentee_stats(self, lists: SessionLists) -> dict:
        return {
            "upcoming_count": len(lists.upcoming),
            "past_count": len(lists.past),
            "hours_spent": total_hours(lists.past),
            "total_spent": total_price(lists.past),
        }

    def mentor_stats(self, lists: SessionLists) -> dict:
        return {
            "upcoming_count": len(lists.upcoming),
            "session_hours": total_hours(lists.past),
            "total_earnings": total_price(lists.past),
            "unique_mentees": distinct_mentees(lists.past),
        }


# Singleton instance
dashboard_service = DashboardService()
